"""pitchmodel - world reconstruction and ball interception for a soccer agent.

A per-cycle pipeline for simulated soccer:
- Single normalised coordinate system (our team attacks toward +x)
- Cross-cycle player identity by (side, uniform number)
- Kicker attribution and offside lines
- Reach-step prediction for every player against the cached ball path
"""

__version__ = "0.1.0"
