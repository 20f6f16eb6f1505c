"""World layer - per-cycle snapshots and their history."""

from .snapshot import WorldSnapshot
from .builder import WorldBuilder
from .model import WorldModel
from .kicker import KickerResult, find_kicker
from .offside import our_offside_line_x, their_offside_line_x
from .export import SnapshotExport, SnapshotFrame, SnapshotRecorder

__all__ = [
    "WorldSnapshot",
    "WorldBuilder",
    "WorldModel",
    "KickerResult",
    "find_kicker",
    "our_offside_line_x",
    "their_offside_line_x",
    "SnapshotExport",
    "SnapshotFrame",
    "SnapshotRecorder",
]
