"""Per-cycle diagnostic trace for world-model debugging.

Collects structured diagnostics (dropped observations, kicker
resolution, intercept results) organized by cycle, so that a debug
visualizer can show why the world model looks the way it does.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class TraceCategory(Enum):
    """Categories of trace messages."""
    WORLD = "world"          # Snapshot construction
    INTERCEPT = "intercept"  # Reach-step prediction
    KICKER = "kicker"        # Kicker attribution


@dataclass
class TraceEntry:
    """A single trace entry."""
    cycle: int
    stopped: int
    subject: str
    category: TraceCategory
    message: str


class TraceSystem:
    """Collects trace entries for the world model.

    Usage:
        trace = get_trace_system()
        trace.enable(True)

        # Once per cycle, before building the snapshot:
        trace.set_time(cycle, stopped)

        # Anywhere in the pipeline:
        trace.trace("L7", TraceCategory.KICKER, "kick plausible")

        entries = trace.get_entries(since_cycle=last_cycle)
    """

    def __init__(self):
        self._enabled = False
        self._entries: List[TraceEntry] = []
        self._cycle = 0
        self._stopped = 0

    def enable(self, enabled: bool = True) -> None:
        """Enable or disable trace collection."""
        self._enabled = enabled
        if enabled:
            self._entries.clear()

    def is_enabled(self) -> bool:
        return self._enabled

    def set_time(self, cycle: int, stopped: int = 0) -> None:
        """Set the game time for subsequent trace calls."""
        self._cycle = cycle
        self._stopped = stopped

    def trace(self, subject: str, category: TraceCategory, message: str) -> None:
        """Add a trace entry.

        Args:
            subject: What the entry is about, e.g. "L7" or "ball"
            category: Pipeline stage that produced the entry
            message: Concise description of what happened
        """
        if not self._enabled:
            return
        self._entries.append(TraceEntry(
            cycle=self._cycle,
            stopped=self._stopped,
            subject=subject,
            category=category,
            message=message,
        ))

    def get_entries(self, since_cycle: Optional[int] = None) -> List[TraceEntry]:
        """Get trace entries, optionally only those from since_cycle onwards."""
        if since_cycle is None:
            return list(self._entries)
        return [e for e in self._entries if e.cycle >= since_cycle]

    def get_entries_for_category(self, category: TraceCategory) -> List[TraceEntry]:
        return [e for e in self._entries if e.category == category]

    def clear(self) -> None:
        """Clear all trace entries."""
        self._entries.clear()

    def to_dict_list(self, entries: Optional[List[TraceEntry]] = None) -> List[Dict]:
        """Convert entries to list of dicts for JSON serialization."""
        if entries is None:
            entries = self._entries
        return [
            {
                "cycle": e.cycle,
                "stopped": e.stopped,
                "subject": e.subject,
                "category": e.category.value,
                "message": e.message,
            }
            for e in entries
        ]


# Global singleton instance
_trace_system = TraceSystem()


def get_trace_system() -> TraceSystem:
    """Get the global trace system instance."""
    return _trace_system
