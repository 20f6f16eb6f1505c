"""Offside lines.

Both lines start from the halfway line: a defender only moves the line
once two defenders are beyond it.
"""

from typing import Iterable

from ..core.entities import Player


def our_offside_line_x(opponents: Iterable[Player]) -> float:
    """Line our attackers must stay behind: second-highest opponent x."""
    first = 0.0
    second = 0.0
    for player in opponents:
        x = player.pos.x
        if x > first:
            second = first
            first = x
        elif x > second:
            second = x
    return second


def their_offside_line_x(teammates: Iterable[Player]) -> float:
    """Line their attackers must stay behind: second-lowest teammate x."""
    first = 0.0
    second = 0.0
    for player in teammates:
        x = player.pos.x
        if x < first:
            second = first
            first = x
        elif x < second:
            second = x
    return second
