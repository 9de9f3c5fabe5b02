"""Result values for single and bulk insertion."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ._common import Point


class InsertOutcome(Enum):
    """
    Outcome of inserting one point into a node.

    Only STORED is truthy, so the outcome can be tested like a bool while
    still telling an out-of-bounds point apart from one that was lost to a
    coverage gap.
    """

    STORED = "stored"
    OUT_OF_BOUNDS = "out_of_bounds"
    COVERAGE_GAP = "coverage_gap"

    def __bool__(self) -> bool:
        return self is InsertOutcome.STORED


@dataclass
class InsertResult:
    """
    Result from bulk insertion operations.

    Attributes:
        count: Number of points stored.
        gaps: Points that fell into a coverage gap and were not stored.
    """

    count: int
    gaps: list[Point] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return True if every point was stored."""
        return not self.gaps
