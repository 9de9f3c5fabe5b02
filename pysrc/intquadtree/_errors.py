"""Exceptions raised by the QuadTree wrapper."""

from __future__ import annotations


class CoverageGapError(ValueError):
    """
    Raised when a point inside the tree bounds could not be stored.

    Odd widths or heights leave a strip along the right or bottom edge of a
    node that none of its four quadrants covers. A full node cannot place a
    point that lands there.
    """

    def __init__(self, point, bounds):
        self.point = point
        self.bounds = bounds
        super().__init__(
            f"Point {point!r} falls into a coverage gap of bounds {bounds!r}"
        )
