# _rectangle.py
"""Axis-aligned integer rectangle used as node bounds and query ranges."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rectangle:
    """
    Immutable axis-aligned box anchored at (x, y).

    Screen coordinates are assumed: y grows downward, so "north" is the
    half with the smaller y. Quadrants use a fixed naming: ne is top-right,
    nw top-left, se bottom-left and sw bottom-right.

    Two edge conventions coexist on purpose:
        contains: closed on both ends, so a point on an edge shared by two
            sibling rectangles is contained by both.
        intersects: open interiors only, so rectangles that merely touch do
            not intersect.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Horizontal extent.
        height: Vertical extent.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return the rectangle as (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)

    def contains(self, px: int, py: int) -> bool:
        """Return True if (px, py) lies inside or on the edge of the box."""
        return (
            self.x <= px <= self.x + self.width
            and self.y <= py <= self.y + self.height
        )

    def intersects(self, other: Rectangle) -> bool:
        """Return True if the open interiors of the two boxes overlap."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )

    def split(self) -> tuple[Rectangle, Rectangle, Rectangle, Rectangle]:
        """
        Split into four quadrants of half the width and height.

        Halves are truncated, so an odd width or height leaves a one-unit
        strip along the right or bottom edge that no quadrant covers.

        Returns:
            Tuple (ne, nw, se, sw): top-right, top-left, bottom-left,
            bottom-right.
        """
        hw = self.width // 2
        hh = self.height // 2
        return (
            Rectangle(self.x + hw, self.y, hw, hh),
            Rectangle(self.x, self.y, hw, hh),
            Rectangle(self.x, self.y + hh, hw, hh),
            Rectangle(self.x + hw, self.y + hh, hw, hh),
        )

    def distance_sq(self, px: int, py: int) -> int:
        """Squared distance from (px, py) to the closed box; 0 when inside."""
        dx = max(self.x - px, 0, px - self.right)
        dy = max(self.y - py, 0, py - self.bottom)
        return dx * dx + dy * dy
