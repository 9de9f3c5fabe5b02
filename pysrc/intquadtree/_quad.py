# _quad.py
"""Recursive point quadtree node."""

from __future__ import annotations

import heapq
import logging
from itertools import count
from typing import Iterator, NamedTuple

from ._common import Point
from ._insert_result import InsertOutcome
from ._rectangle import Rectangle

logger = logging.getLogger(__name__)


class QuadView(NamedTuple):
    """Read-only snapshot of one node, as yielded by Quad.walk()."""

    bounds: Rectangle
    divided: bool
    depth: int
    size: int


def depth_limit(bounds: Rectangle, max_depth: int | None = None) -> int:
    """
    Return the deepest level a tree rooted at `bounds` can reach.

    A node stops subdividing once its width or height drops below 2, or once
    it sits at `max_depth`.
    """
    depth = 0
    width, height = bounds.width, bounds.height
    while width >= 2 and height >= 2 and (max_depth is None or depth < max_depth):
        width //= 2
        height //= 2
        depth += 1
    return depth


class Quad:
    """
    A quadtree node over a Rectangle.

    Points are stored in the first node with room on the way down and are
    never moved afterwards. When a node is full it splits into four children
    (NE, NW, SE, SW) and further points go to the first child, in that
    order, that accepts them. The same fixed order is used for query output.

    A node whose width or height is below 2, or which sits at `max_depth`,
    never splits. It keeps overflow points itself, so capacity is a soft
    limit there.

    Thread-safety:
        Not thread-safe. Serialize access externally.

    Args:
        bounds: Region covered by this node.
        capacity: Max number of points stored directly before splitting.
        max_depth: Optional depth at which nodes stop splitting.
        depth: Depth of this node; 0 for the root.
    """

    __slots__ = (
        "_children",
        "bounds",
        "capacity",
        "depth",
        "divided",
        "max_depth",
        "points",
    )

    def __init__(
        self,
        bounds: Rectangle,
        capacity: int,
        *,
        max_depth: int | None = None,
        depth: int = 0,
    ):
        self.bounds = bounds
        self.capacity = capacity
        self.max_depth = max_depth
        self.depth = depth
        self.points: list[Point] = []
        self.divided = False
        self._children: tuple[Quad, Quad, Quad, Quad] | None = None

    def __repr__(self) -> str:
        return (
            f"Quad(bounds={self.bounds.as_tuple()}, capacity={self.capacity}, "
            f"depth={self.depth}, divided={self.divided}, points={len(self.points)})"
        )

    def __len__(self) -> int:
        """Return the number of points stored in this subtree."""
        total = len(self.points)
        if self._children is not None:
            total += sum(len(child) for child in self._children)
        return total

    # ---- Children ----

    @property
    def children(self) -> tuple[Quad, Quad, Quad, Quad] | None:
        """The four children as (ne, nw, se, sw), or None for a leaf."""
        return self._children

    @property
    def ne(self) -> Quad | None:
        return None if self._children is None else self._children[0]

    @property
    def nw(self) -> Quad | None:
        return None if self._children is None else self._children[1]

    @property
    def se(self) -> Quad | None:
        return None if self._children is None else self._children[2]

    @property
    def sw(self) -> Quad | None:
        return None if self._children is None else self._children[3]

    def can_subdivide(self) -> bool:
        """Return True if this node is allowed to split into quadrants."""
        if self.bounds.width < 2 or self.bounds.height < 2:
            return False
        return self.max_depth is None or self.depth < self.max_depth

    def subdivide(self) -> None:
        """
        Split this node into four empty children.

        Raises:
            RuntimeError: If the node is already divided or may not split.
        """
        if self.divided:
            raise RuntimeError("Quad is already divided")
        if not self.can_subdivide():
            raise RuntimeError(f"Quad {self.bounds.as_tuple()} cannot be subdivided")

        self._children = tuple(
            Quad(rect, self.capacity, max_depth=self.max_depth, depth=self.depth + 1)
            for rect in self.bounds.split()
        )  # type: ignore[assignment]
        self.divided = True
        logger.debug("Subdivided node %s at depth %d", self.bounds.as_tuple(), self.depth)

    # ---- Mutation ----

    def insert(self, point: Point) -> InsertOutcome:
        """
        Insert a point into this subtree.

        Args:
            point: Point (x, y).

        Returns:
            STORED on success, OUT_OF_BOUNDS if the point lies outside this
            node, COVERAGE_GAP if it lies inside but no descendant covers it.
        """
        if not self.bounds.contains(point[0], point[1]):
            return InsertOutcome.OUT_OF_BOUNDS
        if self._insert(point):
            return InsertOutcome.STORED
        logger.warning(
            "Point %r lost in a coverage gap of node %s", point, self.bounds.as_tuple()
        )
        return InsertOutcome.COVERAGE_GAP

    def _insert(self, point: Point) -> bool:
        if not self.bounds.contains(point[0], point[1]):
            return False

        if len(self.points) < self.capacity:
            self.points.append(point)
            return True

        if not self.divided:
            if not self.can_subdivide():
                self.points.append(point)
                return True
            self.subdivide()

        for child in self._children:
            if child._insert(point):
                return True
        return False

    def locate(self, point: Point) -> Quad | None:
        """
        Return the node that stores `point`, or None.

        Only descends into nodes whose bounds contain the point.
        """
        if not self.bounds.contains(point[0], point[1]):
            return None
        if point in self.points:
            return self
        if self.divided:
            for child in self._children:
                node = child.locate(point)
                if node is not None:
                    return node
        return None

    def remove(self, point: Point) -> bool:
        """
        Remove one occurrence of `point` from this subtree.

        The tree shape is left as it is; emptied children are not merged.

        Returns:
            True if the point was found and removed.
        """
        node = self.locate(point)
        if node is None:
            return False
        node.points.remove(point)
        return True

    def clear(self) -> None:
        """Drop every point and child, turning this node back into an empty leaf."""
        self.points.clear()
        self.divided = False
        self._children = None

    # ---- Queries ----

    def query(self, rng: Rectangle) -> list[Point]:
        """
        Return all points inside `rng`.

        Subtrees whose bounds do not intersect `rng` are skipped. Each node
        reports its own points before those of its NE, NW, SE, SW children.
        """
        found: list[Point] = []
        self._query(rng, found)
        return found

    def _query(self, rng: Rectangle, found: list[Point]) -> None:
        if not rng.intersects(self.bounds):
            return

        for p in self.points:
            if rng.contains(p[0], p[1]):
                found.append(p)

        if self.divided:
            for child in self._children:
                child._query(rng, found)

    def iter_points(self) -> Iterator[Point]:
        """Yield every stored point, node by node in pre-order."""
        yield from self.points
        if self.divided:
            for child in self._children:
                yield from child.iter_points()

    def walk(self) -> Iterator[QuadView]:
        """Yield a QuadView for this node and every descendant, in pre-order."""
        yield QuadView(self.bounds, self.divided, self.depth, len(self.points))
        if self.divided:
            for child in self._children:
                yield from child.walk()

    def nearest(self, point: Point, k: int = 1) -> list[Point]:
        """
        Return up to `k` stored points closest to `point`.

        Distance is squared Euclidean. Nodes are visited best-first by their
        distance to `point`; equal distances keep discovery order.
        """
        if k <= 0:
            return []

        px, py = point
        seq = count()
        heap: list[tuple[int, int, Quad | None, Point | None]] = [
            (self.bounds.distance_sq(px, py), next(seq), self, None)
        ]
        out: list[Point] = []
        while heap and len(out) < k:
            _, _, node, found = heapq.heappop(heap)
            if node is None:
                out.append(found)
                continue
            for p in node.points:
                dx = p[0] - px
                dy = p[1] - py
                heapq.heappush(heap, (dx * dx + dy * dy, next(seq), None, p))
            if node.divided:
                for child in node._children:
                    heapq.heappush(
                        heap, (child.bounds.distance_sq(px, py), next(seq), child, None)
                    )
        return out
