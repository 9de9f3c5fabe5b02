# point_quadtree.py
"""QuadTree - Point spatial index over a bounded unsigned integer grid."""

from __future__ import annotations

from typing import Any, Iterator

from ._common import (
    Bounds,
    Point,
    QUADTREE_DTYPE_TO_NP_DTYPE,
    _is_np_array,
    validate_bounds,
    validate_np_dtype,
    validate_point,
)
from ._errors import CoverageGapError
from ._insert_result import InsertOutcome, InsertResult
from ._quad import Quad, depth_limit
from ._rectangle import Rectangle


class QuadTree:
    """
    Spatial index for 2D integer points.

    Wraps a root Quad with validation and exceptions for failed inserts.
    The underlying node is available as `root` for callers that prefer
    result values over exceptions; `len()` always counts what the tree
    holds, however it was inserted.

    Performance characteristics:
        Inserts: average O(log n)
        Rect queries: average O(log n + k) where k is matches returned
        Nearest neighbor: average O(log n)

    Thread-safety:
        Instances are not thread-safe. Use external synchronization if you
        mutate the same tree from multiple threads.

    Args:
        bounds: World bounds as (x, y, width, height). Both edges are
            inclusive for point membership.
        capacity: Max number of points per node before splitting.
        max_depth: Optional max tree depth. If omitted, nodes split until
            their width or height drops below 2.
        dtype: Coordinate type ('u8', 'u16', 'u32', 'u64'). Default is 'u32'.

    Raises:
        ValueError: If parameters are invalid or inserts are out of bounds.
        TypeError: If dtype is unsupported.

    Example:
        ```python
        qt = QuadTree((0, 0, 100, 100), capacity=10)
        qt.insert((10, 20))
        for x, y in qt.query((5, 5, 20, 20)):
            print(f"Point at ({x}, {y})")
        ```
    """

    __slots__ = ("_bounds", "_capacity", "_dtype", "_max_depth", "_root")

    def __init__(
        self,
        bounds: Bounds,
        capacity: int,
        *,
        max_depth: int | None = None,
        dtype: str = "u32",
    ):
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")

        self._bounds = validate_bounds(bounds, dtype)
        self._capacity = capacity
        self._max_depth = max_depth
        self._dtype = dtype

        self._root = Quad(Rectangle(*self._bounds), capacity, max_depth=max_depth)

    @property
    def root(self) -> Quad:
        """The root node."""
        return self._root

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def dtype(self) -> str:
        return self._dtype

    # ---- Insertion ----

    def insert(self, point: Point) -> None:
        """
        Insert a single point.

        Args:
            point: Point (x, y).

        Raises:
            ValueError: If the point is outside the tree bounds.
            CoverageGapError: If the point is inside the bounds but lands in a
                strip no quadrant covers.
            TypeError: If a coordinate is not an integer.
        """
        point = validate_point(point)
        outcome = self._root.insert(point)
        if outcome is InsertOutcome.OUT_OF_BOUNDS:
            bx, by, bw, bh = self._bounds
            raise ValueError(f"Point {point!r} is outside bounds ({bx}, {by}, {bw}, {bh})")
        if outcome is InsertOutcome.COVERAGE_GAP:
            raise CoverageGapError(point, self._bounds)

    def insert_many(self, points: list[Point]) -> InsertResult:
        """
        Bulk insert points.

        Every point is checked against the bounds before anything is stored,
        so an out-of-bounds point leaves the tree untouched. Points lost to a
        coverage gap do not raise; they are listed in the result.

        Args:
            points: List of points.

        Returns:
            InsertResult with the stored count and the lost points.

        Raises:
            ValueError: If any point is outside bounds.
        """
        pts = [validate_point(p) for p in points]
        root = self._root
        outside = [p for p in pts if not root.bounds.contains(p[0], p[1])]
        if outside:
            raise ValueError(
                f"{len(outside)} point(s) are outside tree bounds, first {outside[0]!r}"
            )

        result = InsertResult(count=0)
        for p in pts:
            if root.insert(p):
                result.count += 1
            else:
                result.gaps.append(p)

        return result

    def insert_many_np(self, points: Any) -> InsertResult:
        """
        Bulk insert points from a NumPy array of shape (N, 2).

        Args:
            points: NumPy array with dtype matching the tree's dtype.

        Returns:
            InsertResult with the stored count and the lost points.

        Raises:
            TypeError: If points is not a NumPy array or dtype doesn't match.
            ValueError: If the shape is wrong or any point is outside bounds.
            ImportError: If NumPy is not installed.
        """
        if not _is_np_array(points):
            raise TypeError("insert_many_np requires a NumPy array")

        import numpy as np

        if not isinstance(points, np.ndarray):
            raise TypeError("insert_many_np requires a NumPy array")

        if points.size == 0:
            return InsertResult(count=0)

        validate_np_dtype(points, self._dtype)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"expected an array of shape (N, 2), got {points.shape}")

        return self.insert_many([tuple(row) for row in points.tolist()])

    # ---- Queries ----

    def query(self, rect: Bounds) -> list[Point]:
        """
        Return all points inside an axis-aligned rectangle.

        Args:
            rect: Query rectangle as (x, y, width, height).

        Returns:
            List of (x, y) tuples, each node's points before its children's.

        Example:
            ```python
            for x, y in qt.query((10, 10, 20, 20)):
                print(f"Found point at ({x}, {y})")
            ```
        """
        return self._root.query(Rectangle(*validate_bounds(rect, self._dtype)))

    def query_np(self, rect: Bounds) -> Any:
        """
        Return all points inside an axis-aligned rectangle as a NumPy array.

        Args:
            rect: Query rectangle as (x, y, width, height).

        Returns:
            NDArray with shape (N, 2) and dtype matching the tree.

        Raises:
            ImportError: If NumPy is not installed.
        """
        import numpy as np

        found = self.query(rect)
        return np.array(found, dtype=QUADTREE_DTYPE_TO_NP_DTYPE[self._dtype]).reshape(
            len(found), 2
        )

    def nearest_neighbor(self, point: Point) -> Point | None:
        """
        Return the single nearest point to the query point.

        Args:
            point: Query point (x, y).

        Returns:
            The nearest (x, y) or None if the tree is empty.
        """
        found = self._root.nearest(validate_point(point), 1)
        return found[0] if found else None

    def nearest_neighbors(self, point: Point, k: int) -> list[Point]:
        """
        Return the k nearest points to the query point.

        Args:
            point: Query point (x, y).
            k: Number of neighbors to return.

        Returns:
            List of (x, y) tuples in order of increasing distance.
        """
        return self._root.nearest(validate_point(point), k)

    # ---- Deletion ----

    def delete(self, x: int, y: int) -> bool:
        """
        Delete one point at (x, y).

        Returns:
            True if a point was found and deleted.
        """
        return self.delete_tuple((x, y))

    def delete_tuple(self, point: Point) -> bool:
        return self._root.remove(validate_point(point))

    def clear(self) -> None:
        """
        Empty the tree in place, preserving bounds, capacity, and max_depth.
        """
        self._root.clear()

    # ---- Mutation ----

    def update(self, old_point: Point, new_point: Point) -> bool:
        """
        Move an existing point to a new location.

        Args:
            old_point: Current location.
            new_point: New location.

        Returns:
            True if the point was moved, False if old_point is not stored.

        Raises:
            ValueError: If new_point cannot be stored. The point stays at
                old_point.
        """
        old_point = validate_point(old_point)
        new_point = validate_point(new_point)

        if not self._root.remove(old_point):
            return False

        outcome = self._root.insert(new_point)
        if not outcome:
            # Rollback: reinsert at old position
            self._root.insert(old_point)
            if outcome is InsertOutcome.COVERAGE_GAP:
                raise CoverageGapError(new_point, self._bounds)
            bx, by, bw, bh = self._bounds
            raise ValueError(
                f"New point {new_point!r} is outside bounds ({bx}, {by}, {bw}, {bh})"
            )

        return True

    # ---- Utilities ----

    def __len__(self) -> int:
        """Return the number of points in the tree."""
        return len(self._root)

    def __contains__(self, point: Point) -> bool:
        """
        Check if a point is stored at the given coordinates.

        Example:
            ```python
            qt.insert((10, 20))
            assert (10, 20) in qt
            assert (5, 5) not in qt
            ```
        """
        return self._root.locate(validate_point(point)) is not None

    def __iter__(self) -> Iterator[Point]:
        """Iterate over all (x, y) points in the tree."""
        return self._root.iter_points()

    def get_all_node_boundaries(self) -> list[Bounds]:
        """
        Return all node boundaries in the tree. Useful for visualization.
        """
        return [view.bounds.as_tuple() for view in self._root.walk()]

    def get_inner_max_depth(self) -> int:
        """
        Return the maximum depth the quadtree can reach.

        Useful if you constructed with max_depth=None.
        """
        return depth_limit(self._root.bounds, self._max_depth)

    def depth(self) -> int:
        """Return the depth of the deepest node currently in the tree."""
        return max(view.depth for view in self._root.walk())
