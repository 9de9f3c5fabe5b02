# _common.py
"""Common utilities and constants shared across the quadtree modules."""

from __future__ import annotations

import operator
from typing import Any

# Type aliases
Bounds = tuple[int, int, int, int]
"""Axis-aligned rectangle as (x, y, width, height)."""

Point = tuple[int, int]
"""2D integer point as (x, y)."""

# Largest coordinate each dtype can hold
DTYPE_MAX = {
    "u8": 2**8 - 1,
    "u16": 2**16 - 1,
    "u32": 2**32 - 1,
    "u64": 2**64 - 1,
}
"""Mapping from quadtree dtype strings to their largest coordinate."""

QUADTREE_DTYPE_TO_NP_DTYPE = {
    "u8": "uint8",
    "u16": "uint16",
    "u32": "uint32",
    "u64": "uint64",
}
"""Mapping from quadtree dtype strings to NumPy dtype strings."""


def _is_np_array(x: Any) -> bool:
    """
    Check if x is a NumPy array without importing NumPy.

    This allows dtype checking without forcing NumPy as a hard dependency.

    Args:
        x: Object to check.

    Returns:
        True if x is a NumPy array.
    """
    mod = getattr(x.__class__, "__module__", "")
    return mod.startswith("numpy") and hasattr(x, "ndim") and hasattr(x, "shape")


def validate_dtype(dtype: str) -> int:
    """
    Return the largest coordinate for a dtype string.

    Raises:
        TypeError: If the dtype is not supported.
    """
    try:
        return DTYPE_MAX[dtype]
    except KeyError:
        raise TypeError(f"Unsupported dtype: {dtype}") from None


def _as_int(value: Any, what: str) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"{what} must be integers, got {value!r}") from None


def validate_bounds(bounds: Any, dtype: str = "u32") -> Bounds:
    """
    Validate and normalize bounds to a tuple.

    Args:
        bounds: Bounds as sequence of 4 integers (x, y, width, height).
        dtype: Coordinate dtype the bounds must fit in.

    Returns:
        Validated bounds as tuple.

    Raises:
        ValueError: If bounds are invalid.
        TypeError: If a value is not an integer.
    """
    if type(bounds) is not tuple:
        bounds = tuple(bounds)
    if len(bounds) != 4:
        raise ValueError(
            "bounds must be a tuple of four integer values (x, y, width, height)"
        )
    x, y, width, height = (_as_int(v, "bounds") for v in bounds)
    limit = validate_dtype(dtype)
    if min(x, y, width, height) < 0:
        raise ValueError(f"bounds must be non-negative, got {bounds!r}")
    if x + width > limit or y + height > limit:
        raise ValueError(f"bounds {bounds!r} do not fit in dtype {dtype}")
    return (x, y, width, height)


def validate_point(point: Any) -> Point:
    """
    Normalize a point to a tuple of two Python ints.

    Raises:
        ValueError: If the point does not have two coordinates.
        TypeError: If a coordinate is not an integer.
    """
    if len(point) != 2:
        raise ValueError(f"point must have two coordinates, got {point!r}")
    x, y = point
    return (_as_int(x, "point coordinates"), _as_int(y, "point coordinates"))


def validate_np_dtype(geoms: Any, expected_dtype: str) -> None:
    """
    Validate that a NumPy array's dtype matches expected dtype.

    Args:
        geoms: NumPy array to validate.
        expected_dtype: Expected quadtree dtype ('u8', 'u16', 'u32', 'u64').

    Raises:
        TypeError: If dtype doesn't match.
    """
    expected_np_dtype = QUADTREE_DTYPE_TO_NP_DTYPE.get(expected_dtype)
    if geoms.dtype != expected_np_dtype:
        raise TypeError(
            f"NumPy array dtype {geoms.dtype} does not match quadtree dtype {expected_dtype}"
        )
