"""intquadtree - Point quadtree spatial index over a bounded integer grid."""

import logging

from ._errors import CoverageGapError
from ._insert_result import InsertOutcome, InsertResult
from ._quad import Quad, QuadView
from ._rectangle import Rectangle
from .point_quadtree import QuadTree

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CoverageGapError",
    "InsertOutcome",
    "InsertResult",
    "Quad",
    "QuadTree",
    "QuadView",
    "Rectangle",
]
