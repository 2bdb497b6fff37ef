"""
Coordinate and geometry engine.

Provides the world<->screen transform, incline contact geometry and
consistency checks, plus bounding boxes over trajectories.
"""

from simrender.geometry.coordinates import (
    CoordinateSystem,
    GeometryValidation,
    InclineScreenPoints,
)
from simrender.geometry.bounds import BoundingBox

__all__ = [
    "CoordinateSystem",
    "GeometryValidation",
    "InclineScreenPoints",
    "BoundingBox",
]
