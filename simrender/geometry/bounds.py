"""
Axis-aligned bounding boxes over world-space trajectories.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from simrender.models.geometry import PhysicsPoint


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box in world coordinates."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def center(self) -> PhysicsPoint:
        return PhysicsPoint(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2,
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def is_finite(self) -> bool:
        return all(
            math.isfinite(v) for v in (self.min_x, self.max_x, self.min_y, self.max_y)
        )

    def contains(self, point: PhysicsPoint) -> bool:
        return (
            self.min_x <= point.x <= self.max_x and
            self.min_y <= point.y <= self.max_y
        )

    def expanded(self, margin_x: float, margin_y: float) -> "BoundingBox":
        """Grow the box by a margin on every side."""
        return BoundingBox(
            min_x=self.min_x - margin_x,
            max_x=self.max_x + margin_x,
            min_y=self.min_y - margin_y,
            max_y=self.max_y + margin_y,
        )

    def with_margin(
        self,
        fraction: float = 0.1,
        minimum: float = 0.5,
    ) -> "BoundingBox":
        """Expand by ``max(fraction * span, minimum)`` on each axis."""
        return self.expanded(
            max(self.width * fraction, minimum),
            max(self.height * fraction, minimum),
        )

    @classmethod
    def default(cls) -> "BoundingBox":
        """Fallback box used when no finite positions are available."""
        return cls(min_x=-5.0, max_x=5.0, min_y=-5.0, max_y=5.0)

    @classmethod
    def from_points(cls, points: Iterable[PhysicsPoint]) -> "BoundingBox":
        """
        Smallest box enclosing every finite point.

        Non-finite coordinates are skipped; with no usable point the
        default box is returned.
        """
        min_x = min_y = math.inf
        max_x = max_y = -math.inf

        for point in points:
            if not (math.isfinite(point.x) and math.isfinite(point.y)):
                continue
            min_x = min(min_x, point.x)
            max_x = max(max_x, point.x)
            min_y = min(min_y, point.y)
            max_y = max(max_y, point.y)

        box = cls(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)
        if not box.is_finite:
            return cls.default()
        return box
