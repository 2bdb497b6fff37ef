"""Geometry value objects shared by the coordinate engine and renderers."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Orientation(str, Enum):
    """Direction of the world y axis relative to the screen."""

    Y_UP = "y-up"
    Y_DOWN = "y-down"


@dataclass(frozen=True)
class PhysicsPoint:
    """Point in world coordinates (meters)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "PhysicsPoint") -> "PhysicsPoint":
        return PhysicsPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "PhysicsPoint") -> "PhysicsPoint":
        return PhysicsPoint(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "PhysicsPoint":
        return PhysicsPoint(self.x * scalar, self.y * scalar)

    def dot(self, other: "PhysicsPoint") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class ScreenPoint:
    """Point in device pixels (y always downward)."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class ScreenConfig:
    """Canvas size in pixels."""

    width: int = 1280
    height: int = 720

    def contains(self, point: ScreenPoint) -> bool:
        return 0 <= point.x <= self.width and 0 <= point.y <= self.height


@dataclass(frozen=True)
class CoordinateConfig:
    """
    The world<->screen affine transform of a render job.

    Instances are immutable. A render job owns exactly one; changing it
    means building a new config with ``with_updates``.
    """

    scale: float = 80.0  # Pixels per meter
    offset_x: float = 640.0
    offset_y: float = 620.0  # Ground line
    orientation: Orientation = Orientation.Y_UP

    def with_updates(self, **changes) -> "CoordinateConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class InclineDefinition:
    """A straight surface segment in world coordinates."""

    angle: float  # Degrees above horizontal
    length: float  # Meters
    start_point: PhysicsPoint = PhysicsPoint()
    friction_coeff: Optional[float] = None

    @property
    def angle_rad(self) -> float:
        return math.radians(self.angle)

    @property
    def direction(self) -> PhysicsPoint:
        """Unit vector pointing along the surface."""
        return PhysicsPoint(math.cos(self.angle_rad), math.sin(self.angle_rad))

    @property
    def normal(self) -> PhysicsPoint:
        """Outward unit normal, on the side objects rest on."""
        return PhysicsPoint(-math.sin(self.angle_rad), math.cos(self.angle_rad))

    @property
    def end_point(self) -> PhysicsPoint:
        return self.start_point + self.direction * self.length

    @classmethod
    def standard(
        cls,
        angle: float,
        max_distance: float,
        start_point: PhysicsPoint = PhysicsPoint(),
        friction_coeff: float = 0.2,
    ) -> "InclineDefinition":
        """Incline long enough to show ``max_distance`` of travel plus 20%."""
        return cls(
            angle=angle,
            length=max_distance * 1.2,
            start_point=start_point,
            friction_coeff=friction_coeff,
        )
