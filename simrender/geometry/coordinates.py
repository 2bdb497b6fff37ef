"""
Unified world<->screen coordinate system.

Every screen coordinate in a render job is derived here, from the job's
single CoordinateConfig. This module also owns incline contact geometry:
a body drawn on an incline must be placed with ``calculate_incline_point``
so that it touches the surface without penetrating it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import structlog

from simrender.models.geometry import (
    CoordinateConfig,
    InclineDefinition,
    Orientation,
    PhysicsPoint,
    ScreenConfig,
    ScreenPoint,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class InclineScreenPoints:
    """Screen-space endpoints of an incline."""

    start: ScreenPoint
    end: ScreenPoint


@dataclass
class GeometryValidation:
    """Result of a geometry consistency check."""

    valid: bool = True
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def add(self, issue: str, recommendation: str) -> None:
        """Record an issue together with its recommendation."""
        self.valid = False
        self.issues.append(issue)
        self.recommendations.append(recommendation)


class CoordinateSystem:
    """
    Stateless transform and geometry helpers bound to one CoordinateConfig.

    The config is immutable, so one instance may be shared freely between
    frames that are computed concurrently.
    """

    def __init__(self, config: Optional[CoordinateConfig] = None):
        self.config = config or CoordinateConfig()

    def world_to_screen(self, point: PhysicsPoint) -> ScreenPoint:
        """Map a world point to pixels. The only sanctioned conversion path."""
        cfg = self.config
        screen_x = cfg.offset_x + point.x * cfg.scale
        if cfg.orientation == Orientation.Y_UP:
            screen_y = cfg.offset_y - point.y * cfg.scale
        else:
            screen_y = cfg.offset_y + point.y * cfg.scale
        return ScreenPoint(screen_x, screen_y)

    def screen_to_world(self, point: ScreenPoint) -> PhysicsPoint:
        """Exact inverse of ``world_to_screen``."""
        cfg = self.config
        world_x = (point.x - cfg.offset_x) / cfg.scale
        if cfg.orientation == Orientation.Y_UP:
            world_y = (cfg.offset_y - point.y) / cfg.scale
        else:
            world_y = (point.y - cfg.offset_y) / cfg.scale
        return PhysicsPoint(world_x, world_y)

    def world_length_to_screen(self, meters: float) -> float:
        return meters * self.config.scale

    def screen_length_to_world(self, pixels: float) -> float:
        return pixels / self.config.scale

    def calculate_incline_point(
        self,
        distance_along_incline: float,
        incline: InclineDefinition,
        object_radius: float = 0.0,
    ) -> PhysicsPoint:
        """
        Point ``distance_along_incline`` meters along the incline.

        With a positive ``object_radius`` the point is pushed out along the
        surface normal by exactly that radius, giving the centre of a body
        tangent to the incline.
        """
        base = incline.start_point + incline.direction * distance_along_incline
        if object_radius > 0:
            return base + incline.normal * object_radius
        return base

    def calculate_incline_screen_points(
        self,
        incline: InclineDefinition,
    ) -> InclineScreenPoints:
        return InclineScreenPoints(
            start=self.world_to_screen(incline.start_point),
            end=self.world_to_screen(incline.end_point),
        )

    def calculate_optimal_incline_length(
        self,
        max_distance_along_incline: float,
        screen_width: float,
        margin: float = 50.0,
    ) -> float:
        """
        Incline length covering the full travel (+20%) but fitting the screen.
        """
        required_length = max_distance_along_incline * 1.2
        max_screen_length = (
            screen_width - self.config.offset_x - margin
        ) / self.config.scale
        return min(required_length, max_screen_length)

    def distance_to_incline_surface(
        self,
        point: PhysicsPoint,
        incline: InclineDefinition,
    ) -> float:
        """Signed perpendicular distance from the incline line (+ is outward)."""
        return (point - incline.start_point).dot(incline.normal)

    def enforce_incline_contact(
        self,
        position: PhysicsPoint,
        distance_along_incline: float,
        incline: InclineDefinition,
        object_radius: float,
    ) -> PhysicsPoint:
        """
        Snap a body onto the incline surface.

        A negative distance means the body is not on the incline and its
        position is returned unchanged.
        """
        if distance_along_incline >= 0:
            return self.calculate_incline_point(
                distance_along_incline, incline, object_radius
            )
        return position

    def validate_geometry(
        self,
        incline: InclineDefinition,
        max_distance: float,
        screen_config: ScreenConfig,
    ) -> GeometryValidation:
        """
        Check an incline against the travel distance and the canvas.

        Never raises; each problem is reported with a recommendation.
        """
        result = GeometryValidation()

        if incline.length < max_distance:
            result.add(
                f"Incline length {incline.length:.2f}m is insufficient to cover "
                f"max distance {max_distance:.2f}m",
                f"Use an incline length of at least {max_distance * 1.2:.2f}m",
            )

        end = self.calculate_incline_screen_points(incline).end
        if not screen_config.contains(end):
            result.add(
                f"Incline end point ({end.x:.1f}, {end.y:.1f})px lies off-canvas "
                f"({screen_config.width}x{screen_config.height})",
                "Reduce the scale or move the incline start point",
            )

        if incline.angle <= 0 or incline.angle >= 90:
            result.add(
                f"Incline angle {incline.angle}° is outside the open range (0°, 90°)",
                "Use an incline angle strictly between 0° and 90°",
            )

        if not result.valid:
            logger.debug(
                "Geometry validation failed",
                num_issues=len(result.issues),
                angle=incline.angle,
                length=incline.length,
            )
        return result
