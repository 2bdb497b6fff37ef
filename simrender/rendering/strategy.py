"""
Rendering strategies.

A strategy owns the job's CoordinateSystem and turns world-space state
into screen-space primitives for the external drawing layer. Every
strategy places bodies through the same coordinate engine, so inclines and
bodies can never drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from simrender.config.styles import MotionPhase, phase_color, surface_style, SurfaceKind
from simrender.geometry.coordinates import CoordinateSystem, GeometryValidation
from simrender.models.geometry import (
    CoordinateConfig,
    InclineDefinition,
    PhysicsPoint,
    ScreenConfig,
    ScreenPoint,
)


class RenderStrategyType(str, Enum):
    CANVAS_2D = "2d_canvas"
    WEBGL_3D = "3d_webgl"


@dataclass(frozen=True)
class LinePrimitive:
    start: ScreenPoint
    end: ScreenPoint
    color: str
    line_width: float
    label: Optional[str] = None


@dataclass(frozen=True)
class CirclePrimitive:
    center: ScreenPoint
    radius: float  # Pixels
    fill_color: str
    stroke_color: str = "#000"
    line_width: float = 2.0


@dataclass(frozen=True)
class BodyPlacement:
    """World-space state of a body as the drawing layer needs it."""

    position: PhysicsPoint
    phase: MotionPhase
    incline_distance: Optional[float] = None


class RenderStrategy:
    """Base strategy: coordinate transform and geometry checks."""

    strategy_type: RenderStrategyType = RenderStrategyType.CANVAS_2D

    def __init__(self, coordinate_config: Optional[CoordinateConfig] = None):
        self.coordinates = CoordinateSystem(coordinate_config)

    @property
    def coordinate_config(self) -> CoordinateConfig:
        return self.coordinates.config

    def world_to_screen(self, point: PhysicsPoint) -> ScreenPoint:
        return self.coordinates.world_to_screen(point)

    def incline_position(
        self,
        distance_along_incline: float,
        incline: InclineDefinition,
        object_radius: float,
    ) -> PhysicsPoint:
        """Centre of a body resting on the incline."""
        return self.coordinates.calculate_incline_point(
            distance_along_incline, incline, object_radius
        )

    def validate_geometry(
        self,
        incline: InclineDefinition,
        max_distance: float,
        screen: ScreenConfig,
    ) -> GeometryValidation:
        return self.coordinates.validate_geometry(incline, max_distance, screen)


class Canvas2DStrategy(RenderStrategy):
    """Flat 2D canvas rendering."""

    strategy_type = RenderStrategyType.CANVAS_2D

    def incline_primitive(
        self,
        incline: InclineDefinition,
        max_distance: float,
        screen: ScreenConfig,
    ) -> LinePrimitive:
        """
        Line for the incline, long enough for the full travel but on-screen.
        """
        length = self.coordinates.calculate_optimal_incline_length(
            max_distance, screen.width, 50
        )
        drawn = InclineDefinition(
            angle=incline.angle,
            length=length,
            start_point=incline.start_point,
            friction_coeff=incline.friction_coeff,
        )
        points = self.coordinates.calculate_incline_screen_points(drawn)
        style = surface_style(SurfaceKind.INCLINE)
        return LinePrimitive(
            start=points.start,
            end=points.end,
            color=style.stroke_color,
            line_width=style.line_width,
            label=f"θ={incline.angle}°",
        )

    def body_primitive(
        self,
        body: BodyPlacement,
        incline: Optional[InclineDefinition],
        radius: float = 0.1,
    ) -> CirclePrimitive:
        """
        Circle for a body.

        Bodies in contact phases are placed on the incline surface from
        their distance along it, never from raw position data.
        """
        position = body.position
        if body.phase.on_incline and incline is not None:
            distance = (
                body.incline_distance if body.incline_distance is not None
                else body.position.x
            )
            position = self.incline_position(distance, incline, radius)

        return CirclePrimitive(
            center=self.world_to_screen(position),
            radius=self.coordinates.world_length_to_screen(radius),
            fill_color=phase_color(body.phase),
        )


class WebGL3DStrategy(RenderStrategy):
    """3D rendering; drawing itself happens in the external layer."""

    strategy_type = RenderStrategyType.WEBGL_3D


_STRATEGIES: dict[RenderStrategyType, type[RenderStrategy]] = {
    RenderStrategyType.CANVAS_2D: Canvas2DStrategy,
    RenderStrategyType.WEBGL_3D: WebGL3DStrategy,
}


def create_strategy(
    strategy_type: RenderStrategyType | str,
    coordinate_config: Optional[CoordinateConfig] = None,
) -> RenderStrategy:
    """Create a rendering strategy bound to one coordinate config."""
    if isinstance(strategy_type, str):
        strategy_type = RenderStrategyType(strategy_type)
    return _STRATEGIES[strategy_type](coordinate_config)
