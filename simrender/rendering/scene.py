"""
Scene analysis and render setup recommendation.

Takes the parameters and closed-form results of a textbook scenario
(drop onto an incline, bounce, slide, rest) and derives the coordinate
config, environment and 2D settings that display it in full.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import structlog
from pydantic import BaseModel, Field

from simrender.config.styles import MotionPhase, SurfaceKind
from simrender.geometry.coordinates import CoordinateSystem, GeometryValidation
from simrender.models.geometry import (
    CoordinateConfig,
    InclineDefinition,
    Orientation,
    PhysicsPoint,
    ScreenConfig,
)

logger = structlog.get_logger(__name__)


class SceneParameters(BaseModel):
    """Physical parameters extracted from the problem statement."""

    mass: float = Field(1.0, gt=0.0, description="Body mass in kg")
    height: float = Field(0.0, ge=0.0, description="Drop height in m")
    gravity: float = Field(9.8, gt=0.0, description="Gravity magnitude in m/s^2")
    incline_angle: Optional[float] = Field(None, description="Incline angle in degrees")
    friction_coeff: Optional[float] = Field(None, ge=0.0)


class SceneResults(BaseModel):
    """Closed-form results computed by the scenario formulas."""

    impact_speed: float = Field(0.0, ge=0.0, description="Speed at impact in m/s")
    max_distance: float = Field(0.0, ge=0.0, description="Travel along the incline in m")
    fall_time: float = 0.0
    incline_time: float = 0.0
    total_time: float = 0.0


@dataclass(frozen=True)
class SceneAnalysis:
    """Rendering-relevant summary of a scenario."""

    problem_type: str = "complex_mechanics"
    phases: tuple[MotionPhase, ...] = tuple(MotionPhase)
    max_distance: float = 0.0
    max_height: float = 0.0
    max_speed: float = 0.0
    incline_angle: Optional[float] = None
    friction_coeff: Optional[float] = None
    time_range: tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class SurfaceOutline:
    id: str
    kind: SurfaceKind
    points: tuple[PhysicsPoint, ...]


@dataclass(frozen=True)
class Environment:
    """World-space scenery the drawing layer renders behind the bodies."""

    inclines: tuple[InclineDefinition, ...] = ()
    gravity: PhysicsPoint = PhysicsPoint(0.0, -9.8)
    surfaces: tuple[SurfaceOutline, ...] = ()

    @property
    def primary_incline(self) -> Optional[InclineDefinition]:
        return self.inclines[0] if self.inclines else None

    @classmethod
    def standard(
        cls,
        incline_angle: float,
        max_distance: float,
        friction_coeff: float = 0.2,
    ) -> "Environment":
        """One incline at the origin over a flat ground line."""
        return cls(
            inclines=(InclineDefinition.standard(
                incline_angle, max_distance, PhysicsPoint(), friction_coeff
            ),),
            gravity=PhysicsPoint(0.0, -9.8),
            surfaces=(SurfaceOutline(
                id="ground",
                kind=SurfaceKind.GROUND,
                points=(PhysicsPoint(-10.0, 0.0), PhysicsPoint(10.0, 0.0)),
            ),),
        )


@dataclass(frozen=True)
class Physics2DSettings:
    """Settings consumed by the 2D drawing layer."""

    width: int = 1280
    height: int = 720
    fps: float = 30.0
    duration: float = 0.0
    background_color: str = "#F0F8FF"
    show_vectors: bool = True
    show_annotations: bool = True
    show_trajectory: bool = False
    ball_radius: float = 0.1  # Meters
    vector_scale: float = 0.5


@dataclass
class RenderRecommendation:
    """Suggested coordinate config and environment for a scenario."""

    coordinate_config: CoordinateConfig
    settings: Physics2DSettings
    environment: Environment
    geometry: GeometryValidation
    warnings: list[str] = field(default_factory=list)
    optimizations: list[str] = field(default_factory=list)


def analyze_scene(params: SceneParameters, results: SceneResults) -> SceneAnalysis:
    """Summarize a scenario for rendering."""
    return SceneAnalysis(
        max_distance=results.max_distance,
        max_height=params.height,
        max_speed=results.impact_speed,
        incline_angle=params.incline_angle,
        friction_coeff=params.friction_coeff,
        time_range=(0.0, results.total_time),
    )


def recommend_render_setup(
    analysis: SceneAnalysis,
    screen: ScreenConfig = ScreenConfig(),
    max_scale: float = 100.0,
    min_scale: float = 20.0,
) -> RenderRecommendation:
    """
    Derive a coordinate config that shows the whole scenario.

    Leaves 50% headroom on travel distance and 100% on drop height, uses
    80% of the width and 60% of the height, and caps pixel density.
    """
    warnings: list[str] = []
    optimizations: list[str] = []

    required_width = max(analysis.max_distance * 1.5, 0.1)
    required_height = max(analysis.max_height * 2, 0.1)
    scale = min(
        (screen.width * 0.8) / required_width,
        (screen.height * 0.6) / required_height,
        max_scale,
    )

    if scale < min_scale:
        warnings.append(
            f"Scale {scale:.1f}px/m is too small for a legible render"
        )
        optimizations.append("Increase screen resolution or reduce the physical extent")

    coordinate_config = CoordinateConfig(
        scale=scale,
        offset_x=screen.width / 2,
        offset_y=screen.height - 100,
        orientation=Orientation.Y_UP,
    )

    environment = Environment.standard(
        analysis.incline_angle if analysis.incline_angle is not None else 30.0,
        analysis.max_distance,
        analysis.friction_coeff if analysis.friction_coeff is not None else 0.2,
    )

    geometry = CoordinateSystem(coordinate_config).validate_geometry(
        environment.primary_incline,
        analysis.max_distance,
        screen,
    )
    if not geometry.valid:
        warnings.extend(geometry.issues)
        optimizations.extend(geometry.recommendations)

    settings = Physics2DSettings(
        width=screen.width,
        height=screen.height,
        duration=analysis.time_range[1],
    )

    logger.info(
        "Recommended render setup",
        scale=round(scale, 3),
        incline_length=round(environment.primary_incline.length, 3),
        max_distance=analysis.max_distance,
        num_warnings=len(warnings),
    )

    return RenderRecommendation(
        coordinate_config=coordinate_config,
        settings=settings,
        environment=environment,
        geometry=geometry,
        warnings=warnings,
        optimizations=optimizations,
    )
