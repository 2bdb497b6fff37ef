"""
Rendering orchestration and quality validation.

Builds an optimal configuration for a scenario, selects a rendering
strategy, and scores the setup on geometric, physical and visual checks.
The score is advisory: it is reported to the caller and never aborts a
render.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

import structlog

from simrender.geometry.coordinates import CoordinateSystem
from simrender.models.geometry import (
    CoordinateConfig,
    InclineDefinition,
    PhysicsPoint,
    ScreenConfig,
)
from simrender.models.trace import ResampledFrame
from simrender.rendering.scene import (
    Environment,
    Physics2DSettings,
    SceneAnalysis,
    SceneParameters,
    SceneResults,
    analyze_scene,
    recommend_render_setup,
)
from simrender.rendering.strategy import (
    RenderStrategy,
    RenderStrategyType,
    create_strategy,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class QualityStandards:
    """Thresholds a render setup is measured against."""

    max_coordinate_deviation: float = 2.0  # Pixels
    incline_contact_tolerance: float = 1.0  # Pixels
    min_frame_rate: float = 24.0
    min_scale: float = 20.0  # Pixels per meter

    def with_updates(self, **changes) -> "QualityStandards":
        return replace(self, **changes)


@dataclass
class RenderValidationResult:
    """Outcome of the three render setup checks."""

    geometry_valid: bool = True
    physics_valid: bool = True
    visual_valid: bool = True
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def passed_checks(self) -> int:
        return sum((self.geometry_valid, self.physics_valid, self.visual_valid))

    @property
    def overall_score(self) -> float:
        """Fraction of checks passed: 0, 1/3, 2/3 or 1."""
        return self.passed_checks / 3


@dataclass
class RenderSetup:
    """Everything the drawing layer needs for one render job."""

    strategy: RenderStrategy
    coordinate_config: CoordinateConfig
    settings: Physics2DSettings
    environment: Environment
    analysis: SceneAnalysis
    validation: RenderValidationResult
    warnings: list[str] = field(default_factory=list)


class RenderingManager:
    """
    Composes configuration, strategy selection and validation.

    Holds no per-job state: each call builds its own CoordinateConfig and
    passes it through, so several jobs can run side by side.
    """

    def __init__(self, standards: Optional[QualityStandards] = None):
        self.standards = standards or QualityStandards()
        self.logger = structlog.get_logger(__name__)

    def create_standard_renderer(
        self,
        strategy_type: RenderStrategyType | str,
        params: SceneParameters,
        results: SceneResults,
        screen: ScreenConfig = ScreenConfig(),
    ) -> RenderSetup:
        """
        Build, select and validate a renderer for a scenario.

        Args:
            strategy_type: 2D canvas or 3D strategy
            params: Scenario parameters
            results: Closed-form scenario results
            screen: Target canvas size

        Returns:
            RenderSetup with the validation report attached
        """
        analysis = analyze_scene(params, results)
        recommendation = recommend_render_setup(
            analysis,
            screen,
            min_scale=self.standards.min_scale,
        )
        strategy = create_strategy(strategy_type, recommendation.coordinate_config)

        validation = self.validate_render_setup(
            strategy,
            recommendation.environment,
            analysis,
            screen,
        )

        self.logger.info(
            "Render setup validated",
            strategy=strategy.strategy_type.value,
            overall_score=round(validation.overall_score, 3),
        )
        if validation.issues:
            self.logger.warning("Render setup issues", issues=validation.issues)
        if validation.recommendations:
            self.logger.info(
                "Render setup recommendations",
                recommendations=validation.recommendations,
            )

        return RenderSetup(
            strategy=strategy,
            coordinate_config=recommendation.coordinate_config,
            settings=recommendation.settings,
            environment=recommendation.environment,
            analysis=analysis,
            validation=validation,
            warnings=recommendation.warnings,
        )

    def validate_render_setup(
        self,
        strategy: RenderStrategy,
        environment: Environment,
        analysis: SceneAnalysis,
        screen: ScreenConfig,
    ) -> RenderValidationResult:
        """Run the geometric, physical and visual checks independently."""
        result = RenderValidationResult()
        incline = environment.primary_incline

        # Geometric consistency
        if incline is not None:
            geometry = strategy.validate_geometry(incline, analysis.max_distance, screen)
            if not geometry.valid:
                result.geometry_valid = False
                result.issues.extend(geometry.issues)
                result.recommendations.extend(geometry.recommendations)

        # Physical plausibility
        if incline is not None:
            if incline.length < analysis.max_distance:
                result.physics_valid = False
                result.issues.append(
                    f"Incline length {incline.length:.2f}m does not cover the "
                    f"travel distance {analysis.max_distance:.2f}m"
                )
                result.recommendations.append(
                    "Increase the incline length or adjust the scale"
                )
            if incline.angle <= 0 or incline.angle >= 90:
                result.physics_valid = False
                result.issues.append(f"Incline angle {incline.angle}° is not physical")
                result.recommendations.append(
                    "Use an incline angle strictly between 0° and 90°"
                )

        # Visual quality
        scale = strategy.coordinate_config.scale
        if scale < self.standards.min_scale:
            result.visual_valid = False
            result.issues.append(
                f"Scale {scale:.1f}px/m is below the minimum "
                f"{self.standards.min_scale:.1f}px/m"
            )
            result.recommendations.append(
                "Increase the scale or reduce the physical extent"
            )

        return result

    def enforce_geometry_consistency(
        self,
        object_position: PhysicsPoint,
        incline_distance: float,
        incline_angle: float,
        object_radius: float,
        coordinate_config: Optional[CoordinateConfig] = None,
    ) -> PhysicsPoint:
        """
        Place a body on an origin-anchored incline when it is on one.

        A negative ``incline_distance`` leaves the position unchanged.
        """
        incline = InclineDefinition(
            angle=incline_angle,
            length=max(incline_distance * 2, 0.0),
            start_point=PhysicsPoint(),
        )
        return CoordinateSystem(coordinate_config).enforce_incline_contact(
            object_position, incline_distance, incline, object_radius
        )

    def check_contact(
        self,
        frames: Sequence[ResampledFrame],
        body_id: str,
        incline: InclineDefinition,
        object_radius: float,
        coordinate_config: CoordinateConfig,
    ) -> list[int]:
        """
        Frames in which a body meant to touch the incline visibly does not.

        A body counts as touching when its centre sits ``object_radius``
        above the surface within the contact tolerance, converted from
        pixels through the job's coordinate config.
        """
        coordinates = CoordinateSystem(coordinate_config)
        tolerance = coordinates.screen_length_to_world(
            self.standards.incline_contact_tolerance
        )

        offending = []
        for frame in frames:
            state = frame.bodies.get(body_id)
            if state is None:
                continue
            distance = coordinates.distance_to_incline_surface(
                PhysicsPoint(state.x, state.y), incline
            )
            if abs(distance - object_radius) > tolerance:
                offending.append(frame.frame_index)

        if offending:
            self.logger.warning(
                "Body loses incline contact",
                body_id=body_id,
                num_frames=len(offending),
            )
        return offending
