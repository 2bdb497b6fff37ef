"""
Render configuration builder.

Derives a self-consistent coordinate, camera and style configuration from
trajectory bounds and the target screen size. Trace bounds are analysed
once per render job, not per frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Union

import structlog

from simrender.config.styles import (
    BODY_PALETTE,
    THEMES,
    BodyKind,
    BodyShape,
    ObjectStyle,
    SurfaceKind,
    SurfaceStyle,
    Theme,
    surface_style,
)
from simrender.geometry.bounds import BoundingBox
from simrender.geometry.coordinates import CoordinateSystem
from simrender.models.geometry import (
    CoordinateConfig,
    InclineDefinition,
    Orientation,
    PhysicsPoint,
    ScreenConfig,
)
from simrender.models.trace import Trace

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BodySpec:
    """Description of a body the renderer needs to style."""

    id: str
    kind: BodyKind = BodyKind.BALL
    shape: BodyShape = BodyShape.CIRCLE
    mass: float = 1.0
    radius: float = 0.1


@dataclass(frozen=True)
class SurfaceSpec:
    id: str
    kind: SurfaceKind = SurfaceKind.PLANE


@dataclass
class UIOptions:
    """Caller-facing options for configuration building."""

    fps: float = 30.0
    theme: Theme = Theme.PHYSICS
    background_color: Optional[str] = None
    show_vectors: bool = True
    show_trajectory: bool = False
    show_energy: bool = True
    show_annotations: bool = True

    # Upper bound on pixel density, avoids huge zoom on tiny trajectories
    scale_cap: float = 200.0

    # Pixels kept free below the ground line for overlay text
    ground_margin: float = 100.0

    # Optional incline to sanity-check against the chosen scale
    incline: Optional[InclineDefinition] = None
    max_distance: Optional[float] = None

    # Gravity magnitude shown in the parameter overlay
    gravity: Optional[float] = None


@dataclass(frozen=True)
class CameraBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float


@dataclass(frozen=True)
class CameraConfig:
    """Camera for the (external) 3D strategy."""

    type: str = "adaptive"
    position: tuple[float, float, float] = (0.0, 0.0, 10.0)
    target: tuple[float, float, float] = (0.0, 0.0, 0.0)
    fov: float = 45.0
    near: float = 0.1
    far: float = 100.0
    bounds: Optional[CameraBounds] = None


@dataclass(frozen=True)
class StyleConfig:
    background_color: str = THEMES[Theme.PHYSICS].background_color
    grid_enabled: bool = False
    axes_enabled: bool = False
    shadows_enabled: bool = True


@dataclass(frozen=True)
class DirectionalLight:
    intensity: float = 0.8
    direction: tuple[float, float, float] = (1.0, 1.0, 1.0)
    color: str = "#ffffff"


@dataclass(frozen=True)
class LightingConfig:
    ambient: float = 0.4
    directional: DirectionalLight = DirectionalLight()


@dataclass(frozen=True)
class Annotation:
    text: str
    position: tuple[float, float]
    font: str = "16px Arial"
    color: str = "#000"


@dataclass(frozen=True)
class OverlayConfig:
    show_time: bool = True
    show_energy: bool = True
    show_parameters: bool = True
    show_events: bool = True
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class RenderConfig:
    """Complete configuration handed to the drawing layer."""

    width: int
    height: int
    fps: float
    duration: float
    coordinate: CoordinateConfig
    bounds: BoundingBox
    camera: CameraConfig
    style: StyleConfig
    objects: dict[str, ObjectStyle] = field(default_factory=dict)
    surfaces: dict[str, SurfaceStyle] = field(default_factory=dict)
    lighting: LightingConfig = LightingConfig()
    overlays: OverlayConfig = OverlayConfig()
    warnings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()

    @property
    def screen(self) -> ScreenConfig:
        return ScreenConfig(self.width, self.height)


@dataclass
class ConfigValidation:
    valid: bool = True
    issues: list[str] = field(default_factory=list)


class RenderConfigBuilder:
    """
    Builds render configurations from traces or precomputed bounds.

    Never propagates NaN or infinity into a config: degenerate input falls
    back to a default bounding box.
    """

    def __init__(self, options: Optional[UIOptions] = None):
        self.options = options or UIOptions()
        self.logger = structlog.get_logger(__name__)

    def build(
        self,
        source: Union[Trace, BoundingBox],
        screen_size: tuple[int, int],
        bodies: Sequence[BodySpec] = (),
        surfaces: Sequence[SurfaceSpec] = (),
    ) -> RenderConfig:
        """
        Build a full render configuration.

        Args:
            source: A trace to analyse, or an already computed bounding box
            screen_size: (width, height) in pixels
            bodies: Bodies to style, in palette order
            surfaces: Surfaces to style

        Returns:
            RenderConfig with coordinate transform and advisory warnings
        """
        width, height = screen_size
        opts = self.options

        if isinstance(source, Trace):
            bounds = self.analyze_bounds(source)
            duration = source.duration
        else:
            bounds = source if source.is_finite else BoundingBox.default()
            duration = 0.0

        coordinate = self.calculate_coordinate(bounds, screen_size)
        self.logger.info(
            "Built coordinate config",
            scale=round(coordinate.scale, 3),
            offset_x=round(coordinate.offset_x, 1),
            offset_y=round(coordinate.offset_y, 1),
        )

        warnings: list[str] = []
        recommendations: list[str] = []
        if opts.incline is not None:
            max_distance = (
                opts.max_distance if opts.max_distance is not None
                else opts.incline.length
            )
            check = CoordinateSystem(coordinate).validate_geometry(
                opts.incline,
                max_distance,
                ScreenConfig(width, height),
            )
            warnings.extend(check.issues)
            recommendations.extend(check.recommendations)
            if not check.valid:
                self.logger.warning(
                    "Geometry check reported issues",
                    issues=check.issues,
                )

        return RenderConfig(
            width=width,
            height=height,
            fps=opts.fps,
            duration=duration,
            coordinate=coordinate,
            bounds=bounds,
            camera=self.configure_camera(bounds),
            style=self.configure_style(),
            objects=self.configure_objects(bodies),
            surfaces=self.configure_surfaces(surfaces),
            lighting=LightingConfig(),
            overlays=self.configure_overlays(bodies),
            warnings=tuple(warnings),
            recommendations=tuple(recommendations),
        )

    @staticmethod
    def analyze_bounds(trace: Trace) -> BoundingBox:
        """AABB over every body position in every sample, with margin."""
        points = [
            PhysicsPoint(state.x, state.y)
            for sample in trace.samples
            for state in sample.bodies.values()
            if math.isfinite(state.x) and math.isfinite(state.y)
        ]
        if not points:
            return BoundingBox.default()
        return BoundingBox.from_points(points).with_margin(fraction=0.1, minimum=0.5)

    def calculate_coordinate(
        self,
        bounds: BoundingBox,
        screen_size: tuple[int, int],
    ) -> CoordinateConfig:
        width, height = screen_size
        physics_width = max(bounds.width, 0.1)
        physics_height = max(bounds.height, 0.1)

        scale = min(
            (width * 0.8) / physics_width,
            (height * 0.6) / physics_height,
            self.options.scale_cap,
        )

        center = bounds.center
        return CoordinateConfig(
            scale=scale,
            offset_x=width / 2 - center.x * scale,
            offset_y=height - self.options.ground_margin,
            orientation=Orientation.Y_UP,
        )

    @staticmethod
    def configure_camera(bounds: BoundingBox) -> CameraConfig:
        center = bounds.center
        size = max(bounds.width, bounds.height)
        distance = size * 2
        return CameraConfig(
            type="adaptive",
            position=(center.x, center.y, distance),
            target=(center.x, center.y, 0.0),
            fov=45.0,
            near=0.1,
            far=distance * 10,
            bounds=CameraBounds(
                min_x=bounds.min_x,
                max_x=bounds.max_x,
                min_y=bounds.min_y,
                max_y=bounds.max_y,
                min_z=-size,
                max_z=size,
            ),
        )

    def configure_style(self) -> StyleConfig:
        theme = THEMES[self.options.theme]
        return StyleConfig(
            background_color=self.options.background_color or theme.background_color,
            grid_enabled=theme.grid,
            axes_enabled=theme.axes,
            shadows_enabled=theme.shadows,
        )

    @staticmethod
    def configure_objects(bodies: Sequence[BodySpec]) -> dict[str, ObjectStyle]:
        return {
            body.id: ObjectStyle(fill_color=BODY_PALETTE[i % len(BODY_PALETTE)])
            for i, body in enumerate(bodies)
        }

    @staticmethod
    def configure_surfaces(surfaces: Sequence[SurfaceSpec]) -> dict[str, SurfaceStyle]:
        styles = {}
        for surface in surfaces:
            kind = SurfaceKind.GROUND if surface.id == "ground" else surface.kind
            styles[surface.id] = surface_style(kind)
        return styles

    def configure_overlays(self, bodies: Sequence[BodySpec]) -> OverlayConfig:
        annotations: list[Annotation] = []
        if self.options.show_annotations:
            for body in bodies:
                annotations.append(Annotation(
                    text=f"Mass: {body.mass}kg",
                    position=(20.0, 40.0),
                ))
            if self.options.gravity:
                annotations.append(Annotation(
                    text=f"Gravity: {abs(self.options.gravity)}m/s²",
                    position=(20.0, 65.0),
                ))

        return OverlayConfig(
            show_time=True,
            show_energy=self.options.show_energy,
            show_parameters=True,
            show_events=True,
            annotations=tuple(annotations),
        )

    @staticmethod
    def validate_config(config: RenderConfig) -> ConfigValidation:
        """Sanity-check basic render parameters."""
        result = ConfigValidation()

        if config.width <= 0 or config.height <= 0:
            result.issues.append("Screen size must be positive")
        if config.fps <= 0 or config.fps > 120:
            result.issues.append("Frame rate must be within (0, 120]")
        if config.coordinate.scale <= 0:
            result.issues.append("Coordinate scale must be positive")
        if config.camera.near >= config.camera.far:
            result.issues.append("Camera near plane must be closer than far plane")

        result.valid = not result.issues
        return result

    @staticmethod
    def optimize_for_performance(config: RenderConfig) -> RenderConfig:
        """Return a copy with shadows and lighting tuned to the resolution."""
        pixel_count = config.width * config.height

        if pixel_count > 1920 * 1080:
            shadows, ambient = True, 0.3
        elif pixel_count > 1280 * 720:
            shadows, ambient = True, 0.4
        else:
            shadows, ambient = False, 0.5

        return replace(
            config,
            style=replace(config.style, shadows_enabled=shadows),
            lighting=replace(config.lighting, ambient=ambient),
        )


def build_render_config(
    source: Union[Trace, BoundingBox],
    screen_size: tuple[int, int],
    options: Optional[UIOptions] = None,
    bodies: Sequence[BodySpec] = (),
    surfaces: Sequence[SurfaceSpec] = (),
) -> RenderConfig:
    """Build a render configuration with the given options."""
    return RenderConfigBuilder(options).build(source, screen_size, bodies, surfaces)
