"""
Render configuration.

Builds the coordinate transform, camera, styling and overlay settings for
a render job from trace bounds and the target screen size.
"""

from simrender.config.builder import (
    RenderConfigBuilder,
    RenderConfig,
    UIOptions,
    BodySpec,
    SurfaceSpec,
    CameraConfig,
    StyleConfig,
    LightingConfig,
    OverlayConfig,
    Annotation,
    ConfigValidation,
    build_render_config,
)
from simrender.config.styles import (
    Theme,
    BodyKind,
    BodyShape,
    SurfaceKind,
    MotionPhase,
    ObjectStyle,
    SurfaceStyle,
    phase_color,
)

__all__ = [
    # Builder
    "RenderConfigBuilder",
    "RenderConfig",
    "UIOptions",
    "BodySpec",
    "SurfaceSpec",
    "CameraConfig",
    "StyleConfig",
    "LightingConfig",
    "OverlayConfig",
    "Annotation",
    "ConfigValidation",
    "build_render_config",
    # Styles
    "Theme",
    "BodyKind",
    "BodyShape",
    "SurfaceKind",
    "MotionPhase",
    "ObjectStyle",
    "SurfaceStyle",
    "phase_color",
]
