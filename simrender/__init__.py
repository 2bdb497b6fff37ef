"""
simrender

Turns irregular-timestep physics simulation traces into fixed frame-rate,
event-aligned animation frames, with a single authoritative world<->screen
transform and incline contact geometry for educational video rendering.
"""

from simrender.models.trace import Trace, Sample, TraceEvent, ResampledFrame
from simrender.models.geometry import (
    CoordinateConfig,
    InclineDefinition,
    PhysicsPoint,
    ScreenPoint,
    ScreenConfig,
)
from simrender.geometry.coordinates import CoordinateSystem
from simrender.resampling.resampler import FrameResampler, ResampleConfig, resample
from simrender.config.builder import RenderConfigBuilder, RenderConfig
from simrender.rendering.manager import RenderingManager

__version__ = "0.1.0"

__all__ = [
    # Models
    "Trace",
    "Sample",
    "TraceEvent",
    "ResampledFrame",
    "CoordinateConfig",
    "InclineDefinition",
    "PhysicsPoint",
    "ScreenPoint",
    "ScreenConfig",
    # Geometry
    "CoordinateSystem",
    # Resampling
    "FrameResampler",
    "ResampleConfig",
    "resample",
    # Configuration
    "RenderConfigBuilder",
    "RenderConfig",
    # Rendering
    "RenderingManager",
]
