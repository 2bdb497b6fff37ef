"""Core data models for simrender."""

from simrender.models.trace import (
    BodyState,
    EnergyState,
    Sample,
    TraceEvent,
    TraceStats,
    Trace,
    FrameEvent,
    ResampledFrame,
)
from simrender.models.geometry import (
    Orientation,
    PhysicsPoint,
    ScreenPoint,
    ScreenConfig,
    CoordinateConfig,
    InclineDefinition,
)

__all__ = [
    # Trace
    "BodyState",
    "EnergyState",
    "Sample",
    "TraceEvent",
    "TraceStats",
    "Trace",
    # Frames
    "FrameEvent",
    "ResampledFrame",
    # Geometry
    "Orientation",
    "PhysicsPoint",
    "ScreenPoint",
    "ScreenConfig",
    "CoordinateConfig",
    "InclineDefinition",
]
