"""
Temporal resampling of simulation traces.

Turns irregular-timestep samples into fixed frame-rate, event-aligned
frames ready for drawing.
"""

from simrender.resampling.resampler import (
    FrameResampler,
    ResampleConfig,
    ResampleStats,
    resample,
)
from simrender.resampling.interpolation import (
    InterpolationMethod,
    lerp,
    lerp_angle,
    wrap_angle,
)

__all__ = [
    "FrameResampler",
    "ResampleConfig",
    "ResampleStats",
    "resample",
    "InterpolationMethod",
    "lerp",
    "lerp_angle",
    "wrap_angle",
]
