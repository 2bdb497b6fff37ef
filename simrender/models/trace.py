"""Simulation trace and resampled frame models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BodyState(BaseModel):
    """Kinematic state of a single body at one instant."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0  # Radians
    vx: float = 0.0
    vy: float = 0.0
    omega: float = 0.0  # Rad/s

    @property
    def speed(self) -> float:
        """Speed magnitude in m/s."""
        return (self.vx**2 + self.vy**2) ** 0.5


class EnergyState(BaseModel):
    """Energy ledger entry (kinetic, potential, mechanical)."""

    model_config = ConfigDict(frozen=True)

    Ek: float = 0.0
    Ep: float = 0.0
    Em: float = 0.0


class Sample(BaseModel):
    """One timestamped snapshot of every body's state."""

    model_config = ConfigDict(frozen=True)

    t: float = Field(..., allow_inf_nan=False)
    bodies: dict[str, BodyState] = Field(default_factory=dict)
    energy: EnergyState | None = None


class TraceEvent(BaseModel):
    """A discrete instant (impact, phase change) that must stay visible."""

    model_config = ConfigDict(frozen=True)

    id: str
    t: float = Field(..., allow_inf_nan=False)
    info: dict[str, Any] = Field(default_factory=dict)


class TraceStats(BaseModel):
    """Integrator statistics reported by the simulator."""

    steps: int = 0
    rejects: int = 0
    cpu_ms: float = 0.0


class Trace(BaseModel):
    """
    Full recorded output of a physics simulation.

    Samples are ordered by non-decreasing time; the trace may be empty.
    """

    model_config = ConfigDict(frozen=True)

    samples: list[Sample] = Field(default_factory=list)
    events: list[TraceEvent] = Field(default_factory=list)
    stats: TraceStats | None = None

    @model_validator(mode="after")
    def _check_sorted(self) -> "Trace":
        for prev, curr in zip(self.samples, self.samples[1:]):
            if curr.t < prev.t:
                raise ValueError(
                    f"samples must be sorted by t (got {curr.t} after {prev.t})"
                )
        return self

    @property
    def is_empty(self) -> bool:
        return not self.samples

    @property
    def start_time(self) -> float | None:
        return self.samples[0].t if self.samples else None

    @property
    def end_time(self) -> float | None:
        return self.samples[-1].t if self.samples else None

    @property
    def duration(self) -> float:
        if not self.samples:
            return 0.0
        return self.samples[-1].t - self.samples[0].t

    @property
    def body_ids(self) -> list[str]:
        """Body ids in first-seen order across all samples."""
        seen: dict[str, None] = {}
        for sample in self.samples:
            for body_id in sample.bodies:
                seen.setdefault(body_id, None)
        return list(seen)


class FrameEvent(BaseModel):
    """Event marker attached to a rendered frame."""

    model_config = ConfigDict(frozen=True)

    id: str
    t: float
    highlight: bool = True


class ResampledFrame(BaseModel):
    """One output frame on the fixed-rate, event-aligned time grid."""

    model_config = ConfigDict(frozen=True)

    frame_index: int
    time: float
    bodies: dict[str, BodyState] = Field(default_factory=dict)
    energy: EnergyState = Field(default_factory=EnergyState)
    events: tuple[FrameEvent, ...] = ()
    interpolated: bool = False

    @property
    def has_events(self) -> bool:
        return bool(self.events)
