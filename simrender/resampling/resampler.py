"""
Fixed frame-rate resampling with event alignment.

Converts an irregularly sampled simulation trace into frames on a regular
time grid. Event instants that fall between grid points get a frame of
their own, so impacts and phase changes are never skipped.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Optional, Sequence

import structlog

from simrender.models.trace import (
    EnergyState,
    FrameEvent,
    ResampledFrame,
    Sample,
    Trace,
    TraceEvent,
)
from simrender.resampling.interpolation import (
    InterpolationMethod,
    interpolate_bodies,
    interpolate_energy,
)

logger = structlog.get_logger(__name__)


@dataclass
class ResampleConfig:
    """Configuration for frame resampling."""

    fps: Optional[float] = None  # Overrides the fps argument when set
    event_alignment: bool = True
    event_highlight_frames: int = 3
    interpolation_method: InterpolationMethod = InterpolationMethod.LINEAR
    smoothing: bool = True  # Accepted for compatibility; no effect

    # Fraction of the frame interval within which an existing grid frame
    # already covers an event
    event_alignment_tolerance: float = 0.25

    # Frame times closer than this are treated as the same frame
    dedup_epsilon: float = 1e-6


@dataclass
class ResampleStats:
    """Summary of a resampled frame sequence."""

    num_frames: int = 0
    num_interpolated: int = 0
    num_event_frames: int = 0
    start_time: float = 0.0
    end_time: float = 0.0

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass
class _Bracket:
    """Samples surrounding a query time."""

    before: Sample
    after: Optional[Sample] = None
    alpha: float = 0.0

    # True when ``before`` sits on the query time, False for clamps
    on_sample: bool = False


class FrameResampler:
    """
    Resamples simulation traces to a fixed frame rate.

    Pure and stateless apart from its configuration; ``resample`` can be
    called from several threads at once.
    """

    def __init__(self, config: Optional[ResampleConfig] = None):
        self.config = config or ResampleConfig()
        self.logger = structlog.get_logger(__name__)

    def resample(self, trace: Trace, fps: float) -> list[ResampledFrame]:
        """
        Resample ``trace`` at ``fps`` frames per second.

        Args:
            trace: Simulation trace with samples sorted by time
            fps: Target frame rate

        Returns:
            Frames in ascending time order, indexed from 0
        """
        fps = self.config.fps or fps
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        self.logger.info(
            "Resampling trace",
            num_samples=len(trace.samples),
            num_events=len(trace.events),
            fps=fps,
        )

        if trace.is_empty:
            return []

        frame_interval = 1.0 / fps
        sample_times = [s.t for s in trace.samples]
        event_times = [e.t for e in trace.events] if self.config.event_alignment else []

        frame_times = self.generate_frame_times(
            trace.start_time,
            trace.end_time,
            fps,
            event_times,
        )

        frames = []
        for index, frame_time in enumerate(frame_times):
            bracket = self._find_bracket(
                trace.samples, sample_times, frame_time, self.config.dedup_epsilon
            )
            frames.append(self._build_frame(
                bracket,
                frame_time,
                index,
                self._events_near(trace.events, frame_time, frame_interval / 2),
            ))

        stats = self.summarize(frames)
        self.logger.info(
            "Resampling complete",
            num_frames=stats.num_frames,
            num_interpolated=stats.num_interpolated,
            num_event_frames=stats.num_event_frames,
        )
        return frames

    def state_at(self, trace: Trace, time: float) -> Optional[ResampledFrame]:
        """
        Single frame at an arbitrary time.

        Times outside the trace clamp to the boundary sample. Returns None
        for an empty trace.
        """
        if trace.is_empty:
            return None
        sample_times = [s.t for s in trace.samples]
        bracket = self._find_bracket(
            trace.samples, sample_times, time, self.config.dedup_epsilon
        )
        return self._build_frame(bracket, time, 0, [])

    def generate_frame_times(
        self,
        t_start: float,
        t_end: float,
        fps: float,
        event_times: Sequence[float] = (),
    ) -> list[float]:
        """
        Regular grid from ``t_start`` to ``t_end`` inclusive, plus event times.

        An event is inserted only when no grid time lies within the
        alignment tolerance of it. The result is sorted and deduplicated.
        """
        frame_interval = 1.0 / fps
        eps = self.config.dedup_epsilon

        # Grid points are computed from the index to avoid accumulated drift
        num_steps = int((t_end - t_start) * fps + eps)
        grid = [min(t_start + i * frame_interval, t_end) for i in range(num_steps + 1)]

        times = list(grid)
        align_window = frame_interval * self.config.event_alignment_tolerance
        for event_time in event_times:
            if not t_start <= event_time <= t_end:
                continue
            nearest = self._nearest(grid, event_time)
            if abs(nearest - event_time) >= align_window:
                self.logger.debug("Inserting event-aligned frame", time=event_time)
                times.append(event_time)

        times.sort()
        unique_times: list[float] = []
        for t in times:
            if not unique_times or t - unique_times[-1] > eps:
                unique_times.append(t)
        return unique_times

    @staticmethod
    def summarize(frames: Sequence[ResampledFrame]) -> ResampleStats:
        if not frames:
            return ResampleStats()
        return ResampleStats(
            num_frames=len(frames),
            num_interpolated=sum(1 for f in frames if f.interpolated),
            num_event_frames=sum(1 for f in frames if f.events),
            start_time=frames[0].time,
            end_time=frames[-1].time,
        )

    def _build_frame(
        self,
        bracket: _Bracket,
        frame_time: float,
        frame_index: int,
        events: Sequence[FrameEvent],
    ) -> ResampledFrame:
        before, after = bracket.before, bracket.after
        if after is None:
            return ResampledFrame(
                frame_index=frame_index,
                # Grid arithmetic drifts; a frame on a sample reports its time
                time=before.t if bracket.on_sample else frame_time,
                bodies=dict(before.bodies),
                energy=before.energy or EnergyState(),
                events=events,
                interpolated=False,
            )

        return ResampledFrame(
            frame_index=frame_index,
            time=frame_time,
            bodies=interpolate_bodies(
                before.bodies,
                after.bodies,
                bracket.alpha,
                self.config.interpolation_method,
            ),
            energy=interpolate_energy(before.energy, after.energy, bracket.alpha),
            events=events,
            interpolated=True,
        )

    @staticmethod
    def _find_bracket(
        samples: Sequence[Sample],
        sample_times: Sequence[float],
        time: float,
        eps: float = 0.0,
    ) -> _Bracket:
        """
        Binary search for the samples surrounding ``time``.

        A sample within ``eps`` of ``time`` on either side is an exact hit.
        """
        index = bisect_left(sample_times, time)

        for candidate in (index, index - 1):
            if 0 <= candidate < len(samples) and abs(sample_times[candidate] - time) <= eps:
                return _Bracket(before=samples[candidate], on_sample=True)
        if index == 0:
            return _Bracket(before=samples[0])
        if index == len(samples):
            return _Bracket(before=samples[-1])

        before = samples[index - 1]
        after = samples[index]
        alpha = (time - before.t) / (after.t - before.t)
        return _Bracket(before=before, after=after, alpha=alpha)

    @staticmethod
    def _events_near(
        events: Sequence[TraceEvent],
        time: float,
        window: float,
    ) -> list[FrameEvent]:
        return [
            FrameEvent(id=e.id, t=e.t, highlight=True)
            for e in events
            if abs(e.t - time) < window
        ]

    @staticmethod
    def _nearest(sorted_times: Sequence[float], time: float) -> float:
        index = bisect_left(sorted_times, time)
        candidates = sorted_times[max(0, index - 1):index + 1]
        return min(candidates, key=lambda t: abs(t - time))


def resample(
    trace: Trace,
    fps: float,
    config: Optional[ResampleConfig] = None,
) -> list[ResampledFrame]:
    """Resample a trace at a fixed frame rate."""
    return FrameResampler(config).resample(trace, fps)
