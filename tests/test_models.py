"""
Tests for trace and frame models.
"""

import pytest
from pydantic import ValidationError

from simrender.models.geometry import InclineDefinition, PhysicsPoint
from simrender.models.trace import (
    BodyState,
    EnergyState,
    FrameEvent,
    ResampledFrame,
    Sample,
    Trace,
    TraceEvent,
)


class TestBodyState:
    """Tests for BodyState model."""

    def test_defaults(self):
        """Test a body at rest at the origin."""
        state = BodyState()
        assert (state.x, state.y, state.theta) == (0.0, 0.0, 0.0)
        assert state.speed == 0.0

    def test_speed(self):
        """Test speed from velocity components."""
        assert BodyState(vx=3.0, vy=4.0).speed == pytest.approx(5.0)

    def test_frozen(self):
        """Test states cannot be modified after creation."""
        state = BodyState(x=1.0)
        with pytest.raises(ValidationError):
            state.x = 2.0


class TestTrace:
    """Tests for Trace model."""

    def test_empty_trace(self):
        """Test an empty trace is valid."""
        trace = Trace()
        assert trace.is_empty
        assert trace.start_time is None
        assert trace.end_time is None
        assert trace.duration == 0.0

    def test_time_span(self):
        """Test start, end and duration."""
        trace = Trace(samples=[Sample(t=0.5), Sample(t=0.5), Sample(t=2.0)])

        assert trace.start_time == 0.5
        assert trace.end_time == 2.0
        assert trace.duration == pytest.approx(1.5)

    def test_unsorted_samples_rejected(self):
        """Test samples must be in non-decreasing time order."""
        with pytest.raises(ValidationError, match="sorted"):
            Trace(samples=[Sample(t=1.0), Sample(t=0.5)])

    @pytest.mark.parametrize("t", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_times_rejected(self, t):
        """Test NaN and infinite times fail validation."""
        with pytest.raises(ValidationError):
            Trace(samples=[Sample(t=0.0), Sample(t=t)])
        with pytest.raises(ValidationError):
            TraceEvent(id="impact", t=t)

    def test_body_ids_first_seen_order(self):
        """Test body ids are collected across samples."""
        trace = Trace(samples=[
            Sample(t=0.0, bodies={"ball": BodyState()}),
            Sample(t=1.0, bodies={"cart": BodyState(), "ball": BodyState()}),
        ])
        assert trace.body_ids == ["ball", "cart"]

    def test_from_json(self):
        """Test parsing a trace as produced by the simulator."""
        trace = Trace.model_validate_json("""
        {
            "samples": [
                {"t": 0.0, "bodies": {"ball": {"x": 0, "y": 2}},
                 "energy": {"Ek": 0, "Ep": 19.6, "Em": 19.6}},
                {"t": 0.1, "bodies": {"ball": {"x": 0, "y": 1.95, "vy": -0.98}}}
            ],
            "events": [{"id": "impact", "t": 0.64, "info": {"speed": 6.26}}],
            "stats": {"steps": 64, "rejects": 0, "cpu_ms": 1.5}
        }
        """)

        assert len(trace.samples) == 2
        assert trace.samples[0].energy.Ep == pytest.approx(19.6)
        assert trace.samples[1].energy is None
        assert trace.events[0].info["speed"] == pytest.approx(6.26)
        assert trace.stats.steps == 64


class TestResampledFrame:
    """Tests for ResampledFrame model."""

    def test_defaults(self):
        """Test a bare frame has zero energy and no events."""
        frame = ResampledFrame(frame_index=0, time=0.0)

        assert frame.energy == EnergyState()
        assert not frame.has_events
        assert not frame.interpolated

    def test_has_events(self):
        """Test event markers on a frame."""
        frame = ResampledFrame(
            frame_index=3,
            time=0.1,
            events=[FrameEvent(id="impact", t=0.1)],
        )
        assert frame.has_events
        assert frame.events[0].highlight

    def test_events_immutable(self):
        """Test event markers cannot be changed in place."""
        frame = ResampledFrame(
            frame_index=0,
            time=0.0,
            events=[FrameEvent(id="impact", t=0.0)],
        )

        assert isinstance(frame.events, tuple)
        with pytest.raises(AttributeError):
            frame.events.append(FrameEvent(id="late", t=0.1))

    def test_trace_event_info_optional(self):
        """Test events carry an empty info dict by default."""
        assert TraceEvent(id="e", t=0.0).info == {}


class TestInclineDefinition:
    """Tests for InclineDefinition geometry."""

    def test_direction_and_normal_orthogonal(self):
        """Test the normal is perpendicular to the surface."""
        incline = InclineDefinition(angle=37, length=3)

        assert incline.direction.magnitude() == pytest.approx(1.0)
        assert incline.normal.magnitude() == pytest.approx(1.0)
        assert incline.direction.dot(incline.normal) == pytest.approx(0.0, abs=1e-12)

    def test_end_point(self):
        """Test the far end of a 45° incline."""
        incline = InclineDefinition(angle=45, length=2**0.5, start_point=PhysicsPoint(1, 1))
        assert incline.end_point.x == pytest.approx(2.0)
        assert incline.end_point.y == pytest.approx(2.0)

    def test_standard_length(self):
        """Test the standard incline adds 20% to the travel distance."""
        incline = InclineDefinition.standard(30, 5.0)
        assert incline.length == pytest.approx(6.0)
        assert incline.friction_coeff == 0.2
