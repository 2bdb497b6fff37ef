"""
Tests for render configuration building.
"""

from dataclasses import replace

import pytest

from simrender.config import (
    BodySpec,
    MotionPhase,
    RenderConfigBuilder,
    SurfaceKind,
    SurfaceSpec,
    Theme,
    UIOptions,
    build_render_config,
    phase_color,
)
from simrender.config.styles import BODY_PALETTE, PHASE_COLORS
from simrender.geometry.bounds import BoundingBox
from simrender.models.geometry import InclineDefinition, Orientation
from simrender.models.trace import BodyState, Sample, Trace


def _trace(*points):
    return Trace(samples=[
        Sample(t=float(i), bodies={"ball": BodyState(x=x, y=y)})
        for i, (x, y) in enumerate(points)
    ])


class TestBoundsAnalysis:
    """Tests for trajectory bounds analysis."""

    def test_margin_applied(self):
        """Test 10% margin with the 0.5 m floor."""
        box = RenderConfigBuilder.analyze_bounds(_trace((0, 0), (10, 0)))

        assert box.min_x == pytest.approx(-1.0)
        assert box.max_x == pytest.approx(11.0)
        assert box.min_y == pytest.approx(-0.5)
        assert box.max_y == pytest.approx(0.5)

    def test_empty_trace_uses_default(self):
        """Test an empty trace falls back to the default box."""
        assert RenderConfigBuilder.analyze_bounds(Trace()) == BoundingBox.default()

    def test_nan_positions_use_default(self):
        """Test a trace with only NaN positions falls back to the default box."""
        trace = _trace((float("nan"), 0.0), (1.0, float("nan")))
        assert RenderConfigBuilder.analyze_bounds(trace) == BoundingBox.default()

    def test_trajectory_matching_default_still_gets_margin(self):
        """Test real data is never mistaken for the fallback box."""
        box = RenderConfigBuilder.analyze_bounds(_trace((-5, -5), (5, 5)))
        assert box.min_x == pytest.approx(-6.0)
        assert box.max_y == pytest.approx(6.0)


class TestCoordinateCalculation:
    """Tests for scale and offset derivation."""

    def test_fit_to_width(self):
        """Test scale and offsets for a wide trajectory."""
        config = build_render_config(_trace((0, 0), (10, 0)), (1280, 720))
        coordinate = config.coordinate

        assert coordinate.scale == pytest.approx(1280 * 0.8 / 12)
        assert coordinate.offset_x == pytest.approx(640 - 5 * coordinate.scale)
        assert coordinate.offset_y == pytest.approx(620)
        assert coordinate.orientation == Orientation.Y_UP

    def test_fit_to_height_for_default_box(self):
        """Test the height constraint wins for a square box."""
        config = build_render_config(Trace(), (1280, 720))

        assert config.coordinate.scale == pytest.approx(720 * 0.6 / 10)
        assert config.coordinate.offset_x == pytest.approx(640)

    def test_scale_cap(self):
        """Test tiny trajectories are not zoomed past the cap."""
        config = build_render_config(_trace((0, 0), (0.01, 0.01)), (1280, 720))
        assert config.coordinate.scale == pytest.approx(200)

    def test_custom_ground_margin(self):
        """Test the ground line follows the configured margin."""
        config = build_render_config(Trace(), (800, 600), UIOptions(ground_margin=40))
        assert config.coordinate.offset_y == pytest.approx(560)

    def test_non_finite_bounds_replaced(self):
        """Test an infinite bounding box never reaches the config."""
        box = BoundingBox(0, float("inf"), 0, 1)
        config = build_render_config(box, (1280, 720))

        assert config.bounds == BoundingBox.default()
        assert config.duration == 0.0

    def test_duration_from_trace(self):
        """Test the render duration is the trace span."""
        config = build_render_config(_trace((0, 0), (1, 1), (2, 0)), (1280, 720))
        assert config.duration == 2.0

    def test_duration_with_late_start(self):
        """Test a trace starting after zero is timed by its span."""
        trace = Trace(samples=[
            Sample(t=2.0, bodies={"ball": BodyState()}),
            Sample(t=3.5, bodies={"ball": BodyState(x=1.0)}),
        ])
        config = build_render_config(trace, (1280, 720))
        assert config.duration == pytest.approx(1.5)


class TestGeometryWarnings:
    """Tests for incline checks during building."""

    def test_no_incline_no_warnings(self):
        """Test nothing is reported without an incline."""
        config = build_render_config(Trace(), (1280, 720))
        assert config.warnings == ()
        assert config.recommendations == ()

    def test_short_incline_warns(self):
        """Test an incline shorter than the travel distance is reported."""
        options = UIOptions(
            incline=InclineDefinition(angle=30, length=1),
            max_distance=5.0,
        )
        config = build_render_config(Trace(), (1280, 720), options)

        assert any("insufficient" in w for w in config.warnings)
        assert len(config.recommendations) == len(config.warnings)


class TestStyling:
    """Tests for style, objects, surfaces and overlays."""

    def test_theme_background(self):
        """Test the theme picks the background color."""
        config = build_render_config(Trace(), (1280, 720), UIOptions(theme=Theme.DARK))
        assert config.style.background_color == "#1a1a1a"
        assert config.style.grid_enabled

    def test_background_override(self):
        """Test an explicit background wins over the theme."""
        options = UIOptions(theme=Theme.LIGHT, background_color="#123456")
        config = build_render_config(Trace(), (1280, 720), options)
        assert config.style.background_color == "#123456"

    def test_palette_cycles(self):
        """Test body colors cycle through the palette."""
        bodies = [BodySpec(id=f"b{i}") for i in range(len(BODY_PALETTE) + 1)]
        config = build_render_config(Trace(), (1280, 720), bodies=bodies)

        assert config.objects["b0"].fill_color == BODY_PALETTE[0]
        assert config.objects["b1"].fill_color == BODY_PALETTE[1]
        assert config.objects[f"b{len(BODY_PALETTE)}"].fill_color == BODY_PALETTE[0]

    def test_surface_styles(self):
        """Test the ground gets its own color."""
        surfaces = [SurfaceSpec(id="ground"), SurfaceSpec(id="ramp", kind=SurfaceKind.INCLINE)]
        config = build_render_config(Trace(), (1280, 720), surfaces=surfaces)

        assert config.surfaces["ground"].fill_color == "#8B4513"
        assert config.surfaces["ramp"].fill_color == "#696969"
        assert config.surfaces["ramp"].line_width == 8

    def test_parameter_annotations(self):
        """Test mass and gravity annotations."""
        options = UIOptions(gravity=-9.8)
        config = build_render_config(
            Trace(), (1280, 720), options, bodies=[BodySpec(id="ball", mass=2.0)]
        )
        texts = [a.text for a in config.overlays.annotations]

        assert "Mass: 2.0kg" in texts
        assert "Gravity: 9.8m/s²" in texts

    def test_annotations_disabled(self):
        """Test annotations can be switched off."""
        options = UIOptions(show_annotations=False, gravity=9.8)
        config = build_render_config(
            Trace(), (1280, 720), options, bodies=[BodySpec(id="ball")]
        )
        assert config.overlays.annotations == ()

    def test_camera_frames_bounds(self):
        """Test the camera sits back from the bounds center."""
        config = build_render_config(Trace(), (1280, 720))

        assert config.camera.position == (0.0, 0.0, 20.0)
        assert config.camera.far == pytest.approx(200.0)
        assert config.camera.bounds.min_z == -10.0

    def test_phase_colors_exhaustive(self):
        """Test every motion phase has a distinct color."""
        assert set(PHASE_COLORS) == set(MotionPhase)
        assert len(set(PHASE_COLORS.values())) == len(MotionPhase)
        assert phase_color(MotionPhase.FREE_FALL) == "#FFD93D"


class TestValidationAndOptimization:
    """Tests for config validation and performance tuning."""

    def test_default_config_valid(self):
        """Test a freshly built config passes validation."""
        config = build_render_config(Trace(), (1280, 720))
        result = RenderConfigBuilder.validate_config(config)

        assert result.valid
        assert result.issues == []

    def test_bad_fps_and_size(self):
        """Test invalid frame rate and screen size are reported."""
        config = replace(build_render_config(Trace(), (1280, 720)), fps=0, width=0)
        result = RenderConfigBuilder.validate_config(config)

        assert not result.valid
        assert len(result.issues) == 2

    @pytest.mark.parametrize("size,shadows,ambient", [
        ((3840, 2160), True, 0.3),
        ((1920, 1080), True, 0.4),
        ((1280, 720), False, 0.5),
    ])
    def test_optimize_for_performance(self, size, shadows, ambient):
        """Test lighting is tuned to the pixel count."""
        config = build_render_config(Trace(), size)
        tuned = RenderConfigBuilder.optimize_for_performance(config)

        assert tuned.style.shadows_enabled is shadows
        assert tuned.lighting.ambient == pytest.approx(ambient)
        assert tuned.coordinate == config.coordinate
