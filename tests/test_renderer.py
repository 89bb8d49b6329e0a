"""Unit tests for the liquid fill renderer and renderer discovery."""

import pytest

from liquid_gauge.models import ResolvedConfig
from liquid_gauge.renderers import (
    DEFAULT_RENDERER,
    GaugeRenderer,
    UnknownRendererError,
    discover_renderers,
    get_renderer,
)
from liquid_gauge.renderers.liquid_fill import (
    LIQUID_FILL_DEFAULTS,
    LiquidFillRenderer,
    compute_geometry,
    decimals_for,
    format_value,
    wave_height_factor,
)
from liquid_gauge.resolver import ConfigResolver
from liquid_gauge.surface import DrawingSurface


def _config(**overrides) -> ResolvedConfig:
    return ConfigResolver().resolve(overrides, LIQUID_FILL_DEFAULTS)


def _surface(width=400, height=300) -> DrawingSurface:
    return DrawingSurface(surface_id="fill-gauge-1", width=width, height=height)


class TestGeometry:
    def test_centred_circle(self):
        g = compute_geometry(400, 300, 50, _config())
        assert g.radius == 150
        assert g.location_x == 50
        assert g.location_y == 0

    def test_fill_circle_inset(self):
        g = compute_geometry(400, 300, 50, _config())
        assert g.circle_thickness == pytest.approx(7.5)
        assert g.fill_circle_margin == pytest.approx(15)
        assert g.fill_circle_radius == pytest.approx(135)
        assert g.text_pixels == pytest.approx(75)

    def test_fill_percent_clamped(self):
        assert compute_geometry(200, 200, 150, _config()).fill_percent == 1
        assert compute_geometry(200, 200, -5, _config()).fill_percent == 0
        assert compute_geometry(200, 200, 25, _config()).fill_percent == pytest.approx(0.25)

    def test_flat_wave_for_zero_count(self):
        g = compute_geometry(200, 200, 50, _config(waveCount=0))
        assert g.wave_height == 0

    def test_wave_height_scaling(self):
        config = _config(waveHeight=0.1)
        assert wave_height_factor(config, 0) == 0
        assert wave_height_factor(config, 50) == pytest.approx(0.1)
        assert wave_height_factor(config, 75) == pytest.approx(0.05)
        assert wave_height_factor(config, 100) == 0

    def test_constant_wave_height_without_scaling(self):
        config = _config(waveHeight=0.1, waveHeightScaling=False)
        assert wave_height_factor(config, 0) == pytest.approx(0.1)
        assert wave_height_factor(config, 100) == pytest.approx(0.1)


class TestTextFormatting:
    def test_fewest_decimals(self):
        assert decimals_for(42) == 0
        assert decimals_for(42.5) == 1
        assert decimals_for(33.3333) == 2
        assert decimals_for(12.001) == 0

    def test_percent_suffix(self):
        assert format_value(42, _config()) == "42%"
        assert format_value(42.5, _config(displayPercent=False)) == "42.5"
        assert format_value(100 / 3, _config()) == "33.33%"


class TestLoadGauge:
    def test_draws_ring_clip_and_both_texts(self):
        surface = _surface()
        LiquidFillRenderer().load_gauge(surface, 42, _config())
        svg = surface.to_svg()
        assert 'class="gauge-ring"' in svg
        assert 'class="gauge-fill"' in svg
        assert '<clipPath id="clipWavefill-gauge-1"' in svg
        assert svg.count('class="liquidFillGaugeText"') == 2
        assert svg.count(">42%</text>") == 2

    def test_colors_applied(self):
        surface = _surface()
        config = _config(
            circleColor="#111111",
            waveColor="#222222",
            textColor="#333333",
            waveTextColor="#444444",
        )
        LiquidFillRenderer().load_gauge(surface, 10, config)
        svg = surface.to_svg()
        for color in ("#111111", "#222222", "#333333", "#444444"):
            assert color in svg

    def test_animations_follow_flags(self):
        surface = _surface()
        LiquidFillRenderer().load_gauge(surface, 10, _config())
        assert surface.to_svg().count("<animateTransform") == 2

        still = _surface()
        LiquidFillRenderer().load_gauge(still, 10, _config(waveRise=False, waveAnimate=False))
        assert "<animateTransform" not in still.to_svg()

    def test_count_up_start_value(self):
        surface = _surface()
        LiquidFillRenderer().load_gauge(surface, 64, _config())
        assert 'data-start-value="0%"' in surface.to_svg()

        surface = _surface()
        LiquidFillRenderer().load_gauge(surface, 64, _config(valueCountUp=False))
        assert 'data-start-value="64%"' in surface.to_svg()

    def test_handle_update_redraws_same_surface(self):
        surface = _surface()
        handle = LiquidFillRenderer().load_gauge(surface, 20, _config())
        handle.update(80)
        svg = surface.to_svg()
        assert len(surface.elements) == 1
        assert ">80%</text>" in svg
        assert ">20%</text>" not in svg
        assert handle.value == 80


class TestDiscovery:
    def test_builtin_renderer_available(self):
        renderers = discover_renderers()
        assert DEFAULT_RENDERER in renderers
        assert isinstance(renderers[DEFAULT_RENDERER], GaugeRenderer)

    def test_default_settings_are_a_copy(self):
        renderer = get_renderer()
        settings = renderer.default_settings()
        settings["waveColor"] = "#000000"
        assert renderer.default_settings()["waveColor"] == "#178BCA"

    def test_unknown_renderer(self):
        with pytest.raises(UnknownRendererError, match="liquid-fill"):
            get_renderer("no-such-renderer")
