"""Liquid fill gauge renderer.

Draws a ring, a fill circle clipped by a sine wave at the fill level, and the value
text twice (once over the background, once over the liquid). Rise and scroll
animations are emitted as SMIL elements, so the drawing call returns immediately.
"""

from __future__ import annotations

import math
from html import escape

from pydantic import BaseModel

from gauge_core.types import OptionValue  # noqa: TC001
from liquid_gauge.models import ResolvedConfig  # noqa: TC001
from liquid_gauge.surface import DrawingSurface  # noqa: TC001

LIQUID_FILL_DEFAULTS: dict[str, OptionValue] = {
    "showComparison": False,
    "minValue": 0,
    "maxValue": 100,
    "circleThickness": 0.05,
    "circleFillGap": 0.05,
    "circleColor": "#178BCA",
    "waveHeight": 0.05,
    "waveCount": 1,
    "waveRiseTime": 1000,
    "waveAnimateTime": 18000,
    "waveRise": True,
    "waveHeightScaling": True,
    "waveAnimate": True,
    "waveColor": "#178BCA",
    "waveOffset": 0,
    "textVertPosition": 0.5,
    "textSize": 1,
    "valueCountUp": True,
    "displayPercent": True,
    "textColor": "#045681",
    "waveTextColor": "#A4DBF8",
}

# Clip path samples per wave period.
SAMPLES_PER_WAVE = 40


class GaugeGeometry(BaseModel):
    radius: float
    location_x: float
    location_y: float
    fill_percent: float
    circle_thickness: float
    fill_circle_margin: float
    fill_circle_radius: float
    wave_height: float
    wave_length: float
    wave_clip_count: float
    wave_clip_width: float
    text_pixels: float

    def wave_rise_y(self, t: float) -> float:
        bottom = self.fill_circle_margin + self.fill_circle_radius * 2 + self.wave_height
        top = self.fill_circle_margin - self.wave_height
        return bottom + t * (top - bottom)

    def wave_group_x(self) -> float:
        return self.fill_circle_margin + self.fill_circle_radius * 2 - self.wave_clip_width

    def wave_scroll_x(self, t: float) -> float:
        return t * (self.wave_clip_width - self.fill_circle_radius * 2)

    def text_y(self, t: float) -> float:
        bottom = self.fill_circle_margin + self.fill_circle_radius * 2
        top = self.fill_circle_margin + self.text_pixels * 0.7
        return bottom + t * (top - bottom)


def wave_height_factor(config: ResolvedConfig, percent: float) -> float:
    """Wave amplitude as a fraction of the fill radius for a fill level of 0..100."""
    if not config.wave_height_scaling:
        return config.wave_height
    p = min(100.0, max(0.0, percent))
    if p <= 50:
        return config.wave_height * p / 50
    return config.wave_height * (100 - p) / 50


def compute_geometry(
    width: float, height: float, value: float, config: ResolvedConfig
) -> GaugeGeometry:
    radius = min(width, height) / 2
    fill_percent = max(config.min_value, min(config.max_value, value)) / config.max_value
    circle_thickness = config.circle_thickness * radius
    fill_circle_margin = circle_thickness + config.circle_fill_gap * radius
    fill_circle_radius = radius - fill_circle_margin

    wave_count = config.wave_count if config.wave_count > 0 else 1
    wave_height = fill_circle_radius * wave_height_factor(config, fill_percent * 100)
    if config.wave_count <= 0:
        wave_height = 0.0
    wave_length = fill_circle_radius * 2 / wave_count
    wave_clip_count = 1 + wave_count

    return GaugeGeometry(
        radius=radius,
        location_x=width / 2 - radius,
        location_y=height / 2 - radius,
        fill_percent=fill_percent,
        circle_thickness=circle_thickness,
        fill_circle_margin=fill_circle_margin,
        fill_circle_radius=fill_circle_radius,
        wave_height=wave_height,
        wave_length=wave_length,
        wave_clip_count=wave_clip_count,
        wave_clip_width=wave_length * wave_clip_count,
        text_pixels=config.text_size * radius / 2,
    )


def decimals_for(value: float) -> int:
    """Fewest decimals (0, 1 or 2) that show ``value`` at two-decimal precision."""
    final = round(value, 2)
    if final == round(final):
        return 0
    if final == round(final, 1):
        return 1
    return 2


def format_value(value: float, config: ResolvedConfig) -> str:
    suffix = "%" if config.display_percent else ""
    return f"{round(value, 2):.{decimals_for(value)}f}{suffix}"


def wave_clip_path(geometry: GaugeGeometry, config: ResolvedConfig) -> str:
    wave_count = config.wave_count if config.wave_count > 0 else 1
    samples = int(SAMPLES_PER_WAVE * geometry.wave_clip_count)
    phase = -2 * math.pi * config.wave_offset + 2 * math.pi * (1 - wave_count)
    bottom = geometry.fill_circle_radius * 2 + geometry.wave_height

    points: list[tuple[float, float]] = []
    for i in range(samples + 1):
        x = i / samples * geometry.wave_clip_width
        y = geometry.wave_height * math.sin(phase + (i / SAMPLES_PER_WAVE) * 2 * math.pi)
        points.append((x, y))

    segments = [f"M{points[0][0]:.2f},{points[0][1]:.2f}"]
    segments.extend(f"L{x:.2f},{y:.2f}" for x, y in points[1:])
    segments.append(f"L{points[-1][0]:.2f},{bottom:.2f}")
    segments.append(f"L{points[0][0]:.2f},{bottom:.2f}Z")
    return "".join(segments)


class GaugeHandle:
    """The drawn gauge; ``update`` redraws the same surface with a new value."""

    def __init__(
        self,
        renderer: LiquidFillRenderer,
        surface: DrawingSurface,
        value: float,
        config: ResolvedConfig,
        geometry: GaugeGeometry,
    ) -> None:
        self.renderer = renderer
        self.surface = surface
        self.value = value
        self.config = config
        self.geometry = geometry

    def update(self, value: float) -> GaugeHandle:
        self.surface.clear()
        handle = self.renderer.load_gauge(self.surface, value, self.config)
        self.value = handle.value
        self.geometry = handle.geometry
        return self


class LiquidFillRenderer:
    name: str = "liquid-fill"

    def default_settings(self) -> dict[str, OptionValue]:
        return dict(LIQUID_FILL_DEFAULTS)

    def load_gauge(
        self, surface: DrawingSurface, value: float, config: ResolvedConfig
    ) -> GaugeHandle:
        geometry = compute_geometry(surface.width, surface.height, value, config)
        surface.append(self._render_group(surface.surface_id, value, config, geometry))
        return GaugeHandle(self, surface, value, config, geometry)

    @staticmethod
    def _render_group(
        surface_id: str, value: float, config: ResolvedConfig, g: GaugeGeometry
    ) -> str:
        clip_id = f"clipWave{surface_id}"
        r = g.radius
        text_final = format_value(value, config)
        text_start = format_value(config.min_value, config) if config.value_count_up else text_final
        text_attrs = (
            f'class="liquidFillGaugeText" text-anchor="middle" '
            f'font-size="{g.text_pixels:.2f}px" '
            f'data-start-value="{escape(text_start)}" '
            f'transform="translate({r:.2f},{g.text_y(config.text_vert_position):.2f})"'
        )

        wave_x = g.wave_group_x()
        rise_to = f"{wave_x:.2f},{g.wave_rise_y(g.fill_percent):.2f}"
        lines = [
            f'<g class="liquid-fill-gauge" '
            f'transform="translate({g.location_x:.2f},{g.location_y:.2f})">',
            "<defs>",
            f'<clipPath id="{clip_id}" transform="translate({rise_to})">',
        ]
        if config.wave_rise:
            rise_from = f"{wave_x:.2f},{g.wave_rise_y(0):.2f}"
            lines.append(
                f'<animateTransform attributeName="transform" type="translate" '
                f'from="{rise_from}" to="{rise_to}" dur="{config.wave_rise_time:g}ms" '
                f'fill="freeze"/>'
            )
        lines.append(f'<path class="wave" d="{wave_clip_path(g, config)}">')
        if config.wave_animate:
            lines.append(
                f'<animateTransform attributeName="transform" type="translate" '
                f'from="0,0" to="{g.wave_scroll_x(1):.2f},0" '
                f'dur="{config.wave_animate_time:g}ms" repeatCount="indefinite"/>'
            )
        lines.extend(
            [
                "</path>",
                "</clipPath>",
                "</defs>",
                f'<circle class="gauge-ring" cx="{r:.2f}" cy="{r:.2f}" '
                f'r="{r - g.circle_thickness / 2:.2f}" fill="none" '
                f'stroke="{escape(config.circle_color)}" '
                f'stroke-width="{g.circle_thickness:.2f}"/>',
                f'<text {text_attrs} fill="{escape(config.text_color)}">{text_final}</text>',
                f'<g clip-path="url(#{clip_id})">',
                f'<circle class="gauge-fill" cx="{r:.2f}" cy="{r:.2f}" '
                f'r="{g.fill_circle_radius:.2f}" fill="{escape(config.wave_color)}"/>',
                f'<text {text_attrs} fill="{escape(config.wave_text_color)}">{text_final}</text>',
                "</g>",
                "</g>",
            ]
        )
        return "\n".join(lines)
