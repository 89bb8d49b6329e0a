"""In-memory SVG drawing surface and the host panel element it is mounted in."""

from __future__ import annotations

from dataclasses import dataclass, field

SVG_NS = "http://www.w3.org/2000/svg"

PANEL_STYLE = """<style>
.node,
.link {
  transition: 0.5s opacity;
}
</style>"""


@dataclass
class PanelContainer:
    """The host element a visualization draws into."""

    client_width: float
    client_height: float
    style: dict[str, str] = field(default_factory=dict)
    children: list[str | DrawingSurface] = field(default_factory=list)

    def content_box(self, margin: float) -> tuple[float, float]:
        return max(0.0, self.client_width - margin), max(0.0, self.client_height - margin)

    def to_html(self) -> str:
        style = "; ".join(f"{k}: {v}" for k, v in self.style.items())
        inner = [c.to_svg() if isinstance(c, DrawingSurface) else c for c in self.children]
        return "\n".join([f'<div style="{style}">', *inner, "</div>"])


@dataclass
class DrawingSurface:
    """An SVG canvas owned by one panel; renderers append markup fragments to it."""

    surface_id: str
    width: float = 0.0
    height: float = 0.0
    elements: list[str] = field(default_factory=list)

    def clear(self) -> None:
        self.elements.clear()

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def append(self, fragment: str) -> None:
        self.elements.append(fragment)

    def is_empty(self) -> bool:
        return not self.elements

    def to_svg(self) -> str:
        header = (
            f'<svg xmlns="{SVG_NS}" id="{self.surface_id}" '
            f'width="{self.width:g}" height="{self.height:g}">'
        )
        return "\n".join([header, *self.elements, "</svg>"])
