"""Renderer protocol and plugin discovery for gauge drawing backends.

Renderers are discovered at runtime via importlib.metadata entry_points, so an
alternate drawing backend can ship as a separate package registering under the
``liquid_gauge.renderers`` group. The lifecycle controller only ever calls the two
operations of the protocol.
"""

from __future__ import annotations

from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gauge_core.types import OptionValue
    from liquid_gauge.models import ResolvedConfig
    from liquid_gauge.surface import DrawingSurface

RENDERER_GROUP = "liquid_gauge.renderers"
DEFAULT_RENDERER = "liquid-fill"


class UnknownRendererError(ValueError):
    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(f"Unknown renderer '{name}'. Available: {', '.join(available)}")


@runtime_checkable
class GaugeRenderer(Protocol):
    name: str

    def default_settings(self) -> dict[str, OptionValue]: ...

    def load_gauge(
        self, surface: DrawingSurface, value: float, config: ResolvedConfig
    ) -> Any: ...


def discover_renderers() -> dict[str, GaugeRenderer]:
    """Discover all registered renderers via entry points, keyed by entry point name."""
    from liquid_gauge.renderers.liquid_fill import LiquidFillRenderer

    renderers: dict[str, GaugeRenderer] = {DEFAULT_RENDERER: LiquidFillRenderer()}
    for ep in entry_points(group=RENDERER_GROUP):
        obj = ep.load()
        renderer = obj() if isinstance(obj, type) else obj
        if not isinstance(renderer, GaugeRenderer):
            raise TypeError(f"{ep.name} does not implement GaugeRenderer")
        renderers[ep.name] = renderer
    return renderers


def get_renderer(name: str = DEFAULT_RENDERER) -> GaugeRenderer:
    renderers = discover_renderers()
    renderer = renderers.get(name)
    if renderer is None:
        raise UnknownRendererError(name, sorted(renderers))
    return renderer
