"""Static descriptor the host reads to list the visualization and build its option panel."""

from __future__ import annotations

from liquid_gauge.models import VisualizationDescriptor
from liquid_gauge.options import OptionRegistry, build_default_registry

VISUALIZATION_ID = "liquid_fill_gauge"
VISUALIZATION_LABEL = "Liquid Fill Gauge"


def build_descriptor(registry: OptionRegistry | None = None) -> VisualizationDescriptor:
    registry = registry or build_default_registry()
    return VisualizationDescriptor(
        id=VISUALIZATION_ID,
        label=VISUALIZATION_LABEL,
        options={entry.key: entry for entry in registry.all_entries()},
    )
