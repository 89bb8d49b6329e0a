"""Option Registry: single source of truth for every liquid fill gauge display option.

Each entry carries the label, default, section, value type and constraints shown in the
host's option panel. Visibility rules live in a separate table of pure predicates over
the resolved configuration; the host's presentation layer evaluates them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from gauge_core.types import (
    OptionConstraints,
    OptionDescriptor,
    OptionDisplay,
    OptionSection,
    OptionValue,
    OptionValueType,
)

VisibilityRule = Callable[[Mapping[str, OptionValue]], bool]


class OptionRegistry:
    """Registry of all display options a visualization exposes."""

    def __init__(self) -> None:
        self._entries: dict[str, OptionDescriptor] = {}

    def register(self, entry: OptionDescriptor) -> None:
        if entry.key in self._entries:
            raise ValueError(f"Option '{entry.key}' is already registered")
        self._entries[entry.key] = entry

    def get(self, key: str) -> OptionDescriptor | None:
        return self._entries.get(key)

    def list_by_section(self, section: OptionSection) -> list[OptionDescriptor]:
        return [e for e in self._entries.values() if e.section == section]

    def all_keys(self) -> list[str]:
        return list(self._entries.keys())

    def all_entries(self) -> list[OptionDescriptor]:
        return list(self._entries.values())

    def defaults(self) -> dict[str, OptionValue]:
        return {key: entry.default for key, entry in self._entries.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Option key -> predicate returning True when the option is shown.
VISIBILITY_RULES: dict[str, VisibilityRule] = {
    "maxValue": lambda config: not bool(config.get("showComparison", False)),
}


def is_visible(key: str, config: Mapping[str, OptionValue]) -> bool:
    rule = VISIBILITY_RULES.get(key)
    return True if rule is None else rule(config)


def visible_options(
    registry: OptionRegistry, config: Mapping[str, OptionValue]
) -> list[OptionDescriptor]:
    """Options the host should render in its panel for the given configuration."""
    return [e for e in registry.all_entries() if is_visible(e.key, config)]


def _unit_range(step: float) -> OptionConstraints:
    return OptionConstraints(min=0, max=1, step=step)


def build_default_registry(
    renderer_defaults: Mapping[str, OptionValue] | None = None,
) -> OptionRegistry:
    """Build the registry of liquid fill gauge options.

    Several panel defaults are taken from the rendering backend's own defaults so the
    option panel and the drawn gauge agree when the user has changed nothing.
    """
    if renderer_defaults is None:
        from liquid_gauge.renderers.liquid_fill import LIQUID_FILL_DEFAULTS

        renderer_defaults = LIQUID_FILL_DEFAULTS

    d = renderer_defaults
    registry = OptionRegistry()

    # =========================================================================
    # Value: what is measured and how the number is shown
    # =========================================================================

    registry.register(
        OptionDescriptor(
            key="showComparison",
            label="Use field comparison",
            default=False,
            section=OptionSection.VALUE,
            value_type=OptionValueType.BOOLEAN,
        )
    )

    registry.register(
        OptionDescriptor(
            key="minValue",
            label="Min value",
            default=d["minValue"],
            section=OptionSection.VALUE,
            value_type=OptionValueType.NUMBER,
            constraints=OptionConstraints(min=0),
            placeholder="Any positive number",
        )
    )

    registry.register(
        OptionDescriptor(
            key="maxValue",
            label="Max value",
            default=d["maxValue"],
            section=OptionSection.VALUE,
            value_type=OptionValueType.NUMBER,
            constraints=OptionConstraints(min=0),
            placeholder="Any positive number",
        )
    )

    registry.register(
        OptionDescriptor(
            key="textVertPosition",
            label="Text Vertical Offset",
            default=0.5,
            section=OptionSection.VALUE,
            value_type=OptionValueType.NUMBER,
            constraints=_unit_range(0.01),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="textSize",
            label="Text Size",
            default=1,
            section=OptionSection.VALUE,
            value_type=OptionValueType.NUMBER,
            constraints=_unit_range(0.01),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="displayPercent",
            label="Display as Percent",
            default=True,
            section=OptionSection.VALUE,
            value_type=OptionValueType.BOOLEAN,
        )
    )

    # =========================================================================
    # Style: ring geometry and colors
    # =========================================================================

    registry.register(
        OptionDescriptor(
            key="circleThickness",
            label="Circle Thickness",
            default=d["circleThickness"],
            section=OptionSection.STYLE,
            value_type=OptionValueType.NUMBER,
            constraints=_unit_range(0.05),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="circleFillGap",
            label="Circle Gap",
            default=d["circleFillGap"],
            section=OptionSection.STYLE,
            value_type=OptionValueType.NUMBER,
            constraints=_unit_range(0.05),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="circleColor",
            label="Circle Color",
            default=d["circleColor"],
            section=OptionSection.STYLE,
            value_type=OptionValueType.STRING,
            display=OptionDisplay.COLOR,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveColor",
            label="Wave Color",
            default="#64518A",
            section=OptionSection.STYLE,
            value_type=OptionValueType.STRING,
            display=OptionDisplay.COLOR,
        )
    )

    registry.register(
        OptionDescriptor(
            key="textColor",
            label="Text Color (non-overlapped)",
            default="#000000",
            section=OptionSection.STYLE,
            value_type=OptionValueType.STRING,
            display=OptionDisplay.COLOR,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveTextColor",
            label="Text Color (overlapped)",
            default="#FFFFFF",
            section=OptionSection.STYLE,
            value_type=OptionValueType.STRING,
            display=OptionDisplay.COLOR,
        )
    )

    # =========================================================================
    # Waves: animation parameters, passed untouched to the renderer
    # =========================================================================

    registry.register(
        OptionDescriptor(
            key="waveHeight",
            label="Wave Height",
            default=d["waveHeight"],
            section=OptionSection.WAVES,
            value_type=OptionValueType.NUMBER,
            constraints=_unit_range(0.05),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveCount",
            label="Wave Count",
            default=d["waveCount"],
            section=OptionSection.WAVES,
            value_type=OptionValueType.NUMBER,
            constraints=OptionConstraints(min=0, max=10),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveRiseTime",
            label="Wave Rise Time",
            default=d["waveRiseTime"],
            section=OptionSection.WAVES,
            value_type=OptionValueType.NUMBER,
            constraints=OptionConstraints(min=0, max=5000, step=50),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveAnimateTime",
            label="Wave Animation Time",
            default=1800,
            section=OptionSection.WAVES,
            value_type=OptionValueType.NUMBER,
            constraints=OptionConstraints(min=0, max=5000, step=50),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveRise",
            label="Wave Rise from Bottom",
            default=d["waveRise"],
            section=OptionSection.WAVES,
            value_type=OptionValueType.BOOLEAN,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveHeightScaling",
            label="Scale waves if high or low",
            default=d["waveHeightScaling"],
            section=OptionSection.WAVES,
            value_type=OptionValueType.BOOLEAN,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveAnimate",
            label="Animate Waves",
            default=True,
            section=OptionSection.WAVES,
            value_type=OptionValueType.BOOLEAN,
        )
    )

    registry.register(
        OptionDescriptor(
            key="waveOffset",
            label="Wave Offset",
            default=0,
            section=OptionSection.WAVES,
            value_type=OptionValueType.NUMBER,
            constraints=_unit_range(0.05),
            display=OptionDisplay.RANGE,
        )
    )

    registry.register(
        OptionDescriptor(
            key="valueCountUp",
            label="Animate to Value",
            default=True,
            section=OptionSection.WAVES,
            value_type=OptionValueType.BOOLEAN,
        )
    )

    return registry
