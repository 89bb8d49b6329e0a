"""Template-based explanation of a single display option.

Combines the registry metadata (label, section, constraints, default) with the value
the option resolves to for a given user configuration and whether it is visible.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel

from gauge_core.types import OptionConstraints, OptionSection, OptionValue  # noqa: TC001
from liquid_gauge.options import OptionRegistry, is_visible
from liquid_gauge.resolver import ConfigResolver, merge_options


class UnknownOptionError(ValueError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown option key '{key}'")


class OptionExplanation(BaseModel):
    key: str
    label: str
    section: OptionSection
    value: OptionValue
    default: OptionValue
    source: Literal["override", "default"]
    visible: bool
    constraints: OptionConstraints | None = None

    def to_text(self) -> str:
        lines = [
            f"Option: {self.key} ({self.label})",
            f"  Section: {self.section.value}",
            f"  Value: {self.value} (source: {self.source})",
            f"  Panel default: {self.default}",
            f"  Shown in panel: {'yes' if self.visible else 'no'}",
        ]
        if self.constraints:
            c = self.constraints
            bounds = [
                f"{name}={v:g}"
                for name, v in (("min", c.min), ("max", c.max), ("step", c.step))
                if v is not None
            ]
            lines.append(f"  Constraints: {', '.join(bounds)}")
        return "\n".join(lines)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)


def explain_option(
    key: str,
    registry: OptionRegistry,
    user_config: Mapping[str, OptionValue | None],
    default_settings: Mapping[str, OptionValue],
) -> OptionExplanation:
    entry = registry.get(key)
    if entry is None:
        raise UnknownOptionError(key)

    trace = {p.key: p for p in ConfigResolver().trace(user_config, default_settings)}
    resolved = trace.get(key)
    merged = merge_options(user_config, default_settings)

    return OptionExplanation(
        key=key,
        label=entry.label,
        section=entry.section,
        value=resolved.value if resolved else entry.default,
        default=entry.default,
        source=resolved.source if resolved else "default",
        visible=is_visible(key, merged),
        constraints=entry.constraints,
    )
