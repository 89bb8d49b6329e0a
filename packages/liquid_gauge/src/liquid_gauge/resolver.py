"""Config Resolver: merges renderer defaults with the user's option overrides.

Resolution is a shallow, key-by-key merge driven by the defaults: a user value wins
when present and not None, otherwise the default is used. Keys the defaults do not
know are ignored, so the result never gains or loses keys.
"""

from __future__ import annotations

from collections.abc import Mapping

from gauge_core.types import OptionValue, ResolvedOption
from liquid_gauge.models import ResolvedConfig

UserConfig = Mapping[str, OptionValue | None] | ResolvedConfig


def merge_options(
    user_config: UserConfig,
    default_settings: Mapping[str, OptionValue],
) -> dict[str, OptionValue]:
    """Return a plain mapping with one value for every key of ``default_settings``."""
    overrides = _as_mapping(user_config)
    merged: dict[str, OptionValue] = {}
    for key, default in default_settings.items():
        value = overrides.get(key)
        merged[key] = default if value is None else value
    return merged


class ConfigResolver:
    """Produces a ResolvedConfig for each update call."""

    def resolve(
        self,
        user_config: UserConfig,
        default_settings: Mapping[str, OptionValue],
    ) -> ResolvedConfig:
        return ResolvedConfig.model_validate(merge_options(user_config, default_settings))

    def trace(
        self,
        user_config: UserConfig,
        default_settings: Mapping[str, OptionValue],
    ) -> list[ResolvedOption]:
        """Per-key resolved values annotated with where each one came from."""
        overrides = _as_mapping(user_config)
        trace: list[ResolvedOption] = []
        for key, default in default_settings.items():
            value = overrides.get(key)
            trace.append(
                ResolvedOption(
                    key=key,
                    value=default if value is None else value,
                    source="default" if value is None else "override",
                )
            )
        return trace


def _as_mapping(user_config: UserConfig) -> Mapping[str, OptionValue | None]:
    if isinstance(user_config, ResolvedConfig):
        return user_config.as_options()
    return user_config
