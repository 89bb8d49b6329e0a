"""Value Normalizer: turns extracted measures into the value and range the gauge draws.

Decision order:
1. Reject a primary value that is not finite (NonFiniteValue).
2. Pick the range maximum: the comparison measure when comparison is enabled and the
   query supplied one, otherwise the configured maxValue.
3. Reject a range maximum at or below zero, or not finite (DegenerateRange).
4. In percent mode scale the value to 0..100 and pin the range to 100; otherwise pass
   the value and range through. A scaled value that overflows is NonFiniteValue.
"""

from __future__ import annotations

import logging
import math

from liquid_gauge.models import NormalizedValue, ResolvedConfig

logger = logging.getLogger(__name__)

PERCENT_MAX = 100.0


class DegenerateRange(ValueError):
    """Raised when the effective range maximum is zero or negative."""

    def __init__(self, range_max: float, source: str) -> None:
        self.range_max = range_max
        self.source = source
        super().__init__(
            f"Gauge range maximum must be positive, got {range_max:g} (from {source})"
        )


class NonFiniteValue(ValueError):
    """Raised when the measure value, or its scaled display value, is NaN or infinite."""

    def __init__(self, value: float, stage: str) -> None:
        self.value = value
        self.stage = stage
        super().__init__(f"Gauge {stage} must be a finite number, got {value:g}")


class ValueNormalizer:
    def normalize(
        self,
        primary: float,
        comparison: float | None,
        config: ResolvedConfig,
    ) -> NormalizedValue:
        if not math.isfinite(primary):
            raise NonFiniteValue(primary, "value")

        if config.show_comparison and comparison is not None:
            range_max, source = comparison, "comparison measure"
        else:
            if config.show_comparison:
                logger.debug(
                    "Comparison requested but query has no second measure; using maxValue=%s",
                    config.max_value,
                )
            range_max, source = config.max_value, "maxValue"

        if not math.isfinite(range_max) or range_max <= 0:
            raise DegenerateRange(range_max, source)

        if not config.display_percent:
            return NormalizedValue(display_value=primary, effective_max=range_max)

        display_value = primary / range_max * PERCENT_MAX
        if not math.isfinite(display_value):
            raise NonFiniteValue(display_value, "percent value")
        return NormalizedValue(display_value=display_value, effective_max=PERCENT_MAX)
