"""Query shape gate: checks pivot, dimension and measure counts before rendering.

Checks run in order (pivots, dimensions, measures) and stop at the first violated
bound, which is raised as InvalidQueryShape. The error carries the message the host
shows in place of the visualization.
"""

from __future__ import annotations

from gauge_core.models import QueryResponseMetadata  # noqa: TC001
from liquid_gauge.models import (
    GAUGE_REQUIREMENTS,
    QueryRequirements,
    ShapeCheck,
    VisError,
)


class InvalidQueryShape(ValueError):
    """Raised when the query result violates a structural requirement."""

    def __init__(self, check: ShapeCheck) -> None:
        self.check = check
        self.error = _to_vis_error(check)
        super().__init__(f"{self.error.title}: {self.error.message}")

    @property
    def group(self) -> str:
        return self.check.group

    @property
    def bound(self) -> int | None:
        return self.check.minimum if self.check.violated == "min" else self.check.maximum


class ErrorGate:
    """Evaluates the query shape requirements of a visualization."""

    def __init__(self, requirements: QueryRequirements = GAUGE_REQUIREMENTS) -> None:
        self._requirements = requirements

    def validate(
        self,
        metadata: QueryResponseMetadata,
        requirements: QueryRequirements | None = None,
    ) -> list[ShapeCheck]:
        """Return the passed checks, or raise InvalidQueryShape on the first violation."""
        req = requirements or self._requirements
        fields = metadata.fields
        passed: list[ShapeCheck] = []
        for group, noun, count, minimum, maximum in (
            ("pivot-req", "Pivot", len(fields.pivots), req.min_pivots, req.max_pivots),
            (
                "dim-req",
                "Dimension",
                len(fields.dimensions),
                req.min_dimensions,
                req.max_dimensions,
            ),
            ("mes-req", "Measure", len(fields.measure_like), req.min_measures, req.max_measures),
        ):
            check = _check(group, noun, count, minimum, maximum)
            if not check.passed:
                raise InvalidQueryShape(check)
            passed.append(check)
        return passed


def _check(group: str, noun: str, count: int, minimum: int, maximum: int | None) -> ShapeCheck:
    violated = None
    if count < minimum:
        violated = "min"
    elif maximum is not None and count > maximum:
        violated = "max"
    return ShapeCheck(
        group=group,
        noun=noun,
        count=count,
        minimum=minimum,
        maximum=maximum,
        violated=violated,
    )


def _to_vis_error(check: ShapeCheck) -> VisError:
    exact = check.minimum == check.maximum
    if check.violated == "min":
        bound = check.minimum
        title = f"Not Enough {check.noun}s"
        qualifier = "exactly" if exact else "at least"
    else:
        bound = check.maximum
        title = f"Too Many {check.noun}s"
        qualifier = "exactly" if exact else "no more than"
    plural = "" if bound == 1 else "s"
    return VisError(
        group=check.group,
        title=title,
        message=(
            f"This visualization requires {qualifier} {bound} {check.noun.lower()}{plural}."
        ),
    )
