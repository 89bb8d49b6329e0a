"""Pulls the primary and comparison measure values out of the first result row."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gauge_core.models import Cell, QueryResponseMetadata
from liquid_gauge.models import ExtractedValues


class MissingCellError(ValueError):
    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Result row has no value for measure '{field_name}'")


class DataExtractor:
    """Reads measure cells by the names listed in the query's field metadata.

    The first measure-like field is the gauge value; the second, when the query has
    one, is the comparison value. Callers run the query shape gate first, so at least
    one measure field is present.
    """

    def extract(
        self,
        row: Mapping[str, Cell | Mapping[str, Any]],
        metadata: QueryResponseMetadata,
    ) -> ExtractedValues:
        measures = metadata.fields.measure_like
        primary = _cell_value(row, measures[0].name)
        comparison = _cell_value(row, measures[1].name) if len(measures) > 1 else None
        return ExtractedValues(primary=primary, comparison=comparison)


def _cell_value(row: Mapping[str, Cell | Mapping[str, Any]], name: str) -> float:
    raw = row.get(name)
    if raw is None:
        raise MissingCellError(name)
    if isinstance(raw, Cell):
        return raw.value
    # Aggregates over no rows arrive as a cell with a null value
    if isinstance(raw, Mapping) and raw.get("value") is None:
        raise MissingCellError(name)
    return Cell.model_validate(raw).value
