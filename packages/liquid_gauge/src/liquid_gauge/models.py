"""Liquid gauge models: resolved config, normalized values, host errors, session state."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from gauge_core.types import OptionDescriptor, OptionValue  # noqa: TC001


class ResolvedConfig(BaseModel):
    """Every recognized display option with a concrete value.

    Field aliases are the host's option names, so the model validates straight from a
    host config mapping and dumps back to one with ``by_alias=True``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    show_comparison: bool = Field(alias="showComparison")
    min_value: float = Field(alias="minValue")
    max_value: float = Field(alias="maxValue")
    circle_thickness: float = Field(alias="circleThickness")
    circle_fill_gap: float = Field(alias="circleFillGap")
    circle_color: str = Field(alias="circleColor")
    wave_height: float = Field(alias="waveHeight")
    wave_count: float = Field(alias="waveCount")
    wave_rise_time: float = Field(alias="waveRiseTime")
    wave_animate_time: float = Field(alias="waveAnimateTime")
    wave_rise: bool = Field(alias="waveRise")
    wave_height_scaling: bool = Field(alias="waveHeightScaling")
    wave_animate: bool = Field(alias="waveAnimate")
    wave_color: str = Field(alias="waveColor")
    wave_offset: float = Field(alias="waveOffset")
    text_vert_position: float = Field(alias="textVertPosition")
    text_size: float = Field(alias="textSize")
    value_count_up: bool = Field(alias="valueCountUp")
    display_percent: bool = Field(alias="displayPercent")
    text_color: str = Field(alias="textColor")
    wave_text_color: str = Field(alias="waveTextColor")

    def as_options(self) -> dict[str, OptionValue]:
        return self.model_dump(by_alias=True)

    def with_max_value(self, max_value: float) -> ResolvedConfig:
        return self.model_copy(update={"max_value": max_value})


class ExtractedValues(BaseModel):
    primary: float
    comparison: float | None = None


class NormalizedValue(BaseModel):
    display_value: float
    effective_max: float


class QueryRequirements(BaseModel):
    min_pivots: int = 0
    max_pivots: int | None = 0
    min_dimensions: int = 0
    max_dimensions: int | None = None
    min_measures: int = 1
    max_measures: int | None = None


GAUGE_REQUIREMENTS = QueryRequirements()


class VisError(BaseModel):
    """An error as handed to the host's error display."""

    group: str
    title: str
    message: str


class ShapeCheck(BaseModel):
    group: str
    noun: str
    count: int
    minimum: int
    maximum: int | None
    violated: Literal["min", "max"] | None = None

    @property
    def passed(self) -> bool:
        return self.violated is None


class VisualizationDescriptor(BaseModel):
    id: str
    label: str
    options: dict[str, OptionDescriptor]


class LifecycleState(StrEnum):
    UNINITIALIZED = "uninitialized"
    CREATED = "created"
    RENDERED = "rendered"


class GaugeSessionState(BaseModel):
    """Per-panel state held between create and update calls."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    surface_id: str
    surface: Any
    gauge: Any | None = None
    state: LifecycleState = LifecycleState.CREATED
