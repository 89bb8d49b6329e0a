"""Shared query-response models used by the visualization core and its renderers."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    label: str | None = None


class QueryFields(BaseModel):
    model_config = ConfigDict(extra="allow")

    measure_like: list[FieldDescriptor] = Field(default_factory=list)
    dimensions: list[FieldDescriptor] = Field(default_factory=list)
    pivots: list[FieldDescriptor] = Field(default_factory=list)


class QueryResponseMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    fields: QueryFields = Field(default_factory=QueryFields)


class Cell(BaseModel):
    model_config = ConfigDict(extra="allow")

    value: float
    rendered: str | None = None
    html: str | None = None
    links: list[dict[str, Any]] | None = None
