"""Option classification system and core visualization option types."""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel

OptionValue = int | float | str | bool


class OptionSection(StrEnum):
    VALUE = "Value"
    STYLE = "Style"
    WAVES = "Waves"


class OptionValueType(StrEnum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"


class OptionDisplay(StrEnum):
    RANGE = "range"
    COLOR = "color"


class OptionConstraints(BaseModel):
    min: float | None = None
    max: float | None = None
    step: float | None = None


class OptionDescriptor(BaseModel):
    key: str
    label: str
    default: OptionValue
    section: OptionSection
    value_type: OptionValueType
    constraints: OptionConstraints | None = None
    display: OptionDisplay | None = None
    placeholder: str | None = None


class ResolvedOption(BaseModel):
    key: str
    value: OptionValue
    source: Literal["override", "default"]


class OptionOverrides(BaseModel):
    """Option values supplied outside the host's panel, keyed by option name."""

    values: dict[str, OptionValue] = {}
