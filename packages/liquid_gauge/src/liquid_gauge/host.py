"""Host capabilities handed to the visualization explicitly rather than read from globals."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from liquid_gauge.models import VisError


@runtime_checkable
class HostContext(Protocol):
    def add_error(self, error: VisError) -> None: ...

    def clear_errors(self, group: str | None = None) -> None: ...


class RecordingHostContext:
    """Keeps the errors currently displayed, one per group, like the host's error overlay."""

    def __init__(self) -> None:
        self.errors: dict[str, VisError] = {}

    def add_error(self, error: VisError) -> None:
        self.errors[error.group] = error

    def clear_errors(self, group: str | None = None) -> None:
        if group is None:
            self.errors.clear()
        else:
            self.errors.pop(group, None)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
