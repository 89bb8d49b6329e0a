"""Gauge lifecycle controller: owns a panel's drawing surface across create/update calls.

The update pipeline:
1. Check the query shape (pivots, dimensions, measures)
2. Resolve the user's options against the renderer defaults
3. Extract the primary and comparison values from the first row
4. Normalize the value and range
5. Clear the surface
6. Resize the surface to the panel
7. Hand the value and config to the renderer and keep its handle

Failures in steps 1-4, including host values that do not validate, are shown through
the host's error display and leave the surface as it was. Every successful update
rebuilds the surface from scratch.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from gauge_core.models import QueryResponseMetadata
from liquid_gauge.error_gate import ErrorGate, InvalidQueryShape
from liquid_gauge.extractor import DataExtractor, MissingCellError
from liquid_gauge.models import GaugeSessionState, LifecycleState, VisError
from liquid_gauge.normalizer import DegenerateRange, NonFiniteValue, ValueNormalizer
from liquid_gauge.renderers import get_renderer
from liquid_gauge.resolver import ConfigResolver
from liquid_gauge.settings import GaugeSettings
from liquid_gauge.surface import PANEL_STYLE, DrawingSurface, PanelContainer

if TYPE_CHECKING:
    from liquid_gauge.host import HostContext
    from liquid_gauge.renderers import GaugeRenderer

logger = logging.getLogger(__name__)

DATA_GROUP = "data-req"
RANGE_GROUP = "range-req"
CONFIG_GROUP = "config-req"

_STAGE_GROUPS = (CONFIG_GROUP, DATA_GROUP, RANGE_GROUP)

_surface_sequence = itertools.count(1)


class LifecycleError(RuntimeError):
    pass


def new_surface_id(prefix: str) -> str:
    """Surface id from the creation time, with a sequence number for same-millisecond creates."""
    from whenever import Instant

    return f"{prefix}-{Instant.now().timestamp_millis()}-{next(_surface_sequence)}"


class GaugeLifecycleController:
    """Drives one panel instance of the liquid fill gauge."""

    def __init__(
        self,
        context: HostContext,
        *,
        renderer: GaugeRenderer | None = None,
        settings: GaugeSettings | None = None,
        gate: ErrorGate | None = None,
        resolver: ConfigResolver | None = None,
        extractor: DataExtractor | None = None,
        normalizer: ValueNormalizer | None = None,
    ) -> None:
        self._context = context
        self._settings = settings or GaugeSettings()
        self._renderer = renderer or get_renderer(self._settings.renderer)
        self._gate = gate or ErrorGate()
        self._resolver = resolver or ConfigResolver()
        self._extractor = extractor or DataExtractor()
        self._normalizer = normalizer or ValueNormalizer()
        self._session: GaugeSessionState | None = None

    @property
    def state(self) -> LifecycleState:
        return self._session.state if self._session else LifecycleState.UNINITIALIZED

    @property
    def session(self) -> GaugeSessionState | None:
        return self._session

    def create(
        self, container: PanelContainer, config: Mapping[str, Any] | None = None
    ) -> DrawingSurface:
        if self._session is not None:
            raise LifecycleError(f"Gauge already created on surface '{self._session.surface_id}'")

        container.style["margin"] = f"{self._settings.container_margin_px:g}px"
        surface = DrawingSurface(surface_id=new_surface_id(self._settings.surface_id_prefix))
        surface.resize(*container.content_box(self._settings.surface_margin_px))
        container.children = [PANEL_STYLE, surface]

        self._session = GaugeSessionState(surface_id=surface.surface_id, surface=surface)
        logger.info(
            "Created gauge surface %s (%gx%g)", surface.surface_id, surface.width, surface.height
        )
        return surface

    def update(
        self,
        data: Sequence[Mapping[str, Any]],
        container: PanelContainer,
        config: Mapping[str, Any] | None,
        query_metadata: QueryResponseMetadata | Mapping[str, Any],
    ) -> Any | None:
        """Rebuild the gauge; returns the renderer's handle, or None if an error was shown."""
        session = self._session
        if session is None:
            raise LifecycleError("update() called before create()")

        metadata = (
            query_metadata
            if isinstance(query_metadata, QueryResponseMetadata)
            else QueryResponseMetadata.model_validate(query_metadata)
        )

        try:
            passed = self._gate.validate(metadata)
        except InvalidQueryShape as e:
            # Later-stage errors belong to a gauge that is no longer being drawn
            for group in _STAGE_GROUPS:
                self._context.clear_errors(group)
            self._show_error(session, e.error)
            return None
        for check in passed:
            self._context.clear_errors(check.group)

        try:
            resolved = self._resolver.resolve(config or {}, self._renderer.default_settings())
        except ValidationError as e:
            self._show_error(
                session,
                VisError(group=CONFIG_GROUP, title="Invalid Option", message=_describe(e)),
            )
            return None
        self._context.clear_errors(CONFIG_GROUP)

        if not data:
            self._show_error(
                session,
                VisError(
                    group=DATA_GROUP, title="No Results", message="The query returned no rows."
                ),
            )
            return None
        try:
            extracted = self._extractor.extract(data[0], metadata)
        except MissingCellError as e:
            self._show_error(
                session, VisError(group=DATA_GROUP, title="Missing Value", message=str(e))
            )
            return None
        except ValidationError as e:
            self._show_error(
                session, VisError(group=DATA_GROUP, title="Missing Value", message=_describe(e))
            )
            return None
        self._context.clear_errors(DATA_GROUP)

        try:
            normalized = self._normalizer.normalize(
                extracted.primary, extracted.comparison, resolved
            )
        except DegenerateRange as e:
            self._show_error(
                session, VisError(group=RANGE_GROUP, title="Invalid Range", message=str(e))
            )
            return None
        except NonFiniteValue as e:
            self._show_error(
                session, VisError(group=RANGE_GROUP, title="Invalid Value", message=str(e))
            )
            return None
        self._context.clear_errors(RANGE_GROUP)

        surface: DrawingSurface = session.surface
        surface.clear()
        surface.resize(*container.content_box(self._settings.surface_margin_px))

        session.gauge = self._renderer.load_gauge(
            surface,
            normalized.display_value,
            resolved.with_max_value(normalized.effective_max),
        )
        session.state = LifecycleState.RENDERED
        logger.info(
            "Rendered gauge %s: value=%g max=%g",
            session.surface_id,
            normalized.display_value,
            normalized.effective_max,
        )
        return session.gauge

    def _show_error(self, session: GaugeSessionState, error: VisError) -> None:
        logger.warning(
            "Gauge %s not rendered: %s (%s)", session.surface_id, error.title, error.message
        )
        self._context.add_error(error)


def _describe(error: ValidationError) -> str:
    """First validation problem as `location: message`, in the host's option names."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or error.title
    return f"{location}: {first['msg']}"
