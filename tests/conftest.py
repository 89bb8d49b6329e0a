"""Pytest configuration and fixtures for the liquid gauge tests."""

import pytest

from gauge_core.models import QueryResponseMetadata
from liquid_gauge.host import RecordingHostContext
from liquid_gauge.lifecycle import GaugeLifecycleController
from liquid_gauge.renderers.liquid_fill import LiquidFillRenderer
from liquid_gauge.settings import GaugeSettings
from liquid_gauge.surface import PanelContainer


def make_metadata(measures=("orders.count",), dimensions=(), pivots=()) -> QueryResponseMetadata:
    return QueryResponseMetadata.model_validate(
        {
            "fields": {
                "measure_like": [{"name": n} for n in measures],
                "dimensions": [{"name": n} for n in dimensions],
                "pivots": [{"name": n} for n in pivots],
            }
        }
    )


@pytest.fixture
def single_measure() -> QueryResponseMetadata:
    """One measure, no dimensions or pivots."""
    return make_metadata()


@pytest.fixture
def two_measures() -> QueryResponseMetadata:
    """A value measure followed by a comparison measure."""
    return make_metadata(measures=("orders.count", "orders.goal"))


@pytest.fixture
def sample_rows() -> list[dict]:
    return [
        {
            "orders.count": {"value": 42, "rendered": "42"},
            "orders.goal": {"value": 50, "rendered": "50"},
        }
    ]


@pytest.fixture
def container() -> PanelContainer:
    return PanelContainer(client_width=420, client_height=320)


@pytest.fixture
def context() -> RecordingHostContext:
    return RecordingHostContext()


@pytest.fixture
def controller(context: RecordingHostContext) -> GaugeLifecycleController:
    return GaugeLifecycleController(
        context, renderer=LiquidFillRenderer(), settings=GaugeSettings()
    )
