"""Hypothesis strategies for generating gauge domain objects.

These strategies generate user option mappings, query field metadata and measure
values for property-based testing.
"""

from hypothesis import strategies as st

from gauge_core.models import QueryResponseMetadata
from liquid_gauge.renderers.liquid_fill import LIQUID_FILL_DEFAULTS

# =============================================================================
# OPTION VALUES
# =============================================================================

colors = st.from_regex(r"#[0-9A-F]{6}", fullmatch=True)
unit_floats = st.floats(min_value=0, max_value=1, allow_nan=False)
positive_floats = st.floats(min_value=0.001, max_value=1e9, allow_nan=False)
measure_values = st.floats(min_value=-1e9, max_value=1e9, allow_nan=False)


def _value_for(key: str):
    default = LIQUID_FILL_DEFAULTS[key]
    if isinstance(default, bool):
        return st.booleans()
    if isinstance(default, str):
        return colors
    return st.one_of(st.integers(min_value=0, max_value=20000), unit_floats)


@st.composite
def user_configs(draw):
    """A partial user config: any subset of known keys, some set to None, plus unknown keys."""
    keys = draw(st.lists(st.sampled_from(sorted(LIQUID_FILL_DEFAULTS)), unique=True))
    config = {}
    for key in keys:
        config[key] = draw(st.one_of(st.none(), _value_for(key)))
    extras = draw(
        st.dictionaries(
            st.text(alphabet="xyz", min_size=1, max_size=5), st.integers(), max_size=3
        )
    )
    config.update(extras)
    return config


# =============================================================================
# QUERY METADATA
# =============================================================================


def _fields(prefix: str, max_size: int, min_size: int = 0):
    return st.lists(
        st.integers(min_value=0, max_value=99).map(lambda i: {"name": f"{prefix}.f{i}"}),
        min_size=min_size,
        max_size=max_size,
        unique_by=lambda f: f["name"],
    )


@st.composite
def query_metadata(
    draw, min_measures: int = 0, max_measures: int = 5, min_pivots: int = 0, max_pivots: int = 2
):
    return QueryResponseMetadata.model_validate(
        {
            "fields": {
                "measure_like": draw(_fields("measure", max_measures, min_size=min_measures)),
                "dimensions": draw(_fields("dimension", 4)),
                "pivots": draw(_fields("pivot", max_pivots, min_size=min_pivots)),
            }
        }
    )
