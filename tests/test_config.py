import pytest

from fanchart.config import ChartConfig, FilterMode
from fanchart.errors import ConfigurationOutOfRange


def test_defaults_are_valid():
    config = ChartConfig().validate()

    assert config.generations == 6
    assert config.fan_degree == 360
    assert config.inner_arcs == 3
    assert config.font_scale == 100
    assert config.filter_mode is FilterMode.ALL


@pytest.mark.parametrize(
    "field, value",
    [
        ("generations", 1),
        ("generations", 31),
        ("fan_degree", 179),
        ("fan_degree", 361),
        ("font_scale", 9),
        ("font_scale", 201),
        ("inner_arcs", -1),
        ("inner_arcs", 6),
        ("generations", True),
        ("generations", 6.5),
    ],
)
def test_out_of_range_values_are_rejected(field, value):
    with pytest.raises(ConfigurationOutOfRange) as excinfo:
        ChartConfig(**{field: value}).validate()

    assert excinfo.value.name == field
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("field, value", [("generations", 2), ("generations", 30), ("fan_degree", 180)])
def test_bounds_are_inclusive(field, value):
    ChartConfig(**{field: value}).validate()


def test_from_mapping_reads_query_parameters():
    config = ChartConfig.from_mapping(
        {
            "generations": "8",
            "fanDegree": "270",
            "fontScale": 120,
            "innerArcs": "2",
            "descendantsOptions": "onlyMaleDescendantsPlus",
            "showParentMarriageDates": "1",
            "hideEmptySegments": "false",
            "unknown": "ignored",
        }
    )

    assert config.generations == 8
    assert config.fan_degree == 270
    assert config.font_scale == 120
    assert config.inner_arcs == 2
    assert config.filter_mode is FilterMode.ONLY_MALE_PLUS
    assert config.show_parent_marriage_dates is True
    assert config.hide_empty_segments is False


@pytest.mark.parametrize(
    "values",
    [{"descendantsOptions": "everyone"}, {"generations": "many"}, {"fanDegree": 90}],
)
def test_from_mapping_rejects_invalid_values(values):
    with pytest.raises(ConfigurationOutOfRange):
        ChartConfig.from_mapping(values)


def test_marriage_dates_widen_the_padding():
    plain = ChartConfig()
    dated = ChartConfig(show_parent_marriage_dates=True)

    assert plain.circle_padding == 0
    assert dated.circle_padding == 40
    assert dated.inner_ring_height == dated.outer_ring_height == 150
    assert ChartConfig(font_scale=50).base_font_size == 7.5
