import pytest

from fanchart.config import ChartConfig
from fanchart.geometry import Geometry
from fanchart.labels import LabelRenderer, PathPool
from fanchart.text import LabelStrategy, TextFitter

from builders import fake_measure, layout_node


def renderer(**options):
    config = ChartConfig(**options)
    geometry = Geometry(config)
    pool = PathPool()
    return LabelRenderer(config, geometry, pool), TextFitter(config, geometry, fake_measure), pool


def test_path_pool_creates_each_path_once():
    pool = PathPool()
    calls = []

    def create():
        calls.append(1)
        return "M 0,0"

    assert pool.add("path-person-1-0", create) == "path-person-1-0"
    assert pool.add("path-person-1-0", create) == "path-person-1-0"

    assert len(calls) == 1
    assert len(pool) == 1
    assert "path-person-1-0" in pool


def test_along_arc_lines_reference_shared_paths():
    labels, fitter, pool = renderer()
    node = layout_node(1, 0.0, 0.25, node_id=7)
    plan = fitter.fit(node)

    label = labels.render(node, plan)
    labels.render(node, plan)

    assert label.element_id == "person-7"
    assert [line.path_id for line in label.lines] == ["path-person-7-0", "path-person-7-1"]
    assert all(line.start_offset == "50%" for line in label.lines)
    assert len(pool) == 2


def test_center_lines_are_stacked():
    labels, fitter, _ = renderer()

    assert labels.transforms(layout_node(0, 0.0, 1.0), 2, 10) == [
        "translate(0 -8.5)",
        "translate(0 8.5)",
    ]


@pytest.mark.parametrize(
    "x0, x1, transform",
    [
        (0.5, 0.51, "rotate(-88.2) translate(197.5)"),
        (0.49, 0.5, "rotate(88.2) translate(-197.5)"),
    ],
)
def test_radial_transform(x0, x1, transform):
    labels, _, _ = renderer()

    assert labels.transforms(layout_node(1, x0, x1), 1, 10) == [transform]


def test_radial_lines_fan_out_around_the_middle():
    labels, fitter, pool = renderer()
    node = layout_node(1, 0.5, 0.6, timespan="1900-1970")
    plan = fitter.fit(node)
    label = labels.render(node, plan)

    assert plan.strategy is LabelStrategy.THREE_LINES
    assert len(label.lines) == 3
    assert len(set(line.transform for line in label.lines)) == len(label.lines)
    assert all(line.dy == pytest.approx(plan.font_size / 3) for line in label.lines)
    assert len(pool) == 0


def test_marriage_label():
    labels, _, pool = renderer(show_parent_marriage_dates=True)
    node = layout_node(1, 0.0, 0.25, node_id=3, marriage_date_of_parents="1875")

    label = labels.marriage_label(node)

    assert label.element_id == "person-3-marriage"
    assert label.strategy is None
    assert label.lines[0].runs[0].label == "⚭ 1875"
    assert label.lines[0].css_class == "marriage"
    assert "path-person-3-marriage" in pool


def test_no_marriage_label_without_padding_or_date():
    labels, _, _ = renderer()
    dated = layout_node(1, 0.0, 0.25, marriage_date_of_parents="1875")

    assert labels.marriage_label(dated) is None
    labels, _, _ = renderer(show_parent_marriage_dates=True)
    assert labels.marriage_label(layout_node(1, 0.0, 0.25)) is None
    assert labels.marriage_label(layout_node(0, 0.0, 1.0, marriage_date_of_parents="1875")) is None


def test_strategy_is_kept_on_the_label():
    labels, fitter, _ = renderer()
    node = layout_node(0, 0.0, 1.0)

    assert labels.render(node, fitter.fit(node)).strategy is LabelStrategy.CENTER
