from fanchart import palette
from fanchart.records import Sex


def test_colors_by_sex():
    assert palette.get_colors(Sex.MALE) == ("#E3F2FD", palette.male_color)
    assert palette.get_colors(Sex.FEMALE) == ("#FCE4EC", palette.female_color)
    assert palette.get_colors(Sex.UNKNOWN)[1] == palette.unknown_color


def test_lab_interpolation():
    colors = palette.interpolate_colors_lab("#a8bedb", "#dbe9f6", 5)

    assert len(colors) == 5
    assert colors[0] == "#a8bedb"
    assert colors[-1] == "#dbe9f6"


def test_gradient_follows_position_and_depth():
    colors = palette.palette(8)

    assert len(colors) == 32
    assert palette.gradient_color(0.1, 1) == colors[0]
    assert palette.gradient_color(0.1, 3) == colors[2]
    assert palette.gradient_color(0.9, 1) == colors[24]
    assert palette.gradient_color(1.0, 20) == colors[31]
