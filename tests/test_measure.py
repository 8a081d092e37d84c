import pytest

from fanchart.errors import MeasurementUnavailable
from fanchart.measure import FontMeasure


def test_default_font_widths_grow_with_text_and_size():
    measure = FontMeasure()

    assert measure("Anna Maria", 15) > measure("Anna", 15) > 0
    assert measure("Anna", 30) > measure("Anna", 15)


def test_missing_font_file():
    with pytest.raises(MeasurementUnavailable):
        FontMeasure("/nonexistent/font.ttf")("Anna", 15)


def test_invalid_font_size():
    with pytest.raises(MeasurementUnavailable):
        FontMeasure()("Anna", 0)


def test_bold_text_uses_the_bold_font():
    measure = FontMeasure(None, "/nonexistent/bold.ttf")

    assert measure("Müller", 15) > 0
    with pytest.raises(MeasurementUnavailable):
        measure("Müller", 15, 600)
