import pytest

from builders import family, fake_measure, person


@pytest.fixture
def measure():
    return fake_measure


@pytest.fixture
def small_family():
    """root -> (son -> grandson, daughter)"""
    root = person("I1", "M", "Karl Görlitz", birth="1850-03-01", death="1920-05-02")
    wife = person("I2", "F", "Anna Schmidt")
    son = person("I3", "M", "Paul Görlitz", birth="1880")
    daughter = person("I4", "F", "Marie Görlitz", birth="1882")
    grandson = person("I5", "M", "Otto Görlitz", birth="1910")
    family([root, wife], [son, daughter], marriage_date="1875-06-01")
    family([son], [grandson])
    return root
