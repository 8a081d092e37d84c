import json

import pytest

import fanchart.__main__ as cli
from fanchart.tree import TreeBuilder

from builders import fake_measure

CSV = """id;name;sex;parent1_id;parent2_id;spouse_id;birth_date;death_date;place_of_birth;place_of_death;marriage_date;place_of_marriage
I1;Karl Görlitz;m;;;;1850;1920;;;;
I2;Paul Görlitz;m;I1;;;1880;;;;;
"""


@pytest.fixture(autouse=True)
def fake_font(monkeypatch):
    monkeypatch.setattr(cli, "FontMeasure", lambda path: fake_measure)


@pytest.fixture
def csv_file(tmp_path):
    filename = tmp_path / "data.csv"
    filename.write_text(CSV, encoding="utf-8")
    return filename


def test_main_writes_svg_from_csv(tmp_path, csv_file):
    output = tmp_path / "out.svg"

    assert cli.main([str(csv_file), "--root", "I1", "-o", str(output), "--direct-line", "I2"]) == 0

    svg = output.read_text(encoding="utf-8")
    assert "Görlitz" in svg
    assert "direct-line-1" in svg


def test_main_reads_json_tree(tmp_path, small_family):
    source = tmp_path / "tree.json"
    source.write_text(json.dumps({"data": TreeBuilder(6).build(small_family).to_json()}), encoding="utf-8")
    output = tmp_path / "out.svg"

    assert cli.main([str(source), "-o", str(output), "--fan-degree", "210"]) == 0
    assert 'id="person-3"' in output.read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "arguments, message",
    [
        (["--root", "I1", "--generations", "1"], "generations"),
        (["--root", "I9"], "root"),
    ],
)
def test_main_reports_errors(tmp_path, csv_file, capsys, arguments, message):
    status = cli.main([str(csv_file), "-o", str(tmp_path / "out.svg"), *arguments])

    assert status == 1
    assert message in capsys.readouterr().err


def test_csv_needs_a_root(csv_file):
    with pytest.raises(SystemExit):
        cli.main([str(csv_file)])
