import json

import pytest
from typer.testing import CliRunner

from table2json.cli import _parse_header_option, app

runner = CliRunner()

PEOPLE = [
    ["", "Tom", "Dick"],
    ["Age", 24, 32],
    ["Country", "NZ", "AU"],
]


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch):
    monkeypatch.setenv("TABLE2JSON_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("TABLE2JSON_DEFAULT_PRESET", raising=False)
    monkeypatch.delenv("TABLE2JSON_JSON_INDENT", raising=False)


@pytest.fixture()
def people_json(tmp_path):
    path = tmp_path / "people.json"
    path.write_text(json.dumps(PEOPLE), encoding="utf-8")
    return path


def test_convert_with_preset_prints_json(people_json):
    result = runner.invoke(app, ["convert", str(people_json), "--preset", "row.column"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "Tom": {"Age": 24, "Country": "NZ"},
        "Dick": {"Age": 32, "Country": "AU"},
    }


def test_convert_uses_default_preset_from_environment(people_json, monkeypatch):
    monkeypatch.setenv("TABLE2JSON_DEFAULT_PRESET", "column")
    result = runner.invoke(app, ["convert", str(people_json), "--indent", "0"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [
        {"Age": 24, "Country": "NZ"},
        {"Age": 32, "Country": "AU"},
    ]


def test_convert_with_explicit_headers_writes_file(people_json, tmp_path):
    output = tmp_path / "out" / "people.json"
    result = runner.invoke(
        app,
        [
            "convert",
            str(people_json),
            "--header",
            "column:0:1",
            "--header",
            "row:1:0",
            "--output",
            str(output),
        ],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text(encoding="utf-8")) == {
        "Age": {"Tom": 24, "Dick": 32},
        "Country": {"Tom": "NZ", "Dick": "AU"},
    }


def test_convert_csv_input(tmp_path):
    path = tmp_path / "grid.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    result = runner.invoke(app, ["convert", str(path)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [{"a": "1", "b": "2"}]


def test_convert_rejects_bad_preset(people_json):
    result = runner.invoke(app, ["convert", str(people_json), "--preset", "diagonal"])
    assert result.exit_code == 2
    assert "must be one of" in result.output


def test_convert_reports_missing_file(tmp_path):
    result = runner.invoke(app, ["convert", str(tmp_path / "nope.json")])
    assert result.exit_code == 2


def test_convert_reports_undecodable_csv(tmp_path):
    path = tmp_path / "grid.csv"
    path.write_bytes(b"a,b\n\xff,2\n")
    result = runner.invoke(app, ["convert", str(path)])
    assert result.exit_code == 2
    assert "not valid UTF-8" in result.output


def test_parse_header_option():
    assert _parse_header_option("Row:2:0") == {"kind": "row", "anchor_column": 2, "anchor_row": 0}


def test_bad_header_option_is_a_usage_error(people_json):
    result = runner.invoke(app, ["convert", str(people_json), "--header", "row:x"])
    assert result.exit_code != 0


def test_presets_command_lists_layouts():
    result = runner.invoke(app, ["presets"])
    assert result.exit_code == 0
    assert "row.row: row@(0,0), row@(0,1)" in result.stdout
    assert "column.column: column@(0,0), column@(1,0)" in result.stdout
