"""Tests for the command line interface."""

import csv
import io
import json

import pytest
from typer.testing import CliRunner

from json_field_reader.cli import app

runner = CliRunner()

EXAMPLE_LINES = [
    'GHS 5s          = 5904.66, raw value "5904.657"',
    "GHS av          = 5847.82, raw value 5847.82",
    'chain power     =    0.00, raw value "456.78 (AB)", parsing error <NaN>',
    'chain_rate1     =    0.00, raw value "", parsing error <empty string>',
]


@pytest.fixture
def document_path(tmp_path, sample_document):
    path = tmp_path / "stats.json"
    path.write_bytes(sample_document)
    return str(path)


class TestRun:
    """Tests for the run command."""

    def test_builtin_example(self):
        result = runner.invoke(app, ["run"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == EXAMPLE_LINES

    def test_json_output(self):
        result = runner.invoke(app, ["run", "--format", "json"])
        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert [r["name"] for r in rows] == ["GHS 5s", "GHS av", "chain power", "chain_rate1"]
        assert rows[0]["value"] == 5904.657

    def test_csv_output(self):
        result = runner.invoke(app, ["run", "--format", "CSV"])
        assert result.exit_code == 0
        rows = list(csv.DictReader(io.StringIO(result.stdout)))
        assert rows[2]["error"] == "<NaN>"

    def test_document_and_fields(self, document_path):
        result = runner.invoke(
            app,
            ["run", "-d", document_path, "-f", "label=.STATS.[1].label", "-f", "GHS av=.STATS.[1].GHS av"],
        )
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0].startswith("GHS av          = 5847.82")
        assert lines[1].startswith("label")
        assert lines[1].endswith("parsing error <NaN>")

    def test_document_from_stdin(self, sample_document):
        result = runner.invoke(app, ["run", "-d", "-", "-f", "id=.id"], input=sample_document)
        assert result.exit_code == 0
        assert "id              =    1.00, raw value 1" in result.stdout.splitlines()

    def test_fields_file(self, tmp_path, document_path):
        fields = tmp_path / "fields.json"
        fields.write_text(json.dumps({"fan": ".STATS.[1].fan1"}), encoding="utf-8")
        result = runner.invoke(app, ["run", "-d", document_path, "--fields-file", str(fields)])
        assert result.exit_code == 0
        assert "fan             =    0.00, raw value 0" in result.stdout.splitlines()

    def test_fields_against_builtin_document(self):
        result = runner.invoke(app, ["run", "-f", "temp max=.STATS.[1].temp_max"])
        assert result.exit_code == 0
        assert "temp max        =   68.00, raw value 68" in result.stdout.splitlines()

    def test_query_error_tag(self, document_path):
        result = runner.invoke(
            app, ["run", "-d", document_path, "-f", "gone=.STATS.[9]", "--on-extract-error", "tag"]
        )
        assert result.exit_code == 0
        assert 'gone            =    0.00, raw value , parsing error <query error>' in result.stdout.splitlines()

    def test_query_error_default(self, document_path):
        result = runner.invoke(app, ["run", "-d", document_path, "-f", "gone=.STATS.[9]"])
        assert result.exit_code == 0
        assert 'gone            =    0.00, raw value , parsing error <empty string>' in result.stdout.splitlines()

    def test_name_width_option(self):
        result = runner.invoke(app, ["run", "--name-width", "12"])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[1] == "GHS av       = 5847.82, raw value 5847.82"

    def test_name_width_from_environment(self, monkeypatch):
        monkeypatch.setenv("JSON_FIELD_READER_NAME_WIDTH", "12")
        result = runner.invoke(app, ["run"])
        assert result.stdout.splitlines()[1] == "GHS av       = 5847.82, raw value 5847.82"

    def test_negative_name_width(self):
        result = runner.invoke(app, ["run", "--name-width", "-5"])
        assert result.exit_code == 1
        assert "--name-width must not be negative" in result.output

    def test_lone_surrogate_in_document(self, tmp_path):
        path = tmp_path / "surrogate.json"
        path.write_bytes(b'{"a": "\\ud800", "b": 1}')
        result = runner.invoke(app, ["run", "-d", str(path), "-f", "a=.a", "-f", "b=.b"])
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == 'a               =    0.00, raw value "\\ud800", parsing error <NaN>'
        assert lines[1] == "b               =    1.00, raw value 1"

    def test_bad_registration(self):
        result = runner.invoke(app, ["run", "-f", "no-equals-sign"])
        assert result.exit_code == 1
        assert "Invalid field registration" in result.output

    def test_document_without_fields(self, document_path):
        result = runner.invoke(app, ["run", "-d", document_path])
        assert result.exit_code == 1
        assert "No fields registered" in result.output

    def test_missing_document(self, tmp_path):
        result = runner.invoke(app, ["run", "-d", str(tmp_path / "nope.json"), "-f", "a=.a"])
        assert result.exit_code == 1
        assert "Cannot read input" in result.output

    def test_bad_format(self):
        result = runner.invoke(app, ["run", "--format", "xml"])
        assert result.exit_code == 1

    def test_bad_policy(self):
        result = runner.invoke(app, ["run", "--on-extract-error", "ignore"])
        assert result.exit_code == 1


class TestSuggest:
    """Tests for the suggest command."""

    def test_builtin_example(self):
        result = runner.invoke(app, ["suggest"])
        assert result.exit_code == 0
        assert ".STATS.[1].GHS 5s" in result.stdout.splitlines()

    def test_document(self, document_path):
        result = runner.invoke(app, ["suggest", "-d", document_path])
        assert result.exit_code == 0
        assert ".STATS.[1].chains.[0]" in result.stdout.splitlines()

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["suggest", "-d", str(path)])
        assert result.exit_code == 1
