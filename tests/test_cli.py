"""Tests for the liquid-gauge command line."""

import json

import pytest
from typer.testing import CliRunner

from liquid_gauge.cli import _parse_overrides, app

runner = CliRunner()


@pytest.fixture
def query_file(tmp_path):
    path = tmp_path / "query.json"
    path.write_text(
        json.dumps(
            {
                "fields": {"measure_like": [{"name": "count"}], "dimensions": [], "pivots": []},
                "data": [{"count": {"value": 42, "rendered": "42"}}],
            }
        )
    )
    return path


class TestRender:
    def test_render_svg_to_stdout(self, query_file):
        result = runner.invoke(app, ["render", str(query_file)])
        assert result.exit_code == 0, result.output
        assert "<svg" in result.output
        assert ">42%</text>" in result.output

    def test_render_with_yaml_config(self, query_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("maxValue: 200\ndisplayPercent: true\n")
        result = runner.invoke(app, ["render", str(query_file), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert ">21%</text>" in result.output

    def test_render_with_override(self, query_file):
        result = runner.invoke(
            app, ["render", str(query_file), "-o", "displayPercent=false", "-o", "waveCount=2"]
        )
        assert result.exit_code == 0, result.output
        assert ">42</text>" in result.output

    def test_render_to_file_as_html(self, query_file, tmp_path):
        out = tmp_path / "gauge.html"
        result = runner.invoke(app, ["render", str(query_file), "--html", "--output", str(out)])
        assert result.exit_code == 0, result.output
        document = out.read_text()
        assert document.startswith('<div style="margin: 10px">')
        assert "<svg" in document

    def test_render_reports_host_errors(self, tmp_path):
        path = tmp_path / "query.json"
        path.write_text(json.dumps({"fields": {"measure_like": []}, "data": []}))
        result = runner.invoke(app, ["render", str(path)])
        assert result.exit_code == 1
        assert "Not Enough Measures" in result.output

    def test_render_unknown_renderer(self, query_file):
        result = runner.invoke(app, ["render", str(query_file), "--renderer", "nope"])
        assert result.exit_code == 1
        assert "Unknown renderer" in result.output

    def test_render_bad_override(self, query_file):
        result = runner.invoke(app, ["render", str(query_file), "-o", "waveCount"])
        assert result.exit_code == 1
        assert "Expected key=value" in result.output

    def test_render_null_measure(self, tmp_path):
        path = tmp_path / "query.json"
        response = {
            "fields": {"measure_like": [{"name": "count"}]},
            "data": [{"count": {"value": None}}],
        }
        path.write_text(json.dumps(response))
        result = runner.invoke(app, ["render", str(path)])
        assert result.exit_code == 1
        assert "Missing Value" in result.output

    def test_overrides_parsed_into_typed_values(self):
        overrides = _parse_overrides(
            ["waveRise=no", "waveCount=3", "textSize=0.5", "waveColor=#ABCDEF"]
        )
        assert overrides.values == {
            "waveRise": False,
            "waveCount": 3,
            "textSize": 0.5,
            "waveColor": "#ABCDEF",
        }


class TestOptions:
    def test_options_json(self):
        result = runner.invoke(app, ["options", "--format", "json", "-o", "showComparison=true"])
        assert result.exit_code == 0, result.output
        payload = {item["key"]: item for item in json.loads(result.output)}
        assert len(payload) == 21
        assert payload["maxValue"]["visible"] is False
        assert payload["minValue"]["visible"] is True

    def test_options_table(self):
        result = runner.invoke(app, ["options"])
        assert result.exit_code == 0, result.output
        assert "Liquid Fill Gauge Options" in result.output


class TestExplainOption:
    def test_explain_text(self):
        result = runner.invoke(app, ["explain-option", "maxValue", "-o", "showComparison=true"])
        assert result.exit_code == 0, result.output
        assert "Shown in panel: no" in result.output

    def test_explain_json(self):
        result = runner.invoke(
            app, ["explain-option", "waveCount", "-o", "waveCount=4", "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["value"] == 4
        assert payload["source"] == "override"

    def test_explain_unknown_option(self):
        result = runner.invoke(app, ["explain-option", "nope"])
        assert result.exit_code == 1
        assert "Unknown option key" in result.output


def test_renderers_lists_builtin():
    result = runner.invoke(app, ["renderers"])
    assert result.exit_code == 0, result.output
    assert "liquid-fill" in result.output
