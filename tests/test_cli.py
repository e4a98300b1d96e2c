"""Tests for the quire CLI."""

import json

import pytest
import typer
from typer.testing import CliRunner

from quire import __version__
from quire.cli import typer_app
from quire.cli.commands.utils import parse_var

runner = CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "header.tpl").write_text("<h1>{{ title | upper }}</h1>")
    (tmp_path / "page.tpl").write_text("@include('header')<p>{{ body }}</p>")
    (tmp_path / "count.json").write_text(
        json.dumps({"type": "object", "fields": {"count": {"type": "int", "min": 3}}})
    )
    (tmp_path / "quire.yaml").write_text(
        "templates:\n  header: header.tpl\nvars:\n  title: Hello\nschemas:\n  count: count.json\n"
    )
    return tmp_path


def test_version():
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


# =============================================================================
# render
# =============================================================================


class TestRender:
    def test_render_with_config_and_vars(self, project):
        result = runner.invoke(typer_app, ["render", "page.tpl", "--var", "body=text"])
        assert result.exit_code == 0, result.output
        assert result.output == "<h1>HELLO</h1><p>text</p>"

    def test_render_vars_file(self, project):
        (project / "vars.yaml").write_text("body: from file\ntitle: other\n")
        result = runner.invoke(typer_app, ["render", "page.tpl", "--vars", "vars.yaml"])
        assert result.exit_code == 0, result.output
        assert result.output == "<h1>OTHER</h1><p>from file</p>"

    def test_render_to_file(self, project):
        result = runner.invoke(typer_app, ["render", "page.tpl", "--var", "body=1", "-o", "out/page.html"])
        assert result.exit_code == 0, result.output
        assert (project / "out" / "page.html").read_text() == "<h1>HELLO</h1><p>1</p>"

    def test_render_eval_error(self, project):
        result = runner.invoke(typer_app, ["render", "page.tpl"])
        assert result.exit_code == 1
        assert "undefined variable 'body'" in result.output


# =============================================================================
# validate
# =============================================================================


class TestValidate:
    def test_valid_data(self, project):
        (project / "data.yaml").write_text("count: 4\n")
        result = runner.invoke(typer_app, ["validate", "count.json", "data.yaml"])
        assert result.exit_code == 0, result.output
        assert "ok" in result.output

    def test_invalid_data_by_schema_name(self, project):
        (project / "data.json").write_text('{"count": 1}')
        result = runner.invoke(typer_app, ["validate", "count", "data.json"])
        assert result.exit_code == 1
        assert "Error[min] @ /count" in result.output

    def test_unknown_schema_name(self, project):
        (project / "data.json").write_text("{}")
        result = runner.invoke(typer_app, ["validate", "nope", "data.json"])
        assert result.exit_code == 1
        assert "schema not found: nope" in result.output


# =============================================================================
# check
# =============================================================================


class TestCheck:
    def test_all_templates_parse(self, project):
        result = runner.invoke(typer_app, ["check", "header.tpl", "page.tpl"])
        assert result.exit_code == 0, result.output

    def test_parse_error_reported(self, project):
        (project / "broken.tpl").write_text("@if (x) {open")
        result = runner.invoke(typer_app, ["check", "header.tpl", "broken.tpl"])
        assert result.exit_code == 1
        assert "unclosed block" in result.output


class TestParseVar:
    @pytest.mark.parametrize(
        "item, expected",
        [
            ("n=3", ("n", 3)),
            ("flag=true", ("flag", True)),
            ("name=ada", ("name", "ada")),
            ("empty=", ("empty", "")),
            ("bad=[", ("bad", "[")),
            ("eq=a=b", ("eq", "a=b")),
        ],
    )
    def test_parse(self, item, expected):
        assert parse_var(item) == expected

    def test_missing_equals(self):
        with pytest.raises(typer.BadParameter, match="expected key=value"):
            parse_var("novalue")
