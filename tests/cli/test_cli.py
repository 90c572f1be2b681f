"""Tests for the tagstitch CLI."""

import pytest
from typer.testing import CliRunner

from tagstitch import __version__
from tagstitch.cli.main import app

# Mark all tests as unit tests
pytestmark = pytest.mark.unit


@pytest.fixture
def runner(monkeypatch, tmp_path):
    """CLI test runner isolated from any local config file."""
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_version(runner):
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands(runner):
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ["expand", "stitch", "templates", "config", "version"]:
        assert command in result.output


def test_templates(runner):
    result = runner.invoke(app, ["templates"])
    assert result.exit_code == 0
    assert result.output.split() == ["html", "latex", "markdown"]


def test_config_shows_defaults(runner):
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "DELIM_OPEN={{" in result.output
    assert "DEFAULT_LABEL=auto-report" in result.output


def test_config_file_is_loaded(runner, tmp_path):
    (tmp_path / ".tagstitch.yaml").write_text("DEFAULT_LABEL: main\n", encoding="utf-8")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "DEFAULT_LABEL=main" in result.output


class TestExpandCommand:
    """tagstitch expand"""

    def test_expand_with_vars(self, runner, tmp_path):
        page = tmp_path / "page.txt"
        page.write_text("n={{n + 1}} name={{name}}", encoding="utf-8")
        result = runner.invoke(app, ["expand", str(page), "--var", "n=41", "-v", "name=Ada"])
        assert result.exit_code == 0, result.output
        assert "n=42 name=Ada" in result.output

    def test_expand_custom_delimiters_to_file(self, runner, tmp_path):
        page = tmp_path / "page.txt"
        page.write_text("<% 6 * 7 %>", encoding="utf-8")
        out = tmp_path / "out" / "page.txt"
        result = runner.invoke(
            app, ["expand", str(page), "--open", "<%", "--close", "%>", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8") == "42\n"

    def test_expand_failure_exits_nonzero(self, runner, tmp_path):
        page = tmp_path / "page.txt"
        page.write_text("{{1 / 0}}", encoding="utf-8")
        result = runner.invoke(app, ["expand", str(page)])
        assert result.exit_code == 1
        assert "ZeroDivisionError" in result.output

    def test_bad_var(self, runner, tmp_path):
        page = tmp_path / "page.txt"
        page.write_text("x", encoding="utf-8")
        result = runner.invoke(app, ["expand", str(page), "--var", "novalue"])
        assert result.exit_code != 0


class TestStitchCommand:
    """tagstitch stitch"""

    def test_stitch_markdown(self, runner, tmp_path):
        script = tmp_path / "report.py"
        script.write_text("## title: Hello\nprint(1)\n", encoding="utf-8")
        result = runner.invoke(app, ["stitch", str(script), "-t", "markdown"])
        assert result.exit_code == 0, result.output
        assert "# Hello" in result.output
        assert "```{python auto-report}" in result.output

    def test_stitch_wrong_template(self, runner, tmp_path):
        script = tmp_path / "report.py"
        script.write_text("print(1)\n", encoding="utf-8")
        template = tmp_path / "bad.txt"
        template.write_text("nothing\n", encoding="utf-8")
        result = runner.invoke(app, ["stitch", str(script), "-t", str(template)])
        assert result.exit_code == 1
        assert "Wrong template" in result.output
