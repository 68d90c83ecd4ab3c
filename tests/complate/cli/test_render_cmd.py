"""Integration tests for the render and init CLI commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from complate import app as cli_app
from complate.cli.commands.render_cmd import OverrideParseError, parse_overrides
from complate.render.exceptions import RenderCancelled

CONFIG = """\
templates:
  greet:
    content:
      inline: "Hello {{ name }}!"
    values:
      name:
        prompt: "Who to greet?"
  motd:
    content:
      inline: "{{ greeting }}, {{ user }}"
    values:
      greeting:
        static: Hi
      user:
        shell: "echo shell-user"
"""


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / ".complate" / "config.yaml"
    path.parent.mkdir(parents=True)
    path.write_text(CONFIG, encoding="utf-8")
    return path


class TestParseOverrides:
    def test_splits_on_first_equals(self):
        assert parse_overrides(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}

    def test_none(self):
        assert parse_overrides(None) == {}

    @pytest.mark.parametrize("bad", ["novalue", "=value"])
    def test_invalid(self, bad):
        with pytest.raises(OverrideParseError):
            parse_overrides([bad])


class TestRenderCommand:
    def test_static_and_missing_in_loose_mode(self, runner, config_file):
        result = runner.invoke(cli_app, ["render", "-c", str(config_file), "-t", "motd", "--loose"])
        assert result.exit_code == 0
        assert "Hi, " in result.stdout
        assert "shell-user" not in result.stdout

    def test_trusted_shell_default(self, runner, config_file):
        result = runner.invoke(
            cli_app, ["render", "-c", str(config_file), "-t", "motd", "--trust", "ultimate"]
        )
        assert result.exit_code == 0
        assert "Hi, shell-user" in result.stdout

    def test_strict_mode_lists_missing(self, runner, config_file):
        result = runner.invoke(cli_app, ["render", "-c", str(config_file), "-t", "greet"])
        assert result.exit_code == 1
        assert "- name" in result.output
        assert "Hello" not in result.stdout

    def test_override_requires_experimental(self, runner, config_file):
        result = runner.invoke(
            cli_app, ["render", "-c", str(config_file), "-t", "greet", "-v", "name=Ava"]
        )
        assert result.exit_code == 1
        assert "experimental" in result.output

    def test_override_with_experimental(self, runner, config_file):
        result = runner.invoke(
            cli_app, ["-e", "render", "-c", str(config_file), "-t", "greet", "-v", "name=Ava"]
        )
        assert result.exit_code == 0
        assert "Hello Ava!" in result.stdout

    def test_invalid_override(self, runner, config_file):
        result = runner.invoke(
            cli_app, ["-e", "render", "-c", str(config_file), "-t", "greet", "-v", "name"]
        )
        assert result.exit_code == 1
        assert "KEY=VALUE" in result.output

    def test_ui_backend_requires_experimental(self, runner, config_file):
        result = runner.invoke(cli_app, ["render", "-c", str(config_file), "-b", "ui"])
        assert result.exit_code == 1
        assert "privilege" in result.output

    def test_ambiguous_headless_selection(self, runner, config_file):
        result = runner.invoke(cli_app, ["render", "-c", str(config_file)])
        assert result.exit_code == 1
        assert "--template" in result.output

    def test_line_prompt_backend(self, runner, config_file):
        result = runner.invoke(
            cli_app,
            ["render", "-c", str(config_file), "--backend", "cli"],
            input="1\nAva\n",
        )
        assert result.exit_code == 0
        assert "Who to greet?" in result.output
        assert "Hello Ava!" in result.stdout

    def test_cancel_exits_130(self, runner, config_file):
        with patch("complate.cli.commands.render_cmd.render_request", side_effect=RenderCancelled()):
            result = runner.invoke(cli_app, ["render", "-c", str(config_file), "-t", "greet"])
        assert result.exit_code == 130
        assert "cancelled" in result.output

    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(cli_app, ["render", "-c", str(tmp_path / "none.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_config_from_environment(self, runner, config_file, monkeypatch):
        monkeypatch.setenv("COMPLATE_CONFIG", str(config_file))
        result = runner.invoke(cli_app, ["render", "-t", "motd", "--loose"])
        assert result.exit_code == 0
        assert "Hi, " in result.stdout

    def test_output_file(self, runner, config_file, tmp_path):
        out = tmp_path / "out" / "motd.txt"
        result = runner.invoke(
            cli_app,
            ["render", "-c", str(config_file), "-t", "motd", "--loose", "-o", str(out)],
        )
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "Hi, "


class TestInitCommand:
    def test_writes_starter_config(self, runner, tmp_path):
        target = tmp_path / ".complate" / "config.yaml"
        result = runner.invoke(cli_app, ["init", "--path", str(target)])
        assert result.exit_code == 0
        assert target.exists()

    def test_refuses_overwrite_without_force(self, runner, tmp_path):
        target = tmp_path / "config.yaml"
        target.write_text("mine", encoding="utf-8")
        result = runner.invoke(cli_app, ["init", "--path", str(target)])
        assert result.exit_code == 1
        assert target.read_text(encoding="utf-8") == "mine"

    def test_force(self, runner, tmp_path):
        target = tmp_path / "config.yaml"
        target.write_text("mine", encoding="utf-8")
        result = runner.invoke(cli_app, ["init", "--path", str(target), "--force"])
        assert result.exit_code == 0
        assert "templates:" in target.read_text(encoding="utf-8")


class TestGlobalOptions:
    def test_version(self, runner):
        result = runner.invoke(cli_app, ["--version"])
        assert result.exit_code == 0
        assert "complate" in result.stdout
