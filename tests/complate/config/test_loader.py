"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from complate.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    SHELL_TIMEOUT_ENV_VAR,
    ConfigError,
    build_config,
    load_config,
    resolve_config_path,
    shell_timeout_from_env,
    write_default_config,
)
from complate.render.models import ShellCommand, StaticValue


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


FULL_CONFIG = """\
version: 0.1
templates:
  greet:
    content:
      inline: "Hello {{ name }}"
    values:
      name:
        prompt: "Who to greet?"
        static: World
  commit:
    content:
      file: templates/commit.tpl
    values:
      summary:
        prompt: Summary
      author:
        shell: "git config user.name"
      level:
        options: [patch, minor, 2]
        required: false
      count:
        static: 42
"""


class TestLoadConfig:
    def test_full_config(self, tmp_path):
        _write(tmp_path / ".complate" / "templates" / "commit.tpl", "{{ summary }} ({{ author }})\n")
        config = load_config(_write(tmp_path / ".complate" / "config.yaml", FULL_CONFIG))

        assert config.names() == ["greet", "commit"]

        greet = config.lookup("greet")
        assert greet.body == "Hello {{ name }}"
        (name,) = greet.variables
        assert name.prompt_text == "Who to greet?"
        assert name.default == StaticValue("World")
        assert name.required is True

        commit = config.lookup("commit")
        assert commit.body == "{{ summary }} ({{ author }})\n"
        assert commit.variable_names() == ["summary", "author", "level", "count"]
        variables = {v.name: v for v in commit.variables}
        assert variables["summary"].default is None
        assert variables["author"].default == ShellCommand("git config user.name")
        assert variables["level"].options == ("patch", "minor", "2")
        assert variables["level"].required is False
        assert variables["count"].default == StaticValue("42")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="complate init"):
            load_config(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = _write(tmp_path / "config.yaml", "templates: [unclosed\n")
        with pytest.raises(ConfigError, match="Cannot parse"):
            load_config(path)

    def test_missing_content_file(self, tmp_path):
        path = _write(
            tmp_path / "config.yaml",
            "templates:\n  t:\n    content:\n      file: missing.tpl\n",
        )
        with pytest.raises(ConfigError, match="cannot read content file"):
            load_config(path)

    def test_empty_file_yields_empty_config(self, tmp_path):
        assert len(load_config(_write(tmp_path / "config.yaml", ""))) == 0


class TestBuildConfigValidation:
    def test_static_and_shell_conflict(self):
        data = {"templates": {"t": {"content": {"inline": ""}, "values": {"a": {"static": "x", "shell": "y"}}}}}
        with pytest.raises(ConfigError, match="not both"):
            build_config(data)

    def test_content_needs_exactly_one_source(self):
        data = {"templates": {"t": {"content": {"inline": "a", "file": "b"}}}}
        with pytest.raises(ConfigError, match="exactly one"):
            build_config(data)

    def test_unknown_value_keys_rejected(self):
        data = {"templates": {"t": {"content": {"inline": ""}, "values": {"a": {"bogus": 1}}}}}
        with pytest.raises(ConfigError, match="templates.t.values.a.bogus"):
            build_config(data)

    def test_root_must_be_mapping(self):
        with pytest.raises(ConfigError, match="mapping"):
            build_config(["not", "a", "mapping"])

    def test_declaration_order_preserved(self):
        data = {
            "templates": {
                "t": {
                    "content": {"inline": ""},
                    "values": {"z": {}, "a": {}, "m": {}},
                }
            }
        }
        assert build_config(data).lookup("t").variable_names() == ["z", "a", "m"]


class TestEnvironment:
    def test_cli_path_wins(self, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, "/env/config.yaml")
        assert resolve_config_path("cli.yaml") == Path("cli.yaml")

    def test_env_path(self, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, "/env/config.yaml")
        assert resolve_config_path(None) == Path("/env/config.yaml")

    def test_default_path(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert resolve_config_path(None) == DEFAULT_CONFIG_PATH

    def test_shell_timeout_unset(self, monkeypatch):
        monkeypatch.delenv(SHELL_TIMEOUT_ENV_VAR, raising=False)
        assert shell_timeout_from_env() is None

    def test_shell_timeout_parsed(self, monkeypatch):
        monkeypatch.setenv(SHELL_TIMEOUT_ENV_VAR, "2.5")
        assert shell_timeout_from_env() == 2.5

    @pytest.mark.parametrize("raw", ["soon", "0", "-1", "nan", "inf"])
    def test_shell_timeout_invalid(self, monkeypatch, raw):
        monkeypatch.setenv(SHELL_TIMEOUT_ENV_VAR, raw)
        with pytest.raises(ConfigError):
            shell_timeout_from_env()


class TestWriteDefaultConfig:
    def test_written_config_loads(self, tmp_path):
        path = write_default_config(tmp_path / ".complate" / "config.yaml")
        config = load_config(path)
        assert config.names() == ["default"]
        author = config.lookup("default").variables[-1]
        assert isinstance(author.default, ShellCommand)

    def test_refuses_overwrite(self, tmp_path):
        path = _write(tmp_path / "config.yaml", "keep me")
        with pytest.raises(ConfigError, match="--force"):
            write_default_config(path)
        assert path.read_text() == "keep me"

    def test_force_overwrites(self, tmp_path):
        path = _write(tmp_path / "config.yaml", "keep me")
        write_default_config(path, force=True)
        assert "templates:" in path.read_text()
