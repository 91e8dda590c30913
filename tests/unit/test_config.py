"""Unit tests for config file loading and validation.

Covers:
  - Missing config file → Config.defaults(), no exception
  - version field required; unsupported versions rejected
  - Invalid YAML / non-mapping root → SystemExit(1)
  - logging.level validation
  - .allowlists/config.yaml picked up from the working directory
"""

from __future__ import annotations

import textwrap

import pytest

from allowlists.config import (
    SUPPORTED_VERSIONS,
    VALID_LOG_LEVELS,
    Config,
    LoggingConfig,
    load_config,
)
from allowlists.constants import ALLOWLIST_PATH_PREFIX, DEFAULT_RUNFILES_WORKSPACE


def _write_config(tmp_path, content: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return str(path)


class TestDefaults:
    def test_defaults(self) -> None:
        config = Config.defaults()
        assert config.version == 1
        assert config.path_prefix == ALLOWLIST_PATH_PREFIX
        assert config.runfiles_workspace == DEFAULT_RUNFILES_WORKSPACE
        assert config.runfiles_dir is None
        assert config.logging == LoggingConfig(level="INFO", json_output=True)
        assert config.path is None

    def test_supported_versions(self) -> None:
        assert SUPPORTED_VERSIONS == frozenset({1})

    def test_valid_log_levels(self) -> None:
        assert "DEBUG" in VALID_LOG_LEVELS
        assert "TRACE" not in VALID_LOG_LEVELS


class TestMissingConfigFile:
    def test_nonexistent_path_returns_defaults(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = load_config(config_path=str(tmp_path / "missing.yaml"))
        assert config == Config.defaults()

    def test_no_path_returns_defaults(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config() == Config.defaults()


class TestValidConfig:
    def test_full_config(self, tmp_path) -> None:
        path = _write_config(
            tmp_path,
            """
            version: 1
            path_prefix: lists/
            runfiles_workspace: _main
            runfiles_dir: /opt/bin/protoc.runfiles
            logging:
              level: debug
              json_output: false
            """,
        )
        config = load_config(config_path=path)
        assert config.path_prefix == "lists/"
        assert config.runfiles_workspace == "_main"
        assert config.runfiles_dir == "/opt/bin/protoc.runfiles"
        assert config.logging.level == "DEBUG"
        assert config.logging.json_output is False
        assert config.path == path

    def test_version_only_uses_defaults(self, tmp_path) -> None:
        config = load_config(config_path=_write_config(tmp_path, "version: 1\n"))
        assert config.path_prefix == ALLOWLIST_PATH_PREFIX
        assert config.logging.level == "INFO"

    def test_unknown_keys_ignored(self, tmp_path) -> None:
        config = load_config(config_path=_write_config(tmp_path, "version: 1\nextra: true\n"))
        assert config.version == 1

    def test_working_directory_config(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".allowlists").mkdir()
        (tmp_path / ".allowlists" / "config.yaml").write_text("version: 1\npath_prefix: cwd/\n")
        config = load_config()
        assert config.path_prefix == "cwd/"

    def test_explicit_path_wins_over_working_directory(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".allowlists").mkdir()
        (tmp_path / ".allowlists" / "config.yaml").write_text("version: 1\npath_prefix: cwd/\n")
        explicit = _write_config(tmp_path, "version: 1\npath_prefix: explicit/\n")
        assert load_config(config_path=explicit).path_prefix == "explicit/"


class TestInvalidConfig:
    @pytest.mark.parametrize(
        "content",
        [
            "path_prefix: lists/\n",
            "",
            "version: 2\n",
            "key: [unclosed bracket\n",
            "- just\n- a list\n",
            "version: 1\nlogging:\n  level: LOUD\n",
        ],
        ids=[
            "missing-version",
            "empty-file",
            "unsupported-version",
            "invalid-yaml",
            "non-mapping",
            "bad-log-level",
        ],
    )
    def test_exits(self, tmp_path, capsys, content: str) -> None:
        path = _write_config(tmp_path, content)
        with pytest.raises(SystemExit) as exc_info:
            load_config(config_path=path)
        assert exc_info.value.code == 1
        assert "CONFIG ERROR" in capsys.readouterr().err
