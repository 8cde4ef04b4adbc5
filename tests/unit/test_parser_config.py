"""Tests for loading parser configuration from TOML and the environment."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tinyexpr.core.config import DEFAULT_CONFIG, ParserConfig, load_config
from tinyexpr.core.errors import ConfigError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "tinyexpr.toml"
    path.write_text(text)
    return path


class TestParserConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.extended is False
        assert DEFAULT_CONFIG.warn is True

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.extended = True  # type: ignore[misc]

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ParserConfig(verbose=True)  # type: ignore[call-arg]


class TestLoadConfig:
    def test_no_file_no_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config(env={}) == DEFAULT_CONFIG

    def test_explicit_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[tinyexpr]\nextended = true\nwarn = false\n")
        config = load_config(path, env={})
        assert config == ParserConfig(extended=True, warn=False)

    def test_missing_section_uses_defaults(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[other]\nkey = 1\n")
        assert load_config(path, env={}) == DEFAULT_CONFIG

    def test_discovered_in_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write(tmp_path, "[tinyexpr]\nextended = true\n")
        monkeypatch.chdir(tmp_path)
        assert load_config(env={}).extended is True

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[tinyexpr]\nextended = false\nwarn = true\n")
        config = load_config(path, env={"TINYEXPR_EXTENDED": "yes", "TINYEXPR_WARN": "Off"})
        assert config == ParserConfig(extended=True, warn=False)

    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_env_truthy(self, raw: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config(env={"TINYEXPR_EXTENDED": raw}).extended is True

    def test_env_invalid_bool(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError, match="TINYEXPR_WARN"):
            load_config(env={"TINYEXPR_WARN": "maybe"})

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[tinyexpr\nextended = true\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path, env={})

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "nope.toml", env={})

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'tinyexpr = "on"\n')
        with pytest.raises(ConfigError, match="must be a table"):
            load_config(path, env={})

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[tinyexpr]\nstrict = true\n")
        with pytest.raises(ConfigError, match="Invalid parser configuration"):
            load_config(path, env={})

    def test_wrong_value_type(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '[tinyexpr]\nwarn = "sometimes"\n')
        with pytest.raises(ConfigError):
            load_config(path, env={})
