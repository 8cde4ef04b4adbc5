"""
Parser configuration.

Reads the [tinyexpr] section from tinyexpr.toml and applies environment
overrides. The resulting ParserConfig is passed explicitly into tokenize
and treeify; there is no module-level mutable state.

Example tinyexpr.toml:

    [tinyexpr]
    extended = true   # recognize 0b1011 binary literals
    warn = false      # silence ambiguous-literal warnings

Environment overrides: TINYEXPR_EXTENDED, TINYEXPR_WARN.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tinyexpr.toml"
CONFIG_SECTION = "tinyexpr"

_ENV_OVERRIDES = {
    "extended": "TINYEXPR_EXTENDED",
    "warn": "TINYEXPR_WARN",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ParserConfig(BaseModel):
    """Options read by the tokenizer and the literal linter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    extended: bool = False
    warn: bool = True


DEFAULT_CONFIG = ParserConfig()


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {raw!r}")


def _read_section(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{CONFIG_SECTION}] in {path} must be a table")
    return section


def load_config(path: Path | None = None, env: dict[str, str] | None = None) -> ParserConfig:
    """Build a ParserConfig from a TOML file and the environment.

    Args:
        path: Explicit config file. When omitted, tinyexpr.toml in the
            current directory is used if it exists.
        env: Environment mapping, defaults to os.environ.

    Returns:
        The merged configuration.

    Raises:
        ConfigError: If the file is unreadable or a value is invalid.
    """
    values: dict[str, Any] = {}

    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if candidate.exists():
            path = candidate
    if path is not None:
        values.update(_read_section(path))
        logger.debug("Loaded parser config from %s", path)

    env = os.environ if env is None else env
    for field, var in _ENV_OVERRIDES.items():
        if var in env:
            values[field] = _parse_bool(var, env[var])

    try:
        return ParserConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid parser configuration: {e}") from e
