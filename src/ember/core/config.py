"""
Configuration for the Ember command line.

Settings live in an ``ember.toml`` file:

    [interpreter]
    result_variable = "result"

    [logging]
    level = "WARNING"

The log level can be overridden with the EMBER_LOG_LEVEL environment
variable. A missing file means defaults.
"""

from __future__ import annotations

import logging
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ember.core.errors import ConfigError

CONFIG_FILENAME = "ember.toml"

LOG_LEVEL_ENV_VAR = "EMBER_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass
class InterpreterConfig:
    """Interpreter settings."""

    result_variable: str = "result"


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "WARNING"
    format: str = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"


@dataclass
class EmberConfig:
    """Complete configuration, defaults when no ember.toml is present."""

    interpreter: InterpreterConfig = field(default_factory=InterpreterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Path | None = None


def find_config(start: Path) -> Path | None:
    """Return ember.toml in ``start`` (or its directory, for a file), if present."""
    directory = start if start.is_dir() else start.parent
    candidate = directory / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def load_config(path: Path | None) -> EmberConfig:
    """Load configuration from ``path``; defaults when ``path`` is None."""
    if path is None:
        config = EmberConfig()
    else:
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e
        config = _config_from_dict(data)
        config.path = path

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if env_level:
        config.logging.level = _check_level(env_level)
    return config


def _config_from_dict(data: dict) -> EmberConfig:
    interpreter_data = _section(data, "interpreter")
    logging_data = _section(data, "logging")

    result_variable = interpreter_data.get("result_variable", "result")
    if not isinstance(result_variable, str) or not _IDENT_RE.fullmatch(result_variable):
        raise ConfigError(f"result_variable must be an identifier, got {result_variable!r}")

    defaults = LoggingConfig()
    return EmberConfig(
        interpreter=InterpreterConfig(result_variable=result_variable),
        logging=LoggingConfig(
            level=_check_level(str(logging_data.get("level", defaults.level))),
            format=_check_format(logging_data.get("format", defaults.format)),
        ),
    )


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {type(section).__name__}")
    return section


def _check_format(value: object) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"logging.format must be a string, got {type(value).__name__}")
    try:
        logging.Formatter(value)
    except ValueError as e:
        raise ConfigError(f"Invalid logging.format: {e}") from e
    return value


def _check_level(level: str) -> str:
    normalized = level.upper()
    if normalized not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level {level!r}; expected one of {', '.join(_LOG_LEVELS)}")
    return normalized
