# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and loader for the completion helper.

Settings are layered: built-in defaults, then an optional TOML file, then
``DETECT_COMPLETE_*`` environment variables.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_ENV: Final[str] = "DETECT_COMPLETE_CONFIG"
CONFIG_DIR_NAME: Final[str] = "detect-complete"
CONFIG_FILE_NAME: Final[str] = "config.toml"

DEFAULT_SEARCH_DIRS: Final[tuple[str, ...]] = ("~/Downloads", "/tmp/synopsys-detect*")
DEFAULT_ARTIFACT_PATTERN: Final[str] = "synopsys-detect-*.jar"
DEFAULT_CACHE_SUFFIX: Final[str] = ".options"

_ENV_FIELDS: Final[dict[str, str]] = {
    "DETECT_COMPLETE_COMMAND": "command_name",
    "DETECT_COMPLETE_SEARCH_DIRS": "search_dirs",
    "DETECT_COMPLETE_PATTERN": "artifact_pattern",
    "DETECT_COMPLETE_JAVA": "java",
    "DETECT_COMPLETE_TIMEOUT": "refresh_timeout",
}
_NO_COLOR_ENV: Final[str] = "DETECT_COMPLETE_NO_COLOR"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class CompletionSettings(BaseModel):
    """Runtime settings shared by the cache builder, the CLI and the shell script."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    command_name: str = Field(default="detect", min_length=1)
    search_dirs: tuple[str, ...] = DEFAULT_SEARCH_DIRS
    artifact_pattern: str = Field(default=DEFAULT_ARTIFACT_PATTERN, min_length=1)
    cache_suffix: str = Field(default=DEFAULT_CACHE_SUFFIX, min_length=1)
    java: str = Field(default="java", min_length=1)
    help_args: tuple[str, ...] = ("--help",)
    refresh_timeout: float = Field(default=60.0, ge=0)
    use_color: bool = True
    use_emoji: bool = False

    @field_validator("search_dirs", mode="before")
    @classmethod
    def _split_search_dirs(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(entry for entry in value.split(os.pathsep) if entry)
        return value

    def help_command(self, artifact: Path) -> list[str]:
        """Return the command printing the help text of ``artifact``.

        Args:
            artifact: Tool jar whose option names are being scraped.

        Returns:
            list[str]: Argument list suitable for :func:`detect_complete.process.run_command`.
        """

        return [self.java, "-jar", str(artifact), *self.help_args]


def default_config_path(env: Mapping[str, str]) -> Path:
    """Return the configuration file location honouring ``DETECT_COMPLETE_CONFIG``."""

    explicit = env.get(CONFIG_ENV)
    if explicit:
        return Path(explicit).expanduser()
    config_home = env.get("XDG_CONFIG_HOME") or "~/.config"
    return Path(config_home).expanduser() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _load_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(data, MutableMapping):
        raise ConfigError(f"Configuration at {path} must be a table")
    return dict(data)


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key, field_name in _ENV_FIELDS.items():
        value = env.get(key)
        if value:
            overrides[field_name] = value
    if env.get(_NO_COLOR_ENV):
        overrides["use_color"] = False
    return overrides


def load_settings(
    *,
    env: Mapping[str, str] | None = None,
    path: Path | None = None,
) -> CompletionSettings:
    """Load settings from defaults, the TOML file and the environment.

    Args:
        env: Environment mapping, defaults to :data:`os.environ`.
        path: Explicit configuration file, defaults to :func:`default_config_path`.

    Returns:
        CompletionSettings: Validated settings.

    Raises:
        ConfigError: If the file cannot be parsed or a value fails validation.
    """

    environ = os.environ if env is None else env
    config_path = path if path is not None else default_config_path(environ)
    payload = _load_toml(config_path)
    payload.update(_env_overrides(environ))
    try:
        return CompletionSettings.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "CompletionSettings",
    "ConfigError",
    "default_config_path",
    "load_settings",
]
