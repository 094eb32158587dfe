# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, service wiring)."""

from __future__ import annotations

from dataclasses import dataclass

import typer

from ..config import CompletionSettings
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn
from ..option_cache import FileSystem, HelpRunner, OptionCache


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around the console helpers respecting colour and emoji settings."""

    use_emoji: bool
    use_color: bool | None = None

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_cli_logger(settings: CompletionSettings | None = None) -> CLILogger:
    """Return a :class:`CLILogger` honouring ``settings`` presentation flags.

    Args:
        settings: Loaded settings, ``None`` when configuration failed to load.

    Returns:
        CLILogger: Logger writing notices to stderr.
    """

    if settings is None:
        return CLILogger(use_emoji=False, use_color=False)
    # ``None`` defers to TTY detection when colour is allowed.
    return CLILogger(use_emoji=settings.use_emoji, use_color=None if settings.use_color else False)


def build_option_cache(
    settings: CompletionSettings,
    logger: CLILogger,
    *,
    filesystem: FileSystem | None = None,
    runner: HelpRunner | None = None,
) -> OptionCache:
    """Return an :class:`OptionCache` reporting progress through ``logger``."""

    return OptionCache(settings, filesystem=filesystem, runner=runner, notify=logger.info)


__all__ = [
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "build_option_cache",
]
