# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shell-free execution of the tool's help command.

The help text is only ever scraped for option names, so output is captured
and decoded leniently: a JVM running in a non-UTF-8 locale must not turn a
completion request into a traceback.
"""

from __future__ import annotations

import shutil

# Bandit: the only external command is the tool's own help invocation, passed
# as an argument list without shell expansion.
import subprocess  # nosec B404 suppression_valid: Shell-free subprocess wrapper enforces safe execution.
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Capture and decoding settings for a help invocation.

    Attributes:
        timeout: Seconds to wait before giving up, ``None`` to wait indefinitely.
        encoding: Codec for the captured streams, ``None`` for the locale default.
        errors: Codec error handler; undecodable bytes are replaced by default.
    """

    timeout: float | None = None
    encoding: str | None = None
    errors: str = "replace"

    def with_timeout(self, timeout: float | None) -> CommandOptions:
        """Return a copy of the options using ``timeout``.

        Raises:
            ValueError: When ``timeout`` is negative.
        """

        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be non-negative")
        return replace(self, timeout=timeout)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and decoded output of a finished command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def timed_out(self) -> bool:
        """Return ``True`` when the command was stopped by its timeout."""

        return self.returncode == TIMEOUT_RETURNCODE


def _decode(value: str | bytes | None, options: CommandOptions) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(options.encoding or "utf-8", errors=options.errors)


def _resolve_executable(args: Sequence[str]) -> list[str]:
    """Return ``args`` with the executable resolved to an absolute path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        raise ValueError("command requires at least one argument")

    head, *rest = args
    if Path(head).is_absolute():
        return [head, *rest]
    resolved = shutil.which(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CommandResult:
    """Run ``args`` with stdin closed and both output streams captured.

    A non-zero exit is reported through :attr:`CommandResult.returncode`, and
    so is a timeout (code ``124``, with a note appended to stderr).

    Args:
        args: Command and argument sequence to execute.
        options: Timeout and decoding settings.

    Returns:
        CommandResult: Exit status with decoded stdout and stderr.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    command = _resolve_executable(args)
    resolved_options = options or CommandOptions()
    try:
        completed = subprocess.run(  # nosec B603 - controlled arguments, not user supplied
            command,
            check=False,
            capture_output=True,
            stdin=subprocess.DEVNULL,
            timeout=resolved_options.timeout,
            encoding=resolved_options.encoding,
            errors=resolved_options.errors,
        )
    except subprocess.TimeoutExpired as exc:
        note = f"Command timed out after {resolved_options.timeout:.1f}s"
        stderr = _decode(exc.stderr, resolved_options)
        return CommandResult(
            args=tuple(command),
            returncode=TIMEOUT_RETURNCODE,
            stdout=_decode(exc.stdout, resolved_options),
            stderr=f"{stderr}\n{note}" if stderr else note,
        )
    return CommandResult(
        args=tuple(command),
        returncode=completed.returncode,
        stdout=_decode(completed.stdout, resolved_options),
        stderr=_decode(completed.stderr, resolved_options),
    )


__all__ = [
    "CommandOptions",
    "CommandResult",
    "TIMEOUT_RETURNCODE",
    "run_command",
]
