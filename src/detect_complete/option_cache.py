# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery of the tool artifact and caching of its option names.

The option list is scraped from the artifact's help output and stored next to
the artifact, one option per line. The cache is rebuilt whenever it is older
than the artifact it was derived from.
"""

from __future__ import annotations

import glob
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol

from .config import CompletionSettings
from .process import CommandOptions, run_command

LOGGER = logging.getLogger(__name__)

OPTION_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(--[A-Za-z0-9.]+)")

HelpRunner = Callable[[Path], str]
Notifier = Callable[[str], None]


class FileSystem(Protocol):
    """Filesystem operations required by :class:`OptionCache`."""

    def glob(self, pattern: str) -> list[Path]:
        """Return paths matching the absolute glob ``pattern``."""
        ...

    def mtime(self, path: Path) -> float | None:
        """Return the modification time of ``path``, ``None`` when missing."""
        ...

    def read_text(self, path: Path) -> str:
        """Return the text stored at ``path``."""
        ...

    def write_text(self, path: Path, text: str) -> None:
        """Replace the content of ``path`` with ``text``."""
        ...


class LocalFileSystem:
    """:class:`FileSystem` backed by the local disk."""

    def glob(self, pattern: str) -> list[Path]:
        """Return paths matching the absolute glob ``pattern``."""

        return [Path(match) for match in glob.glob(pattern)]

    def mtime(self, path: Path) -> float | None:
        """Return the modification time of ``path``, ``None`` when missing."""

        try:
            return path.stat().st_mtime
        except FileNotFoundError:
            return None

    def read_text(self, path: Path) -> str:
        """Return the text at ``path``, replacing bytes that are not UTF-8."""

        return path.read_text(encoding="utf-8", errors="replace")

    def write_text(self, path: Path, text: str) -> None:
        """Replace the content of ``path`` with ``text`` encoded as UTF-8."""

        path.write_text(text, encoding="utf-8")


@dataclass(frozen=True, slots=True)
class OptionLookup:
    """Outcome of resolving the cached option list.

    Attributes:
        artifact: Newest tool artifact, ``None`` when none was found.
        cache_path: Cache file derived from ``artifact``.
        options: Option names read from the cache.
        refreshed: ``True`` when the cache was rebuilt during the lookup.
        notice: Informational message for the user, if any.
    """

    artifact: Path | None
    cache_path: Path | None
    options: tuple[str, ...] = ()
    refreshed: bool = False
    notice: str | None = None

    @property
    def available(self) -> bool:
        """Return ``True`` when a tool artifact was located."""

        return self.artifact is not None


def extract_options(text: str) -> tuple[str, ...]:
    """Return option names found at the start of lines in ``text``.

    Only the first option on each line is kept; duplicates are dropped while
    preserving first-seen order.

    Args:
        text: Help output printed by the tool.

    Returns:
        tuple[str, ...]: Option names including their leading dashes.
    """

    seen: dict[str, None] = {}
    for line in text.splitlines():
        match = OPTION_PATTERN.match(line)
        if match:
            seen.setdefault(match.group(1), None)
    return tuple(seen)


def render_cache(options: Iterable[str]) -> str:
    """Return the cache file content for ``options``."""

    return "".join(f"{option}\n" for option in options)


def make_help_runner(settings: CompletionSettings) -> HelpRunner:
    """Return a runner printing the help text of an artifact with ``java -jar``.

    Args:
        settings: Settings providing the java executable, help arguments and timeout.

    Returns:
        HelpRunner: Callable returning the captured standard output.
    """

    options = CommandOptions().with_timeout(settings.refresh_timeout or None)

    def run_help(artifact: Path) -> str:
        result = run_command(settings.help_command(artifact), options=options)
        if result.timed_out:
            LOGGER.debug("help command for %s timed out", artifact)
        elif result.returncode != 0:
            LOGGER.debug("help command for %s exited with %s", artifact, result.returncode)
        return result.stdout

    return run_help


class OptionCache:
    """Locate the newest tool artifact and keep its option cache current."""

    def __init__(
        self,
        settings: CompletionSettings,
        *,
        filesystem: FileSystem | None = None,
        runner: HelpRunner | None = None,
        notify: Notifier | None = None,
    ) -> None:
        self._settings = settings
        self._fs: FileSystem = filesystem or LocalFileSystem()
        self._runner = runner or make_help_runner(settings)
        self._notify = notify or LOGGER.info

    @property
    def settings(self) -> CompletionSettings:
        """Return the settings this cache was built from."""

        return self._settings

    def search_patterns(self) -> tuple[str, ...]:
        """Return the absolute glob patterns searched for the artifact."""

        pattern = self._settings.artifact_pattern
        return tuple(
            str(Path(directory).expanduser() / pattern) for directory in self._settings.search_dirs
        )

    def find_artifact(self) -> Path | None:
        """Return the most recently modified artifact across the search locations."""

        newest: Path | None = None
        newest_mtime = float("-inf")
        for pattern in self.search_patterns():
            for candidate in self._fs.glob(pattern):
                mtime = self._fs.mtime(candidate)
                if mtime is not None and mtime > newest_mtime:
                    newest, newest_mtime = candidate, mtime
        return newest

    def cache_path_for(self, artifact: Path) -> Path:
        """Return the cache file associated with ``artifact``."""

        return artifact.with_name(f"{artifact.name}{self._settings.cache_suffix}")

    def is_stale(self, artifact: Path) -> bool:
        """Return ``True`` when the cache is missing or older than ``artifact``."""

        cache_mtime = self._fs.mtime(self.cache_path_for(artifact))
        if cache_mtime is None:
            return True
        artifact_mtime = self._fs.mtime(artifact)
        return artifact_mtime is not None and cache_mtime < artifact_mtime

    def read_options(self, cache_path: Path) -> tuple[str, ...]:
        """Return the option names stored at ``cache_path``; empty when unreadable."""

        try:
            text = self._fs.read_text(cache_path)
        except (OSError, UnicodeDecodeError):
            return ()
        return tuple(line for line in text.splitlines() if line)

    def lookup(self, *, force: bool = False) -> OptionLookup:
        """Return the cached option list, rebuilding it first when stale.

        Args:
            force: Rebuild the cache even when it is current.

        Returns:
            OptionLookup: Options plus any notice for the user. A missing
            artifact yields no options and an informational notice.
        """

        artifact = self.find_artifact()
        if artifact is None:
            dirs = ", ".join(self._settings.search_dirs)
            return OptionLookup(
                artifact=None,
                cache_path=None,
                notice=f"{self._settings.artifact_pattern} not found in {dirs}",
            )

        cache_path = self.cache_path_for(artifact)
        refreshed = False
        notice: str | None = None
        if force or self.is_stale(artifact):
            refreshed, notice = self._rebuild(artifact, cache_path)
        return OptionLookup(
            artifact=artifact,
            cache_path=cache_path,
            options=self.read_options(cache_path),
            refreshed=refreshed,
            notice=notice,
        )

    def _rebuild(self, artifact: Path, cache_path: Path) -> tuple[bool, str | None]:
        self._notify(f"Reading options from {artifact.name}, this may take a few seconds")
        try:
            options = extract_options(self._runner(artifact))
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.debug("help invocation failed for %s: %s", artifact, exc)
            return False, f"Could not read options from {artifact.name}: {exc}"
        if not options:
            # An empty cache newer than the artifact would never be rebuilt.
            return False, f"No options found in the help output of {artifact.name}"
        try:
            self._fs.write_text(cache_path, render_cache(options))
        except OSError as exc:
            LOGGER.debug("cannot write %s: %s", cache_path, exc)
            return False, f"Could not write option cache {cache_path}: {exc}"
        return True, None


__all__ = [
    "FileSystem",
    "HelpRunner",
    "LocalFileSystem",
    "OPTION_PATTERN",
    "OptionCache",
    "OptionLookup",
    "extract_options",
    "make_help_runner",
    "render_cache",
]
