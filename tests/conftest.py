# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import fnmatch
from pathlib import Path

import pytest

from detect_complete.config import CompletionSettings

HELP_TEXT = """\
Detect 8.0.0 help
--detect.tools: Tools to include in the scan.
--detect.source.path   Source directory to scan.
  --detect.indented.option  continuation lines do not start an option
--blackduck.url --blackduck.api.token
this line mentions --detect.ignored mid-sentence
--detect.tools is listed twice
"""


class FakeFileSystem:
    """In-memory filesystem whose writes are stamped by a manual clock."""

    def __init__(self) -> None:
        self.files: dict[Path, tuple[str, float]] = {}
        self.now = 1000.0
        self.writes = 0

    def tick(self, seconds: float = 1.0) -> float:
        self.now += seconds
        return self.now

    def add(self, path: str | Path, text: str = "", *, mtime: float | None = None) -> Path:
        resolved = Path(path)
        self.files[resolved] = (text, self.now if mtime is None else mtime)
        return resolved

    def glob(self, pattern: str) -> list[Path]:
        return sorted(path for path in self.files if fnmatch.fnmatch(str(path), pattern))

    def mtime(self, path: Path) -> float | None:
        entry = self.files.get(path)
        return None if entry is None else entry[1]

    def read_text(self, path: Path) -> str:
        try:
            return self.files[path][0]
        except KeyError as exc:
            raise FileNotFoundError(str(path)) from exc

    def write_text(self, path: Path, text: str) -> None:
        self.writes += 1
        self.files[path] = (text, self.tick())


class FakeHelpRunner:
    """Record help invocations and return canned output."""

    def __init__(self, output: str = HELP_TEXT) -> None:
        self.output = output
        self.calls: list[Path] = []

    def __call__(self, artifact: Path) -> str:
        self.calls.append(artifact)
        return self.output


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def help_runner() -> FakeHelpRunner:
    return FakeHelpRunner()


@pytest.fixture
def settings() -> CompletionSettings:
    """Settings searching two fixed directories of the fake filesystem."""
    return CompletionSettings(search_dirs=("/home/dev/Downloads", "/tmp/synopsys-detect*"))


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at an empty download directory and no config file."""
    downloads = tmp_path / "downloads"
    downloads.mkdir()
    monkeypatch.setenv("DETECT_COMPLETE_CONFIG", str(tmp_path / "missing.toml"))
    monkeypatch.setenv("DETECT_COMPLETE_SEARCH_DIRS", str(downloads))
    monkeypatch.setenv("DETECT_COMPLETE_NO_COLOR", "1")
    monkeypatch.setenv("COLUMNS", "400")
    for name in (
        "DETECT_COMPLETE_COMMAND",
        "DETECT_COMPLETE_PATTERN",
        "DETECT_COMPLETE_JAVA",
        "DETECT_COMPLETE_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return downloads
