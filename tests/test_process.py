# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the subprocess wrapper."""

from __future__ import annotations

import sys

import pytest

from detect_complete.process import (
    TIMEOUT_RETURNCODE,
    CommandOptions,
    run_command,
)


def test_run_command_captures_output() -> None:
    result = run_command([sys.executable, "-c", "print('--detect.tools')"])

    assert result.returncode == 0
    assert result.stdout.strip() == "--detect.tools"
    assert not result.timed_out


def test_run_command_reports_failure_without_raising() -> None:
    result = run_command([sys.executable, "-c", "import sys; print('--a'); sys.exit(3)"])

    assert result.returncode == 3
    assert result.stdout.strip() == "--a"


def test_run_command_replaces_undecodable_output() -> None:
    script = "import sys; sys.stdout.buffer.write(b'--detect.tools\\n\\xff\\xfe caf\\xe9\\n')"

    result = run_command([sys.executable, "-c", script], options=CommandOptions(encoding="utf-8"))

    assert result.returncode == 0
    assert result.stdout.splitlines()[0] == "--detect.tools"
    assert "�" in result.stdout


def test_run_command_timeout_maps_to_returncode() -> None:
    options = CommandOptions().with_timeout(0.2)

    result = run_command([sys.executable, "-c", "import time; time.sleep(5)"], options=options)

    assert result.returncode == TIMEOUT_RETURNCODE
    assert result.timed_out
    assert "timed out" in result.stderr


def test_missing_executable() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["definitely-not-a-real-java-binary"])


def test_empty_command() -> None:
    with pytest.raises(ValueError):
        run_command([])


def test_negative_timeout_rejected() -> None:
    with pytest.raises(ValueError):
        CommandOptions().with_timeout(-1)
