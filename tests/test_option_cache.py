# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for artifact discovery and the option cache."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

from detect_complete.config import CompletionSettings
from detect_complete.option_cache import (
    LocalFileSystem,
    OptionCache,
    extract_options,
    make_help_runner,
    render_cache,
)
from detect_complete.process import CommandResult

JAR = "/home/dev/Downloads/synopsys-detect-8.0.0.jar"
EXPECTED_OPTIONS = ("--detect.tools", "--detect.source.path", "--blackduck.url")


def _cache(settings, fake_fs, help_runner, notices=None) -> OptionCache:
    sink = notices if notices is not None else []
    return OptionCache(settings, filesystem=fake_fs, runner=help_runner, notify=sink.append)


def test_extract_options_keeps_first_token_per_line() -> None:
    text = "--a.b: first --d\n--c1 second\nno --e here\n--a.b again\n-f short\n"

    assert extract_options(text) == ("--a.b", "--c1")


def test_extract_options_ignores_indented_lines() -> None:
    text = "--a.b: first\n   --c1 continuation\n\t--d tabbed\n"

    assert extract_options(text) == ("--a.b",)


def test_render_cache_one_option_per_line() -> None:
    assert render_cache(("--a", "--b")) == "--a\n--b\n"


def test_missing_artifact_produces_notice(settings, fake_fs, help_runner) -> None:
    lookup = _cache(settings, fake_fs, help_runner).lookup()

    assert not lookup.available
    assert lookup.options == ()
    assert "synopsys-detect-*.jar not found" in (lookup.notice or "")
    assert help_runner.calls == []


def test_newest_artifact_wins_across_locations(settings, fake_fs, help_runner) -> None:
    fake_fs.add(JAR, mtime=10.0)
    newer = fake_fs.add("/tmp/synopsys-detect-x/synopsys-detect-9.1.0.jar", mtime=20.0)
    fake_fs.add("/home/dev/Downloads/other.jar", mtime=30.0)

    assert _cache(settings, fake_fs, help_runner).find_artifact() == newer


def test_cache_path_appends_suffix(settings, fake_fs, help_runner) -> None:
    cache = _cache(settings, fake_fs, help_runner)

    assert cache.cache_path_for(Path(JAR)) == Path(JAR + ".options")


def test_first_lookup_builds_cache(settings, fake_fs, help_runner) -> None:
    artifact = fake_fs.add(JAR)
    notices: list[str] = []

    lookup = _cache(settings, fake_fs, help_runner, notices).lookup()

    assert lookup.refreshed
    assert lookup.notice is None
    assert lookup.options == EXPECTED_OPTIONS
    assert help_runner.calls == [artifact]
    assert fake_fs.read_text(Path(JAR + ".options")) == render_cache(EXPECTED_OPTIONS)
    assert len(notices) == 1
    assert "synopsys-detect-8.0.0.jar" in notices[0]


def test_regeneration_is_idempotent(settings, fake_fs, help_runner) -> None:
    fake_fs.add(JAR)
    cache = _cache(settings, fake_fs, help_runner)

    cache.lookup()
    first = fake_fs.read_text(Path(JAR + ".options"))
    second_lookup = cache.lookup()

    assert not second_lookup.refreshed
    assert second_lookup.options == EXPECTED_OPTIONS
    assert fake_fs.read_text(Path(JAR + ".options")) == first
    assert len(help_runner.calls) == 1
    assert fake_fs.writes == 1


def test_newer_artifact_invalidates_cache(settings, fake_fs, help_runner) -> None:
    fake_fs.add(JAR)
    cache = _cache(settings, fake_fs, help_runner)
    cache.lookup()

    fake_fs.add(JAR, mtime=fake_fs.tick(10))
    help_runner.output = "--detect.new.option\n"
    lookup = cache.lookup()

    assert lookup.refreshed
    assert lookup.options == ("--detect.new.option",)
    assert len(help_runner.calls) == 2


def test_cache_with_equal_mtime_is_current(settings, fake_fs, help_runner) -> None:
    artifact = fake_fs.add(JAR, mtime=50.0)
    fake_fs.add(JAR + ".options", "--cached\n", mtime=50.0)

    cache = _cache(settings, fake_fs, help_runner)

    assert not cache.is_stale(artifact)
    assert cache.lookup().options == ("--cached",)
    assert help_runner.calls == []


def test_force_rebuilds_current_cache(settings, fake_fs, help_runner) -> None:
    fake_fs.add(JAR, mtime=50.0)
    fake_fs.add(JAR + ".options", "--cached\n", mtime=60.0)

    lookup = _cache(settings, fake_fs, help_runner).lookup(force=True)

    assert lookup.refreshed
    assert lookup.options == EXPECTED_OPTIONS


def test_failed_invocation_keeps_stale_cache(settings, fake_fs) -> None:
    fake_fs.add(JAR + ".options", "--stale.option\n", mtime=5.0)
    fake_fs.add(JAR, mtime=10.0)

    def broken_runner(artifact: Path) -> str:
        raise FileNotFoundError("Executable 'java' was not found on PATH")

    cache = OptionCache(settings, filesystem=fake_fs, runner=broken_runner, notify=lambda message: None)
    lookup = cache.lookup()

    assert not lookup.refreshed
    assert lookup.options == ("--stale.option",)
    assert "java" in (lookup.notice or "")
    assert fake_fs.writes == 0


def test_empty_help_output_does_not_write_cache(settings, fake_fs, help_runner) -> None:
    fake_fs.add(JAR)
    help_runner.output = "usage: nothing useful\n"

    lookup = _cache(settings, fake_fs, help_runner).lookup()

    assert lookup.options == ()
    assert lookup.notice is not None
    assert fake_fs.writes == 0


def test_local_filesystem_round_trip(tmp_path: Path, help_runner) -> None:
    downloads = tmp_path / "Downloads"
    downloads.mkdir()
    old = downloads / "synopsys-detect-7.0.0.jar"
    new = downloads / "synopsys-detect-8.0.0.jar"
    old.write_bytes(b"")
    new.write_bytes(b"")
    os.utime(old, (1_000, 1_000))
    os.utime(new, (2_000, 2_000))
    settings = CompletionSettings(search_dirs=(str(downloads),))
    cache = OptionCache(settings, filesystem=LocalFileSystem(), runner=help_runner, notify=lambda message: None)

    lookup = cache.lookup()

    assert lookup.artifact == new
    assert lookup.options == EXPECTED_OPTIONS
    assert (downloads / "synopsys-detect-8.0.0.jar.options").read_text(encoding="utf-8") == render_cache(
        EXPECTED_OPTIONS
    )
    assert not cache.lookup().refreshed


def test_help_runner_invokes_java_jar(monkeypatch) -> None:
    captured = {}

    def fake_run_command(args, *, options=None):
        captured["args"] = list(args)
        captured["options"] = options
        return CommandResult(args=tuple(args), returncode=1, stdout="--a\n", stderr="")

    monkeypatch.setattr("detect_complete.option_cache.run_command", fake_run_command)
    settings = CompletionSettings(java="/opt/java/bin/java", help_args=("-hv",), refresh_timeout=5)

    output = make_help_runner(settings)(Path("/dl/tool.jar"))

    assert output == "--a\n"
    assert captured["args"] == ["/opt/java/bin/java", "-jar", "/dl/tool.jar", "-hv"]
    assert captured["options"].timeout == 5
    assert captured["options"].errors == "replace"


def test_cache_with_invalid_utf8_is_read(tmp_path: Path, help_runner) -> None:
    jar = tmp_path / "synopsys-detect-8.0.0.jar"
    cache_file = tmp_path / "synopsys-detect-8.0.0.jar.options"
    jar.write_bytes(b"")
    cache_file.write_bytes(b"--detect.tools\n--bad\xff\xfe\n")
    os.utime(jar, (1_000, 1_000))
    os.utime(cache_file, (2_000, 2_000))
    settings = CompletionSettings(search_dirs=(str(tmp_path),))
    cache = OptionCache(settings, filesystem=LocalFileSystem(), runner=help_runner, notify=lambda message: None)

    lookup = cache.lookup()

    assert not lookup.refreshed
    assert lookup.options[0] == "--detect.tools"
    assert help_runner.calls == []


def test_help_output_with_invalid_utf8_is_scraped(tmp_path: Path) -> None:
    java = tmp_path / "java"
    java.write_text(
        f"#!{sys.executable}\n"
        "import sys\n"
        "sys.stdout.buffer.write(b'--detect.tools\\n\\xff\\xfe caf\\xe9\\n')\n",
        encoding="utf-8",
    )
    java.chmod(java.stat().st_mode | stat.S_IXUSR)
    (tmp_path / "synopsys-detect-8.0.0.jar").write_bytes(b"")
    settings = CompletionSettings(search_dirs=(str(tmp_path),), java=str(java))
    cache = OptionCache(settings, filesystem=LocalFileSystem(), notify=lambda message: None)

    lookup = cache.lookup()

    assert lookup.notice is None
    assert lookup.refreshed
    assert lookup.options == ("--detect.tools",)
