# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the completion commands."""

from __future__ import annotations

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from ..config import CompletionSettings, ConfigError, load_settings
from ..dispatch import complete
from ..option_cache import OptionCache
from ..shell import format_reply, render_bash_script, split_command_line
from .models import (
    COMMAND_OPTION,
    CURRENT_ARGUMENT,
    FORCE_OPTION,
    LINE_OPTION,
    PREVIOUS_ARGUMENT,
    PROGRAM_OPTION,
)
from .shared import CLIError, CLILogger, build_cli_logger, build_option_cache

app = typer.Typer(
    help="Shell completion for the options of the Detect scanner jar.",
    add_completion=False,
    no_args_is_help=True,
)


def _load_settings_or_exit(logger: CLILogger) -> CompletionSettings:
    try:
        return load_settings()
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc


@app.command("complete")
def complete_command(
    previous: PREVIOUS_ARGUMENT = "",
    current: CURRENT_ARGUMENT = "",
    line: LINE_OPTION = None,
) -> None:
    """Print completion candidates for the word under the cursor.

    The command always exits successfully: no candidates is a valid answer
    and the calling shell must stay usable.
    """

    if line is not None:
        previous, current = split_command_line(line)
    try:
        settings = load_settings()
    except ConfigError as exc:
        build_cli_logger().warn(str(exc))
        return

    logger = build_cli_logger(settings)
    cache = build_option_cache(settings, logger)
    completion = complete(previous, current, options=cache.lookup)
    if completion.notice:
        logger.info(completion.notice)
    for reply_line in format_reply(completion):
        logger.echo(reply_line)


@app.command("bash")
def bash_command(
    command: COMMAND_OPTION = None,
    program: PROGRAM_OPTION = "detect-complete",
) -> None:
    """Print the bash script registering the completion handler."""

    logger = build_cli_logger()
    settings = _load_settings_or_exit(logger)
    logger.echo(render_bash_script(command or settings.command_name, program))


def run_refresh(cache: OptionCache, logger: CLILogger, *, force: bool) -> int:
    """Rebuild the option cache and report the outcome.

    Args:
        cache: Option cache bound to the loaded settings.
        logger: Logger used for user-facing messages.
        force: Rebuild even when the cache is current.

    Returns:
        int: ``0`` on success.

    Raises:
        CLIError: If no artifact exists or the rebuild failed.
    """

    lookup = cache.lookup(force=force)
    if not lookup.available:
        raise CLIError(lookup.notice or "tool artifact not found")
    if lookup.notice:
        raise CLIError(lookup.notice)
    if lookup.refreshed:
        logger.ok(f"Cached {len(lookup.options)} options in {lookup.cache_path}")
    else:
        logger.ok(f"Option cache {lookup.cache_path} is up to date ({len(lookup.options)} options)")
    return 0


@app.command("refresh")
def refresh_command(force: FORCE_OPTION = False) -> None:
    """Rebuild the cached option list from the newest tool artifact."""

    settings = _load_settings_or_exit(build_cli_logger())
    logger = build_cli_logger(settings)
    try:
        run_refresh(build_option_cache(settings, logger), logger, force=force)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


def build_status_table(cache: OptionCache) -> Table:
    """Return a rich table describing the artifact and its option cache."""

    table = Table(title="Option cache", box=box.SIMPLE, expand=True)
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")

    settings = cache.settings
    table.add_row("Command", settings.command_name)
    table.add_row("Search", ", ".join(cache.search_patterns()) or "-")
    artifact = cache.find_artifact()
    if artifact is None:
        table.add_row("Artifact", "not found")
        return table
    cache_path = cache.cache_path_for(artifact)
    table.add_row("Artifact", str(artifact))
    table.add_row("Cache", str(cache_path))
    table.add_row("State", "stale" if cache.is_stale(artifact) else "current")
    table.add_row("Options", str(len(cache.read_options(cache_path))))
    return table


@app.command("status")
def status_command() -> None:
    """Show the located artifact and the state of its option cache."""

    settings = _load_settings_or_exit(build_cli_logger())
    logger = build_cli_logger(settings)
    console = Console(soft_wrap=True)
    console.print(build_status_table(build_option_cache(settings, logger)))


__all__ = ["app", "build_status_table", "run_refresh"]
