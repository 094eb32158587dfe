# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer parameter declarations shared by the CLI commands."""

from __future__ import annotations

from typing import Annotated

import typer

PREVIOUS_ARGUMENT = Annotated[
    str,
    typer.Argument(help="Word before the one being completed."),
]
CURRENT_ARGUMENT = Annotated[
    str,
    typer.Argument(help="Word being completed, possibly in --name=value form."),
]
LINE_OPTION = Annotated[
    str | None,
    typer.Option(
        "--line",
        "-l",
        help="Command line up to the cursor; overrides PREVIOUS and CURRENT.",
    ),
]
COMMAND_OPTION = Annotated[
    str | None,
    typer.Option(
        "--command",
        "-c",
        help="Command name to attach the completion to.",
        show_default=False,
    ),
]
PROGRAM_OPTION = Annotated[
    str,
    typer.Option(
        "--program",
        help="Executable the generated script calls back into.",
    ),
]
FORCE_OPTION = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Rebuild the option cache even when it is current.",
    ),
]

__all__ = [
    "COMMAND_OPTION",
    "CURRENT_ARGUMENT",
    "FORCE_OPTION",
    "LINE_OPTION",
    "PREVIOUS_ARGUMENT",
    "PROGRAM_OPTION",
]
