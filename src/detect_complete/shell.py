# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Bash integration: command line parsing, reply format and registration script."""

from __future__ import annotations

import re
import shlex
from typing import Final

from .completers import Completion, CompletionKind

FILES_MARKER: Final[str] = "@files"
_FUNCTION_NAME_RE: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9_]")

BASH_TEMPLATE: Final[str] = r"""
# bash completion for {command_name}
# eval "$({program} bash)" in ~/.bashrc to enable it.
{function_name}() {{
    local line="${{COMP_LINE:0:COMP_POINT}}"
    local IFS=$'\n'
    local -a reply
    reply=( $({program} complete --line "$line") )
    if [[ "${{reply[0]}}" == "{files_marker}" ]]; then
        compopt -o filenames 2>/dev/null
        COMPREPLY=( $(compgen -f -- "${{reply[1]:-}}") )
    else
        COMPREPLY=( "${{reply[@]}}" )
    fi
    return 0
}}
complete -o nospace -F {function_name} {command_name}
"""


def _split_words(line: str) -> tuple[list[str], bool]:
    """Split ``line`` into shell words, closing a quote left open at the cursor.

    Returns:
        tuple[list[str], bool]: The words, and ``True`` when the last word is
        still being typed inside quotes or after an escaped space.
    """

    try:
        return shlex.split(line), line.endswith("\\ ")
    except ValueError:
        pass
    for quote in ('"', "'"):
        try:
            return shlex.split(line + quote), True
        except ValueError:
            continue
    return line.split(), False


def split_command_line(line: str) -> tuple[str, str]:
    """Return the previous and current words of a partial command line.

    Args:
        line: Command line text up to the cursor (``COMP_LINE[:COMP_POINT]``).

    Returns:
        tuple[str, str]: ``(previous, current)``. ``current`` is empty when the
        line ends with whitespace; ``previous`` is empty when there is none.
    """

    words, open_word = _split_words(line)
    if not line or (line[-1].isspace() and not open_word):
        words.append("")
    if not words:
        return "", ""
    previous = words[-2] if len(words) > 1 else ""
    return previous, words[-1]


def format_reply(completion: Completion) -> list[str]:
    """Return the lines printed back to the shell function for ``completion``."""

    if completion.kind is CompletionKind.FILES:
        return [FILES_MARKER, completion.fragment]
    return list(completion.rendered())


def render_bash_script(command_name: str, program: str = "detect-complete") -> str:
    """Return the bash script registering completion for ``command_name``.

    Args:
        command_name: Command the completion is attached to.
        program: Executable answering ``complete`` requests.

    Returns:
        str: Script suitable for ``eval`` or sourcing from a bash profile.
    """

    function_name = "_" + _FUNCTION_NAME_RE.sub("_", command_name) + "_complete"
    return BASH_TEMPLATE.format(
        command_name=command_name,
        program=program,
        function_name=function_name,
        files_marker=FILES_MARKER,
    ).lstrip("\n")


__all__ = [
    "FILES_MARKER",
    "format_reply",
    "render_bash_script",
    "split_command_line",
]
