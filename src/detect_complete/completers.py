# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Completion strategies for option values and option names."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

LIST_SEPARATOR: Final[str] = ","
WORD_SEPARATOR: Final[str] = " "
OPTION_VALUE_SEPARATOR: Final[str] = "="
EXCLUSIVE_VALUES: Final[frozenset[str]] = frozenset({"ALL", "NONE"})
BOOLEAN_VALUES: Final[tuple[str, ...]] = ("true", "false")


class CompletionKind(str, Enum):
    """How the shell should treat a completion reply."""

    WORDS = "words"
    FILES = "files"


@dataclass(frozen=True, slots=True)
class Completion:
    """Ordered candidates for a single completion request.

    Attributes:
        candidates: Suggestions in presentation order, without ``suffix``.
        kind: ``WORDS`` for literal candidates, ``FILES`` to hand the fragment
            to the shell's file completion.
        suffix: Text appended to a candidate once selected.
        fragment: Partial value the ``FILES`` completion applies to.
        notice: Optional informational message shown instead of suggestions.
    """

    candidates: tuple[str, ...] = ()
    kind: CompletionKind = CompletionKind.WORDS
    suffix: str = ""
    fragment: str = ""
    notice: str | None = None

    def rendered(self) -> tuple[str, ...]:
        """Return candidates with the selection suffix applied."""

        return tuple(f"{candidate}{self.suffix}" for candidate in self.candidates)


def filter_prefix(values: Iterable[str], fragment: str) -> tuple[str, ...]:
    """Return ``values`` starting with ``fragment`` in their original order."""

    return tuple(value for value in values if value.startswith(fragment))


def complete_choice(values: Sequence[str], fragment: str) -> Completion:
    """Complete a single value drawn from ``values``.

    Args:
        values: Allowed values in presentation order.
        fragment: Partially typed value.

    Returns:
        Completion: Matching values, advancing to the next word on selection.
    """

    return Completion(candidates=filter_prefix(values, fragment), suffix=WORD_SEPARATOR)


def complete_list(values: Sequence[str], fragment: str) -> Completion:
    """Complete a comma-separated list of values drawn from ``values``.

    Parameters already present in ``fragment`` are not offered again. ``ALL``
    and ``NONE`` are only valid as the sole entry: once a list has started they
    are no longer suggested, and a list led by either of them accepts nothing
    more.

    Args:
        values: Allowed values in presentation order.
        fragment: Partially typed list, possibly containing commas.

    Returns:
        Completion: Candidates carrying the already specified prefix.
    """

    if LIST_SEPARATOR not in fragment:
        return Completion(candidates=filter_prefix(values, fragment))

    specified, _, current = fragment.rpartition(LIST_SEPARATOR)
    chosen = specified.split(LIST_SEPARATOR)
    if chosen[0] in EXCLUSIVE_VALUES:
        return Completion()
    excluded = set(chosen) | EXCLUSIVE_VALUES
    allowed = [value for value in values if value not in excluded]
    candidates = tuple(
        f"{specified}{LIST_SEPARATOR}{value}{LIST_SEPARATOR}" for value in filter_prefix(allowed, current)
    )
    return Completion(candidates=candidates)


def complete_boolean(fragment: str) -> Completion:
    """Complete a ``true``/``false`` option value."""

    return complete_choice(BOOLEAN_VALUES, fragment)


def complete_path(fragment: str) -> Completion:
    """Defer to the shell's file name completion for ``fragment``."""

    return Completion(kind=CompletionKind.FILES, fragment=fragment)


def complete_options(options: Sequence[str], word: str, *, notice: str | None = None) -> Completion:
    """Complete an option name from the cached option list.

    Args:
        options: Known option names such as ``--detect.tools``.
        word: Current word typed so far.
        notice: Message to surface alongside the candidates.

    Returns:
        Completion: Matching option names, followed by ``=`` on selection.
    """

    return Completion(
        candidates=filter_prefix(options, word),
        suffix=OPTION_VALUE_SEPARATOR,
        notice=notice,
    )


__all__ = [
    "BOOLEAN_VALUES",
    "Completion",
    "CompletionKind",
    "EXCLUSIVE_VALUES",
    "complete_boolean",
    "complete_choice",
    "complete_list",
    "complete_options",
    "complete_path",
    "filter_prefix",
]
