# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Route a completion request to the completer for the option being edited."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .categories import CompletionStrategy, OptionCategory, resolve_category
from .completers import (
    OPTION_VALUE_SEPARATOR,
    Completion,
    complete_boolean,
    complete_choice,
    complete_list,
    complete_options,
    complete_path,
)
from .option_cache import OptionLookup

OptionSource = Callable[[], OptionLookup]


@dataclass(frozen=True, slots=True)
class CompletionRequest:
    """Option name and value fragment derived from the words around the cursor."""

    option: str
    fragment: str
    word: str

    @property
    def inline(self) -> bool:
        """Return ``True`` when the value is typed inline as ``--name=value``."""

        return OPTION_VALUE_SEPARATOR in self.word


def split_current_word(previous: str, current: str) -> CompletionRequest:
    """Split ``current`` on ``=`` into an option name and a value fragment.

    Args:
        previous: Word before the cursor word, as tracked by the shell.
        current: Word under the cursor.

    Returns:
        CompletionRequest: The left side of ``=`` overrides ``previous`` when present.
    """

    if OPTION_VALUE_SEPARATOR in current:
        option, _, fragment = current.partition(OPTION_VALUE_SEPARATOR)
        return CompletionRequest(option=option, fragment=fragment, word=current)
    return CompletionRequest(option=previous, fragment=current, word=current)


def _category_for(request: CompletionRequest) -> OptionCategory | None:
    if not request.inline:
        # A new option is being typed, or the previous word already carries its value.
        if request.word.startswith("-") or OPTION_VALUE_SEPARATOR in request.option:
            return None
    return resolve_category(request.option)


def complete_category(category: OptionCategory, fragment: str) -> Completion:
    """Complete ``fragment`` with the strategy registered for ``category``."""

    strategy = category.strategy
    if strategy is CompletionStrategy.BOOLEAN:
        return complete_boolean(fragment)
    if strategy is CompletionStrategy.PATH:
        return complete_path(fragment)
    if strategy is CompletionStrategy.LIST:
        return complete_list(category.values, fragment)
    return complete_choice(category.values, fragment)


def complete(previous: str, current: str, *, options: OptionSource) -> Completion:
    """Return completion candidates for the word under the cursor.

    Exactly one branch runs: a specific option category when the option name
    is known, otherwise option-name completion from the cached option list.
    ``options`` is only called on the fallback branch since it may run the
    tool to rebuild its cache.

    Args:
        previous: Word before the cursor word.
        current: Word under the cursor.
        options: Callable returning the cached option list.

    Returns:
        Completion: Candidates for the shell.
    """

    request = split_current_word(previous, current)
    category = _category_for(request)
    if category is not None:
        return complete_category(category, request.fragment)
    lookup = options()
    return complete_options(lookup.options, current, notice=lookup.notice)


__all__ = [
    "CompletionRequest",
    "OptionSource",
    "complete",
    "complete_category",
    "split_current_word",
]
