# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Option categories, their value sets and the name routing table."""

from __future__ import annotations

from enum import Enum
from typing import Final


class CompletionStrategy(str, Enum):
    """Completer used for the values of an option category."""

    CHOICE = "choice"
    LIST = "list"
    BOOLEAN = "boolean"
    PATH = "path"


class OptionCategory(str, Enum):
    """Families of tool options sharing a value vocabulary."""

    BOOLEAN = "boolean"
    PATH = "path"
    LOG_LEVEL = "log-level"
    TOOLS = "tools"
    PROJECT_TOOL = "project-tool"
    SEVERITY = "severity"
    CLONE_CATEGORY = "clone-category"
    TIER = "tier"
    DISTRIBUTION = "distribution"
    PHASE = "phase"
    SNIPPET_MATCHING = "snippet-matching"

    @property
    def strategy(self) -> CompletionStrategy:
        """Return the completer strategy used for this category."""

        return CATEGORY_STRATEGIES[self]

    @property
    def values(self) -> tuple[str, ...]:
        """Return the static value set offered for this category."""

        return CATEGORY_VALUES.get(self, ())


LOG_LEVELS: Final[tuple[str, ...]] = ("TRACE", "DEBUG", "INFO", "WARN", "ERROR", "FATAL", "OFF")
TOOLS: Final[tuple[str, ...]] = (
    "BAZEL",
    "DETECTOR",
    "DOCKER",
    "SIGNATURE_SCAN",
    "BINARY_SCAN",
    "POLARIS",
    "NONE",
    "ALL",
)
PROJECT_TOOLS: Final[tuple[str, ...]] = ("DETECTOR", "DOCKER", "BAZEL")
SEVERITIES: Final[tuple[str, ...]] = (
    "ALL",
    "BLOCKER",
    "CRITICAL",
    "MAJOR",
    "MINOR",
    "TRIVIAL",
    "UNSPECIFIED",
)
CLONE_CATEGORIES: Final[tuple[str, ...]] = ("COMPONENT_DATA", "VULN_DATA")
TIERS: Final[tuple[str, ...]] = ("1", "2", "3", "4", "5")
DISTRIBUTIONS: Final[tuple[str, ...]] = ("EXTERNAL", "SAAS", "INTERNAL", "OPENSOURCE")
PHASES: Final[tuple[str, ...]] = (
    "PLANNING",
    "DEVELOPMENT",
    "RELEASED",
    "DEPRECATED",
    "ARCHIVED",
    "PRERELEASE",
)
SNIPPET_MATCHING: Final[tuple[str, ...]] = (
    "SNIPPET_MATCHING",
    "SNIPPET_MATCHING_ONLY",
    "FULL_SNIPPET_MATCHING",
    "FULL_SNIPPET_MATCHING_ONLY",
    "NONE",
)

CATEGORY_STRATEGIES: Final[dict[OptionCategory, CompletionStrategy]] = {
    OptionCategory.BOOLEAN: CompletionStrategy.BOOLEAN,
    OptionCategory.PATH: CompletionStrategy.PATH,
    OptionCategory.LOG_LEVEL: CompletionStrategy.CHOICE,
    OptionCategory.TOOLS: CompletionStrategy.LIST,
    OptionCategory.PROJECT_TOOL: CompletionStrategy.LIST,
    OptionCategory.SEVERITY: CompletionStrategy.LIST,
    OptionCategory.CLONE_CATEGORY: CompletionStrategy.LIST,
    OptionCategory.TIER: CompletionStrategy.CHOICE,
    OptionCategory.DISTRIBUTION: CompletionStrategy.CHOICE,
    OptionCategory.PHASE: CompletionStrategy.CHOICE,
    OptionCategory.SNIPPET_MATCHING: CompletionStrategy.CHOICE,
}

CATEGORY_VALUES: Final[dict[OptionCategory, tuple[str, ...]]] = {
    OptionCategory.LOG_LEVEL: LOG_LEVELS,
    OptionCategory.TOOLS: TOOLS,
    OptionCategory.PROJECT_TOOL: PROJECT_TOOLS,
    OptionCategory.SEVERITY: SEVERITIES,
    OptionCategory.CLONE_CATEGORY: CLONE_CATEGORIES,
    OptionCategory.TIER: TIERS,
    OptionCategory.DISTRIBUTION: DISTRIBUTIONS,
    OptionCategory.PHASE: PHASES,
    OptionCategory.SNIPPET_MATCHING: SNIPPET_MATCHING,
}

# Option names are stored without their leading dashes.
EXACT_OPTIONS: Final[dict[str, OptionCategory]] = {
    "blackduck.trust.cert": OptionCategory.BOOLEAN,
    "detect.cleanup": OptionCategory.BOOLEAN,
    "detect.force.success": OptionCategory.BOOLEAN,
    "detect.wait.for.results": OptionCategory.BOOLEAN,
    "detect.risk.report.pdf": OptionCategory.BOOLEAN,
    "detect.notices.report": OptionCategory.BOOLEAN,
    "detect.project.codelocation.unmap": OptionCategory.BOOLEAN,
    "detect.project.version.update": OptionCategory.BOOLEAN,
    "detect.blackduck.signature.scanner.dry.run": OptionCategory.BOOLEAN,
    "detect.blackduck.signature.scanner.license.search": OptionCategory.BOOLEAN,
    "logging.level.com.synopsys.integration": OptionCategory.LOG_LEVEL,
    "logging.level.detect": OptionCategory.LOG_LEVEL,
    "detect.tools": OptionCategory.TOOLS,
    "detect.tools.excluded": OptionCategory.TOOLS,
    "detect.project.tool": OptionCategory.PROJECT_TOOL,
    "detect.policy.check.fail.on.severities": OptionCategory.SEVERITY,
    "detect.project.clone.categories": OptionCategory.CLONE_CATEGORY,
    "detect.project.tier": OptionCategory.TIER,
    "detect.project.version.distribution": OptionCategory.DISTRIBUTION,
    "detect.project.version.phase": OptionCategory.PHASE,
    "detect.blackduck.signature.scanner.snippet.matching": OptionCategory.SNIPPET_MATCHING,
}

# Evaluated in order after the exact table; the first matching suffix wins.
SUFFIX_RULES: Final[tuple[tuple[str, OptionCategory], ...]] = (
    ("path", OptionCategory.PATH),
    ("tar", OptionCategory.PATH),
    ("mode", OptionCategory.BOOLEAN),
    ("continue", OptionCategory.BOOLEAN),
    ("exclusion.defaults", OptionCategory.BOOLEAN),
)


def normalize_option(option: str) -> str:
    """Return ``option`` without leading dashes or surrounding whitespace."""

    return option.strip().lstrip("-")


def resolve_category(option: str) -> OptionCategory | None:
    """Return the category completing values of ``option``.

    Args:
        option: Option name as typed, with or without leading dashes.

    Returns:
        OptionCategory | None: Matching category, ``None`` when the option has
        no dedicated value completion.
    """

    name = normalize_option(option)
    if not name:
        return None
    category = EXACT_OPTIONS.get(name)
    if category is not None:
        return category
    for suffix, suffix_category in SUFFIX_RULES:
        if name.endswith(suffix):
            return suffix_category
    return None


__all__ = [
    "CATEGORY_STRATEGIES",
    "CATEGORY_VALUES",
    "CompletionStrategy",
    "EXACT_OPTIONS",
    "OptionCategory",
    "SUFFIX_RULES",
    "normalize_option",
    "resolve_category",
]
