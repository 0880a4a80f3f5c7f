"""
Rewrite Rule Module.

Prefix/suffix stripping and name extraction expressed as ordered
(pattern, action) rules. Each rule is isolated and testable; a rule list is
evaluated top-to-bottom against the progressively rewritten string.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable


class RewriteRule(ABC):
    """Abstract base class for a single rewrite step."""

    @abstractmethod
    def apply(self, text: str) -> str | None:
        """
        Rewrite text.

        Args:
            text: Current working string

        Returns:
            Rewritten string, or None if the rule does not match
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this rule for debugging."""
        ...


class StripRule(RewriteRule):
    """
    Replaces the first match of a pattern.

    Examples:
    - "угд по аккольскому району" -> "аккольскому району" (prefix)
    - "сарыаркинскому району" -> "сарыаркинскому " (suffix, replacement " ")
    """

    def __init__(self, name: str, pattern: str, replacement: str = ""):
        self._name = name
        self.pattern = re.compile(pattern)
        self.replacement = replacement

    @property
    def name(self) -> str:
        return self._name

    def apply(self, text: str) -> str | None:
        rewritten, count = self.pattern.subn(self.replacement, text, count=1)
        return rewritten if count else None


class CaptureRule(RewriteRule):
    """
    Replaces the whole working string with a captured group.

    An optional transform post-processes the captured text.
    """

    def __init__(
        self,
        name: str,
        pattern: str,
        group: int = 1,
        transform: Callable[[str], str] | None = None,
    ):
        self._name = name
        self.pattern = re.compile(pattern)
        self.group = group
        self.transform = transform

    @property
    def name(self) -> str:
        return self._name

    def apply(self, text: str) -> str | None:
        match = self.pattern.search(text)
        if not match or not match.group(self.group):
            return None
        captured = match.group(self.group)
        return self.transform(captured) if self.transform else captured


def apply_rules(text: str, rules: Iterable[RewriteRule]) -> str:
    """
    Run every rule in order, each against the output of the previous one.

    Rules are not mutually exclusive: a match does not stop evaluation.
    """
    for rule in rules:
        rewritten = rule.apply(text)
        if rewritten is not None:
            text = rewritten
    return text


def apply_rules_with_trace(
    text: str,
    rules: Iterable[RewriteRule],
) -> tuple[str, list[str]]:
    """
    Run rules and report which ones fired, for testing/debugging.

    Returns:
        Tuple of (rewritten_text, fired_rule_names)
    """
    fired: list[str] = []
    for rule in rules:
        rewritten = rule.apply(text)
        if rewritten is not None:
            text = rewritten
            fired.append(rule.name)
    return text, fired
