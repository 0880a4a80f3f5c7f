"""
Generic text normalizer.

Foundation for every other normalization step: lowercases, turns commas and
periods into spaces, and collapses whitespace.
"""

from __future__ import annotations

import re

_PUNCTUATION = re.compile(r"[.,]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """
    Normalize free text for tokenization.

    Commas and periods become spaces rather than being deleted so that
    "г.Алматы" tokenizes as "г алматы" instead of gluing the words together.

    Args:
        text: Raw text (None is accepted)

    Returns:
        Lowercased, single-spaced, trimmed text ("" for empty input)
    """
    if not text:
        return ""
    normalized = text.lower()
    normalized = _PUNCTUATION.sub(" ", normalized)
    normalized = _WHITESPACE.sub(" ", normalized)
    return normalized.strip()
