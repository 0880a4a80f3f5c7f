"""
Match Selection Module.

Ranks scored candidates and applies the confidence gate.
"""

from __future__ import annotations

import logging

from tax_office_resolver.constants import MIN_CONFIDENCE_SCORE
from tax_office_resolver.resolution.parser import ParsedAddressInput
from tax_office_resolver.resolution.scoring import MatchCandidate

logger = logging.getLogger(__name__)


def rank_candidates(candidates: list[MatchCandidate]) -> list[MatchCandidate]:
    """
    Sort candidates by score, highest first.

    The sort is stable: equal scores keep reference-table order.
    """
    return sorted(candidates, key=lambda c: c.score, reverse=True)


def _single_term_fallback(
    ranked: list[MatchCandidate],
    parsed: ParsedAddressInput,
) -> MatchCandidate | None:
    """Find a positively scored candidate naming the single query term exactly."""
    single_term = parsed.all_terms[0]
    for candidate in ranked:
        record = candidate.record
        if single_term in record.name_tokens or record.normalized_region == single_term:
            if candidate.score > 0:
                logger.info(
                    f"Re-evaluating for single term '{single_term}', found candidate: "
                    f"{record.raw_name} with score {candidate.score}"
                )
                return candidate
    return None


def select_best_match(
    candidates: list[MatchCandidate],
    parsed: ParsedAddressInput,
    min_confidence: int = MIN_CONFIDENCE_SCORE,
) -> MatchCandidate | None:
    """
    Pick the best candidate, or None when no match is confident enough.

    A best score below min_confidence is rejected only for multi-term queries;
    single-term queries accept the top candidate whatever its score.

    Args:
        candidates: Scored candidates in table order
        parsed: Parsed locality input
        min_confidence: Minimum score for multi-term queries

    Returns:
        Winning MatchCandidate, or None
    """
    return select_from_ranked(rank_candidates(candidates), parsed, min_confidence)


def select_from_ranked(
    ranked: list[MatchCandidate],
    parsed: ParsedAddressInput,
    min_confidence: int = MIN_CONFIDENCE_SCORE,
) -> MatchCandidate | None:
    """Apply the confidence gate to candidates already sorted by rank_candidates."""
    if not ranked:
        return None

    best = ranked[0]

    if best.score < min_confidence and len(parsed.all_terms) > 1:
        logger.info(
            f"Best candidate score {best.score} too low for confidence with multiple terms."
        )
        # Never true under the enclosing multi-term guard
        if len(parsed.all_terms) == 1:
            return _single_term_fallback(ranked, parsed)
        return None

    return best
