"""
Tax Office Resolution Module.

Resolves a free-text locality string to the tax office (UGD/DGD) that
administers it.

This module separates concerns into distinct, testable components:
- Input parsing (region/district/general terms)
- Candidate scoring (rule-based overlap scoring)
- Match selection (ranking and confidence gate)

Each component can be tested independently and swapped out for improved versions.
"""

from tax_office_resolver.resolution.parser import (
    ParsedAddressInput,
    parse_address_input,
)
from tax_office_resolver.resolution.resolver import (
    ResolutionResult,
    TaxOfficeResolver,
    resolve_address_components,
)
from tax_office_resolver.resolution.scoring import (
    CandidateScorer,
    MatchCandidate,
    RuleBasedScorer,
    ScoreAdjustment,
    score_candidates,
)
from tax_office_resolver.resolution.selection import (
    rank_candidates,
    select_best_match,
    select_from_ranked,
)

__all__ = [
    # Parsing
    "ParsedAddressInput",
    "parse_address_input",
    # Scoring
    "CandidateScorer",
    "MatchCandidate",
    "RuleBasedScorer",
    "ScoreAdjustment",
    "score_candidates",
    # Selection
    "rank_candidates",
    "select_best_match",
    "select_from_ranked",
    # Main resolver
    "ResolutionResult",
    "TaxOfficeResolver",
    "resolve_address_components",
]
