"""
Tax Office Resolver Module.

Orchestrates the resolution pipeline for one locality string:
1. Parse the locality into region/district/general terms
2. Score every reference record
3. Select the best candidate

The reference table is injected at construction and never mutated; a reload
is an atomic swap of the whole table.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tax_office_resolver.constants import (
    CANDIDATE_SCORE_FLOOR,
    DEFAULT_TOP_CANDIDATES,
    MIN_CONFIDENCE_SCORE,
)
from tax_office_resolver.reference.loader import ReferenceTable
from tax_office_resolver.reference.records import TaxOfficeRecord
from tax_office_resolver.resolution.parser import ParsedAddressInput, parse_address_input
from tax_office_resolver.resolution.scoring import (
    CandidateScorer,
    MatchCandidate,
    RuleBasedScorer,
    score_candidates,
)
from tax_office_resolver.resolution.selection import rank_candidates, select_from_ranked

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Complete result of resolving one locality string."""

    locality_name: str | None
    matched: bool
    reason: str
    record: TaxOfficeRecord | None = None
    score: int | None = None

    # Pipeline details (for debugging)
    parsed: ParsedAddressInput | None = None
    top_candidates: list[MatchCandidate] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "locality_name": self.locality_name,
            "matched": self.matched,
            "reason": self.reason,
            "record": self.record.to_dict() if self.record else None,
            "score": self.score,
            "parsed": self.parsed.to_dict() if self.parsed else None,
            "top_candidates": [
                {
                    "code": c.record.code,
                    "name": c.record.raw_name,
                    "score": c.score,
                    "explanation": c.explain(),
                }
                for c in self.top_candidates
            ],
        }


class TaxOfficeResolver:
    """
    Resolves free-text localities to tax offices.

    Safe to share across threads: resolution only reads the table.
    """

    def __init__(
        self,
        table: ReferenceTable,
        scorer: CandidateScorer | None = None,
        min_confidence: int = MIN_CONFIDENCE_SCORE,
        score_floor: int = CANDIDATE_SCORE_FLOOR,
        top_candidates: int = DEFAULT_TOP_CANDIDATES,
    ):
        """
        Initialize resolver with a loaded reference table.

        Args:
            table: Loaded reference table (may be empty)
            scorer: Candidate scorer (default: RuleBasedScorer)
            min_confidence: Minimum best score for multi-term queries
            score_floor: Candidates must score strictly above this
            top_candidates: Ranked candidates kept in detailed results
        """
        self._table = table
        self.scorer = scorer or RuleBasedScorer()
        self.min_confidence = min_confidence
        self.score_floor = score_floor
        self.top_candidates = top_candidates

    @property
    def table(self) -> ReferenceTable:
        return self._table

    def replace_table(self, table: ReferenceTable) -> None:
        """Swap in a new reference table; in-flight calls keep the old one."""
        self._table = table
        logger.info(f"Reference table replaced ({len(table)} records)")

    def resolve(self, locality_name: str | None) -> TaxOfficeRecord | None:
        """
        Resolve a locality string to a tax office.

        Args:
            locality_name: Free-text locality entered by a user

        Returns:
            Matching TaxOfficeRecord, or None when there is no confident match
        """
        return self.resolve_with_details(locality_name).record

    def resolve_with_details(self, locality_name: str | None) -> ResolutionResult:
        """
        Resolve a locality string and keep the pipeline details.

        Returns:
            ResolutionResult with parsed input and top-ranked candidates
        """
        table = self._table

        if table.is_empty:
            logger.warning("Tax office reference data not available.")
            return ResolutionResult(locality_name, matched=False, reason="no_reference_data")

        if not locality_name:
            logger.warning("No locality name provided.")
            return ResolutionResult(locality_name, matched=False, reason="no_locality")

        parsed = parse_address_input(locality_name)
        logger.debug(f"Parsed address input: {parsed.to_dict()}")

        if parsed.is_empty:
            logger.warning("Locality name resulted in no searchable terms.")
            return ResolutionResult(
                locality_name, matched=False, reason="no_terms", parsed=parsed
            )

        candidates = score_candidates(table, parsed, self.scorer, self.score_floor)
        ranked = rank_candidates(candidates)
        top = ranked[: self.top_candidates]

        if not candidates:
            logger.info("No suitable tax office candidates found.")
            return ResolutionResult(
                locality_name, matched=False, reason="no_candidates", parsed=parsed
            )

        best = top[0]
        logger.info(
            f"Best match: {best.record.raw_name} "
            f"(Code: {best.record.code}, Score: {best.score})"
        )
        logger.debug(f"Best match trace: {' | '.join(best.explain())}")

        selected = select_from_ranked(ranked, parsed, self.min_confidence)
        if selected is None:
            return ResolutionResult(
                locality_name,
                matched=False,
                reason="low_confidence",
                parsed=parsed,
                top_candidates=top,
            )

        return ResolutionResult(
            locality_name,
            matched=True,
            reason="matched",
            record=selected.record,
            score=selected.score,
            parsed=parsed,
            top_candidates=top,
        )


# =============================================================================
# Convenience Functions
# =============================================================================


def resolve_address_components(
    components: Mapping[str, str | None],
    resolver: TaxOfficeResolver,
) -> TaxOfficeRecord | None:
    """
    Resolve a tax office from an address-components mapping.

    Only the "locality_name" component is used.

    Args:
        components: Address components, e.g. {"locality_name": "г. Алматы"}
        resolver: Resolver with a loaded reference table

    Returns:
        Matching TaxOfficeRecord, or None
    """
    return resolver.resolve(components.get("locality_name"))
