"""
Candidate Scoring Module.

Computes a signed integer score for each reference record against a parsed
locality query. Each scoring rule is isolated and testable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field

from tax_office_resolver.constants import (
    CANDIDATE_SCORE_FLOOR,
    DISTRICT_MATCH_BONUS,
    DISTRICT_MISMATCH_PENALTY,
    GENERAL_NAME_MATCH_WEIGHT,
    GENERAL_REGION_MATCH_WEIGHT,
    GENERAL_TERM_LENGTH_CAP,
    NOT_DISTRICT_OFFICE_PENALTY,
    REGION_MATCH_BONUS,
    REGION_MISMATCH_PENALTY,
    UNEXPECTED_DISTRICT_PENALTY,
)
from tax_office_resolver.reference.records import TaxOfficeRecord
from tax_office_resolver.resolution.parser import ParsedAddressInput


@dataclass(frozen=True)
class ScoreAdjustment:
    """One scoring rule firing (diagnostic only)."""

    rule: str
    delta: int
    detail: str = ""


@dataclass
class MatchCandidate:
    """A reference record paired with its score for one query."""

    record: TaxOfficeRecord
    score: int = 0
    adjustments: list[ScoreAdjustment] = field(default_factory=list)

    def add(self, rule: str, delta: int, detail: str = "") -> None:
        self.score += delta
        self.adjustments.append(ScoreAdjustment(rule, delta, detail))

    def explain(self) -> list[str]:
        """Human-readable scoring trace."""
        return [f"{a.delta:+d} ({a.rule}: {a.detail})" for a in self.adjustments]


def tokens_overlap(term: str, tokens: Iterable[str]) -> bool:
    """Bidirectional substring test between a term and any token."""
    return any(term in token or token in term for token in tokens)


class CandidateScorer(ABC):
    """Abstract base class for candidate scorers."""

    @abstractmethod
    def score(
        self,
        record: TaxOfficeRecord,
        parsed: ParsedAddressInput,
    ) -> MatchCandidate:
        """
        Score one record against a parsed query.

        Args:
            record: Reference record
            parsed: Parsed locality input

        Returns:
            MatchCandidate with final score and adjustments
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this scorer for debugging."""
        ...


class RuleBasedScorer(CandidateScorer):
    """
    Rule-based scorer over region, district and general term overlap.

    Rules are applied and accumulated in a fixed order: region, district,
    general terms against the name, general terms against the region.
    """

    DEFAULT_WEIGHTS = {
        "region_match": REGION_MATCH_BONUS,
        "region_mismatch": REGION_MISMATCH_PENALTY,
        "not_district_office": NOT_DISTRICT_OFFICE_PENALTY,
        "district_match": DISTRICT_MATCH_BONUS,
        "district_mismatch": DISTRICT_MISMATCH_PENALTY,
        "unexpected_district": UNEXPECTED_DISTRICT_PENALTY,
        "general_name_match": GENERAL_NAME_MATCH_WEIGHT,
        "general_region_match": GENERAL_REGION_MATCH_WEIGHT,
    }

    def __init__(
        self,
        weights: dict[str, int] | None = None,
        length_cap: int = GENERAL_TERM_LENGTH_CAP,
    ):
        """
        Initialize scorer with optional custom weights.

        Args:
            weights: Overrides for DEFAULT_WEIGHTS entries
            length_cap: Term length at which general-term rewards stop growing
        """
        self.weights = {**self.DEFAULT_WEIGHTS, **(weights or {})}
        self.length_cap = length_cap

    @property
    def name(self) -> str:
        return "rule_based"

    def score(
        self,
        record: TaxOfficeRecord,
        parsed: ParsedAddressInput,
    ) -> MatchCandidate:
        candidate = MatchCandidate(record=record)
        self._score_region(candidate, parsed)
        self._score_district(candidate, parsed)
        self._score_general_name(candidate, parsed)
        self._score_general_region(candidate, parsed)
        return candidate

    def _score_region(self, candidate: MatchCandidate, parsed: ParsedAddressInput) -> None:
        if not parsed.region_terms:
            return

        region = candidate.record.normalized_region
        for input_region in parsed.region_terms:
            if region and input_region in region:
                candidate.add(
                    "region_match",
                    self.weights["region_match"],
                    f"'{input_region}' in '{region}'",
                )
                return

        candidate.add(
            "region_mismatch",
            self.weights["region_mismatch"],
            f"no match for {', '.join(parsed.region_terms)}",
        )

    def _score_district(self, candidate: MatchCandidate, parsed: ParsedAddressInput) -> None:
        record = candidate.record

        if not parsed.district_terms:
            if record.is_district:
                candidate.add(
                    "unexpected_district",
                    self.weights["unexpected_district"],
                    "district office, no input district",
                )
            return

        if not record.is_district:
            candidate.add(
                "not_district_office",
                self.weights["not_district_office"],
                "input district specified, office is not a district office",
            )
            return

        matched = False
        for district in parsed.district_terms:
            if tokens_overlap(district, record.name_tokens):
                candidate.add(
                    "district_match",
                    self.weights["district_match"],
                    f"'{district}' in [{', '.join(record.name_tokens)}]",
                )
                matched = True

        if not matched:
            candidate.add(
                "district_mismatch",
                self.weights["district_mismatch"],
                f"no name match for {', '.join(parsed.district_terms)}",
            )

    def _score_general_name(self, candidate: MatchCandidate, parsed: ParsedAddressInput) -> None:
        for term in parsed.general_terms:
            if tokens_overlap(term, candidate.record.name_tokens):
                candidate.add(
                    "general_name_match",
                    self.weights["general_name_match"] * min(len(term), self.length_cap),
                    f"'{term}' in name",
                )

    def _score_general_region(self, candidate: MatchCandidate, parsed: ParsedAddressInput) -> None:
        region = candidate.record.normalized_region
        if parsed.region_terms or not region:
            return

        for term in parsed.general_terms:
            if term in region:
                candidate.add(
                    "general_region_match",
                    self.weights["general_region_match"] * min(len(term), self.length_cap),
                    f"'{term}' in region '{region}'",
                )


def score_candidates(
    records: Iterable[TaxOfficeRecord],
    parsed: ParsedAddressInput,
    scorer: CandidateScorer | None = None,
    score_floor: int = CANDIDATE_SCORE_FLOOR,
) -> list[MatchCandidate]:
    """
    Score every record and keep the viable ones.

    Args:
        records: Reference records, in table order
        parsed: Parsed locality input
        scorer: Scorer to use (default: RuleBasedScorer)
        score_floor: Candidates must score strictly above this

    Returns:
        Candidates in table order
    """
    if scorer is None:
        scorer = RuleBasedScorer()

    candidates = []
    for record in records:
        candidate = scorer.score(record, parsed)
        if candidate.score > score_floor:
            candidates.append(candidate)
    return candidates


def score_candidates_with_stats(
    records: Iterable[TaxOfficeRecord],
    parsed: ParsedAddressInput,
    scorer: CandidateScorer | None = None,
    score_floor: int = CANDIDATE_SCORE_FLOOR,
) -> tuple[list[MatchCandidate], dict[str, int]]:
    """
    Score records and return statistics for testing/debugging.

    Returns:
        Tuple of (candidates, stats_dict)
        stats_dict has scored/kept/discarded counts and per-rule fire counts
    """
    if scorer is None:
        scorer = RuleBasedScorer()

    stats: dict[str, int] = {"scored": 0, "kept": 0, "discarded": 0}
    candidates = []
    for record in records:
        candidate = scorer.score(record, parsed)
        stats["scored"] += 1
        for adjustment in candidate.adjustments:
            stats[adjustment.rule] = stats.get(adjustment.rule, 0) + 1
        if candidate.score > score_floor:
            candidates.append(candidate)
            stats["kept"] += 1
        else:
            stats["discarded"] += 1
    return candidates, stats
