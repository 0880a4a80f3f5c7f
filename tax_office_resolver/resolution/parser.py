"""
Address Input Parser Module.

Splits a free-text locality string into region, district and general terms.
Each raw part lands in exactly one bucket, checked in priority order:
region, district, general.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from tax_office_resolver.normalization.rules import RewriteRule, StripRule, apply_rules
from tax_office_resolver.normalization.text import normalize_text
from tax_office_resolver.reference.records import normalize_region_name

# Separators, or connector words surrounded by separators
PART_SEPARATOR = re.compile(r"[,;/\s]+(?:и|или|or)[\s,;]+|[,;/]")

REGION_SUFFIXES = (" область", " обл", " обл.")

# Major cities are region-level regardless of grammatical form
REGION_CITY_PREFIXES = ("г.алматы", "г.астана", "г.нур-султан", "г.шымкент")

DISTRICT_MARKERS = (" район", " р-н", " ауданы")

DISTRICT_RULES: list[RewriteRule] = [
    StripRule("district_suffix", r"\s*(?:район|р-н|ауданы)$"),
    StripRule("district_prefix", r"^(?:район|р-н|ауданы)\s*"),
]

_LOCALITY_AFFIX = r"(?:город|г\.|пос\.|село|с\.|область|обл\.|район|р-н)"

GENERAL_RULES: list[RewriteRule] = [
    StripRule("locality_prefix", rf"^{_LOCALITY_AFFIX}\s*"),
    StripRule("locality_suffix", rf"\s*{_LOCALITY_AFFIX}$"),
]


@dataclass(frozen=True)
class ParsedAddressInput:
    """Terms extracted from one locality string."""

    raw_input: str
    region_terms: tuple[str, ...] = ()
    district_terms: tuple[str, ...] = ()
    general_terms: tuple[str, ...] = ()
    all_terms: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.all_terms

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "raw_input": self.raw_input,
            "region_terms": list(self.region_terms),
            "district_terms": list(self.district_terms),
            "general_terms": list(self.general_terms),
            "all_terms": list(self.all_terms),
        }


def split_locality_parts(locality_name: str) -> list[str]:
    """
    Split a locality string into trimmed, non-empty raw parts.

    Examples:
    - "Алматы, Бостандыкский район" -> ["Алматы", "Бостандыкский район"]
    - "Алматы и Бостандыкский" -> ["Алматы", "Бостандыкский"]
    """
    parts = (part.strip() for part in PART_SEPARATOR.split(locality_name))
    return [part for part in parts if part]


def is_region_part(low_part: str) -> bool:
    """Check whether a lowercased part names a region or a major city."""
    return low_part.endswith(REGION_SUFFIXES) or low_part.startswith(REGION_CITY_PREFIXES)


def is_district_part(low_part: str) -> bool:
    """Check whether a lowercased part names a district."""
    return any(marker in low_part for marker in DISTRICT_MARKERS)


def _unique(terms: list[str]) -> list[str]:
    return list(dict.fromkeys(terms))


def parse_address_input(locality_name: str | None) -> ParsedAddressInput:
    """
    Parse a free-text locality string.

    Never fails: empty input yields an input with no terms.

    Args:
        locality_name: Locality/address text typed by a user

    Returns:
        ParsedAddressInput with deduplicated terms
    """
    locality_name = locality_name or ""

    regions: list[str] = []
    districts: list[str] = []
    general: list[str] = []

    for part in split_locality_parts(locality_name):
        low_part = part.lower()

        if is_region_part(low_part):
            region_name = normalize_region_name(low_part)
            if region_name:
                regions.append(region_name)
                continue

        if is_district_part(low_part):
            district_core = normalize_text(apply_rules(low_part, DISTRICT_RULES))
            if district_core:
                districts.extend(t for t in district_core.split(" ") if len(t) > 1)
                continue

        cleaned = normalize_text(apply_rules(low_part, GENERAL_RULES))
        # Stripping must never discard a part entirely
        terms_source = cleaned or normalize_text(low_part)
        if terms_source:
            general.extend(t for t in terms_source.split(" ") if t)

    region_terms = _unique(regions)
    district_terms = _unique([t for t in districts if len(t) > 1])
    general_terms = _unique(
        [t for t in general if t not in region_terms and t not in district_terms]
    )

    return ParsedAddressInput(
        raw_input=locality_name,
        region_terms=tuple(region_terms),
        district_terms=tuple(district_terms),
        general_terms=tuple(general_terms),
        all_terms=tuple(_unique(region_terms + district_terms + general_terms)),
    )
