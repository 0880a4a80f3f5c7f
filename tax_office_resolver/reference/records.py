"""
Reference Record Module.

Converts raw tax-office rows into searchable records: a normalized token
list for the office name, a normalized region string, and a district flag.
All derived fields are computed once, at load time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from tax_office_resolver.normalization.rules import (
    CaptureRule,
    RewriteRule,
    StripRule,
    apply_rules,
)
from tax_office_resolver.normalization.text import normalize_text

_DIGIT = re.compile(r"\d")


@dataclass(frozen=True)
class TaxOfficeRecord:
    """A tax office (UGD/DGD) from the reference table."""

    code: str  # Authority code, e.g. "6205"
    bin: str  # 12-digit business identification number
    raw_name: str
    raw_region: str | None = None

    # Derived at load time
    name_tokens: tuple[str, ...] = ()
    normalized_region: str | None = None
    is_district: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "bin": self.bin,
            "name": self.raw_name,
            "region": self.raw_region,
        }


def _trim_district_stem(stem: str) -> str:
    """Approximate the base district name; stems ending in "ом"/"ым" lose them."""
    if stem.endswith("ск"):
        return stem
    if stem.endswith(("ом", "ым")):
        return stem[:-2]
    return stem


REGION_RULES: list[RewriteRule] = [
    StripRule("region_suffix", r"\s*(?:область|обл\.|обл)$"),
    StripRule("city_prefix", r"^(?:город|г)[\s.]\s*"),
]

NAME_TOKEN_RULES: list[RewriteRule] = [
    StripRule(
        "authority_prefix",
        r"^(?:угд|дгд|ну|департамент государственных доходов)\s*(?:по)?\s*",
    ),
    StripRule("locality_prefix", r"^(?:городу|г\.|пос\.|село|с\.)\s*"),
    CaptureRule(
        "district_suffix_form",
        r"^([^\s]+)(?:ому|скому|овскому|евскому|ынскому|енскому|им\.)\s+району",
        transform=_trim_district_stem,
    ),
    CaptureRule("district_named_after", r"^району\s+(?:имени\s*)?([^,]+)"),
    CaptureRule("quoted_name", r'^"([^"]+)"'),
    StripRule("district_word", r"\s*району\s*|\s*район\s*$", " "),
    StripRule("region_word", r"\s*облысы\s*|\s*область\s*$", " "),
]


def is_district_name(name: str) -> bool:
    """Check whether an office name refers to a district ("район"/"району")."""
    lname = name.lower()
    return "район" in lname or "району" in lname


def normalize_region_name(region: str | None) -> str | None:
    """
    Normalize a region name for substring matching.

    Examples:
    - "Акмолинская область" -> "акмолинская"
    - "г. Алматы" -> "алматы"

    Returns:
        Normalized region, or None for empty input
    """
    if not region:
        return None
    normalized = apply_rules(region.lower().strip(), REGION_RULES)
    return normalize_text(normalized) or None


def normalize_name_for_tokens(name: str) -> list[str]:
    """
    Turn an office name into search tokens.

    Examples:
    - "УГД по Есильскому району" -> ["есильск"]
    - "УГД по району имени Казыбек би" -> ["казыбек", "би"]
    - 'УГД "Морпорт Актау"' -> ["морпорт", "актау"]

    Single-character tokens are dropped unless they contain a digit.
    """
    normalized = apply_rules(name.lower(), NAME_TOKEN_RULES)
    return [
        token
        for token in normalize_text(normalized).split(" ")
        if len(token) > 1 or _DIGIT.search(token)
    ]


def build_record(
    code: str,
    bin: str,
    name: str,
    region: str | None = None,
) -> TaxOfficeRecord:
    """
    Build a searchable record from raw reference values.

    Args:
        code: Authority code
        bin: Authority BIN
        name: Office name as written in the reference file
        region: Region name (optional)

    Returns:
        TaxOfficeRecord with derived fields populated
    """
    name = name.strip()
    region = region.strip() if region else None
    return TaxOfficeRecord(
        code=code,
        bin=bin,
        raw_name=name,
        raw_region=region or None,
        name_tokens=tuple(normalize_name_for_tokens(name)),
        normalized_region=normalize_region_name(region),
        is_district=is_district_name(name),
    )
