"""Text normalization for Russian/Kazakh administrative names."""

from tax_office_resolver.normalization.rules import (
    CaptureRule,
    RewriteRule,
    StripRule,
    apply_rules,
)
from tax_office_resolver.normalization.text import normalize_text

__all__ = [
    "CaptureRule",
    "RewriteRule",
    "StripRule",
    "apply_rules",
    "normalize_text",
]
