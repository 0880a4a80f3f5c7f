"""
Constants for tax_office_resolver package.

Centralizes scoring weights and thresholds.
"""

# Region matching
REGION_MATCH_BONUS = 100
REGION_MISMATCH_PENALTY = -200  # Input names a region the office does not cover

# District matching
DISTRICT_MATCH_BONUS = 150  # Per matching input district term
DISTRICT_MISMATCH_PENALTY = -75  # District office, but no input district matched
NOT_DISTRICT_OFFICE_PENALTY = -100  # Input names a district, office is not one
UNEXPECTED_DISTRICT_PENALTY = -20  # District office for a non-district query

# General terms, scaled by min(term length, GENERAL_TERM_LENGTH_CAP)
GENERAL_NAME_MATCH_WEIGHT = 20
GENERAL_REGION_MATCH_WEIGHT = 10
GENERAL_TERM_LENGTH_CAP = 5

# Selection
CANDIDATE_SCORE_FLOOR = -100  # Candidates must score strictly above this
MIN_CONFIDENCE_SCORE = 50  # Below this, multi-term queries are rejected
DEFAULT_TOP_CANDIDATES = 5  # Ranked candidates kept for diagnostics
