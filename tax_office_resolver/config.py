"""
Configuration management for tax_office_resolver.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tax_office_resolver.constants import (
    CANDIDATE_SCORE_FLOOR,
    DEFAULT_TOP_CANDIDATES,
    MIN_CONFIDENCE_SCORE,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    ugd_reference_path: Path | None = Field(
        default=None,
        description="Path to the tax office reference CSV (default: data/ugd.csv)",
    )
    ugd_min_confidence: int = Field(
        default=MIN_CONFIDENCE_SCORE,
        description="Minimum best score accepted for multi-term queries",
    )
    ugd_candidate_floor: int = Field(
        default=CANDIDATE_SCORE_FLOOR,
        description="Records must score strictly above this to be candidates",
    )
    ugd_top_candidates: int = Field(
        default=DEFAULT_TOP_CANDIDATES,
        ge=1,
        description="Ranked candidates kept in detailed results",
    )

    @field_validator("ugd_reference_path", mode="before")
    @classmethod
    def empty_string_to_none(cls, v: str | Path | None) -> str | Path | None:
        """Convert empty strings to None for optional fields."""
        if isinstance(v, str):
            v = v.strip()
            return v if v else None
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def get_min_confidence() -> int:
    """Get the confidence floor from settings."""
    return get_settings().ugd_min_confidence


def get_candidate_floor() -> int:
    """Get the candidate score floor from settings."""
    return get_settings().ugd_candidate_floor


# Data paths - default computed from package location


def get_data_dir() -> Path:
    """Get data directory path (project root / data)."""
    project_root = Path(__file__).parent.parent
    return project_root / "data"


def get_reference_table_path(settings: Settings | None = None) -> Path:
    """Get path to the tax office reference CSV (default: cached settings)."""
    configured = (settings or get_settings()).ugd_reference_path
    if configured is not None:
        return configured
    # Try relative to current working directory first (for scripts)
    cwd_path = Path("data/ugd.csv")
    if cwd_path.exists():
        return cwd_path
    return get_data_dir() / "ugd.csv"


def create_resolver(settings: Settings | None = None):
    """
    Load the reference table and build a resolver from settings.

    The table is loaded eagerly; call this once at startup and share the
    returned resolver.
    """
    from tax_office_resolver.reference.loader import load_reference_table
    from tax_office_resolver.resolution.resolver import TaxOfficeResolver

    settings = settings or get_settings()
    path = get_reference_table_path(settings)
    return TaxOfficeResolver(
        load_reference_table(path),
        min_confidence=settings.ugd_min_confidence,
        score_floor=settings.ugd_candidate_floor,
        top_candidates=settings.ugd_top_candidates,
    )
