"""
Pytest configuration and shared fixtures for tax_office_resolver tests.
"""

import os
from pathlib import Path

import pytest

from tax_office_resolver.reference.loader import ReferenceTable, build_reference_table
from tax_office_resolver.reference.records import TaxOfficeRecord, build_record

# Keep exported settings from changing scoring thresholds under test
for _var in (
    "UGD_REFERENCE_PATH",
    "UGD_MIN_CONFIDENCE",
    "UGD_CANDIDATE_FLOOR",
    "UGD_TOP_CANDIDATES",
):
    os.environ.pop(_var, None)


SAMPLE_ROWS = [
    ("0318", "000000000001", "УГД по Есильскому району", "Акмолинская область"),
    ("6003", "000000000002", "УГД по Ауэзовскому району", "г. Алматы"),
    ("6004", "000000000003", "УГД по Бостандыкскому району", "г. Алматы"),
    ("7206", "000000000004", "УГД по городу Сатпаеву", "Улытауская область"),
    ("3020", "000000000005", "УГД по району имени Казыбек би", "Карагандинская область"),
    ("4309", "000000000006", 'УГД "Морпорт Актау"', "Мангистауская область"),
    ("0618", "000000000007", "УГД по г.Актобе", "Актюбинская область"),
]


@pytest.fixture
def make_record():
    """Factory for TaxOfficeRecord built through the real normalizers."""

    def _make(
        name: str,
        region: str | None = None,
        code: str = "0000",
        bin: str = "000000000000",
    ) -> TaxOfficeRecord:
        return build_record(code=code, bin=bin, name=name, region=region)

    return _make


@pytest.fixture
def sample_table() -> ReferenceTable:
    """A small reference table covering district, city and quoted offices."""
    rows = [
        {"code": code, "bin": bin_, "name": name, "region": region}
        for code, bin_, name, region in SAMPLE_ROWS
    ]
    return build_reference_table(rows)


@pytest.fixture
def write_reference_csv(tmp_path):
    """Write a reference CSV with header and return its path."""

    def _write(lines: list[str], filename: str = "ugd.csv", encoding: str = "utf-8") -> Path:
        path = tmp_path / filename
        path.write_text("\n".join(lines) + "\n", encoding=encoding)
        return path

    return _write
