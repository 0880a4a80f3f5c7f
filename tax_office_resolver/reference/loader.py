"""
Reference table loader.

Reads the tax-office reference file once and builds an immutable
ReferenceTable. The file is comma-delimited UTF-8 with a header row and
the columns: code, bin, name, region.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from tax_office_resolver.reference.records import TaxOfficeRecord, build_record

logger = logging.getLogger(__name__)

REFERENCE_COLUMNS = ("code", "bin", "name", "region")


class ReferenceDataError(ValueError):
    """Raised when a reference file row cannot be parsed."""


@dataclass(frozen=True)
class ReferenceTable:
    """Immutable snapshot of the tax-office reference data."""

    records: tuple[TaxOfficeRecord, ...] = ()
    source: Path | None = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TaxOfficeRecord]:
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def find_by_code(self, code: str) -> TaxOfficeRecord | None:
        """Look up a record by authority code (first occurrence)."""
        for record in self.records:
            if record.code == code:
                return record
        return None


def read_reference_rows(path: Path) -> list[dict[str, str]]:
    """
    Read raw rows from a reference file.

    The header row is skipped, blank lines are ignored and every value is
    trimmed.

    Raises:
        OSError: If the file cannot be read
        ReferenceDataError: If a row does not have exactly four columns
    """
    rows: list[dict[str, str]] = []
    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # Header
        for row in reader:
            values = [value.strip() for value in row]
            if not any(values):
                continue
            if len(values) != len(REFERENCE_COLUMNS):
                raise ReferenceDataError(
                    f"{path}:{reader.line_num}: expected {len(REFERENCE_COLUMNS)} "
                    f"columns, got {len(values)}"
                )
            rows.append(dict(zip(REFERENCE_COLUMNS, values)))
    return rows


def build_reference_table(
    rows: Iterable[Mapping[str, str | None]],
    source: Path | None = None,
) -> ReferenceTable:
    """
    Build a ReferenceTable from raw rows.

    Args:
        rows: Mappings with "code", "bin", "name" and optional "region"
        source: Where the rows came from (for diagnostics)

    Returns:
        ReferenceTable preserving row order
    """
    records = tuple(
        build_record(
            code=row["code"] or "",
            bin=row["bin"] or "",
            name=row["name"] or "",
            region=row.get("region"),
        )
        for row in rows
    )
    return ReferenceTable(records=records, source=source)


def load_reference_table(path: Path | str) -> ReferenceTable:
    """
    Load the reference table from disk.

    A missing, unreadable or malformed file degrades to an empty table so that
    every resolution returns None instead of failing.

    Args:
        path: Path to the reference CSV

    Returns:
        Loaded ReferenceTable (empty on failure)
    """
    path = Path(path)
    try:
        rows = read_reference_rows(path)
    except (OSError, UnicodeDecodeError, csv.Error, ReferenceDataError) as e:
        logger.error(f"Failed to load tax office reference data from {path}: {e}")
        return ReferenceTable(source=path)

    table = build_reference_table(rows, source=path)
    logger.info(f"Loaded {len(table)} tax office records from {path}")
    return table
