"""Tax-office reference data: records and the table loader."""

from tax_office_resolver.reference.loader import (
    ReferenceDataError,
    ReferenceTable,
    build_reference_table,
    load_reference_table,
    read_reference_rows,
)
from tax_office_resolver.reference.records import (
    TaxOfficeRecord,
    build_record,
    is_district_name,
    normalize_name_for_tokens,
    normalize_region_name,
)

__all__ = [
    "ReferenceDataError",
    "ReferenceTable",
    "TaxOfficeRecord",
    "build_record",
    "build_reference_table",
    "is_district_name",
    "load_reference_table",
    "normalize_name_for_tokens",
    "normalize_region_name",
    "read_reference_rows",
]
