"""
Tax Office Resolver - maps Kazakhstani locality names to tax offices.

This package provides utilities for:
- Normalizing Russian/Kazakh administrative names
- Loading the tax office (UGD/DGD) reference table
- Resolving a free-text locality to the office that administers it
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from tax_office_resolver.config import create_resolver, get_reference_table_path
from tax_office_resolver.reference import (
    ReferenceTable,
    TaxOfficeRecord,
    load_reference_table,
)
from tax_office_resolver.resolution import (
    ResolutionResult,
    TaxOfficeResolver,
    parse_address_input,
)

__all__ = [
    "__version__",
    # Config
    "create_resolver",
    "get_reference_table_path",
    # Reference data
    "ReferenceTable",
    "TaxOfficeRecord",
    "load_reference_table",
    # Resolution
    "ResolutionResult",
    "TaxOfficeResolver",
    "parse_address_input",
]
