"""
CLI utilities for tax_office_resolver.

This package provides shared functionality for scripts:
- Logging setup
- Section headers
"""

from tax_office_resolver.cli.logging import print_section_header, setup_logging

__all__ = [
    "setup_logging",
    "print_section_header",
]
