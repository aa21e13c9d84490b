"""Import specifier extraction for JavaScript and TypeScript sources."""

from parse.es_imports import (
    ImportSpecifier,
    extract_import_specifiers,
    extract_specifiers_from_source,
)

__all__ = [
    "ImportSpecifier",
    "extract_import_specifiers",
    "extract_specifiers_from_source",
]
