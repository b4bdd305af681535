"""
DOCX Tidy - simplify the XML markup of DOCX documents.

Word processors split one logical run of text into many adjacent runs with
identical formatting, and one text node into many adjacent text elements.
DOCX Tidy rewrites such markup into the minimal equivalent form:

- Merge successive runs having identical run properties
- Merge successive elements of the same type (``<w:t>``, ``<w:instrText>``)
  within each run
- Normalize the formatting inside field-character scopes so field runs merge too

Quick Start:
    from docx_tidy import tidy_document, tidy_markup

    tidy_document("document.docx", "tidied.docx")
    xml = tidy_markup(xml)
"""

__version__ = "0.3.0"
__author__ = "DOCX Tidy Team"

from .exceptions import (
    DocxTidyError,
    PatternError,
    MalformedTagError,
    FieldScopeInconsistencyError,
    MissingFieldTextError,
    TidyError,
    PackageError,
    PartReadError,
    PartWriteError,
    PackagingError,
)
from .config import DEFAULT_REMOVE_PATTERNS, TidyOptions
from .engine import MarkupTidier, TidyStats, tidy_markup
from .document import TidyReport, tidy_document
from .package import PackageReader, PackageWriter, PartHandle

__all__ = [
    # Main API
    "tidy_markup",
    "tidy_document",
    "MarkupTidier",
    "TidyOptions",
    "TidyReport",
    "TidyStats",
    "DEFAULT_REMOVE_PATTERNS",

    # Package access
    "PackageReader",
    "PackageWriter",
    "PartHandle",

    # Exceptions
    "DocxTidyError",
    "PatternError",
    "MalformedTagError",
    "FieldScopeInconsistencyError",
    "MissingFieldTextError",
    "TidyError",
    "PackageError",
    "PartReadError",
    "PartWriteError",
    "PackagingError",
]


def main():
    """CLI entry point."""
    from .cli import main as cli_main
    return cli_main()
