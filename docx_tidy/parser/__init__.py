"""
Markup tokenization layer.

Splitting, tag classification and run-properties access on raw
WordprocessingML strings. No DOM is ever built.
"""

from .tokenizer import compile_pattern, join_with_glues, split_with_separators
from .tag_classifier import TagLimit, is_self_closing, limiting_kind, same_type, type_of
from .run_properties import extract_run_properties, replace_run_properties, strip_run_properties

__all__ = [
    "compile_pattern",
    "join_with_glues",
    "split_with_separators",
    "TagLimit",
    "is_self_closing",
    "limiting_kind",
    "same_type",
    "type_of",
    "extract_run_properties",
    "replace_run_properties",
    "strip_run_properties",
]
