"""
Markup consolidation engine.

Merges redundant runs and leaf elements of WordprocessingML parts.
"""

from .element_merger import ElementMerger, MERGEABLE_TAG_TYPES, contains_mergeable_elements
from .field_scope import FieldScopeState, FieldScopeTracker, find_canonical_properties
from .run_merger import RunMerger
from .paragraph_tidier import ParagraphTidier
from .markup_tidier import MarkupTidier, tidy_markup
from .stats import TidyStats

__all__ = [
    "ElementMerger",
    "MERGEABLE_TAG_TYPES",
    "contains_mergeable_elements",
    "FieldScopeState",
    "FieldScopeTracker",
    "find_canonical_properties",
    "RunMerger",
    "ParagraphTidier",
    "MarkupTidier",
    "tidy_markup",
    "TidyStats",
]
