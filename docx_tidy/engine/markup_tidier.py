"""
Tidying of a complete WordprocessingML part.

Sequence: cosmetic markup removal (to a fixed point), removal of
``xml:space="preserve"`` markers, paragraph-wise run and element merging,
reassembly, and blanket re-addition of the whitespace markers to every bare
text and instruction text opening tag.
"""

import logging
import re
from typing import List, Optional, Pattern

from ..config import RemovePatterns, TidyOptions
from ..parser.tokenizer import join_with_glues, split_with_separators
from .element_merger import ElementMerger
from .paragraph_tidier import ParagraphTidier
from .run_merger import RunMerger
from .stats import TidyStats

logger = logging.getLogger(__name__)

PARAGRAPH_OPEN_PATTERN = re.compile(r"<w:p(?:\s[^>]*)?(?<!/)>", re.IGNORECASE)

SPACE_PRESERVE = ' xml:space="preserve"'

_SPACE_PRESERVE_PATTERN = re.compile(r'(<w:(?:t|instrText)\b[^>]*?)\s+xml:space="preserve"')
_BARE_LEAF_OPEN_PATTERN = re.compile(r"<(w:(?:t|instrText))>")


def strip_space_preserve(xml: str) -> str:
    """Remove whitespace-preservation markers from text and instruction text tags."""
    return _SPACE_PRESERVE_PATTERN.sub(r"\1", xml)


def add_space_preserve(xml: str) -> str:
    """Mark every bare text and instruction text opening tag as whitespace preserving."""
    return _BARE_LEAF_OPEN_PATTERN.sub(rf"<\1{SPACE_PRESERVE}>", xml)


class MarkupTidier:
    """
    Tidies WordprocessingML parts.

    Holds no state across parts apart from the statistics of the last call.
    """

    def __init__(self, options: Optional[TidyOptions] = None):
        """
        Initialize markup tidier.

        Args:
            options: Tidy options (defaults if None)

        Raises:
            PatternError: If a configured removal pattern is malformed
        """
        self.options = options or TidyOptions()
        self.remove_patterns: List[Pattern[str]] = self.options.compiled_remove_patterns()
        self.paragraph_tidier = ParagraphTidier(
            run_merger=RunMerger(),
            element_merger=ElementMerger(),
            max_iterations=self.options.max_iterations,
        )
        self.last_stats: Optional[TidyStats] = None

    def remove_cosmetic_markup(self, xml: str, stats: Optional[TidyStats] = None) -> str:
        """
        Apply the removal patterns until the markup stops changing.

        Removing one tag can make another pattern match, e.g. an emptied
        ``<w:rPr></w:rPr>`` after its only ``<w:noProof/>`` is gone.
        """
        if not self.remove_patterns:
            return xml

        while True:
            previous = xml
            for pattern in self.remove_patterns:
                xml = pattern.sub("", xml)
            if stats is not None:
                stats.removal_passes += 1
            if xml == previous:
                return xml

    def tidy(self, xml: str) -> str:
        """
        Tidy a part.

        Args:
            xml: Complete XML part

        Returns:
            Tidied XML part

        Raises:
            FieldScopeInconsistencyError: If a field scope has no carrier element
            MalformedTagError: If the markup breaks the expected tag shapes
            TidyError: If a paragraph does not stabilize
        """
        if not isinstance(xml, str):
            raise TypeError(f"XML must be a string, got {type(xml).__name__}")

        stats = TidyStats()
        xml = self.remove_cosmetic_markup(xml, stats)
        xml = strip_space_preserve(xml)

        paragraphs, paragraph_open_tags = split_with_separators(PARAGRAPH_OPEN_PATTERN, xml)
        # First item is XML declaration and document preamble, not a paragraph
        for index in range(1, len(paragraphs)):
            paragraphs[index] = self.paragraph_tidier.tidy(paragraphs[index], stats)

        xml = join_with_glues(paragraphs, paragraph_open_tags)
        if self.options.preserve_space:
            xml = add_space_preserve(xml)

        logger.debug(
            f"Tidied {stats.paragraphs} paragraphs: {stats.runs_merged} runs and "
            f"{stats.elements_merged} elements merged"
        )
        self.last_stats = stats
        return xml


def tidy_markup(xml: str, remove_patterns: RemovePatterns = None) -> str:
    """
    Tidy one XML part in memory.

    Args:
        xml: Complete XML part
        remove_patterns: None for the default cosmetic patterns, False to skip
            the removal pass, or custom patterns

    Returns:
        Tidied XML part
    """
    return MarkupTidier(TidyOptions(remove_patterns=remove_patterns)).tidy(xml)
