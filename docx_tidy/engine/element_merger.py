"""
Merging of adjacent leaf elements inside a run.

Word processors split one logical text node into many ``<w:t>`` (or
``<w:instrText>``) elements. Within a single run, every closing tag directly
followed by an opening tag of the same mergeable type is dropped and the
payloads are concatenated in order.
"""

import logging
import re
from typing import List, Sequence, Tuple

from ..parser.tag_classifier import TagLimit, is_self_closing, limiting_kind, same_type, type_of
from ..parser.tokenizer import split_with_separators

logger = logging.getLogger(__name__)

MERGEABLE_TAG_TYPES = ("w:t", "w:instrText")

ELEMENT_TAG_UNCLOSED_PATTERN = re.compile(r"<(/)?w:[a-z]+", re.IGNORECASE)


def contains_mergeable_elements(tag_list: str, tag_types: Sequence[str] = MERGEABLE_TAG_TYPES) -> bool:
    """
    Quick check whether a comma-joined list of unclosed tags may hold a merge pair.

    Args:
        tag_list: e.g. ``<w:rPr,<w:b,</w:rPr,<w:t,</w:t,<w:t,</w:t``
        tag_types: Mergeable element types

    Returns:
        False only if no ``</type,<type`` adjacency occurs
    """
    if not tag_list:
        return False
    return any(f"</{tag_type},<{tag_type}" in tag_list for tag_type in tag_types)


def _strip_opening_tag(element: str) -> str:
    return element[element.index(">") + 1:]


class ElementMerger:
    """
    Merges successive elements of the same mergeable type within one run.
    """

    def __init__(self, tag_types: Sequence[str] = MERGEABLE_TAG_TYPES):
        """
        Initialize element merger.

        Args:
            tag_types: Element types whose adjacent instances may be joined
        """
        self.tag_types = tuple(tag_types)

    def is_mergeable(self, tag_a: str, tag_b: str) -> bool:
        """
        Check whether a closing element and the following opening one can be joined.

        1. both are of the same type
        2. the first closes and the second opens an element
        3. the type is one of the mergeable types
        4. the second element is not self-closed
        """
        if limiting_kind(tag_a) is not TagLimit.CLOSE or limiting_kind(tag_b) is not TagLimit.OPEN:
            return False
        if not same_type(tag_a, tag_b) or type_of(tag_a) not in self.tag_types:
            return False
        return not is_self_closing(tag_b)

    def merge_run(self, run: str) -> Tuple[str, int]:
        """
        Merge all mergeable element pairs of a run until none is left.

        Args:
            run: Run content

        Returns:
            Tuple of the tidied run and the number of merges applied
        """
        closings, unclosed = split_with_separators(ELEMENT_TAG_UNCLOSED_PATTERN, run)
        if not contains_mergeable_elements(",".join(unclosed), self.tag_types):
            return run, 0

        # closings[0] precedes the first tag and is kept as is
        elements = [tag + closings[index + 1] for index, tag in enumerate(unclosed)]

        merged = 0
        while self._merge_first_pair(elements):
            merged += 1

        return closings[0] + "".join(elements), merged

    def _merge_first_pair(self, elements: List[str]) -> bool:
        # elements[0] has no predecessor to absorb a payload
        for index in range(1, len(elements) - 1):
            if not self.is_mergeable(elements[index], elements[index + 1]):
                continue

            elements[index - 1] += _strip_opening_tag(elements[index + 1])
            elements[index] = ""
            elements[index + 1] = ""
            elements[:] = [element for element in elements if element]
            return True

        return False
