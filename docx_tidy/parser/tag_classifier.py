"""
Classification of raw WordprocessingML tag tokens.

A token is anything starting with an element tag such as ``<w:t>Hello`` or
``</w:rPr>``. Only the ``w:`` prefixed shapes emitted by word processors are
recognized.
"""

import re
from enum import Enum

from ..exceptions import MalformedTagError

ELEMENT_TAG_PATTERN = re.compile(r"<(/)?(w:[a-z]+)", re.IGNORECASE)

OPEN_TAG_START = "<w:"
CLOSE_TAG_START = "</w:"


class TagLimit(Enum):
    """Limiting kind of a tag: opening, closing or neither."""
    NONE = 0
    OPEN = 1
    CLOSE = 2


def type_of(tag: str) -> str:
    """
    Get the element type name of a tag token.

    Args:
        tag: Tag token, e.g. ``</w:instrText>``

    Returns:
        Element type, e.g. ``w:instrText``, regardless of opening or closing

    Raises:
        MalformedTagError: If no element type can be found
    """
    if not isinstance(tag, str):
        raise MalformedTagError("Tag must be a string", repr(tag))

    match = ELEMENT_TAG_PATTERN.search(tag)
    if match is None:
        raise MalformedTagError("Tag type identification failed", tag[:80])
    return match.group(2)


def limiting_kind(tag: str) -> TagLimit:
    """Get whether the token opens or closes an element."""
    if tag.startswith(OPEN_TAG_START):
        return TagLimit.OPEN
    if tag.startswith(CLOSE_TAG_START):
        return TagLimit.CLOSE
    return TagLimit.NONE


def same_type(tag_a: str, tag_b: str) -> bool:
    """Check whether two tokens belong to the same element type."""
    return type_of(tag_a) == type_of(tag_b)


def is_self_closing(tag: str) -> bool:
    """Check whether the leading tag of a token is self-closed (``<w:t/>``)."""
    end = tag.find(">")
    return end > 0 and tag[end - 1] == "/"
