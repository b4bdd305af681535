"""
Tokenizer for WordprocessingML markup.

Splits markup around a delimiter pattern while keeping the matched delimiters,
so that fragments and separators can be re-interleaved into the original text.
This is the primitive used to explode a part into paragraphs, a paragraph into
runs and a run into element tags.
"""

import re
from typing import List, Pattern, Sequence, Tuple, Union

from ..exceptions import PatternError

PatternLike = Union[str, Pattern[str]]


def compile_pattern(pattern: PatternLike, flags: int = re.IGNORECASE) -> Pattern[str]:
    """
    Compile a delimiter pattern.

    Args:
        pattern: Regular expression source or an already compiled pattern
        flags: Flags used when compiling a string pattern

    Returns:
        Compiled pattern

    Raises:
        PatternError: If the pattern is empty, not a string or malformed
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str) or not pattern:
        raise PatternError("Pattern must be a non-empty string", repr(pattern))

    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(f"Invalid pattern {pattern!r}", str(e)) from e


def split_with_separators(pattern: PatternLike, text: str) -> Tuple[List[str], List[str]]:
    """
    Split text around every non-overlapping match of a pattern.

    The first fragment is whatever precedes the first match and is not
    necessarily prefixed by a separator.

    Args:
        pattern: Delimiter pattern
        text: Markup to split

    Returns:
        Tuple ``(fragments, separators)`` with
        ``len(fragments) == len(separators) + 1``
    """
    regex = compile_pattern(pattern)

    fragments: List[str] = []
    separators: List[str] = []
    position = 0
    for match in regex.finditer(text):
        fragments.append(text[position:match.start()])
        separators.append(match.group(0))
        position = match.end()
    fragments.append(text[position:])

    return fragments, separators


def join_with_glues(pieces: Sequence[str], glues: Sequence[str]) -> str:
    """
    Re-interleave pieces with the glues that separated them.

    ``pieces[0] + glues[0] + pieces[1] + glues[1] + ...``; a missing trailing
    glue is treated as empty.

    Args:
        pieces: Fragments, e.g. runs of a paragraph
        glues: Separators, e.g. run opening tags

    Returns:
        Reassembled markup
    """
    if len(glues) not in (len(pieces) - 1, len(pieces)) and pieces:
        raise ValueError(
            f"Cannot join {len(pieces)} pieces with {len(glues)} glues"
        )

    parts: List[str] = []
    for index, piece in enumerate(pieces):
        parts.append(piece)
        if index < len(glues):
            parts.append(glues[index])
    return "".join(parts)
