"""
Access to the run properties block (``<w:rPr>``) of a run.

The block is expected at the very start of a run's content. Nested blocks, as
written for tracked formatting changes (``<w:rPrChange>``), are matched
balanced so the whole outer block is treated as one value.
"""

import re
from typing import Optional, Tuple

from ..exceptions import MalformedTagError

RUN_PROPERTIES_OPEN = "<w:rPr>"
RUN_PROPERTIES_EMPTY = "<w:rPr/>"

_RUN_PROPERTIES_TAG = re.compile(r"<(/?)w:rPr(/?)>")


def _leading_whitespace(run: str) -> int:
    return len(run) - len(run.lstrip())


def _locate(run: str) -> Optional[Tuple[int, int]]:
    start = _leading_whitespace(run)
    if run.startswith(RUN_PROPERTIES_EMPTY, start):
        return start, start + len(RUN_PROPERTIES_EMPTY)
    if not run.startswith(RUN_PROPERTIES_OPEN, start):
        return None

    depth = 0
    for match in _RUN_PROPERTIES_TAG.finditer(run, start):
        if match.group(2):
            continue
        if match.group(1):
            depth -= 1
            if depth == 0:
                return start, match.end()
        else:
            depth += 1

    raise MalformedTagError("Unterminated run properties block", run[start:start + 80])


def extract_run_properties(run: str) -> Optional[str]:
    """
    Get the run properties block of a run.

    Args:
        run: Run content following the run opening tag

    Returns:
        The block as found in the markup, or None if the run has no properties
    """
    span = _locate(run)
    if span is None:
        return None
    return run[span[0]:span[1]]


def strip_run_properties(run: str) -> str:
    """Remove the run properties block from a run."""
    span = _locate(run)
    if span is None:
        return run
    return run[:span[0]] + run[span[1]:]


def replace_run_properties(run: str, properties: Optional[str]) -> str:
    """
    Replace (or insert, or remove) the run properties block of a run.

    Args:
        run: Run content following the run opening tag
        properties: New block, None to leave the run without properties

    Returns:
        Updated run content
    """
    span = _locate(run)
    if span is None:
        span = (_leading_whitespace(run),) * 2
    return run[:span[0]] + (properties or "") + run[span[1]:]
