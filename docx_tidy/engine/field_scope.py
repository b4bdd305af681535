"""
Tracking of field-character scopes across the runs of a paragraph.

A dynamic field (page number, cross reference, TOC entry, ...) is written as a
``<w:fldChar w:fldCharType="begin"/>`` run, instruction and result runs, and a
``<w:fldChar w:fldCharType="end"/>`` run. The host application renders the
field as one unit, so the runs strictly inside the scope are given one
canonical run properties block, taken from the first text carrying run after
the begin marker. Boundary runs keep their own properties.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from ..exceptions import MissingFieldTextError
from ..parser.run_properties import extract_run_properties

logger = logging.getLogger(__name__)

FIELD_CHAR_PATTERN = re.compile(
    r'<w:fldChar\b[^>]*?\bw:fldCharType="(begin|separate|end)"', re.IGNORECASE
)
CARRIER_ELEMENT_PATTERN = re.compile(r"<w:(?:t|instrText)(?=[\s>/])")

FIELD_BEGIN = "begin"
FIELD_END = "end"


def _markers(run: str, kind: str):
    return [m for m in FIELD_CHAR_PATTERN.finditer(run) if m.group(1).lower() == kind]


def has_scope_begin(run: str) -> bool:
    """Check whether a run carries a field begin marker."""
    return bool(_markers(run, FIELD_BEGIN))


def has_scope_end(run: str) -> bool:
    """Check whether a run carries a field end marker."""
    return bool(_markers(run, FIELD_END))


def is_boundary_run(run: str) -> bool:
    return has_scope_begin(run) or has_scope_end(run)


@dataclass(frozen=True)
class FieldScopeState:
    """
    Field scope state threaded through the run merges of one paragraph pass.

    ``ending_in_current_run`` is only set for the run carrying the end marker;
    the following advance leaves the scope.
    """

    inside_scope: bool = False
    ending_in_current_run: bool = False
    canonical_properties: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.inside_scope and not self.ending_in_current_run

    def normalizes(self, run: str) -> bool:
        """Check whether a run is strictly inside the current scope."""
        return bool(run) and self.active and not is_boundary_run(run)


def find_canonical_properties(runs: Sequence[str], start: int, offset: int = 0) -> Optional[str]:
    """
    Find the run properties of the first text carrying run of a field scope.

    Args:
        runs: Runs of the paragraph
        start: Index of the run carrying the begin marker
        offset: Position right after the begin marker within ``runs[start]``

    Returns:
        Run properties block of the carrier run (None if it has none)

    Raises:
        MissingFieldTextError: If no text or instruction element is found
            before the field end marker
    """
    for index in range(start, len(runs)):
        run = runs[index]
        body = run[offset:] if index == start else run
        ends = _markers(body, FIELD_END)
        scoped = body[:ends[0].start()] if ends else body

        if CARRIER_ELEMENT_PATTERN.search(scoped):
            return extract_run_properties(run)
        if ends:
            break

    raise MissingFieldTextError(
        "Field scope has no text or instruction element",
        f"scope begins in run {start}",
    )


class FieldScopeTracker:
    """
    State machine {outside, inside} over the runs of a paragraph.

    Stateless itself: each call takes the state before a run and returns the
    state after it.
    """

    @staticmethod
    def advance(state: FieldScopeState, runs: Sequence[str], index: int) -> FieldScopeState:
        """
        Advance the scope state over ``runs[index]``.

        Args:
            state: State before the run
            runs: Runs of the paragraph
            index: Index of the run to advance over

        Returns:
            State after the run

        Raises:
            MissingFieldTextError: If a scope is entered and no canonical
                properties can be found for it
        """
        run = runs[index]
        inside = state.active
        canonical = state.canonical_properties if inside else None
        ending = False
        entered_at = None

        for marker in FIELD_CHAR_PATTERN.finditer(run):
            kind = marker.group(1).lower()
            if kind == FIELD_BEGIN and not inside:
                inside, ending, entered_at = True, False, marker.end()
            elif kind == FIELD_END and inside:
                inside, ending, entered_at = False, True, None

        if inside and entered_at is not None:
            canonical = find_canonical_properties(runs, index, entered_at)
            logger.debug(f"Entered field scope at run {index}, canonical properties: {canonical!r}")

        if ending and not inside:
            return FieldScopeState(True, True, canonical)
        return FieldScopeState(inside, False, canonical if inside else None)
