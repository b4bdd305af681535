"""
Merging of adjacent runs with identical run properties.

Runs are held as two co-indexed lists: ``runs[i]`` is the content following
the run opening tag ``open_tags[i]``. A merged-away run is left as an empty
string with an empty opening tag, and the following slot carries the fused
content, so a chain of N equal runs collapses in N-1 calls without shifting
indices.
"""

import logging
import re
from typing import List, Tuple

from ..parser.run_properties import extract_run_properties, replace_run_properties, strip_run_properties
from .field_scope import FieldScopeState, FieldScopeTracker, has_scope_begin, has_scope_end

logger = logging.getLogger(__name__)

RUN_CLOSE_TAG = "</w:r>"
PARAGRAPH_CLOSE_TAG = "</w:p>"

_TRAILING_RUN_CLOSE = re.compile(r"</w:r>\s*\Z")


def ends_with_run_close(run: str) -> bool:
    return run.rstrip().endswith(RUN_CLOSE_TAG)


def is_single_run(run: str) -> bool:
    """
    Check whether a run fragment holds exactly one complete run.

    Runs nesting paragraphs (text boxes) or runs (ruby) are split by the
    inner opening tags, so their last fragment closes an outer run too.
    """
    return (
        ends_with_run_close(run)
        and run.count(RUN_CLOSE_TAG) == 1
        and PARAGRAPH_CLOSE_TAG not in run
    )


class RunMerger:
    """
    Decides whether two adjacent runs of a paragraph can be fused, and fuses them.
    """

    def try_merge_with_next(
        self,
        runs: List[str],
        open_tags: List[str],
        index: int,
        scope: FieldScopeState,
    ) -> Tuple[bool, FieldScopeState]:
        """
        Merge ``runs[index]`` into ``runs[index + 1]`` if their properties match.

        Runs strictly inside a field scope get the scope's canonical properties
        written into their markup before the comparison.

        Args:
            runs: Run contents of the paragraph, modified in place
            open_tags: Run opening tags co-indexed with ``runs``, modified in place
            index: Index of the current run
            scope: Field scope state before the current run

        Returns:
            Tuple of (merged, field scope state after the current run)

        Raises:
            FieldScopeInconsistencyError: If a field scope has no canonical
                properties
        """
        scope = FieldScopeTracker.advance(scope, runs, index)

        for position in (index, index + 1):
            if scope.normalizes(runs[position]):
                runs[position] = replace_run_properties(runs[position], scope.canonical_properties)

        current = runs[index]
        following = runs[index + 1]

        if not is_single_run(current):
            return False, scope
        if has_scope_begin(following) or has_scope_end(current):
            return False, scope
        if extract_run_properties(current) != extract_run_properties(following):
            return False, scope

        # Closing tag of current run and properties of next run are dropped,
        # the next run's opening tag is replaced by the current one's
        runs[index + 1] = _TRAILING_RUN_CLOSE.sub("", current) + strip_run_properties(following)
        runs[index] = ""
        open_tags[index + 1] = open_tags[index]
        open_tags[index] = ""

        return True, scope
