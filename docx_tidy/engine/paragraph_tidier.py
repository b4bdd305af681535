"""
Fixed-point tidying of one paragraph.

Each cycle re-tokenizes the paragraph into runs, merges adjacent runs left to
right, merges adjacent elements inside every run and reassembles the
paragraph. Cycles repeat while anything was merged, because a merge can make
previously different neighbours mergeable.
"""

import logging
import re
from typing import Optional

from ..exceptions import TidyError
from ..parser.tokenizer import join_with_glues, split_with_separators
from .element_merger import ElementMerger
from .field_scope import FieldScopeState
from .run_merger import RunMerger
from .stats import TidyStats

logger = logging.getLogger(__name__)

RUN_OPEN_PATTERN = re.compile(r"<w:r(?:\s[^>]*)?(?<!/)>", re.IGNORECASE)


class ParagraphTidier:
    """
    Drives run and element merging over one paragraph until it is stable.
    """

    def __init__(
        self,
        run_merger: Optional[RunMerger] = None,
        element_merger: Optional[ElementMerger] = None,
        max_iterations: int = 10000,
    ):
        """
        Initialize paragraph tidier.

        Args:
            run_merger: Run merger (default instance if None)
            element_merger: Element merger (default instance if None)
            max_iterations: Ceiling on cycles per paragraph
        """
        self.run_merger = run_merger or RunMerger()
        self.element_merger = element_merger or ElementMerger()
        self.max_iterations = max_iterations

    def tidy(self, paragraph: str, stats: Optional[TidyStats] = None) -> str:
        """
        Tidy a paragraph.

        Args:
            paragraph: Markup following a paragraph opening tag, up to the next one
            stats: Statistics to update (optional)

        Returns:
            Tidied paragraph markup

        Raises:
            FieldScopeInconsistencyError: If a field scope of the paragraph
                has no canonical properties
            TidyError: If the paragraph does not stabilize
        """
        stats = stats if stats is not None else TidyStats()
        stats.paragraphs += 1

        cycles = 0
        run_count = None
        while True:
            cycles += 1
            if cycles > self.max_iterations:
                raise TidyError(
                    "Paragraph did not stabilize",
                    f"{self.max_iterations} iterations exceeded",
                )

            # runs[0] is the paragraph's leading markup (properties), not a run
            runs, tags = split_with_separators(RUN_OPEN_PATTERN, paragraph)
            open_tags = [""] + tags
            if run_count is None:
                run_count = len(tags)
                stats.runs_before += run_count
            if len(runs) <= 1:
                break

            runs_merged = 0
            scope = FieldScopeState()
            # The last run has no successor to merge with
            for index in range(1, len(runs) - 1):
                merged, scope = self.run_merger.try_merge_with_next(runs, open_tags, index, scope)
                runs_merged += int(merged)

            elements_merged = 0
            for index, run in enumerate(runs):
                if run:
                    runs[index], count = self.element_merger.merge_run(run)
                    elements_merged += count

            paragraph = join_with_glues(runs, open_tags[1:])
            run_count = len(tags) - runs_merged
            stats.runs_merged += runs_merged
            stats.elements_merged += elements_merged

            if not runs_merged and not elements_merged:
                break

        stats.iterations += cycles
        stats.runs_after += run_count
        return paragraph
