"""Counters collected while tidying markup."""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class TidyStats:
    """Merge statistics for one tidied markup part (or a sum of parts)."""

    paragraphs: int = 0
    runs_before: int = 0
    runs_after: int = 0
    runs_merged: int = 0
    elements_merged: int = 0
    iterations: int = 0
    removal_passes: int = 0

    def add(self, other: "TidyStats") -> None:
        """Accumulate another statistics object into this one."""
        for key, value in asdict(other).items():
            setattr(self, key, getattr(self, key) + value)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
