"""
Options for tidying WordprocessingML parts and DOCX packages.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Pattern, Tuple, Union

from .parser.tokenizer import compile_pattern

# Cosmetic markup removed by default before merging
PATTERN_PROOF_ERR = r'<w:proofErr w:type="\w+"/>'
PATTERN_NO_PROOF = r"<w:noProof/>"
PATTERN_LANG = r"<w:lang [^>]*/>"
PATTERN_FONT_HINT = r'<w:rFonts w:hint="\w+"/>'
PATTERN_HINT_ATTRIBUTE = r' w:hint="\w+"'
PATTERN_EMPTY_FONTS = r"<w:rFonts/>"
PATTERN_EMPTY_RUN_PROPERTIES = r"<w:rPr></w:rPr>|<w:rPr/>"

DEFAULT_REMOVE_PATTERNS: Tuple[str, ...] = (
    PATTERN_PROOF_ERR,
    PATTERN_NO_PROOF,
    PATTERN_LANG,
    PATTERN_FONT_HINT,
    PATTERN_HINT_ATTRIBUTE,
    PATTERN_EMPTY_FONTS,
    PATTERN_EMPTY_RUN_PROPERTIES,
)

DEFAULT_PART_PATTERNS: Tuple[str, ...] = ("word/*.xml",)

DEFAULT_MAX_ITERATIONS = 10000

RemovePatterns = Union[None, bool, str, Pattern[str], Iterable[Union[str, Pattern[str]]]]

_FALSE_VALUES = {"0", "false", "no", "off", ""}


def compile_remove_patterns(remove_patterns: RemovePatterns) -> List[Pattern[str]]:
    """
    Resolve a removal configuration into compiled patterns.

    Args:
        remove_patterns: None for the default set, False to disable removal,
            a single pattern, or an iterable of patterns

    Returns:
        List of compiled patterns (empty if removal is disabled)

    Raises:
        PatternError: If a pattern is malformed
    """
    if remove_patterns is None or remove_patterns is True:
        remove_patterns = DEFAULT_REMOVE_PATTERNS
    elif remove_patterns is False:
        return []

    if isinstance(remove_patterns, (str, re.Pattern)):
        remove_patterns = [remove_patterns]

    return [compile_pattern(pattern) for pattern in remove_patterns]


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in _FALSE_VALUES


@dataclass
class TidyOptions:
    """
    Tidy options.

    Attributes:
        remove_patterns: Removal pass configuration, see
            :func:`compile_remove_patterns`
        preserve_space: Add ``xml:space="preserve"`` to every bare text and
            instruction text opening tag after merging
        verify_xml: Re-parse every tidied part to make sure it is well-formed
        part_patterns: Glob patterns selecting the archive members to tidy
        max_iterations: Ceiling for the fixed-point loop of one paragraph
    """

    remove_patterns: RemovePatterns = None
    preserve_space: bool = True
    verify_xml: bool = True
    part_patterns: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_PART_PATTERNS)
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        if isinstance(self.part_patterns, str):
            self.part_patterns = (self.part_patterns,)
        else:
            self.part_patterns = tuple(self.part_patterns)
        if not self.part_patterns:
            raise ValueError("At least one part pattern is required")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")

    def compiled_remove_patterns(self) -> List[Pattern[str]]:
        return compile_remove_patterns(self.remove_patterns)

    @classmethod
    def from_env(cls, **overrides) -> "TidyOptions":
        """
        Build options from ``DOCX_TIDY_*`` environment variables.

        ``DOCX_TIDY_NO_REMOVE`` disables the removal pass, ``DOCX_TIDY_VERIFY``
        toggles verification and ``DOCX_TIDY_PARTS`` is a comma-separated list
        of part glob patterns. Keyword arguments take precedence.
        """
        values = {}
        if _env_flag("DOCX_TIDY_NO_REMOVE", False):
            values["remove_patterns"] = False
        values["verify_xml"] = _env_flag("DOCX_TIDY_VERIFY", True)
        parts = os.environ.get("DOCX_TIDY_PARTS")
        if parts:
            values["part_patterns"] = tuple(p.strip() for p in parts.split(",") if p.strip())
        values.update(overrides)
        return cls(**values)
