"""
Tidying of complete DOCX documents.

The main entry point is :func:`tidy_document`, which reads every selected XML
part of a package, tidies it in memory and writes the package back only when
all parts were tidied successfully.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from lxml import etree as lxml_etree

from .config import TidyOptions
from .engine.markup_tidier import MarkupTidier
from .engine.stats import TidyStats
from .exceptions import DocxTidyError, PartReadError, TidyError
from .package import PackageReader, PackageWriter, PartHandle

logger = logging.getLogger(__name__)


@dataclass
class TidyReport:
    """Summary of a tidied document."""

    source: Path
    output: Path
    parts: List[str] = field(default_factory=list)
    bytes_before: int = 0
    bytes_after: int = 0
    stats: TidyStats = field(default_factory=TidyStats)

    @property
    def size_reduction(self) -> float:
        """Relative size reduction of the tidied parts (0.0 - 1.0)."""
        if self.bytes_before <= 0:
            return 0.0
        return (self.bytes_before - self.bytes_after) / self.bytes_before


def decode_part(handle: PartHandle, content: bytes) -> str:
    """
    Decode a part as UTF-8 (a byte order mark is dropped).

    Raises:
        PartReadError: If the part is not valid UTF-8
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise PartReadError(f"Part {handle} is not UTF-8 encoded", str(e)) from e


def verify_part(handle: PartHandle, content: bytes) -> None:
    """
    Make sure a tidied part is still well-formed XML.

    Raises:
        TidyError: If the part cannot be parsed
    """
    try:
        lxml_etree.fromstring(content)
    except lxml_etree.XMLSyntaxError as e:
        raise TidyError(f"Tidied part {handle} is not well-formed", str(e)) from e


def tidy_document(
    source_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    options: Optional[TidyOptions] = None,
) -> TidyReport:
    """
    Tidy every selected XML part of a DOCX package.

    Args:
        source_path: DOCX file to tidy
        output_path: Target DOCX file (the source is overwritten if None)
        options: Tidy options (defaults if None)

    Returns:
        Report of the tidied document

    Raises:
        DocxTidyError: Any failure; nothing is written in that case
    """
    options = options or TidyOptions()
    source = Path(source_path)
    output = Path(output_path) if output_path else source
    report = TidyReport(source=source, output=output)

    tidier = MarkupTidier(options)
    tidied: Dict[PartHandle, bytes] = {}

    with PackageReader(source) as reader:
        for handle in reader.list_xml_parts(options.part_patterns):
            content = reader.read_part(handle)
            try:
                result = tidier.tidy(decode_part(handle, content)).encode("utf-8")
            except DocxTidyError as e:
                logger.error(f"Failed to tidy part {handle}: {e}")
                raise

            if options.verify_xml:
                verify_part(handle, result)

            tidied[handle] = result
            report.parts.append(handle.name)
            report.bytes_before += len(content)
            report.bytes_after += len(result)
            report.stats.add(tidier.last_stats)
            logger.debug(f"Tidied part {handle}: {len(content)} -> {len(result)} bytes")

    writer = PackageWriter(source)
    for handle, content in tidied.items():
        writer.write_part(handle, content)
    writer.repackage(output)

    logger.info(
        f"Tidied {len(report.parts)} parts of {source}: "
        f"{report.stats.runs_before} -> {report.stats.runs_after} runs"
    )
    return report
