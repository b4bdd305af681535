"""
Package reader for DOCX files.

Enumerates and reads the XML parts of a DOCX package. Parts are read directly
from the ZIP archive; nothing is extracted to disk.
"""

import fnmatch
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..exceptions import PartReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartHandle:
    """Reference to a member of a DOCX package."""

    name: str

    def __str__(self) -> str:
        return self.name


class PackageReader:
    """
    Reads XML parts of a DOCX package.

    Use as a context manager so the archive is always closed.
    """

    def __init__(self, docx_path: Union[str, Path]):
        """
        Initialize package reader.

        Args:
            docx_path: Path to DOCX file

        Raises:
            PartReadError: If the file does not exist or is not a ZIP archive
        """
        self.docx_path = Path(docx_path)
        self._zip_file: Optional[zipfile.ZipFile] = None
        self._open_package()

    def _open_package(self) -> None:
        """Open DOCX package as ZIP file."""
        if not self.docx_path.exists():
            raise PartReadError("DOCX file not found", str(self.docx_path))

        try:
            self._zip_file = zipfile.ZipFile(self.docx_path, "r")
        except (zipfile.BadZipFile, OSError) as e:
            raise PartReadError(f"Failed to open DOCX package {self.docx_path}", str(e)) from e

        logger.info(f"Opened DOCX package: {self.docx_path}")

    @property
    def zip_file(self) -> zipfile.ZipFile:
        if self._zip_file is None:
            raise PartReadError("Package reader is closed", str(self.docx_path))
        return self._zip_file

    def namelist(self) -> List[str]:
        """Get the names of all members in archive order."""
        return self.zip_file.namelist()

    def list_xml_parts(self, patterns: Iterable[str] = ("word/*.xml",)) -> List[PartHandle]:
        """
        List XML parts matching any of the given glob patterns.

        Args:
            patterns: Glob patterns on member names, e.g. ``word/*.xml``

        Returns:
            Part handles in archive order
        """
        patterns = tuple(patterns)
        handles = [
            PartHandle(name)
            for name in self.namelist()
            if not name.endswith("/") and any(fnmatch.fnmatchcase(name, p) for p in patterns)
        ]
        logger.debug(f"Found {len(handles)} XML parts matching {patterns}")
        return handles

    def read_part(self, handle: Union[PartHandle, str]) -> bytes:
        """
        Read the raw content of a part.

        Args:
            handle: Part handle or member name

        Returns:
            Part content as bytes

        Raises:
            PartReadError: If the part is missing or cannot be decompressed
        """
        name = str(handle)
        try:
            return self.zip_file.read(name)
        except KeyError as e:
            raise PartReadError("Part not found", name) from e
        except (zipfile.BadZipFile, OSError, RuntimeError) as e:
            raise PartReadError(f"Failed to read part {name}", str(e)) from e

    def close(self) -> None:
        """Close the package reader."""
        if self._zip_file is not None:
            self._zip_file.close()
            self._zip_file = None

    def __enter__(self) -> "PackageReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
