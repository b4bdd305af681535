"""
Package writer for DOCX files.

Collects replaced parts and writes a new package that keeps every other member
of the source package, in the original order.
"""

import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Dict, List, Union

from ..exceptions import PackagingError, PartWriteError
from .package_reader import PartHandle

logger = logging.getLogger(__name__)


class PackageWriter:
    """
    Writes a DOCX package based on a source package with some parts replaced.
    """

    def __init__(self, source_path: Union[str, Path]):
        """
        Initialize package writer.

        Args:
            source_path: DOCX package providing all members not replaced

        Raises:
            PackagingError: If the source package cannot be opened
        """
        self.source_path = Path(source_path)
        try:
            with zipfile.ZipFile(self.source_path, "r") as source:
                self._members: List[str] = source.namelist()
        except (zipfile.BadZipFile, OSError) as e:
            raise PackagingError(f"Failed to open source package {self.source_path}", str(e)) from e
        self._parts: Dict[str, bytes] = {}

    @property
    def replaced_parts(self) -> List[str]:
        return list(self._parts)

    def write_part(self, handle: Union[PartHandle, str], content: bytes) -> None:
        """
        Replace the content of a part.

        Args:
            handle: Part handle or member name
            content: New part content

        Raises:
            PartWriteError: If the part is not a member of the source package
                or the content is not bytes
        """
        name = str(handle)
        if name not in self._members:
            raise PartWriteError("Part not in source package", name)
        if not isinstance(content, bytes):
            raise PartWriteError(f"Part content must be bytes, got {type(content).__name__}", name)
        self._parts[name] = content

    def repackage(self, output_path: Union[str, Path]) -> Path:
        """
        Write the package to a new archive.

        The archive is written next to the target and then moved into place,
        so the output path may be the source path.

        Args:
            output_path: Target DOCX path

        Returns:
            Path of the written package

        Raises:
            PackagingError: If the archive cannot be written
        """
        output_path = Path(output_path)
        temp_name = None
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            handle, temp_name = tempfile.mkstemp(
                prefix=".docx_tidy_", suffix=".docx", dir=str(output_path.parent)
            )
            os.close(handle)

            with zipfile.ZipFile(self.source_path, "r") as source, \
                    zipfile.ZipFile(temp_name, "w", zipfile.ZIP_DEFLATED) as target:
                for info in source.infolist():
                    content = self._parts.get(info.filename)
                    if content is None:
                        content = source.read(info.filename)
                    entry = zipfile.ZipInfo(info.filename, date_time=info.date_time)
                    entry.compress_type = zipfile.ZIP_DEFLATED
                    entry.external_attr = info.external_attr
                    target.writestr(entry, content)

            os.replace(temp_name, output_path)
            temp_name = None
        except (zipfile.BadZipFile, OSError, RuntimeError) as e:
            raise PackagingError(f"Failed to write package {output_path}", str(e)) from e
        finally:
            if temp_name is not None and os.path.exists(temp_name):
                os.remove(temp_name)

        logger.info(f"Wrote DOCX package: {output_path} ({len(self._parts)} parts replaced)")
        return output_path
