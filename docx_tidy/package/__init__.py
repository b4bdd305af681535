"""
DOCX package access: enumerate, read and rewrite XML parts of the archive.
"""

from .package_reader import PackageReader, PartHandle
from .package_writer import PackageWriter

__all__ = ["PackageReader", "PackageWriter", "PartHandle"]
