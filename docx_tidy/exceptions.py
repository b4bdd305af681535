"""Custom exceptions for DOCX Tidy."""

from typing import Optional


class DocxTidyError(Exception):
    """Base exception for DOCX Tidy errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class PatternError(DocxTidyError):
    """Exception raised when a tokenization or removal pattern is malformed."""

    pass


class MalformedTagError(DocxTidyError):
    """Exception raised when a token is not a recognizable element tag."""

    pass


class FieldScopeInconsistencyError(DocxTidyError):
    """Exception raised when a field scope has no canonical run properties."""

    pass


class MissingFieldTextError(FieldScopeInconsistencyError):
    """Exception raised when a field scope contains no text carrier element."""

    pass


class TidyError(DocxTidyError):
    """Exception raised when tidying does not converge or yields invalid XML."""

    pass


class PackageError(DocxTidyError):
    """Base exception for DOCX archive errors."""

    pass


class PartReadError(PackageError):
    """Exception raised when an archive part cannot be read."""

    pass


class PartWriteError(PackageError):
    """Exception raised when an archive part cannot be written."""

    pass


class PackagingError(PackageError):
    """Exception raised when the output archive cannot be produced."""

    pass
