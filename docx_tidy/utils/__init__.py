"""Helper utilities."""

from .logger import add_file_handler, configure_logging

__all__ = ["add_file_handler", "configure_logging"]
