"""
Entry point for running docx_tidy as a module.

Usage:
    python -m docx_tidy tidy input.docx --output tidied.docx
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
