"""
Tests for run properties access.
"""

import pytest

from docx_tidy.exceptions import MalformedTagError
from docx_tidy.parser.run_properties import (
    extract_run_properties,
    replace_run_properties,
    strip_run_properties,
)

TRACKED = '<w:rPr><w:b/><w:rPrChange w:id="1"><w:rPr><w:i/></w:rPr></w:rPrChange></w:rPr>'


class TestExtractRunProperties:
    """Test cases for extract_run_properties."""

    def test_leading_block(self):
        assert extract_run_properties("<w:rPr><w:b/></w:rPr><w:t>A</w:t></w:r>") == "<w:rPr><w:b/></w:rPr>"

    def test_absent(self):
        assert extract_run_properties("<w:t>A</w:t></w:r>") is None

    def test_not_leading_is_absent(self):
        """Only a block at the start of the run counts."""
        assert extract_run_properties("<w:t>A</w:t><w:rPr><w:b/></w:rPr>") is None

    def test_self_closed_block(self):
        assert extract_run_properties("<w:rPr/><w:t>A</w:t>") == "<w:rPr/>"

    def test_leading_whitespace(self):
        assert extract_run_properties("\n  <w:rPr><w:b/></w:rPr>\n  <w:t>A</w:t>") == "<w:rPr><w:b/></w:rPr>"

    def test_nested_block_is_balanced(self):
        assert extract_run_properties(TRACKED + "<w:t>A</w:t>") == TRACKED

    def test_unterminated_block(self):
        with pytest.raises(MalformedTagError):
            extract_run_properties("<w:rPr><w:b/><w:t>A</w:t>")


class TestStripAndReplace:
    """Test cases for strip_run_properties and replace_run_properties."""

    def test_strip(self):
        assert strip_run_properties(TRACKED + "<w:t>A</w:t></w:r>") == "<w:t>A</w:t></w:r>"

    def test_strip_absent(self):
        assert strip_run_properties("<w:t>A</w:t>") == "<w:t>A</w:t>"

    def test_replace(self):
        result = replace_run_properties("<w:rPr><w:b/></w:rPr><w:t>A</w:t>", "<w:rPr><w:i/></w:rPr>")
        assert result == "<w:rPr><w:i/></w:rPr><w:t>A</w:t>"

    def test_replace_inserts_when_absent(self):
        result = replace_run_properties("  <w:t>A</w:t>", "<w:rPr><w:i/></w:rPr>")
        assert result == "  <w:rPr><w:i/></w:rPr><w:t>A</w:t>"

    def test_replace_with_none_removes(self):
        assert replace_run_properties("<w:rPr><w:b/></w:rPr><w:t>A</w:t>", None) == "<w:t>A</w:t>"
