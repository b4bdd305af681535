"""
Pytest configuration for DOCX Tidy
"""

import logging
import sys

import pytest

from _markup_helpers import BOLD, ITALIC, XML_DECLARATION, make_run, wrap_document, write_docx


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Only show warnings and errors during tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for tests."""
    return tmp_path


@pytest.fixture
def fragmented_body():
    """Paragraph with two bold runs split by proofing flags, then an italic run."""
    return (
        '<w:p w:rsidR="00A1">'
        + make_run("Hel", BOLD, tag='<w:r w:rsidR="00B2">')
        + '<w:proofErr w:type="spellStart"/>'
        + make_run("lo ", BOLD)
        + '<w:proofErr w:type="spellEnd"/>'
        + make_run("World", ITALIC)
        + "</w:p>"
    )


@pytest.fixture
def sample_zip_content(fragmented_body):
    """Create sample ZIP content for a DOCX package."""
    return {
        '[Content_Types].xml': f'''{XML_DECLARATION}
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
    <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
    <Default Extension="xml" ContentType="application/xml"/>
    <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
</Types>''',
        '_rels/.rels': f'''{XML_DECLARATION}
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
    <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>
</Relationships>''',
        'word/document.xml': wrap_document(fragmented_body),
        'word/_rels/document.xml.rels': f'''{XML_DECLARATION}
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
</Relationships>''',
        'word/media/image1.png': b'\x89PNG fake image data',
    }


@pytest.fixture
def sample_docx(temp_dir, sample_zip_content):
    """DOCX package built from sample_zip_content."""
    return write_docx(temp_dir / "sample.docx", sample_zip_content)
