"""
Tests for tidying complete DOCX documents.
"""

import zipfile

import pytest

from _markup_helpers import count_runs, field_run, read_member, text_payload, wrap_document, write_docx
from docx_tidy import TidyOptions, tidy_document, tidy_markup
from docx_tidy.exceptions import MissingFieldTextError, PartReadError, TidyError


@pytest.fixture
def broken_field_part():
    return wrap_document(
        "<w:p>" + field_run("begin") + "<w:r><w:tab/></w:r>" + field_run("end") + "</w:p>"
    )


class TestTidyDocument:
    """Test cases for tidy_document."""

    def test_tidy_to_output(self, sample_docx, sample_zip_content, temp_dir):
        output = temp_dir / "tidied.docx"

        report = tidy_document(sample_docx, output)

        assert report.output == output
        assert report.parts == ["word/document.xml"]
        assert report.stats.runs_before == 3
        assert report.stats.runs_after == 2
        assert report.bytes_after < report.bytes_before
        assert 0.0 < report.size_reduction < 1.0

        document = read_member(output, "word/document.xml").decode("utf-8")
        assert document == tidy_markup(sample_zip_content["word/document.xml"])
        assert text_payload(document) == "Hello World"

    def test_other_members_unchanged(self, sample_docx, sample_zip_content, temp_dir):
        output = temp_dir / "tidied.docx"

        tidy_document(sample_docx, output)

        with zipfile.ZipFile(output) as zf:
            assert zf.namelist() == list(sample_zip_content)
        for name in ("[Content_Types].xml", "_rels/.rels", "word/media/image1.png"):
            assert read_member(output, name) == read_member(sample_docx, name)

    def test_source_untouched_with_output(self, sample_docx, temp_dir):
        before = sample_docx.read_bytes()

        tidy_document(sample_docx, temp_dir / "tidied.docx")

        assert sample_docx.read_bytes() == before

    def test_overwrite_source(self, sample_docx):
        report = tidy_document(sample_docx)

        assert report.output == sample_docx
        assert count_runs(read_member(sample_docx, "word/document.xml").decode("utf-8")) == 2

    def test_selected_parts_only(self, temp_dir, sample_zip_content):
        parts = dict(sample_zip_content)
        parts["word/footer1.xml"] = sample_zip_content["word/document.xml"]
        source = write_docx(temp_dir / "footer.docx", parts)

        report = tidy_document(source, temp_dir / "out.docx", TidyOptions(part_patterns=("word/footer*.xml",)))

        assert report.parts == ["word/footer1.xml"]
        assert read_member(temp_dir / "out.docx", "word/document.xml") == read_member(source, "word/document.xml")

    def test_failure_writes_nothing(self, temp_dir, sample_zip_content, broken_field_part):
        parts = dict(sample_zip_content)
        parts["word/footer1.xml"] = broken_field_part
        source = write_docx(temp_dir / "broken.docx", parts)
        before = source.read_bytes()

        with pytest.raises(MissingFieldTextError):
            tidy_document(source)

        assert source.read_bytes() == before
        with pytest.raises(MissingFieldTextError):
            tidy_document(source, temp_dir / "out.docx")
        assert not (temp_dir / "out.docx").exists()

    def test_malformed_part_fails_verification(self, temp_dir, sample_zip_content):
        parts = dict(sample_zip_content)
        parts["word/document.xml"] = "<w:document><w:p><w:r><w:t>A</w:t></w:r>"
        source = write_docx(temp_dir / "malformed.docx", parts)

        with pytest.raises(TidyError):
            tidy_document(source, temp_dir / "out.docx")
        assert not (temp_dir / "out.docx").exists()

    def test_verification_disabled(self, temp_dir, sample_zip_content):
        parts = dict(sample_zip_content)
        parts["word/document.xml"] = "<w:document><w:p><w:r><w:t>A</w:t></w:r><w:r><w:t>B</w:t></w:r>"
        source = write_docx(temp_dir / "malformed.docx", parts)

        tidy_document(source, temp_dir / "out.docx", TidyOptions(verify_xml=False))

        assert text_payload(read_member(temp_dir / "out.docx", "word/document.xml").decode("utf-8")) == "AB"

    def test_byte_order_mark_dropped(self, temp_dir, sample_zip_content):
        parts = dict(sample_zip_content)
        parts["word/document.xml"] = sample_zip_content["word/document.xml"].encode("utf-8-sig")
        source = write_docx(temp_dir / "bom.docx", parts)

        tidy_document(source)

        assert not read_member(source, "word/document.xml").startswith(b"\xef\xbb\xbf")

    def test_non_utf8_part(self, temp_dir, sample_zip_content):
        parts = dict(sample_zip_content)
        parts["word/document.xml"] = b"<w:document>\xff\xfe</w:document>"
        source = write_docx(temp_dir / "latin.docx", parts)

        with pytest.raises(PartReadError):
            tidy_document(source)

    def test_missing_source(self, temp_dir):
        with pytest.raises(PartReadError):
            tidy_document(temp_dir / "missing.docx")
