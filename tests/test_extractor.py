from pathlib import Path

import pytest
from docx import Document
from pypdf import PdfWriter

from backend.core.errors import ExtractionError
from backend.core.extractor import extract_text

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def test_plain_text_is_returned_verbatim(tmp_path: Path):
    cv = tmp_path / "cv.txt"
    cv.write_text("Senior Go engineer\nDistributed systems – 8 years", encoding="utf-8")

    assert extract_text(cv, "text/plain") == "Senior Go engineer\nDistributed systems – 8 years"


def test_invalid_utf8_raises_user_facing_error(tmp_path: Path):
    cv = tmp_path / "cv.txt"
    cv.write_bytes(b"\xff\xfe\xfa broken")

    with pytest.raises(ExtractionError) as exc:
        extract_text(cv, "text/plain")

    assert str(exc.value) == "Failed to parse CV file."


def test_docx_paragraphs_and_tables(tmp_path: Path):
    cv = tmp_path / "cv.docx"
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("Kubernetes operator author")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Go"
    table.rows[0].cells[1].text = "Rust"
    doc.save(str(cv))

    text = extract_text(cv, DOCX_MIME)

    assert "Jane Doe" in text
    assert "Kubernetes operator author" in text
    assert "Go" in text and "Rust" in text


def test_word_mime_substring_match(tmp_path: Path):
    cv = tmp_path / "cv.docx"
    doc = Document()
    doc.add_paragraph("Matched on 'word'")
    doc.save(str(cv))

    assert "Matched on 'word'" in extract_text(cv, "application/msword")


def test_generic_mime_is_guessed_from_suffix(tmp_path: Path):
    cv = tmp_path / "cv.docx"
    doc = Document()
    doc.add_paragraph("Guessed from suffix")
    doc.save(str(cv))

    assert "Guessed from suffix" in extract_text(cv, "application/octet-stream")


def test_pdf_without_text_yields_empty_pages(tmp_path: Path):
    cv = tmp_path / "cv.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    with open(cv, "wb") as f:
        writer.write(f)

    assert extract_text(cv, "application/pdf").strip() == ""


def test_corrupt_pdf_raises_extraction_error(tmp_path: Path):
    cv = tmp_path / "cv.pdf"
    cv.write_bytes(b"%PDF-1.4 this is not really a pdf")

    with pytest.raises(ExtractionError):
        extract_text(cv, "application/pdf")


def test_corrupt_docx_raises_extraction_error(tmp_path: Path):
    cv = tmp_path / "cv.docx"
    cv.write_bytes(b"PK not a zip")

    with pytest.raises(ExtractionError):
        extract_text(cv, DOCX_MIME)


def test_file_is_not_modified(tmp_path: Path):
    cv = tmp_path / "cv.txt"
    cv.write_bytes(b"unchanged")
    extract_text(cv, "text/plain")
    assert cv.read_bytes() == b"unchanged"
