"""
JOBSCOUT • core/extractor.py
Plain-text extraction for uploaded CVs (PDF, Word, plain text).

Parser failures never leak: every decoder error is logged and
re-raised as a single ExtractionError.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from backend.core.errors import ExtractionError
from backend.core.utils import log_event

_GENERIC_MIME = {"", "application/octet-stream"}


def _resolve_mime(file_path: Path, mime_type: str | None) -> str:
    mime = (mime_type or "").strip().lower()
    if mime in _GENERIC_MIME:
        guessed, _ = mimetypes.guess_type(file_path.name)
        mime = (guessed or mime).lower()
    return mime


def _is_word(mime: str) -> bool:
    return "word" in mime or "officedocument" in mime


def _pdf_text(file_path: Path) -> str:
    reader = PdfReader(str(file_path))
    return "\n".join((page.extract_text() or "") for page in reader.pages)


def _docx_text(file_path: Path) -> str:
    doc = Document(str(file_path))
    parts = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            parts.extend(cell.text for cell in row.cells)
    return "\n".join(parts)


def extract_text(file_path: str | Path, mime_type: str | None) -> str:
    """Return the plain text of a CV file, dispatching on its MIME type."""
    path = Path(file_path)
    mime = _resolve_mime(path, mime_type)
    try:
        if mime == "application/pdf":
            return _pdf_text(path)
        if _is_word(mime):
            return _docx_text(path)
        return path.read_bytes().decode("utf-8")
    except Exception as e:
        log_event("cv_extract_fail", {"mime": mime, "error": str(e)})
        raise ExtractionError() from e
