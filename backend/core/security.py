"""
JOBSCOUT • core/security.py
Upload gate for CV files: extension allow-list, size cap, and a
content sniff so a renamed binary never reaches the extractor.
"""

from __future__ import annotations

import os
from typing import Callable, Dict, Union

from backend.core import config
from backend.core.utils import safe_filename, log_event


# ============================================================
# 🔎 Content signatures per extension
# ============================================================
def _is_text(raw: bytes) -> bool:
    return b"\x00" not in raw[:4096]


SIGNATURES: Dict[str, Callable[[bytes], bool]] = {
    ".pdf": lambda raw: raw.lstrip()[:5] == b"%PDF-",
    ".docx": lambda raw: raw[:4] == b"PK\x03\x04",
    ".doc": lambda raw: raw[:8] == b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1",
    ".txt": _is_text,
    ".md": _is_text,
}


# ============================================================
# ⚙️ CV upload validation
# ============================================================
def validate_file(upload_name: str, content: Union[bytes, bytearray, str]) -> str:
    """
    Check a CV upload before it is written to disk.
    Returns the sanitized filename; raises ValueError with a user-facing message.
    """
    if not upload_name:
        raise ValueError("Missing filename in upload.")

    ext = os.path.splitext(upload_name)[1].lower()
    if ext not in config.ALLOWED_EXTENSIONS:
        allowed = ", ".join(sorted(config.ALLOWED_EXTENSIONS))
        raise ValueError(f"Invalid file extension: {ext or '(none)'} (allowed: {allowed})")

    raw = bytes(content) if isinstance(content, (bytes, bytearray)) else str(content).encode("utf-8")
    if not raw.strip():
        raise ValueError("Uploaded file is empty.")

    size_mb = len(raw) / (1024 * 1024)
    if size_mb > config.MAX_UPLOAD_MB:
        raise ValueError(f"CV exceeds {config.MAX_UPLOAD_MB} MB limit (got {size_mb:.2f} MB).")

    sniff = SIGNATURES.get(ext)
    if sniff is not None and not sniff(raw):
        log_event("upload_rejected", {"ext": ext, "reason": "content_mismatch"})
        raise ValueError(f"File content does not look like a {ext} document.")

    safe_name = safe_filename(upload_name)
    log_event("upload_validated", {"file": safe_name, "ext": ext, "size_mb": round(size_mb, 2)})
    return safe_name
