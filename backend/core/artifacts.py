"""
JOBSCOUT • core/artifacts.py
Temporary storage for CV uploads and rendered cover letters.

  • temporary_upload(...)  scoped CV file, removed on exit (success or failure)
  • ArtifactStore          uniquely named PDFs under the /download directory,
                           reclaimed once older than the configured TTL
"""

from __future__ import annotations

import os
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from backend.core import config
from backend.core.utils import ensure_dir, log_event, safe_filename


@contextmanager
def temporary_upload(content: bytes, filename: str, directory: Optional[Path] = None) -> Iterator[Path]:
    """Write `content` to a uniquely named file and delete it when the block exits."""
    target_dir = Path(directory or config.UPLOAD_DIR)
    ensure_dir(target_dir)
    suffix = Path(filename or "").suffix.lower()
    path = target_dir / f"cv_{uuid.uuid4().hex}{suffix}"
    path.write_bytes(content)
    try:
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            log_event("upload_cleanup_fail", {"path": str(path), "error": str(e)})


class ArtifactStore:
    """Files in `root` are addressable by name and expire after `ttl_seconds`."""

    def __init__(self, root: Optional[Path] = None, ttl_seconds: Optional[int] = None) -> None:
        self.root = Path(root or config.ARTIFACT_DIR)
        self.ttl_seconds = int(config.PDF_TTL_SECONDS if ttl_seconds is None else ttl_seconds)
        ensure_dir(self.root)

    def new_name(self, label: str, suffix: str = ".pdf") -> str:
        return f"{safe_filename(label)}_{uuid.uuid4().hex}{suffix}"

    def write(self, label: str, data: bytes, suffix: str = ".pdf") -> str:
        """Store `data` under a fresh unique name and return that name."""
        name = self.new_name(label, suffix)
        tmp = self.root / f".{name}.part"
        tmp.write_bytes(data)
        os.replace(tmp, self.root / name)
        log_event("artifact_written", {"name": name, "size_kb": round(len(data) / 1024, 1)})
        return name

    def path_for(self, name: str) -> Path:
        return self.root / safe_filename(name)

    def sweep_expired(self, now: Optional[float] = None) -> List[str]:
        """Delete artifacts whose mtime is older than the TTL; returns removed names."""
        cutoff = (now if now is not None else time.time()) - self.ttl_seconds
        removed: List[str] = []
        for p in self.root.iterdir():
            if not p.is_file():
                continue
            try:
                if p.stat().st_mtime < cutoff:
                    p.unlink()
                    removed.append(p.name)
            except FileNotFoundError:
                continue
            except OSError as e:
                log_event("artifact_sweep_error", {"name": p.name, "error": str(e)})
        if removed:
            log_event("artifacts_swept", {"removed": len(removed)})
        return removed
