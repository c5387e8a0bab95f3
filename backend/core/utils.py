"""
JOBSCOUT • core/utils.py
Common utility functions shared across backend modules.
"""

from __future__ import annotations

import re
import html
import json
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from backend.core import config

LOG_PATH = Path(config.LOG_PATH)
LOG_PATH.parent.mkdir(parents=True, exist_ok=True)


# ============================================================
# 🗂️ Filesystem Helpers
# ============================================================
def ensure_dir(p: Path | str) -> None:
    """Create directory (and parents) if it does not exist."""
    Path(p).mkdir(parents=True, exist_ok=True)


# ============================================================
# 🏷️ Naming Helpers
# ============================================================
def safe_filename(name: Optional[str]) -> str:
    """Convert a string into a safe, cross-platform filename."""
    if not name:
        return "file"
    # keep letters, digits, underscore, dot, dash; replace others with underscore
    name = re.sub(r"[^A-Za-z0-9_.-]", "_", name)
    # Avoid leading/trailing dots or underscores; trim length
    name = name.strip("._") or "file"
    return name[:64]


# ============================================================
# 📜 TEXT HELPERS
# ============================================================
def html_escape(text: Optional[str]) -> str:
    """HTML-escape text for safe embedding in rendered documents."""
    return html.escape(text or "")


def truncate(text: Optional[str], limit: int) -> str:
    """Return at most `limit` leading characters of `text`."""
    return (text or "")[: max(0, int(limit))]


# ============================================================
# 🧠 LOGGING & DIAGNOSTIC HELPERS
# ============================================================
def utc_now_iso() -> str:
    """Return current UTC timestamp in ISO-8601 format."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def utc_today_iso() -> str:
    """Return today's UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def log_event(event: str, meta: Optional[Dict[str, Any]] = None) -> None:
    """
    Append a JSON line to the global event log and print to console.
    Used by all backend modules for diagnostics.

    Accepts:
      • event: short event string
      • meta : optional dict payload (anything JSON-serializable; non-serializable values coerced to str)
    """
    record = {
        "timestamp": utc_now_iso(),
        "event": str(event),
        "meta": meta or {},
    }

    # Console log (truncate very large metas for readability)
    try:
        preview = json.dumps(record["meta"], ensure_ascii=False, default=str)
        if len(preview) > 800:
            preview = preview[:800] + "…"
        print(f"[{record['timestamp']}] {record['event']} :: {preview}")
    except (TypeError, ValueError):
        print(f"[{record['timestamp']}] {record['event']} :: (unserializable meta)")

    # Persistent log (append JSONL)
    try:
        LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with open(LOG_PATH, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    except OSError as e:
        print(f"[JOBSCOUT] ⚠️ Failed to write event log: {e}")


def benchmark(name: str):
    """
    Context manager for timing code blocks.

    Example:
        with benchmark("score_jobs"):
            await score_jobs(...)
    """

    class _Timer:
        def __enter__(self):
            self._start = time.time()
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            duration_ms = (time.time() - self._start) * 1000.0
            log_event("⏱️ benchmark", {"name": name, "duration_ms": round(duration_ms, 1)})

    return _Timer()
