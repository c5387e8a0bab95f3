import os
import time
from pathlib import Path

import pytest

from backend.core.artifacts import ArtifactStore, temporary_upload


def test_upload_removed_after_block(tmp_path: Path):
    with temporary_upload(b"cv bytes", "resume.PDF", directory=tmp_path) as path:
        assert path.read_bytes() == b"cv bytes"
        assert path.suffix == ".pdf"
    assert not path.exists()


def test_upload_removed_when_block_raises(tmp_path: Path):
    with pytest.raises(RuntimeError):
        with temporary_upload(b"cv bytes", "resume.txt", directory=tmp_path) as path:
            raise RuntimeError("extraction blew up")
    assert not path.exists()
    assert list(tmp_path.iterdir()) == []


def test_concurrent_uploads_get_distinct_names(tmp_path: Path):
    with temporary_upload(b"a", "cv.txt", directory=tmp_path) as a:
        with temporary_upload(b"b", "cv.txt", directory=tmp_path) as b:
            assert a != b


def test_write_returns_unique_safe_names(tmp_path: Path):
    store = ArtifactStore(root=tmp_path, ttl_seconds=60)

    first = store.write("cover_letter_Acme & Co", b"%PDF-1")
    second = store.write("cover_letter_Acme & Co", b"%PDF-2")

    assert first != second
    assert first.startswith("cover_letter_Acme___Co_")
    assert first.endswith(".pdf")
    assert store.path_for(first).read_bytes() == b"%PDF-1"
    assert not any(p.name.endswith(".part") for p in tmp_path.iterdir())


def test_sweep_removes_only_expired(tmp_path: Path):
    store = ArtifactStore(root=tmp_path, ttl_seconds=3600)
    old = store.write("old", b"old")
    fresh = store.write("fresh", b"fresh")
    two_hours_ago = time.time() - 7200
    os.utime(store.path_for(old), (two_hours_ago, two_hours_ago))

    removed = store.sweep_expired()

    assert removed == [old]
    assert not store.path_for(old).exists()
    assert store.path_for(fresh).exists()
