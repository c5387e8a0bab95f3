"""Shared fixtures: isolate data directories and credentials before backend imports."""

import os
import tempfile
from pathlib import Path

_DATA_ROOT = Path(tempfile.mkdtemp(prefix="jobscout-tests-"))
os.environ["DATA_DIR"] = str(_DATA_ROOT)
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ["APIFY_API_TOKEN"] = ""

import pytest

from backend.core import config
from backend.core.models import CvProfile, Job


@pytest.fixture
def profile() -> CvProfile:
    return CvProfile(
        skills=["Go", "Kubernetes", "distributed systems"],
        profile_summary="Senior Go engineer, 8 years, distributed systems",
        experience_highlights=["Built a sharded queue", "Led SRE rotation", "Cut p99 latency 40%"],
    )


@pytest.fixture
def make_job():
    def _make(job_id: str, title: str = "Backend Engineer", description: str = "Go services") -> Job:
        return Job(
            job_id=job_id,
            company_name="Acme",
            job_title=title,
            job_url=f"https://jobs.example.com/{job_id}",
            apply_url=f"https://jobs.example.com/{job_id}",
            description=description,
            scraped_at="2026-10-01",
        )

    return _make


@pytest.fixture
def apify_config(monkeypatch):
    """Fast, deterministic Apify settings."""
    monkeypatch.setattr(config, "APIFY_API_TOKEN", "")
    monkeypatch.setattr(config, "APIFY_ACTOR_SLUG", "curious_coder~linkedin-jobs-scraper")
    monkeypatch.setattr(config, "APIFY_MAX_ITEMS", 100)
    monkeypatch.setattr(config, "APIFY_POLL_INTERVAL_SEC", 5.0)
    monkeypatch.setattr(config, "APIFY_POLL_MAX_ATTEMPTS", 120)
    monkeypatch.setattr(config, "APIFY_POLL_TIMEOUT_SEC", 900.0)
    return config
