from backend.core.normalize import normalize_job, normalize_jobs
from backend.core.utils import utc_today_iso


def test_empty_record_gets_every_default():
    job = normalize_job({})

    assert job.job_title == "Untitled Role"
    assert job.company_name == "Unknown Company"
    assert job.company_logo is None
    assert job.job_url == ""
    assert job.apply_url == ""
    assert job.description == ""
    assert job.scraped_at == utc_today_iso()
    assert job.job_id
    assert job.score is None and job.verdict is None


def test_generated_ids_are_distinct():
    a = normalize_job({"title": "One"})
    b = normalize_job({"title": "Two"})
    assert a.job_id != b.job_id


def test_apply_url_falls_back_to_job_url():
    job = normalize_job({"url": "https://linkedin.com/jobs/view/1"})
    assert job.job_url == "https://linkedin.com/jobs/view/1"
    assert job.apply_url == job.job_url


def test_primary_aliases_win_over_secondary():
    job = normalize_job({
        "id": 4021,
        "jobId": "ignored",
        "companyName": "Globex",
        "company": "ignored",
        "title": "Platform Engineer",
        "jobTitle": "ignored",
        "description": "Own the platform",
        "text": "ignored",
        "postedAt": "2026-09-30",
    })
    assert job.job_id == "4021"
    assert job.company_name == "Globex"
    assert job.job_title == "Platform Engineer"
    assert job.description == "Own the platform"
    assert job.scraped_at == "2026-09-30"


def test_secondary_aliases_are_used_when_primary_missing():
    job = normalize_job({
        "jobId": "abc",
        "company": "Initech",
        "logo": "https://img.example.com/logo.png",
        "jobTitle": "SRE",
        "link": "https://example.com/job/abc",
        "applyUrl": "https://example.com/apply/abc",
        "descriptionText": "Keep things up",
    })
    assert job.job_id == "abc"
    assert job.company_name == "Initech"
    assert job.company_logo == "https://img.example.com/logo.png"
    assert job.job_title == "SRE"
    assert job.job_url == "https://example.com/job/abc"
    assert job.apply_url == "https://example.com/apply/abc"
    assert job.description == "Keep things up"


def test_empty_strings_fall_through_to_defaults():
    job = normalize_job({"title": "", "companyName": "", "company": "Fallback Inc"})
    assert job.job_title == "Untitled Role"
    assert job.company_name == "Fallback Inc"


def test_normalize_jobs_drops_repeated_ids_and_non_mappings():
    jobs = normalize_jobs([
        {"id": "1", "title": "First"},
        "not a record",
        {"id": "1", "title": "Duplicate"},
        {"title": "No id"},
    ])
    assert [j.job_title for j in jobs] == ["First", "No id"]
    assert len({j.job_id for j in jobs}) == 2


def test_serializes_with_camel_case_keys():
    payload = normalize_job({"id": "7", "title": "Dev"}).model_dump(by_alias=True)
    assert {"jobId", "companyName", "companyLogo", "jobTitle", "jobUrl", "applyUrl",
            "description", "scrapedAt", "score", "verdict"} == set(payload)
