import json

from jobspider import settings
from jobspider.upload_to_supabase import (
    load_latest_jobs, parse_salary, transform_job_data, upload_all_jobs,
)


def test_parse_salary_range():
    assert parse_salary("Clerk Grade 9/10, $126,071 - $139,511") == {
        "salary_min": 126071.0,
        "salary_max": 139511.0,
        "salary_currency": "AUD",
    }


def test_parse_salary_thousands_suffix_and_plain_amounts():
    assert parse_salary("$90k - $100k p.a.")["salary_max"] == 100000.0
    assert parse_salary("$139511 package")["salary_min"] == 139511.0
    assert parse_salary("Competitive")["salary_min"] is None
    assert parse_salary(None)["salary_max"] is None


def test_transform_nsw_job():
    job = {
        "job_id": "00009ABC",
        "title": "Principal Policy Officer",
        "job_url": "https://iworkfor.nsw.gov.au/job/00009abc",
        "closing_date": "20-Oct-2026",
        "locations": ["Sydney", "Parramatta"],
        "department": "DCCEEW",
        "job_type": "Ongoing Full-Time",
        "description": "Lead policy work.",
        "details": {
            "description_html": "<p>About the role</p>",
            "remuneration": "$126,071 - $139,511",
            "organisation": None,
            "metadata": {"last_scraped": "2026-10-18T09:00:00+00:00"},
        },
    }

    row = transform_job_data("NSW", job, "2026-10-18-09-30-00")

    assert row["job_board"] == "I work for NSW"
    assert row["organisation"] == "DCCEEW"
    assert row["location"] == "Sydney, Parramatta"
    assert row["work_type"] == "Ongoing Full-Time"
    assert row["salary_min"] == 126071.0
    assert row["description_text"] == "About the role"
    assert row["details_scraped_at"] == "2026-10-18T09:00:00+00:00"
    assert row["scraper_version"] == settings.SCRAPER_VERSION


def test_transform_seek_job_without_details():
    job = {"job_id": "81234567", "title": "Project Officer", "company": "DCCEEW",
           "location": "Parramatta NSW", "work_arrangement": "Hybrid", "details": None}

    row = transform_job_data("SEEK", job, None)

    assert row["job_board"] == "SEEK"
    assert row["organisation"] == "DCCEEW"
    assert row["work_type"] == "Hybrid"
    assert row["salary"] is None
    assert row["description_text"] is None


def test_load_latest_jobs_reads_newest_file(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, 'DATA_DIR', tmp_path)
    jobs_dir = tmp_path / "NSW" / "jobs"
    jobs_dir.mkdir(parents=True)
    for name, job_id in [("2026-10-17.json", "OLD"), ("2026-10-18.json", "NEW")]:
        with open(jobs_dir / name, 'w', encoding='utf-8') as f:
            json.dump({"metadata": {"date_scraped": name[:-5]}, "jobs": [{"job_id": job_id, "details": None}]}, f)

    rows = load_latest_jobs("NSW")

    assert [row["job_id"] for row in rows] == ["NEW"]
    assert rows[0]["date_scraped"] == "2026-10-18"


def test_dry_run_does_not_connect(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(settings, 'DATA_DIR', tmp_path)
    monkeypatch.setattr("jobspider.upload_to_supabase.get_supabase_client",
                        lambda: (_ for _ in ()).throw(AssertionError("should not connect")))
    jobs_dir = tmp_path / "SEEK" / "jobs"
    jobs_dir.mkdir(parents=True)
    (jobs_dir / "2026-10-18.json").write_text(
        json.dumps({"metadata": {}, "jobs": [{"job_id": "1", "title": "Officer", "details": None}]}),
        encoding='utf-8')

    upload_all_jobs("SEEK", dry_run=True)

    assert "Validated: Officer" in capsys.readouterr().out
