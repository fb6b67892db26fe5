import json
from datetime import datetime

from jobspider.core.models import CrawlMetadata, CrawlResult, ErrorRecord
from jobspider.core.storage import JobStore

NOW = datetime(2026, 10, 18, 14, 5, 9)


def test_layout(tmp_path):
    store = JobStore(tmp_path, "NSW")
    store.ensure_dirs()

    assert store.result_path(NOW) == tmp_path / "NSW" / "jobs" / "2026-10-18.json"
    assert store.error_path(NOW) == tmp_path / "NSW" / "errors" / "Error at 2026-10-18-14-05-09.json"
    assert store.screenshot_path("nsw-error", NOW).name == "nsw-error-2026-10-18-14-05-09.png"
    for directory in [store.jobs_dir, store.errors_dir, store.cache_dir, store.screenshots_dir]:
        assert directory.is_dir()


def test_write_result(store):
    metadata = CrawlMetadata(
        total_jobs=1, expected_total_jobs=1, total_pages=1, jobs_created=1,
        jobs_skipped=0, failed_scrapes=0, date_scraped="2026-10-18-14-05-09",
    )
    result = CrawlResult(metadata, [{"job_id": "NSW-001", "title": "Ecologist – Biodiversity", "details": None}])

    path = store.write_result(result, NOW)

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    assert data["metadata"]["jobs_created"] == 1
    assert data["jobs"][0]["title"] == "Ecologist – Biodiversity"
    assert store.latest_result_file() == path


def test_write_error(store):
    path = store.write_error(ErrorRecord(text="Navigation timeout", date="2026-10-18"), NOW)

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    assert data == {
        "text": "Navigation timeout",
        "date": "2026-10-18",
        "metadata": {
            "total_jobs_attempted": 0,
            "jobs_created": 0,
            "jobs_skipped": 0,
            "pages_processed": 0,
            "error_occurred": True,
        },
    }


def test_latest_result_file_is_newest_date(store):
    for name in ["2026-10-17.json", "2026-09-30.json", "2026-10-18.json"]:
        (store.jobs_dir / name).write_text("{}", encoding='utf-8')

    assert store.latest_result_file().name == "2026-10-18.json"


def test_journal_skips_truncated_lines(store):
    store.append_journal({"job_id": "A1"})
    with open(store.journal_path, 'a', encoding='utf-8') as f:
        f.write('{"job_id": "A2", "deta')

    assert list(store.read_journal()) == [{"job_id": "A1"}]

    store.clear_journal()
    assert list(store.read_journal()) == []
