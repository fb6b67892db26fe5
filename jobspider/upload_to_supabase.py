"""
Upload scraped jobs to Supabase

Reads the newest result file from data/<SOURCE>/jobs/ and upserts every job
into the source's table (nsw_jobs or seek_jobs). Optional: run it by hand after a
crawl, the spiders never import it.
"""

import json
import os
import re
from pathlib import Path
from typing import Optional, Dict, Any, List

from bs4 import BeautifulSoup
from dotenv import load_dotenv
from supabase import create_client, Client

from jobspider import settings
from jobspider.core.storage import JobStore

# Load environment variables from .env file in project root
load_dotenv(settings.PROJECT_ROOT / ".env")

TABLES = {
    "NSW": "nsw_jobs",
    "SEEK": "seek_jobs",
}

JOB_BOARDS = {
    "NSW": "I work for NSW",
    "SEEK": "SEEK",
}


def get_supabase_client() -> Client:
    """
    Create and return a Supabase client.

    Raises:
        ValueError: If credentials are not set
    """
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    if not url or not key:
        raise ValueError(
            "Supabase credentials not found. Please set SUPABASE_URL and SUPABASE_KEY "
            "environment variables.\n\n"
            "Example:\n"
            "export SUPABASE_URL='https://your-project.supabase.co'\n"
            "export SUPABASE_KEY='your-service-role-key'\n"
        )

    return create_client(url, key)


def parse_salary(salary_str: Optional[str]) -> Dict[str, Any]:
    """
    Parse salary string to extract min and max.

    Args:
        salary_str: Salary string (e.g., "Clerk Grade 9/10, $126,071 - $139,511", "$90k - $100k p.a.")

    Returns:
        Dictionary with salary_min, salary_max, salary_currency
    """
    result = {
        "salary_min": None,
        "salary_max": None,
        "salary_currency": "AUD"
    }

    if not salary_str:
        return result

    amounts = []
    for number, suffix in re.findall(r'\$\s*(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)\s*([kK]?)', salary_str):
        amount = float(number.replace(',', ''))
        if suffix:
            amount *= 1000
        amounts.append(amount)

    if amounts:
        result["salary_min"] = min(amounts)
        result["salary_max"] = max(amounts)

    return result


def html_to_text(html_str: Optional[str]) -> Optional[str]:
    """Convert HTML to plain text for full-text search."""
    if not html_str:
        return None
    soup = BeautifulSoup(html_str, 'html.parser')
    return soup.get_text(separator=' ', strip=True)


def transform_job_data(code: str, job: Dict[str, Any], date_scraped: Optional[str]) -> Dict[str, Any]:
    """
    Flatten a job record (summary plus details) into a database row.
    """
    details = job.get("details") or {}
    metadata = details.get("metadata") or {}

    if code == "NSW":
        salary = details.get("remuneration")
        description_html = details.get("description_html")
        organisation = details.get("organisation") or job.get("department")
        location = ", ".join(job.get("locations") or [])
        work_type = details.get("work_type") or job.get("job_type")
    else:
        salary = details.get("salary")
        description_html = details.get("description")
        organisation = job.get("company")
        location = job.get("location")
        work_type = details.get("work_type") or job.get("work_arrangement")

    salary_info = parse_salary(salary)

    return {
        # Job Identification
        "job_id": job.get("job_id"),
        "job_title": job.get("title"),

        # Source Information
        "jurisdiction": "New South Wales, Australia",
        "job_board": JOB_BOARDS.get(code, code),
        "organisation": organisation,
        "url": job.get("job_url"),

        # Employment Details
        "location": location,
        "work_type": work_type,
        "closing_date": job.get("closing_date") or details.get("closing_date"),

        # Salary Information
        "salary": salary,
        "salary_min": salary_info["salary_min"],
        "salary_max": salary_info["salary_max"],
        "salary_currency": salary_info["salary_currency"],

        # Job Content
        "summary": job.get("description"),
        "description_html": description_html,
        "description_text": html_to_text(description_html),

        # Scraping Metadata
        "details_scraped_at": metadata.get("last_scraped"),
        "date_scraped": date_scraped,
        "scraper_version": settings.SCRAPER_VERSION,
    }


def load_latest_jobs(code: str) -> List[Dict[str, Any]]:
    """Return database rows for every job in the newest result file."""
    latest: Optional[Path] = JobStore(settings.DATA_DIR, code).latest_result_file()
    if latest is None:
        return []

    with open(latest, 'r', encoding='utf-8') as f:
        data = json.load(f)

    date_scraped = (data.get("metadata") or {}).get("date_scraped")
    return [transform_job_data(code, job, date_scraped) for job in data.get("jobs") or []]


def upload_all_jobs(code: str, dry_run: bool = False):
    """
    Upload the newest result file of a source to Supabase.

    Args:
        code: Source code ("NSW" or "SEEK")
        dry_run: If True, only validate data without uploading
    """
    rows = load_latest_jobs(code)
    if not rows:
        print(f"❌ No result files found for {code}")
        return

    print(f"📊 Found {len(rows)} {code} jobs in the latest result file")
    print()

    if dry_run:
        print("🔍 DRY RUN MODE - No data will be uploaded")
        for i, row in enumerate(rows, 1):
            print(f"[{i}/{len(rows)}] ✓ Validated: {(row['job_title'] or '')[:50]}... (ID: {row['job_id']})")
        return

    try:
        supabase = get_supabase_client()
        print("✅ Connected to Supabase")
        print()
    except ValueError as e:
        print(f"❌ {e}")
        return

    successful = 0
    failed = 0
    table = TABLES[code]

    for i, row in enumerate(rows, 1):
        try:
            supabase.table(table).upsert(row, on_conflict="job_id").execute()
            print(f"[{i}/{len(rows)}] ✅ Uploaded: {(row['job_title'] or '')[:50]}... (ID: {row['job_id']})")
            successful += 1
        except Exception as e:
            print(f"[{i}/{len(rows)}] ❌ Error uploading job {row.get('job_id')}: {str(e)}")
            failed += 1

    print()
    print("=" * 60)
    print("📊 Upload Summary")
    print("=" * 60)
    print(f"Total jobs: {len(rows)}")
    print(f"✅ Successful: {successful}")
    print(f"❌ Failed: {failed}")
    print("=" * 60)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Upload the latest scraped jobs to Supabase")
    parser.add_argument("source", choices=list(TABLES.keys()))
    parser.add_argument("--dry-run", action="store_true", help="Validate without uploading")
    args = parser.parse_args()

    upload_all_jobs(args.source, dry_run=args.dry_run)
