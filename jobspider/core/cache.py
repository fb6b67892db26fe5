"""
In-memory cache of job details, rebuilt from previously persisted results.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Callable

from jobspider import settings
from jobspider.core.models import CacheEntry
from jobspider.core.storage import JobStore, TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a stored timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings (with or without a trailing "Z") and the
    "YYYY-MM-DD-HH-MM-SS" format used for `date_scraped`. Naive values are
    taken as local time.
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed.astimezone(timezone.utc)


def record_job_id(record: Dict[str, Any]) -> Optional[str]:
    return record.get("job_id") or record.get("jobId")


def details_last_scraped(details: Dict[str, Any]) -> Optional[datetime]:
    metadata = details.get("metadata") or {}
    return parse_timestamp(metadata.get("last_scraped") or metadata.get("lastScraped"))


class CacheStore:
    """
    Job details keyed by job ID.

    An entry is fresh while it is at most `max_age` old; stale entries stay in
    memory but are never returned by `lookup`. Inserts are appended to the
    store's journal so fetched details survive a crash before the final
    result file is written.
    """

    def __init__(self, store: JobStore,
                 max_age: timedelta = timedelta(hours=settings.CACHE_MAX_AGE_HOURS),
                 clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.max_age = max_age
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self):
        return len(self._entries)

    def __contains__(self, job_id):
        return job_id in self._entries

    def load(self):
        """Rebuild the cache from every result file plus the journal."""
        self._entries.clear()

        for data in self.store.read_result_files():
            file_scraped = parse_timestamp((data.get("metadata") or {}).get("date_scraped"))
            for job in data.get("jobs") or []:
                job_id = record_job_id(job)
                details = job.get("details")
                if not job_id or not details:
                    continue
                last_scraped = details_last_scraped(details) or file_scraped
                if last_scraped is None:
                    continue
                self._keep_newest(job_id, CacheEntry(last_scraped, details))

        journal_count = 0
        for entry in self.store.read_journal():
            job_id = entry.get("job_id")
            last_scraped = parse_timestamp(entry.get("last_scraped"))
            details = entry.get("details")
            if not job_id or not details or last_scraped is None:
                continue
            self._keep_newest(job_id, CacheEntry(last_scraped, details))
            journal_count += 1

        logger.info(f"📂 Loaded {len(self._entries)} jobs from cache ({journal_count} journal entries)")

    def lookup(self, job_id: str) -> Optional[Dict[str, Any]]:
        """Return cached details for job_id if the entry is still fresh."""
        entry = self._entries.get(job_id)
        if entry is None:
            return None
        if self.clock() - entry.last_scraped > self.max_age:
            return None
        return entry.details

    def insert(self, job_id: str, details: Dict[str, Any]) -> CacheEntry:
        """Store details for job_id, replacing any existing entry.

        The details' metadata.last_scraped is stamped with the insert time.
        """
        entry = CacheEntry(self.clock(), details)
        details.setdefault("metadata", {})["last_scraped"] = entry.last_scraped.isoformat()
        self._entries[job_id] = entry
        self.store.append_journal({
            "job_id": job_id,
            "last_scraped": entry.last_scraped.isoformat(),
            "details": details,
        })
        return entry

    def checkpoint(self):
        """Drop the journal once its entries are persisted in a result file."""
        self.store.clear_journal()

    def _keep_newest(self, job_id: str, entry: CacheEntry):
        current = self._entries.get(job_id)
        if current is None or entry.last_scraped >= current.last_scraped:
            self._entries[job_id] = entry
