"""
Local JSON storage for crawl results, error records and the detail cache journal.

Layout under the data directory:

    <CODE>/jobs/YYYY-MM-DD.json                    one result file per successful run
    <CODE>/errors/Error at YYYY-MM-DD-HH-MM-SS.json  one file per failed session
    <CODE>/cache/details.jsonl                     append-only detail cache journal
    <CODE>/screenshots/                            diagnostic screenshots
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Iterator, Optional

from jobspider.core.models import CrawlResult, ErrorRecord

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"


def date_stamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(DATE_FORMAT)


def timestamp_stamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


class JobStore:
    """File-system persistence for a single listing source."""

    def __init__(self, data_dir: Path, code: str):
        self.root = Path(data_dir) / code
        self.jobs_dir = self.root / "jobs"
        self.errors_dir = self.root / "errors"
        self.cache_dir = self.root / "cache"
        self.screenshots_dir = self.root / "screenshots"
        self.journal_path = self.cache_dir / "details.jsonl"

    def ensure_dirs(self):
        for directory in [self.jobs_dir, self.errors_dir, self.cache_dir, self.screenshots_dir]:
            directory.mkdir(parents=True, exist_ok=True)

    def result_path(self, now: Optional[datetime] = None) -> Path:
        return self.jobs_dir / f"{date_stamp(now)}.json"

    def error_path(self, now: Optional[datetime] = None) -> Path:
        return self.errors_dir / f"Error at {timestamp_stamp(now)}.json"

    def screenshot_path(self, label: str, now: Optional[datetime] = None) -> Path:
        return self.screenshots_dir / f"{label}-{timestamp_stamp(now)}.png"

    def write_result(self, result: CrawlResult, now: Optional[datetime] = None) -> Path:
        path = self.result_path(now)
        self._write_json(path, result.to_dict())
        logger.info(f"💾 Jobs saved to {path}")
        return path

    def write_error(self, record: ErrorRecord, now: Optional[datetime] = None) -> Path:
        path = self.error_path(now)
        self._write_json(path, record.to_dict())
        logger.info(f"💾 Error log saved to {path}")
        return path

    def result_files(self) -> List[Path]:
        """Result files sorted by name, which is also run-date order."""
        if not self.jobs_dir.exists():
            return []
        return sorted(self.jobs_dir.glob("*.json"))

    def latest_result_file(self) -> Optional[Path]:
        files = self.result_files()
        return files[-1] if files else None

    def read_result_files(self) -> Iterator[Dict[str, Any]]:
        """Yield the parsed content of every result file, skipping unreadable ones."""
        for path in self.result_files():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    yield json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"⚠️  Could not read result file {path.name}: {e}")

    def append_journal(self, entry: Dict[str, Any]):
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        with open(self.journal_path, 'a', encoding='utf-8') as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")

    def clear_journal(self):
        if self.journal_path.exists():
            self.journal_path.unlink()

    def read_journal(self) -> Iterator[Dict[str, Any]]:
        if not self.journal_path.exists():
            return
        with open(self.journal_path, 'r', encoding='utf-8') as f:
            for line_no, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError:
                    # A crash mid-write can leave a truncated last line
                    logger.warning(f"⚠️  Skipping malformed cache journal line {line_no}")

    @staticmethod
    def _write_json(path: Path, payload: Dict[str, Any]):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
