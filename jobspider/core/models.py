"""
Data models shared by every job spider
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any


@dataclass
class CacheEntry:
    """Previously scraped job details, keyed by job ID in the cache store"""
    last_scraped: datetime
    details: Dict[str, Any]


@dataclass
class CrawlMetadata:
    """Summary block written at the top of every result file"""
    total_jobs: int
    expected_total_jobs: int
    total_pages: int
    jobs_created: int
    jobs_skipped: int
    failed_scrapes: int
    date_scraped: str

    def to_dict(self):
        """Convert to dictionary"""
        return asdict(self)


@dataclass
class CrawlResult:
    """Everything collected by one successful crawl session"""
    metadata: CrawlMetadata
    jobs: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self):
        """Convert to dictionary"""
        return {
            "metadata": self.metadata.to_dict(),
            "jobs": self.jobs,
        }


@dataclass
class ErrorMetadata:
    total_jobs_attempted: int = 0
    jobs_created: int = 0
    jobs_skipped: int = 0
    pages_processed: int = 0
    error_occurred: bool = True


@dataclass
class ErrorRecord:
    """Written instead of a CrawlResult when a session fails"""
    text: str
    date: str
    metadata: ErrorMetadata = field(default_factory=ErrorMetadata)

    def to_dict(self):
        """Convert to dictionary"""
        return asdict(self)


def merge_job(summary: Dict[str, Any], details: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Combine a list-level job summary with its details into one job record."""
    record = dict(summary)
    record["details"] = details
    return record
