"""
Data models for NSW Government job scraper
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any


@dataclass
class NSWJobSummary:
    """Job card on an iworkfor.nsw.gov.au search results page"""

    # Identification
    job_id: str  # e.g. "00009ABC" (job reference number)
    title: str
    job_url: str

    # Dates
    posting_date: str = ""
    closing_date: str = ""

    # Classification
    categories: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)

    # Organization
    department: str = ""
    job_type: str = ""  # e.g. "Temporary Full-Time"

    # Description snippet
    description: str = ""

    def to_dict(self):
        """Convert to dictionary"""
        return asdict(self)


@dataclass
class NSWJobDetails:
    """Full job advertisement from the job detail page"""

    description_html: str
    summary: str = ""
    remuneration: Optional[str] = None  # e.g. "Clerk Grade 9/10, $126,071 - $139,511"
    organisation: Optional[str] = None
    job_reference: Optional[str] = None
    work_type: Optional[str] = None
    closing_date: Optional[str] = None
    contact: Optional[str] = None
    contact_email: Optional[str] = None
    related_jobs_count: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self):
        """Convert to dictionary"""
        return asdict(self)
