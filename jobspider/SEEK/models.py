"""
Data models for SEEK job scraper
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any


@dataclass
class SEEKJobSummary:
    """Job card on a SEEK search results page"""

    job_id: str  # data-job-id attribute
    title: str
    job_url: str
    company: str = ""
    location: str = ""
    work_arrangement: str = ""  # e.g. "Hybrid"
    classification: str = ""
    sub_classification: str = ""
    bullet_points: List[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self):
        """Convert to dictionary"""
        return asdict(self)


@dataclass
class SEEKJobDetails:
    """Full job ad from the SEEK job page"""

    description: str  # inner HTML of the job ad
    salary: str = ""
    work_type: str = ""
    listing_date: str = ""
    additional_details: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self):
        """Convert to dictionary"""
        return asdict(self)
