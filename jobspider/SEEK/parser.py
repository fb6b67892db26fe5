"""
Parser for SEEK job listings and job ads
"""

import re
from typing import Optional, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from jobspider.core.errors import SourceError

from . import config
from .models import SEEKJobSummary, SEEKJobDetails


def _text(element: Optional[Tag]) -> str:
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def _automation(element, name: str) -> Optional[Tag]:
    return element.select_one(f'[data-automation="{name}"]')


def find_job_cards(soup: BeautifulSoup) -> List[Tag]:
    return soup.select(config.JOB_CARD_SELECTOR)


def parse_job_card(card: Tag) -> dict:
    """
    Parse one job card from the search results.

    Raises:
        ValueError: If the card has no data-job-id.
    """
    job_id = (card.get('data-job-id') or "").strip()
    if not job_id:
        raise ValueError("Job card has no data-job-id")

    title_elem = _automation(card, 'jobTitle')
    href = title_elem.get('href', '') if title_elem else ''

    summary = SEEKJobSummary(
        job_id=job_id,
        title=_text(title_elem),
        job_url=urljoin(config.BASE_URL, href) if href else "",
        company=_text(_automation(card, 'jobCompany')),
        location=_text(_automation(card, 'jobLocation')),
        work_arrangement=re.sub(r'[()]', '', _text(card.select_one('[data-testid="work-arrangement"]'))),
        classification=re.sub(r'[()]', '', _text(_automation(card, 'jobClassification'))).strip(),
        sub_classification=_text(_automation(card, 'jobSubClassification')),
        bullet_points=[_text(span) for span in card.select('ul li span') if _text(span)],
        description=_text(_automation(card, 'jobShortDescription')),
    )
    return summary.to_dict()


def check_search_page(html_content: str):
    """
    Raises:
        SourceError: If SEEK rendered its search error message.
    """
    soup = BeautifulSoup(html_content, 'html.parser')
    error_elem = soup.select_one(config.SEARCH_ERROR_SELECTOR)
    if error_elem is not None:
        raise SourceError(f"Seek returned an error: {_text(error_elem)}")


def parse_total_jobs(html_content: str) -> Optional[int]:
    """Read the job count from "1,234 jobs" in the total jobs message."""
    soup = BeautifulSoup(html_content, 'html.parser')
    match = re.search(r'(\d[\d,]*)\s+jobs?', _text(soup.select_one(config.TOTAL_JOBS_SELECTOR)))
    if not match:
        return None
    return int(match.group(1).replace(',', ''))


def is_verification_page(html_content: str) -> bool:
    """Detect the Cloudflare "Help us keep SEEK secure" challenge."""
    soup = BeautifulSoup(html_content, 'html.parser')
    title = _text(soup.title)
    if config.VERIFICATION_TITLE in title:
        return True
    if soup.select_one(config.VERIFICATION_SELECTOR) is not None:
        return True
    return config.VERIFICATION_TEXT in _text(soup.body or soup)


def parse_job_details(html_content: str) -> dict:
    """
    Parse a SEEK job ad page.

    Raises:
        ValueError: If the job ad container is missing.
    """
    soup = BeautifulSoup(html_content, 'html.parser')

    ad = soup.select_one(config.DETAIL_SELECTOR)
    if ad is None:
        raise ValueError("Job ad details not found")

    details = SEEKJobDetails(
        description="".join(str(child) for child in ad.contents).strip(),
        salary=_text(_automation(soup, 'job-detail-salary')),
        work_type=_text(_automation(soup, 'job-detail-work-type')),
        listing_date=_text(_automation(soup, 'job-detail-date')),
        additional_details=[_text(p) for p in ad.find_all('p') if _text(p)],
    )
    return details.to_dict()
