"""
Parser for NSW Government job postings from iworkfor.nsw.gov.au
"""

import re
from typing import Optional, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from . import config
from .models import NSWJobSummary, NSWJobDetails

# Detail page "Label: value" lines, checked in order
DETAIL_LABELS = [
    ("total remuneration package", "remuneration"),
    ("remuneration", "remuneration"),
    ("salary", "remuneration"),
    ("organisation/entity", "organisation"),
    ("organisation", "organisation"),
    ("job reference number", "job_reference"),
    ("work type", "work_type"),
    ("closing date", "closing_date"),
    ("contact", "contact"),
]


def _text(element: Optional[Tag]) -> str:
    """Whitespace-normalised text of an element, or "" if missing."""
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def find_job_cards(soup: BeautifulSoup) -> List[Tag]:
    return soup.select(config.JOB_CARD_SELECTOR)


def parse_job_card(card: Tag) -> dict:
    """
    Parse one job card from the search results page.

    Raises:
        ValueError: If the card has no job reference number.
    """
    job_id = _text(card.select_one('.job-search-result-ref-no'))
    if not job_id:
        raise ValueError("Job card has no reference number")

    link = card.select_one('.card-header a')
    job_url = urljoin(config.BASE_URL, link.get('href', '')) if link else ""

    # "Job posting: 01-Oct-2026 - Closing date: 15-Oct-2026"
    date_text = _text(card.select_one('.card-body p'))
    date_text = date_text.replace('Job posting:', '').replace('Closing date:', '')
    dates = [part.strip() for part in date_text.split(' - ')]
    posting_date = dates[0] if dates else ""
    closing_date = dates[1] if len(dates) > 1 else ""

    # Category spans are nested inside wrapper spans; keep the leaves only
    categories = [
        _text(span) for span in card.select('.nsw-tertiary-blue span')
        if not span.find('span') and _text(span)
    ]
    locations = [
        _text(span) for span in card.select('.nsw-col p:nth-child(3) span')
        if _text(span)
    ]

    summary = NSWJobSummary(
        job_id=job_id,
        title=_text(card.select_one('.card-header a span')),
        job_url=job_url,
        posting_date=posting_date,
        closing_date=closing_date,
        categories=categories,
        locations=locations,
        department=_text(card.select_one('.job-search-result-right h2')),
        job_type=_text(card.select_one('.job-search-result-right p span')),
        description=_text(card.select_one('.nsw-col p:nth-child(4)')),
    )
    return summary.to_dict()


def parse_total_jobs(html_content: str) -> Optional[int]:
    """Read the "N jobs match" count from the first results page."""
    soup = BeautifulSoup(html_content, 'html.parser')
    count_elem = soup.select_one(config.RESULTS_COUNT_SELECTOR)
    text = _text(count_elem) if count_elem else _text(soup.body or soup)

    match = re.search(r'(\d[\d,]*)\s+jobs?\s+match', text)
    if not match:
        return None
    return int(match.group(1).replace(',', ''))


def parse_job_details(html_content: str) -> dict:
    """
    Parse the job detail page.

    Raises:
        ValueError: If the detail container is missing.
    """
    soup = BeautifulSoup(html_content, 'html.parser')

    container = soup.select_one(config.DETAIL_SELECTOR)
    if container is None:
        raise ValueError("Job detail container not found")

    fields = {}
    for element in container.find_all(['p', 'li']):
        text = _text(element)
        lowered = text.lower()
        for label, key in DETAIL_LABELS:
            if lowered.startswith(label + ':') and key not in fields:
                fields[key] = text[len(label) + 1:].strip()
                break

    email_link = container.select_one('a[href^="mailto:"]')
    contact_email = email_link['href'][len('mailto:'):] if email_link else None

    description = container.select_one('.job-detail-des') or container

    details = NSWJobDetails(
        description_html=str(description),
        summary=_text(description)[:500],
        remuneration=fields.get('remuneration'),
        organisation=fields.get('organisation'),
        job_reference=fields.get('job_reference'),
        work_type=fields.get('work_type'),
        closing_date=fields.get('closing_date'),
        contact=fields.get('contact'),
        contact_email=contact_email,
        related_jobs_count=len(soup.select('.related-jobs .job-card')),
    )
    return details.to_dict()
