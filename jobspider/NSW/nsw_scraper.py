"""
NSW Government Job Scraper

Scrapes job postings from https://iworkfor.nsw.gov.au/ for the Department of
Climate Change, Energy, the Environment and Water.
"""

from jobspider.core.runner import run_spider
from jobspider.core.source import JobSource

from . import config, parser


def page_url(page_number: int) -> str:
    return f"{config.SEARCH_URL}&page={page_number}&pagesize={config.PAGE_SIZE}"


SOURCE = JobSource(
    code=config.CODE,
    name=config.NAME,
    page_url=page_url,
    page_size=config.PAGE_SIZE,
    ready_selector=config.READY_SELECTOR,
    detail_selector=config.DETAIL_SELECTOR,
    find_items=parser.find_job_cards,
    parse_item=parser.parse_job_card,
    parse_total=parser.parse_total_jobs,
    parse_details=parser.parse_job_details,
    # No announced count means the agency has nothing advertised
    empty_total_is_error=False,
    page_delay=config.DELAY_BETWEEN_PAGES,
    job_delay=config.DELAY_BETWEEN_JOBS,
)


def main():
    run_spider(SOURCE)


if __name__ == "__main__":
    main()
