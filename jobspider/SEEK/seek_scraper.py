"""
SEEK Job Scraper

Scrapes DCCEEW job ads from https://www.seek.com.au/. SEEK sits behind
Cloudflare, so the browser runs headed and the operator may be asked to
complete a verification before crawling starts.
"""

from jobspider.core.runner import run_spider
from jobspider.core.source import JobSource

from . import config, parser


def page_url(page_number: int) -> str:
    if page_number == 1:
        return config.SEARCH_URL
    return f"{config.SEARCH_URL}?page={page_number}"


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
    check_page=parser.check_search_page,
    # Cards render after the count; SEEK never legitimately serves an empty page
    item_selector=config.JOB_CARD_SELECTOR,
    # SEEK always shows a count for a valid search; a missing one means the page broke
    empty_total_is_error=True,
    is_challenge=parser.is_verification_page,
    wait_until=config.WAIT_UNTIL,
    page_delay=config.DELAY_BETWEEN_PAGES,
    job_delay=config.DELAY_BETWEEN_JOBS,
)


def main():
    # Verification has to be solved in a visible browser window
    run_spider(SOURCE, headless=False)


if __name__ == "__main__":
    main()
