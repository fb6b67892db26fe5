"""
List-page extraction.
"""

import logging
import math
from typing import List, Dict, Any, Optional

from bs4 import BeautifulSoup

from jobspider.core.source import JobSource

logger = logging.getLogger(__name__)


def total_pages(total_jobs: int, page_size: int) -> int:
    """Number of list pages needed to show total_jobs at page_size per page."""
    if total_jobs <= 0:
        return 0
    return math.ceil(total_jobs / page_size)


class PageExtractor:
    """
    Turns a rendered list page into job summaries.

    A card that fails to parse is counted in `failed_extractions` and dropped;
    the remaining cards on the page are still parsed.
    """

    def __init__(self, source: JobSource):
        self.source = source
        self.failed_extractions = 0

    def announced_total(self, page) -> Optional[int]:
        html = page.content()
        if self.source.check_page:
            self.source.check_page(html)
        return self.source.parse_total(html)

    def extract(self, page) -> List[Dict[str, Any]]:
        return self.extract_html(page.content())

    def extract_html(self, html: str) -> List[Dict[str, Any]]:
        soup = BeautifulSoup(html, 'html.parser')
        cards = self.source.find_items(soup)
        logger.info(f"  📋 Found {len(cards)} job listings to process...")

        summaries = []
        for index, card in enumerate(cards, 1):
            try:
                summaries.append(self.source.parse_item(card))
            except Exception as e:
                self.failed_extractions += 1
                logger.warning(f"  ⚠️  Error parsing job listing {index}: {e}")

        return summaries
