"""
Description of a paginated listing source.

Each source package (NSW, SEEK) builds one JobSource from its config and
parser modules; the crawl engine only talks to this interface.
"""

from dataclasses import dataclass
from typing import Callable, Optional, List, Dict, Any

from bs4 import BeautifulSoup, Tag


@dataclass
class JobSource:
    code: str
    name: str

    # Pagination
    page_url: Callable[[int], str]
    page_size: int

    # Selectors to wait for
    ready_selector: str  # list page has rendered (cards, count or error message)
    detail_selector: str  # main container of a detail page

    # Parsing
    find_items: Callable[[BeautifulSoup], List[Tag]]
    parse_item: Callable[[Tag], Dict[str, Any]]
    parse_total: Callable[[str], Optional[int]]
    parse_details: Callable[[str], Dict[str, Any]]
    check_page: Optional[Callable[[str], None]] = None  # raises SourceError

    # When set, every list page must render at least one item within the
    # timeout; an empty page is then a navigation timeout, not an early stop.
    item_selector: Optional[str] = None

    # When the announced total is missing or zero: True fails the session,
    # False finishes it cleanly with no jobs.
    empty_total_is_error: bool = False

    # Anti-automation challenge detection
    is_challenge: Optional[Callable[[str], bool]] = None

    wait_until: str = "domcontentloaded"
    page_delay: float = 0
    job_delay: float = 0
