"""
Entry point shared by the per-source scraper modules.
"""

import logging
import time

from jobspider import settings
from jobspider.core.cache import CacheStore
from jobspider.core.log import setup_logging
from jobspider.core.models import CrawlResult
from jobspider.core.provider import BrowserProvider
from jobspider.core.recovery import run_with_recovery
from jobspider.core.session import CrawlSession
from jobspider.core.source import JobSource
from jobspider.core.storage import JobStore

logger = logging.getLogger(__name__)


def run_spider(source: JobSource, headless: bool = settings.HEADLESS) -> CrawlResult:
    """
    Crawl a source end to end: load the cache once, then run sessions under
    the recovery loop until one succeeds or a failure is final.
    """
    setup_logging(source.code)
    start_time = time.time()

    logger.info("=" * 80)
    logger.info(f"Starting {source.name} scraper")
    logger.info(f"Version: {settings.SCRAPER_VERSION}")
    logger.info(f"Headless mode: {headless}")
    logger.info("=" * 80)

    store = JobStore(settings.DATA_DIR, source.code)
    store.ensure_dirs()

    # Loaded once per launch and shared by every restart attempt
    cache = CacheStore(store)
    cache.load()

    def new_session():
        return CrawlSession(source, BrowserProvider(headless=headless), cache, store)

    result = run_with_recovery(new_session)

    duration = time.time() - start_time
    logger.info(f"⏱️  Duration: {duration:.1f} seconds ({duration/60:.1f} minutes)")
    logger.info(f"💾 Data saved to: {store.root}")
    return result
