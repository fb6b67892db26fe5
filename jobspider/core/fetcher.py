"""
Detail page fetching with cache lookup.
"""

import logging
from typing import Optional, Dict, Any

from jobspider import settings
from jobspider.core.cache import CacheStore
from jobspider.core.source import JobSource

logger = logging.getLogger(__name__)


class DetailFetcher:
    """
    Resolves job details, from the cache when fresh, otherwise from the
    detail page opened in an isolated browser context.
    """

    def __init__(self, provider, cache: CacheStore, source: JobSource):
        self.provider = provider
        self.cache = cache
        self.source = source
        self.cache_hits = 0
        self.fetched = 0
        self.failed = 0
        self.last_from_cache = False

    def resolve(self, job_id: str, job_url: str) -> Optional[Dict[str, Any]]:
        """
        Return details for a job, or None if the detail page could not be scraped.

        Never raises; a failure only affects this one job.
        """
        self.last_from_cache = False

        cached = self.cache.lookup(job_id)
        if cached is not None:
            self.cache_hits += 1
            self.last_from_cache = True
            logger.info(f"    ⏭️  Using cached data for job {job_id}")
            return cached

        if not job_url:
            self.failed += 1
            logger.warning(f"    ⚠️  Job {job_id} has no detail URL")
            return None

        try:
            logger.info(f"    🔗 Fetching details for job {job_id}")
            with self.provider.isolated_page() as detail_page:
                detail_page.goto(job_url, timeout=settings.TIMEOUT, wait_until=self.source.wait_until)
                detail_page.wait_for_selector(self.source.detail_selector, timeout=settings.TIMEOUT)
                details = self.source.parse_details(detail_page.content())
        except Exception as e:
            self.failed += 1
            logger.warning(f"    ⚠️  Error scraping job details from {job_url}: {e}")
            return None

        self.cache.insert(job_id, details)
        self.fetched += 1
        return details
