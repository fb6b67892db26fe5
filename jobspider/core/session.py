"""
Crawl session: page-count discovery, page iteration, detail resolution and
persistence of either a result file or an error record.

A session runs through DISCOVERING -> PAGING -> FINISHING. Any page-level or
navigation-level exception moves it to FAILED, which writes an error record,
closes the browser and raises CrawlFailed for the recovery loop.
"""

import logging
import time
from enum import Enum
from typing import List, Dict, Any, Callable, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeout

from jobspider import settings
from jobspider.core.cache import CacheStore
from jobspider.core.errors import CrawlFailed, NavigationTimeoutError, SourceError
from jobspider.core.extractor import PageExtractor, total_pages
from jobspider.core.fetcher import DetailFetcher
from jobspider.core.models import CrawlMetadata, CrawlResult, ErrorRecord, merge_job
from jobspider.core.source import JobSource
from jobspider.core.storage import JobStore, date_stamp, timestamp_stamp
from jobspider.core.verification import handle_verification, wait_for_operator

logger = logging.getLogger(__name__)


class SessionState(Enum):
    DISCOVERING = "discovering"
    PAGING = "paging"
    FINISHING = "finishing"
    FAILED = "failed"


class CrawlSession:
    """One attempt at crawling every list page of a source."""

    def __init__(self, source: JobSource, provider, cache: CacheStore, store: JobStore,
                 confirm: Callable[[str, float], bool] = wait_for_operator,
                 sleep: Callable[[float], None] = time.sleep):
        self.source = source
        self.provider = provider
        self.cache = cache
        self.store = store
        self.confirm = confirm
        self.sleep = sleep

        self.extractor = PageExtractor(source)
        self.fetcher = DetailFetcher(provider, cache, source)

        self.state = SessionState.DISCOVERING
        self.expected_total = 0
        self.total_pages = 0
        self.current_page = 1
        self.jobs: List[Dict[str, Any]] = []
        self.duplicates = 0
        self._seen_ids = set()
        self.result: Optional[CrawlResult] = None

    def run(self) -> CrawlResult:
        logger.info(f'🕷️  "{self.source.name}" spider launched.')
        try:
            page = self.provider.launch()
            self._discover(page)
            while self.state is SessionState.PAGING:
                self._process_page(page)
            return self._finish()
        except Exception as e:
            self._fail(e)

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def _discover(self, page):
        self.state = SessionState.DISCOVERING
        url = self.source.page_url(1)
        logger.info(f'🌐 Navigating to {self.source.name} jobs page...')
        self._goto(page, url)

        handle_verification(page, self.source, self.store, confirm=self.confirm, sleep=self.sleep)

        self._wait(page, self.source.ready_selector, url)
        announced = self.extractor.announced_total(page)

        if not announced:
            if self.source.empty_total_is_error:
                raise SourceError(f"No jobs found on {self.source.name}")
            logger.info(f"📭 No jobs announced on {self.source.name}")
            self.expected_total = 0
            self.total_pages = 0
        else:
            self.expected_total = announced
            self.total_pages = total_pages(announced, self.source.page_size)
            logger.info(f"📊 Found {announced} total jobs across {self.total_pages} pages")

        self.current_page = 1
        self.state = SessionState.PAGING

    def _process_page(self, page):
        if self.current_page > self.total_pages:
            self.state = SessionState.FINISHING
            return

        logger.info("")
        logger.info(f"📄 Processing page {self.current_page} of {self.total_pages}...")

        url = self.source.page_url(self.current_page)
        if self.current_page > 1:
            if self.source.page_delay:
                self.sleep(self.source.page_delay)
            self._goto(page, url)
            self._wait(page, self.source.ready_selector, url)
        if self.source.item_selector:
            self._wait(page, self.source.item_selector, url)

        summaries = self.extractor.extract(page)
        if not summaries:
            logger.info(f"  ⏹️  Page {self.current_page} has no jobs, stopping early")
            self.state = SessionState.FINISHING
            return

        for index, summary in enumerate(summaries, 1):
            self._resolve_job(summary, index, len(summaries))

        self.current_page += 1

    def _resolve_job(self, summary: Dict[str, Any], index: int, count: int):
        job_id = summary["job_id"]
        if job_id in self._seen_ids:
            self.duplicates += 1
            logger.info(f"  ⏭️  [{index}/{count}] Job {job_id} already collected this session, skipping...")
            return
        self._seen_ids.add(job_id)

        details = self.fetcher.resolve(job_id, summary.get("job_url"))
        self.jobs.append(merge_job(summary, details))

        logger.info(f"  [{index}/{count}] Processed: {len(self.jobs)} jobs "
                    f"({self.fetcher.cache_hits} from cache, {self.fetcher.failed} failed)")

        if not self.fetcher.last_from_cache and self.source.job_delay:
            self.sleep(self.source.job_delay)

    def _finish(self) -> CrawlResult:
        self.state = SessionState.FINISHING
        pages_processed = self.current_page - 1
        cache_hits = self.fetcher.cache_hits

        metadata = CrawlMetadata(
            total_jobs=len(self.jobs),
            expected_total_jobs=self.expected_total,
            total_pages=pages_processed,
            jobs_created=len(self.jobs) - cache_hits,
            jobs_skipped=cache_hits,
            failed_scrapes=self.fetcher.failed,
            date_scraped=timestamp_stamp()
        )
        self.result = CrawlResult(metadata=metadata, jobs=self.jobs)

        logger.info("")
        logger.info("=" * 80)
        logger.info(f"📊 {self.source.name} Scraping Summary")
        logger.info("=" * 80)
        logger.info(f"📄 Total pages processed: {pages_processed}")
        logger.info(f"🔍 Total jobs found: {metadata.total_jobs} / {metadata.expected_total_jobs}")
        logger.info(f"✅ Jobs created/updated: {metadata.jobs_created}")
        logger.info(f"⏭️  Jobs loaded from cache: {metadata.jobs_skipped}")
        logger.info(f"❌ Failed detail scrapes: {metadata.failed_scrapes}")
        logger.info(f"⚠️  Failed listing extractions: {self.extractor.failed_extractions}")
        if self.duplicates:
            logger.info(f"🔁 Duplicate listings skipped: {self.duplicates}")
        logger.info("=" * 80)

        try:
            self.store.write_result(self.result)
            self.cache.checkpoint()
        finally:
            self.provider.close()
            logger.info(f'"{self.source.name}" spider terminated.')
        return self.result

    def _fail(self, error: Exception):
        self.state = SessionState.FAILED
        logger.error(f"❌ Error in {self.source.name} crawl: {error}")

        try:
            if self.provider.page is not None:
                self._screenshot(self.provider.page, "error")
            self.store.write_error(ErrorRecord(text=str(error), date=date_stamp()))
        finally:
            self.provider.close()
            logger.info(f'"{self.source.name}" spider terminated.')

        raise CrawlFailed(self.source.name, error) from error

    # ------------------------------------------------------------------
    # Browser helpers
    # ------------------------------------------------------------------

    def _goto(self, page, url: str):
        try:
            page.goto(url, timeout=settings.NAVIGATION_TIMEOUT, wait_until=self.source.wait_until)
        except PlaywrightTimeout as e:
            raise NavigationTimeoutError(url, cause=e) from e

    def _wait(self, page, selector: str, url: str):
        try:
            page.wait_for_selector(selector, timeout=settings.TIMEOUT)
        except PlaywrightTimeout as e:
            raise NavigationTimeoutError(url, selector, cause=e) from e

    def _screenshot(self, page, label: str):
        path = self.store.screenshot_path(f"{self.source.code.lower()}-{label}")
        try:
            page.screenshot(path=str(path))
            logger.info(f"📸 Saved screenshot: {path}")
        except Exception as e:
            logger.warning(f"Could not save screenshot: {e}")
