"""
Shared fixtures: an in-memory fake of the browser provider and HTML builders
for NSW and SEEK pages.
"""

from contextlib import contextmanager
from datetime import datetime, timezone

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from jobspider.core.cache import CacheStore
from jobspider.core.storage import JobStore
from jobspider.NSW import config as nsw_config
from jobspider.NSW.nsw_scraper import SOURCE as NSW_SOURCE
from jobspider.SEEK import config as seek_config
from jobspider.SEEK.seek_scraper import SOURCE as SEEK_SOURCE

BLANK_PAGE = "<html><body></body></html>"


class FakeSite:
    """URL -> HTML map with injectable failures, shared by all fake pages."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.navigations = []
        self.goto_errors = {}  # url -> exception raised on every goto
        self.fail_once = {}  # url -> exception raised on the first goto only
        self.hang = set()  # urls whose wait_for_selector times out
        self.missing = set()  # (url, selector) pairs that never render
        self.waits = []
        self.screenshots = []

    def goto(self, url):
        self.navigations.append(url)
        if url in self.fail_once:
            raise self.fail_once.pop(url)
        if url in self.goto_errors:
            raise self.goto_errors[url]
        return self.pages.get(url, BLANK_PAGE)


class FakePage:
    def __init__(self, site):
        self.site = site
        self.url = "about:blank"
        self.html = BLANK_PAGE
        self.closed = False

    def goto(self, url, timeout=None, wait_until=None):
        self.html = self.site.goto(url)
        self.url = url

    def wait_for_selector(self, selector, timeout=None):
        self.site.waits.append((self.url, selector))
        if self.url in self.site.hang or (self.url, selector) in self.site.missing:
            raise PlaywrightTimeout(f"Timeout {timeout}ms exceeded.")

    def content(self):
        return self.html

    def screenshot(self, path=None):
        self.site.screenshots.append(path)


class FakeProvider:
    def __init__(self, site):
        self.site = site
        self.page = None
        self.launched = 0
        self.closed = False
        self.contexts_opened = 0
        self.contexts_closed = 0

    def launch(self):
        self.launched += 1
        self.page = FakePage(self.site)
        return self.page

    @contextmanager
    def isolated_page(self):
        self.contexts_opened += 1
        try:
            yield FakePage(self.site)
        finally:
            self.contexts_closed += 1

    def close(self):
        self.closed = True
        self.page = None


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def nsw_card(job_id, title="Senior Policy Officer"):
    return f"""
    <div class="job-card">
      <div class="card-header"><a href="/job/{job_id.lower()}"><span>{title}</span></a></div>
      <div class="card-body"><p>Job posting: 01-Oct-2026 - Closing date: 20-Oct-2026</p></div>
      <div class="nsw-col">
        <p>Agency banner</p>
        <p>Grade 9/10</p>
        <p><span>Sydney</span><span>Parramatta</span></p>
        <p>Lead policy work on the energy transition.</p>
      </div>
      <div class="nsw-tertiary-blue"><span><span>Policy</span><span>Environment</span></span></div>
      <div class="job-search-result-right">
        <h2>Department of Climate Change, Energy, the Environment and Water</h2>
        <p><span>Ongoing Full-Time</span></p>
      </div>
      <div class="job-search-result-ref-no">{job_id}</div>
    </div>
    """


def nsw_list_page(total, job_ids):
    count = f"<div b-n96x1o845s>{total} jobs match your search</div>" if total is not None else ""
    cards = "".join(nsw_card(job_id) for job_id in job_ids)
    return f"<html><body>{count}{cards}</body></html>"


def nsw_detail_page(salary="Clerk Grade 9/10, $126,071 - $139,511"):
    return f"""
    <html><body>
      <div class="job-detail">
        <div class="job-detail-des"><p>About the role</p><p>Shape NSW energy policy.</p></div>
        <ul>
          <li>Organisation/Entity: Department of Climate Change, Energy, the Environment and Water</li>
          <li>Job reference number: 00009ABC</li>
          <li>Work type: Ongoing Full-Time</li>
          <li>Total remuneration package: {salary}</li>
          <li>Closing date: 20-Oct-2026</li>
          <li>Contact: Jane Citizen</li>
        </ul>
        <a href="mailto:jane.citizen@environment.nsw.gov.au">Email Jane</a>
      </div>
      <div class="related-jobs"><div class="job-card"></div><div class="job-card"></div></div>
    </body></html>
    """


def nsw_job_url(job_id):
    return f"{nsw_config.BASE_URL}/job/{job_id.lower()}"


def job_ids(start, count, prefix="NSW"):
    return [f"{prefix}-{i:03d}" for i in range(start, start + count)]


def build_nsw_site(total, pages_of_ids, detail_html=None):
    """Site with one list page per entry of pages_of_ids and a detail page per job."""
    site = FakeSite()
    for number, ids in enumerate(pages_of_ids, 1):
        site.pages[NSW_SOURCE.page_url(number)] = nsw_list_page(total, ids)
        for job_id in ids:
            site.pages[nsw_job_url(job_id)] = detail_html or nsw_detail_page()
    return site


def seek_card(job_id):
    return f"""
    <article data-automation="normalJob" data-job-id="{job_id}">
      <a data-automation="jobTitle" href="/job/{job_id}">Project Officer</a>
      <a data-automation="jobCompany">DCCEEW</a>
    </article>
    """


def seek_list_page(total, job_ids, with_cards=True):
    count = f'<span data-automation="totalJobsMessage">{total} jobs</span>'
    cards = "".join(seek_card(job_id) for job_id in job_ids) if with_cards else ""
    return f"<html><body>{count}{cards}</body></html>"


def seek_detail_page():
    return """
    <html><body>
      <span data-automation="job-detail-salary">$110,000 - $125,000</span>
      <div data-automation="jobAdDetails"><p>Lead the program.</p></div>
    </body></html>
    """


def seek_job_url(job_id):
    return f"{seek_config.BASE_URL}/job/{job_id}"


def build_seek_site(total, pages_of_ids):
    site = FakeSite()
    for number, ids in enumerate(pages_of_ids, 1):
        site.pages[SEEK_SOURCE.page_url(number)] = seek_list_page(total, ids)
        for job_id in ids:
            site.pages[seek_job_url(job_id)] = seek_detail_page()
    return site


def no_sleep(seconds):
    pass


@pytest.fixture
def store(tmp_path):
    job_store = JobStore(tmp_path, "NSW")
    job_store.ensure_dirs()
    return job_store


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def cache(store, clock):
    return CacheStore(store, clock=clock)
