import sys
import types

import pytest

from jobspider.core.errors import VerificationError
from jobspider.core.session import CrawlSession
from jobspider.core.storage import JobStore
from jobspider.core.verification import handle_verification, wait_for_operator
from jobspider.NSW.nsw_scraper import SOURCE as NSW_SOURCE
from jobspider.SEEK.seek_scraper import SOURCE as SEEK_SOURCE

from conftest import FakePage, FakeProvider, FakeSite, no_sleep

CHALLENGE = "<html><head><title>Just a moment... | SEEK secure</title></head><body></body></html>"

SEEK_RESULTS = """
<html><body>
  <span data-automation="totalJobsMessage">1 job</span>
  <article data-automation="normalJob" data-job-id="81234567">
    <a data-automation="jobTitle" href="/job/81234567">Senior Project Officer</a>
  </article>
</body></html>
"""

SEEK_AD = """
<html><body>
  <span data-automation="job-detail-salary">$110,000 - $125,000</span>
  <div data-automation="jobAdDetails"><p>Lead the program.</p></div>
</body></html>
"""


@pytest.fixture
def seek_store(tmp_path):
    store = JobStore(tmp_path, "SEEK")
    store.ensure_dirs()
    return store


def challenge_page():
    site = FakeSite({SEEK_SOURCE.page_url(1): CHALLENGE})
    page = FakePage(site)
    page.goto(SEEK_SOURCE.page_url(1))
    return page


def test_no_challenge_returns_immediately(seek_store):
    page = FakePage(FakeSite())
    prompts = []

    assert handle_verification(page, SEEK_SOURCE, seek_store,
                               confirm=lambda *args: prompts.append(args)) is False
    assert handle_verification(page, NSW_SOURCE, seek_store,
                               confirm=lambda *args: prompts.append(args)) is False
    assert prompts == []


def test_waits_until_challenge_clears(seek_store):
    page = challenge_page()
    sleeps = []

    def sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 2:
            page.html = SEEK_RESULTS

    assert handle_verification(page, SEEK_SOURCE, seek_store,
                               confirm=lambda message, timeout: True, sleep=sleep) is True
    assert len(sleeps) == 2
    assert len(page.site.screenshots) == 1


def test_no_operator_response_raises(seek_store):
    page = challenge_page()

    with pytest.raises(VerificationError):
        handle_verification(page, SEEK_SOURCE, seek_store,
                            confirm=lambda message, timeout: False, sleep=no_sleep)


def test_seek_session_continues_after_verification(cache, seek_store):
    site = FakeSite({
        SEEK_SOURCE.page_url(1): CHALLENGE,
        "https://www.seek.com.au/job/81234567": SEEK_AD,
    })
    provider = FakeProvider(site)

    def solve(message, timeout):
        provider.page.html = SEEK_RESULTS
        return True

    session = CrawlSession(SEEK_SOURCE, provider, cache, seek_store, confirm=solve, sleep=no_sleep)
    result = session.run()

    assert result.metadata.total_jobs == 1
    assert result.metadata.total_pages == 1
    assert result.jobs[0]["job_id"] == "81234567"
    assert result.jobs[0]["details"]["salary"] == "$110,000 - $125,000"


@pytest.fixture
def windows_console(monkeypatch):
    console = types.SimpleNamespace(pressed=False, read=[])
    console.kbhit = lambda: console.pressed
    console.getwch = lambda: console.read.append("\r") or "\r"
    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setitem(sys.modules, "msvcrt", console)
    return console


def test_windows_operator_wait_gives_up_at_timeout(windows_console):
    assert wait_for_operator("Solve the check", timeout=0) is False
    assert windows_console.read == []


def test_windows_operator_wait_returns_on_keypress(windows_console):
    windows_console.pressed = True

    assert wait_for_operator("Solve the check", timeout=5) is True
    assert windows_console.read == ["\r"]
