"""
Exception types shared by the crawl engine.
"""

from typing import Optional

# Error message fragments that mark a failure as transient. A session that
# fails with one of these is restarted from scratch by the recovery loop.
KNOWN_TRANSIENT_SIGNATURES = [
    "Navigation timeout",
    "net::ERR_TIMED_OUT",
    "browser has disconnected",
    "Target closed",
    "Target page, context or browser has been closed",
    "not clickable",
    "Element is not attached to the DOM",
]


def is_known_transient(message: str) -> bool:
    """Return True if the message matches one of the transient signatures."""
    if not message:
        return False
    return any(signature in message for signature in KNOWN_TRANSIENT_SIGNATURES)


class ScraperError(Exception):
    """Base class for all errors raised by the spiders."""


class SourceError(ScraperError):
    """The listing source reported an error or returned no usable results."""


class NavigationTimeoutError(ScraperError):
    """A page load or wait-for-selector step did not resolve in time."""

    def __init__(self, url: str, selector: Optional[str] = None, cause: Optional[Exception] = None):
        target = f"'{selector}' on {url}" if selector else url
        super().__init__(f"Navigation timeout while waiting for {target}: {cause}")
        self.url = url
        self.selector = selector
        self.cause = cause


class WaitTimeoutError(ScraperError):
    """A polling wait reached its deadline before the condition became true."""


class VerificationError(ScraperError):
    """An anti-automation challenge was not cleared."""


class CrawlFailed(ScraperError):
    """A crawl session ended in the FAILED state."""

    def __init__(self, source: str, error: Exception):
        super().__init__(f"{source} crawl failed: {error}")
        self.source = source
        self.error = error

    @property
    def transient(self) -> bool:
        return is_known_transient(str(self.error))
