"""
Session restarts and bounded polling waits.
"""

import logging
import time
from typing import Callable

from tenacity import (
    Retrying, RetryError, retry_if_exception, retry_if_result,
    stop_after_attempt, stop_after_delay, wait_exponential, wait_fixed,
)

from jobspider import settings
from jobspider.core.errors import CrawlFailed, WaitTimeoutError
from jobspider.core.models import CrawlResult

logger = logging.getLogger(__name__)


def wait_for_condition(predicate: Callable[[], bool],
                       timeout: float,
                       interval: float = settings.POLL_INTERVAL,
                       description: str = "condition",
                       sleep: Callable[[float], None] = time.sleep) -> None:
    """
    Poll predicate every `interval` seconds until it returns True.

    Raises:
        WaitTimeoutError: If the predicate is still False after `timeout` seconds.
    """
    retryer = Retrying(
        retry=retry_if_result(lambda ready: not ready),
        wait=wait_fixed(interval),
        stop=stop_after_delay(timeout),
        sleep=sleep,
        before_sleep=lambda state: logger.debug(f"⏳ Waiting for {description}..."),
    )
    try:
        retryer(predicate)
    except RetryError as e:
        raise WaitTimeoutError(f"Timed out after {timeout}s waiting for {description}") from e


def _is_transient(error: BaseException) -> bool:
    return isinstance(error, CrawlFailed) and error.transient


def run_with_recovery(new_session: Callable,
                      max_restarts: int = settings.MAX_RESTARTS,
                      backoff: float = settings.RESTART_BACKOFF_SECONDS,
                      sleep: Callable[[float], None] = time.sleep) -> CrawlResult:
    """
    Run crawl sessions until one succeeds.

    Each attempt is a brand new session starting at page 1. A failure whose
    message matches a known transient signature is retried up to
    `max_restarts` times, waiting `backoff`, then twice as long after every
    further restart. Any other failure, or the last transient one, is re-raised.
    """

    def log_restart(state):
        failure = state.outcome.exception()
        logger.warning(f"🔄 {failure.source} spider restarting in {state.next_action.sleep:.0f}s "
                       f"(restart {state.attempt_number}/{max_restarts}): {failure.error}")

    retryer = Retrying(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(max_restarts + 1),
        wait=wait_exponential(multiplier=backoff),
        sleep=sleep,
        before_sleep=log_restart,
        reraise=True,
    )

    try:
        return retryer(lambda: new_session().run())
    except CrawlFailed as failure:
        if failure.transient:
            logger.error(f"❌ {failure.source} still failing after {max_restarts} restarts, giving up")
        else:
            logger.error(f"❌ {failure.source} failed with a non-recoverable error: {failure.error}")
        raise
