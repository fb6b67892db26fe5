"""
Manual handling of anti-automation challenges (Cloudflare and similar).

When a challenge page is shown the spider takes a screenshot, asks the
operator to solve it in the browser window and waits until the page no longer
looks like a challenge.
"""

import logging
import sys
import time
from typing import Callable

from jobspider import settings
from jobspider.core.errors import VerificationError, WaitTimeoutError
from jobspider.core.recovery import wait_for_condition
from jobspider.core.source import JobSource
from jobspider.core.storage import JobStore

logger = logging.getLogger(__name__)


def wait_for_operator(message: str, timeout: float = settings.VERIFICATION_TIMEOUT) -> bool:
    """
    Wait for the operator to press ENTER.

    Returns:
        True once ENTER was pressed, False if the timeout expired.
    """
    logger.warning(f"{message}. Press ENTER in this terminal to continue...")

    if sys.platform != 'win32':
        import select
        ready, _, _ = select.select([sys.stdin], [], [], timeout)
        if not ready:
            return False
        sys.stdin.readline()
        return True

    # Windows - select() does not work on stdin, poll the console instead
    import msvcrt
    try:
        wait_for_condition(msvcrt.kbhit, timeout=timeout, interval=0.5,
                           description="operator to press ENTER")
    except WaitTimeoutError:
        return False
    msvcrt.getwch()
    return True


def handle_verification(page, source: JobSource, store: JobStore,
                        confirm: Callable[[str, float], bool] = wait_for_operator,
                        timeout: float = settings.VERIFICATION_TIMEOUT,
                        sleep: Callable[[float], None] = time.sleep) -> bool:
    """
    Pause for manual verification if the current page is a challenge.

    Returns:
        True if a challenge was detected and cleared, False if there was none.

    Raises:
        VerificationError: If the operator did not respond or the challenge
            did not clear before the timeout.
    """
    if source.is_challenge is None or not source.is_challenge(page.content()):
        return False

    screenshot = store.screenshot_path(f"{source.code.lower()}-verification")
    try:
        page.screenshot(path=str(screenshot))
        logger.info(f"📸 Saved verification screenshot: {screenshot}")
    except Exception as e:
        logger.warning(f"Could not save screenshot: {e}")

    logger.warning("=" * 80)
    logger.warning(f"🤖 VERIFICATION DETECTED on {source.name}!")
    logger.warning("Please complete the verification in the browser window.")
    logger.warning("=" * 80)

    if not confirm("After completing the verification in the browser window", timeout):
        raise VerificationError(f"No operator response within {timeout}s for {source.name} verification")

    wait_for_condition(
        lambda: not source.is_challenge(page.content()),
        timeout=timeout,
        description=f"{source.name} verification to clear",
        sleep=sleep
    )
    logger.info("✓ Verification cleared, continuing...")
    return True
