"""
Shared settings for all job spiders.

Values can be overridden through environment variables or a `.env` file in
the project root.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(PROJECT_ROOT / ".env")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Data directories
DATA_DIR = Path(os.getenv("JOBSPIDER_DATA_DIR", PROJECT_ROOT / "data"))
LOGS_DIR = Path(os.getenv("JOBSPIDER_LOGS_DIR", PROJECT_ROOT / "logs"))

# Browser settings
HEADLESS = _env_flag("JOBSPIDER_HEADLESS", False)
NAVIGATION_TIMEOUT = 200000  # 200 seconds
TIMEOUT = 60000  # 60 seconds
VIEWPORT = {'width': 1920, 'height': 1080}
USER_AGENT = 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36'
BROWSER_ARGS = [
    '--start-maximized',
    '--disable-infobars',
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--disable-gpu',
    '--window-size=1920,1080',
]

# Cache settings
CACHE_MAX_AGE_HOURS = 24

# Recovery settings
MAX_RESTARTS = int(os.getenv("JOBSPIDER_MAX_RESTARTS", "3"))
RESTART_BACKOFF_SECONDS = 10  # Doubled after every restart

# Polling waits (in seconds)
POLL_INTERVAL = 5
VERIFICATION_TIMEOUT = 600  # 10 minutes for an operator to solve a challenge

# Scraper version
SCRAPER_VERSION = "1.0.0"
