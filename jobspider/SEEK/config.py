"""
Configuration for SEEK (seek.com.au) Job Scraper
"""

CODE = "SEEK"
NAME = "seek jobs"

# Base URLs
BASE_URL = "https://www.seek.com.au"
SEARCH_URL = (
    f"{BASE_URL}/Department-of-Climate-Change,-Energy,-the-Environment-and-Water-jobs/"
    "in-All-Sydney-NSW/full-time"
)

# Pagination
PAGE_SIZE = 22

# Selectors
JOB_CARD_SELECTOR = 'article[data-automation="premiumJob"], article[data-automation="normalJob"]'
TOTAL_JOBS_SELECTOR = '[data-automation="totalJobsMessage"]'
SEARCH_ERROR_SELECTOR = '[data-automation="searchErrorMessage"]'
READY_SELECTOR = f"{TOTAL_JOBS_SELECTOR}, {SEARCH_ERROR_SELECTOR}"
DETAIL_SELECTOR = '[data-automation="jobAdDetails"]'

# Verification page markers
VERIFICATION_TITLE = "SEEK secure"
VERIFICATION_TEXT = "Help us keep SEEK secure"
VERIFICATION_SELECTOR = ".cloudflare-challenge"

# Page load strategy (SEEK renders results client-side)
WAIT_UNTIL = "networkidle"

# Delays (in seconds)
DELAY_BETWEEN_PAGES = 2
DELAY_BETWEEN_JOBS = 1.5
