"""
Configuration for NSW Government (iworkfor.nsw.gov.au) Job Scraper
"""

CODE = "NSW"
NAME = "nsw gov jobs"

# Base URLs
BASE_URL = "https://iworkfor.nsw.gov.au"
SEARCH_URL = (
    f"{BASE_URL}/jobs/all-keywords/all-agencies/"
    "department-of-climate-change,-energy,-the-environment-and-water-/"
    "all-categories/all-locations/all-worktypes?agenciesid=9116&sortby=RelevanceDesc"
)

# Pagination
PAGE_SIZE = 25

# Selectors
JOB_CARD_SELECTOR = ".job-card"
RESULTS_COUNT_SELECTOR = "div[b-n96x1o845s]"
READY_SELECTOR = f"{JOB_CARD_SELECTOR}, {RESULTS_COUNT_SELECTOR}"
DETAIL_SELECTOR = ".job-detail"

# Delays (in seconds)
DELAY_BETWEEN_PAGES = 2
DELAY_BETWEEN_JOBS = 1
