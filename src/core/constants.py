"""
Application constants to avoid hardcoded values.

Following Clean Code principle: "Stop Hardcoding Values"
"""

# Client Configuration
DEFAULT_API_URL = "http://localhost:8000/api/learner_analytics/v0/learners/"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
DEFAULT_LOG_LEVEL = "info"

# Environment Variable Names
ENV_API_URL = "LEARNERS_API_URL"
ENV_REQUEST_TIMEOUT = "LEARNERS_API_TIMEOUT"
ENV_LOG_LEVEL = "LOG_LEVEL"

# Pagination Configuration
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 25
PAGE_WINDOW_SIZE = 10

# Query Parameter Keys
PARAM_COURSE_ID = "course_id"
PARAM_PAGE = "page"
PARAM_PAGE_SIZE = "page_size"
PARAM_ORDER_BY = "order_by"
PARAM_SORT_ORDER = "sort_order"
PARAM_TEXT_SEARCH = "text_search"
FILTER_VALUE_SEPARATOR = ","

# Filter Names
FILTER_COHORT = "cohort"
FILTER_SEGMENTS = "segments"
FILTER_IGNORE_SEGMENTS = "ignore_segments"

# HTTP Status Codes
HTTP_STATUS_GATEWAY_TIMEOUT = 504

# Error Messages
ERROR_GATEWAY_TIMEOUT = (
    "504: Server error: processing your request took too long to complete. "
    "Reload the page to try again."
)
ERROR_SERVER = "Server error: your request could not be processed. Reload the page to try again."
ERROR_INVALID_PAGE = "Page must be a positive integer"
ERROR_INVALID_SORT_FIELD = "Sort field must be a non-empty string"

# Engagement Metrics
METRIC_DISCUSSION_CONTRIBUTIONS = "discussion_contributions"
METRIC_PROBLEMS_ATTEMPTED = "problems_attempted"
METRIC_PROBLEMS_COMPLETED = "problems_completed"
METRIC_VIDEOS_VIEWED = "videos_viewed"
METRIC_PROBLEM_ATTEMPTS_PER_COMPLETED = "problem_attempts_per_completed"

ENGAGEMENT_METRICS = (
    METRIC_DISCUSSION_CONTRIBUTIONS,
    METRIC_PROBLEMS_ATTEMPTED,
    METRIC_PROBLEMS_COMPLETED,
    METRIC_VIDEOS_VIEWED,
    METRIC_PROBLEM_ATTEMPTS_PER_COMPLETED,
)

# Roster Columns: (field, label, tooltip)
COLUMN_USERNAME = "username"
ROSTER_COLUMNS = (
    (COLUMN_USERNAME, "Name (Username)", "The learner's full name and username."),
    (
        METRIC_DISCUSSION_CONTRIBUTIONS,
        "Discussions",
        "Number of contributions to the discussion forums, including posts, responses, and comments.",
    ),
    (
        METRIC_PROBLEMS_ATTEMPTED,
        "Problems Tried",
        "Number of unique problems this learner has attempted.",
    ),
    (
        METRIC_PROBLEMS_COMPLETED,
        "Problems Correct",
        "Number of unique problems this learner has answered correctly.",
    ),
    (
        METRIC_VIDEOS_VIEWED,
        "Videos",
        "Number of unique videos this learner has played.",
    ),
    (
        METRIC_PROBLEM_ATTEMPTS_PER_COMPLETED,
        "Attempts per Problem Correct",
        "Average number of attempts made for each problem this learner answered correctly.",
    ),
)
SORTABLE_FIELDS = tuple(column[0] for column in ROSTER_COLUMNS)

# Roster Display Text
TABLE_CAPTION = "Learner Roster"
LAST_UPDATED_PREFIX = "Date Last Updated"
SEARCH_INPUT_ID = "search-learners"
SEARCH_LABEL = "Search learners"
COHORT_FILTER_ALL_LABEL = "All"
FOCUS_ANCHOR_ID = "learner-app-focusable"

# Sort Indicators
GLYPH_UNSORTED = "fa-sort"
GLYPH_ASCENDING = "fa-sort-asc"
GLYPH_DESCENDING = "fa-sort-desc"
SR_TEXT_UNSORTED = "click to sort"
SR_TEXT_ASCENDING = "sort ascending"
SR_TEXT_DESCENDING = "sort descending"

# Paging Control Titles
PAGE_LINK_FIRST = "First"
PAGE_LINK_PREVIOUS = "Previous"
PAGE_LINK_NEXT = "Next"
PAGE_LINK_LAST = "Last"
PAGE_LINK_NUMBER_FORMAT = "Page {page}"

# Logging Configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
