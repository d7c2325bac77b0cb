"""
Deterministic normalization rules for the roster feed.

The column layout is a contract of the published feed. Columns 0 and 4 are
present in the feed but not modeled.
"""

FEED_DELIMITER = ","
FEED_QUOTECHAR = '"'

HEADER_ROWS = 1
MIN_FIELDS = 6

COL_FIRST_NAME = 1
COL_LAST_NAME = 2
COL_EMAIL = 3
COL_JOIN_DATE = 5

# Tried in order, first match wins. Day-first layouts come before month-first
# ones, so "03/04/2020" is 3 April.
JOIN_DATE_LAYOUTS = (
    "DD/MM/YYYY",
    "D/M/YYYY",
    "M/D/YYYY",
    "DD/M/YYYY",
    "D/MM/YYYY",
    "YYYY",
)

MEMBERSHIP_TERM_YEARS = 1

DEFAULT_FETCH_TIMEOUT = 10.0

