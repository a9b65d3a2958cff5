"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PERIOD_HISTORY = 12
DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 500
MAX_SALARY_PAYMENT_DATE = 28
