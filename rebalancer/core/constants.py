"""
Core constants and limits.

Defines the rebalancing policy defaults, CSV layout and resource limits
shared across the core, the codec and the API layer.
"""

# Policy Tolerances
TARGET_SUM_TOLERANCE = 0.001  # Targets must sum to 1.0 within this band
BALANCED_THRESHOLD_PCT = 0.5  # Drift (percentage points) still counted as balanced

# Formatting
CURRENCY_DECIMALS = 2  # Dollar amounts in exports
PERCENTAGE_DECIMALS = 2  # Percentage columns in exports

# CSV Layout
CSV_FUND_COLUMN = "fund"
CSV_BALANCE_COLUMN = "balance"
CSV_TARGET_COLUMN = "target"
CSV_REQUIRED_COLUMNS = (CSV_FUND_COLUMN, CSV_BALANCE_COLUMN, CSV_TARGET_COLUMN)
CSV_MIN_FIELDS_PER_ROW = 3  # Shorter rows are skipped on import

PORTFOLIO_EXPORT_HEADER = "Fund,Balance,Target"
RESULTS_EXPORT_HEADER = "Fund,Dollars_to_Add,Allocation_%,Target_Allocation_%,Difference_%"
RESULTS_EXPORT_HEADER_WITH_ACTION = (
    "Fund,Dollars_to_Add,Action,Allocation_%,Target_Allocation_%,Difference_%"
)

# Resource Limits (enforced at the API boundary)
MAX_PORTFOLIO_LINES = 1000  # Maximum funds accepted in one request
MAX_CSV_BYTES = 1024 * 1024  # Maximum CSV payload size (1 MiB)
MAX_FUND_NAME_LENGTH = 200
