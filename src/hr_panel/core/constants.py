"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FULL_DAY_HOURS = 9
HALF_DAY_HOURS = 5
MAX_BREAK_HOURS = 2

DEFAULT_PASSWORD = "password"
DEFAULT_COMPANY_NAME = "Teleexpro"
DEFAULT_THEME = "indigo"
THEMES = ("indigo", "blue", "emerald", "rose", "violet", "amber")

DEFAULT_HISTORY_LIMIT = 5
WEEKLY_ATTENDANCE_DAYS = 5
SEARCH_RESULT_LIMIT = 8

PAYSLIP_REIMBURSEMENT = 349.0
PAYSLIP_ATTENDANCE_BONUS = 500.0
PAYSLIP_FESTIVAL_ALLOWANCE = 0.0
