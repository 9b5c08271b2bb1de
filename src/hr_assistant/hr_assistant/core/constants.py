"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FIRST_EMPLOYEE_NUMBER = 1001
DEFAULT_WEEKEND_DAYS = (5, 6)  # Friday, Saturday (0 = Sunday)
DEFAULT_STANDARD_HOURS = 8
DEFAULT_LIST_LIMIT = 200
DEFAULT_LOG_LIMIT = 100
TERMINAL_LOG_BATCH = 5000
PLACEHOLDER = "-"
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
REFERENCE_LISTS = (
    "roles",
    "groupNames",
    "systems",
    "campuses",
    "leaveTypes",
    "stage",
    "subjects",
    "machineNames",
    "reportLines1",
)
EMAIL_LISTS = ("reportLines1",)
