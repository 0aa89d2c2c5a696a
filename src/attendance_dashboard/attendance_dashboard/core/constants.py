"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ISO_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_SERIES_DAYS = 7
MAX_SERIES_DAYS = 366
DEFAULT_BATCH_WORKERS = 8
DEFAULT_STORE_TIMEOUT = 15

MIN_STUDENT_NAME_LENGTH = 2

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
REPORT_FAILED_MESSAGE = "Could not generate the attendance report. Please try again."
REPORT_DISABLED_MESSAGE = "AI report generation is temporarily disabled for this version of the application."
