"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DEBOUNCE_MS = 500
DEFAULT_SCAN_SESSION_TTL_S = 1800
DEFAULT_TODAY_LOG_LIMIT = 50
PRESENT_STATUS = "Present"

MSG_NO_CODE = "No QR code data found."
MSG_STUDENT_NOT_FOUND = "Student not found"
MSG_ATTENDANCE_FAILED = "Error recording attendance"
MSG_UNEXPECTED = "An unexpected error occurred"
