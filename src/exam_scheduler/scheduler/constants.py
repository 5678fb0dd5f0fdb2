"""Constants for exam schedule generation."""

# Daily exam windows, in catalog order.
# A run uses only the first N of these (windows_per_day).
EXAM_WINDOWS = [
    {"id": "1", "start": "07:30", "end": "09:00", "duration": 90},
    {"id": "2", "start": "09:30", "end": "11:00", "duration": 90},
    {"id": "3", "start": "13:00", "end": "14:30", "duration": 90},
    {"id": "4", "start": "15:00", "end": "16:30", "duration": 90},
    {"id": "5", "start": "10:00", "end": "12:00", "duration": 120},
    {"id": "6", "start": "14:00", "end": "17:00", "duration": 180},
]

MIN_WINDOWS_PER_DAY = 1
MAX_WINDOWS_PER_DAY = len(EXAM_WINDOWS)
DEFAULT_WINDOWS_PER_DAY = MAX_WINDOWS_PER_DAY

# Supervising staff required for every placement
INVIGILATORS_PER_ROOM = 2

# Role label for the n-th invigilator of a placement
INVIGILATOR_ROLE_TEMPLATE = "Invigilator {}"

# Run budget defaults (None = unlimited)
DEFAULT_TIME_LIMIT: float | None = None
DEFAULT_MAX_CANDIDATES: int | None = None
