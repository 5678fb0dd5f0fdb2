"""Exam Scheduler - exam timetabling and invigilator assignment engine.

This module builds exam timetables from course registrations: every course
with registered students gets a date, a daily exam window and a room large
enough for it, plus two invigilators, with no room or staff member booked
twice in the same window.

Example usage:
    from exam_scheduler import RegistryLoader, ScheduleStore, generate

    registry = RegistryLoader(Path("data"))
    store = ScheduleStore(Path("output/schedules.json"))
    report = generate(
        "2025-07-01", "2025-07-15", 6, "Final", "2025-2026/1",
        registry=registry, store=store,
    )

    print(f"Scheduled: {report.scheduled_count}/{report.total_to_schedule}")
    for exam in report.scheduled_exams():
        print(f"{exam['date']} {exam['window_start']} {exam['course_code']} {exam['room_name']}")
"""

from .config import RegistryLoader
from .exceptions import (
    InvalidDataError,
    InvalidRequestError,
    PersistenceError,
    ReservationConflictError,
    SchedulerError,
)
from .scheduler import ExamScheduler, RunBudget, ScheduleReport, UnscheduledReason
from .service import GenerationRequest, generate
from .storage import ScheduleStore

__version__ = "0.1.0"

__all__ = [
    # Entry point
    "generate",
    "GenerationRequest",
    # Collaborators
    "RegistryLoader",
    "ScheduleStore",
    # Scheduling
    "ExamScheduler",
    "RunBudget",
    "ScheduleReport",
    "UnscheduledReason",
    # Exceptions
    "SchedulerError",
    "InvalidRequestError",
    "InvalidDataError",
    "ReservationConflictError",
    "PersistenceError",
]
