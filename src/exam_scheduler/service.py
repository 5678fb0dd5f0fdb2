"""Exam schedule generation entry point."""

import logging
from dataclasses import dataclass
from datetime import date

from .config import RegistryLoader
from .exceptions import InvalidRequestError, PersistenceError
from .scheduler.algorithm import ExamScheduler, RunBudget
from .scheduler.conflicts import ConflictIndex
from .scheduler.constants import (
    INVIGILATORS_PER_ROOM,
    MAX_WINDOWS_PER_DAY,
    MIN_WINDOWS_PER_DAY,
)
from .scheduler.demand import aggregate_demand
from .scheduler.models import ScheduleReport
from .scheduler.utils import parse_date
from .storage import ScheduleStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """Validated parameters of one generation run."""

    start_date: date
    end_date: date
    windows_per_day: int
    exam_type: str
    semester: str

    @classmethod
    def create(
        cls,
        start_date: date | str,
        end_date: date | str,
        windows_per_day: int,
        exam_type: str,
        semester: str,
    ) -> "GenerationRequest":
        """Validate raw parameters and build a request.

        Raises:
            InvalidRequestError: If any parameter is malformed or out of range
        """
        try:
            start = parse_date(start_date)
        except ValueError:
            raise InvalidRequestError(
                "start_date", f"'{start_date}' is not a date (YYYY-MM-DD)"
            ) from None
        try:
            end = parse_date(end_date)
        except ValueError:
            raise InvalidRequestError(
                "end_date", f"'{end_date}' is not a date (YYYY-MM-DD)"
            ) from None
        if start > end:
            raise InvalidRequestError(
                "end_date", f"end date {end} is before start date {start}"
            )

        if isinstance(windows_per_day, bool) or not isinstance(windows_per_day, int):
            raise InvalidRequestError(
                "windows_per_day", f"must be an integer, got {windows_per_day!r}"
            )
        if not MIN_WINDOWS_PER_DAY <= windows_per_day <= MAX_WINDOWS_PER_DAY:
            raise InvalidRequestError(
                "windows_per_day",
                f"must be between {MIN_WINDOWS_PER_DAY} and {MAX_WINDOWS_PER_DAY}, "
                f"got {windows_per_day}",
            )

        exam_type = (exam_type or "").strip()
        semester = (semester or "").strip()
        if not exam_type:
            raise InvalidRequestError("exam_type", "must not be empty")
        if not semester:
            raise InvalidRequestError("semester", "must not be empty")

        return cls(
            start_date=start,
            end_date=end,
            windows_per_day=windows_per_day,
            exam_type=exam_type,
            semester=semester,
        )


def generate(
    start_date: date | str,
    end_date: date | str,
    windows_per_day: int,
    exam_type: str,
    semester: str,
    *,
    registry: RegistryLoader,
    store: ScheduleStore | None = None,
    budget: RunBudget | None = None,
    invigilators_per_room: int = INVIGILATORS_PER_ROOM,
) -> ScheduleReport:
    """Generate the exam schedule of one (semester, exam_type) scope.

    The scope is fully recomputed: its previous placements are ignored
    during the search and replaced on success. Bookings of other scopes in
    the date range block their rooms and invigilators.

    Args:
        start_date: First exam date
        end_date: Last exam date (inclusive)
        windows_per_day: Number of catalog windows usable per day
        exam_type: Exam type of the scope (e.g. 'Final')
        semester: Semester of the scope (e.g. '2025-2026/1')
        registry: Loaded registry snapshots
        store: Where to persist the result, or None to only compute it
        budget: Optional run budget
        invigilators_per_room: Staff required per placement

    Returns:
        ScheduleReport; ``persisted`` tells whether it was committed

    Raises:
        InvalidRequestError: If the request is invalid (nothing is touched)
        InvalidDataError: If registry data is malformed
        PersistenceError: If the write-back fails (the store is unchanged;
            the computed report is attached as ``report``)
    """
    request = GenerationRequest.create(
        start_date, end_date, windows_per_day, exam_type, semester
    )
    logger.info(
        f"Generating {request.exam_type} exams for {request.semester} "
        f"from {request.start_date} to {request.end_date}"
    )

    demand = aggregate_demand(
        registry.courses.courses, registry.courses.registrations, request.semester
    )

    conflict_index = ConflictIndex()
    if store is not None:
        blocking, blocking_staff = store.bookings_outside_scope(
            request.semester, request.exam_type, request.start_date, request.end_date
        )
        conflict_index.seed(blocking, blocking_staff)
        if blocking:
            logger.info(f"{len(blocking)} placements of other scopes block the date range")

    scheduler = ExamScheduler(
        rooms=registry.rooms.get_active_rooms(),
        staff=registry.staff.get_invigilators(),
        windows_per_day=request.windows_per_day,
        conflict_index=conflict_index,
        invigilators_per_room=invigilators_per_room,
        budget=budget,
    )
    report = scheduler.schedule(
        demand,
        request.start_date,
        request.end_date,
        request.semester,
        request.exam_type,
    )

    if store is None:
        return report

    try:
        store.replace_scope(
            request.semester,
            request.exam_type,
            list(report.placements),
            list(report.assignments),
        )
    except PersistenceError as e:
        logger.error(f"Schedule computed but not committed: {e}")
        e.report = report
        raise

    return report.mark_persisted()
