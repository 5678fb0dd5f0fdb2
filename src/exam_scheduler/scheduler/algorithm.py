"""Greedy exam scheduling algorithm."""

import logging
import time
from dataclasses import dataclass, field
from datetime import date

from .conflicts import ConflictIndex
from .constants import (
    DEFAULT_MAX_CANDIDATES,
    DEFAULT_TIME_LIMIT,
    DEFAULT_WINDOWS_PER_DAY,
    INVIGILATORS_PER_ROOM,
)
from .invigilators import InvigilatorAssigner
from .models import (
    CourseDemand,
    Placement,
    Room,
    ScheduleReport,
    StaffMember,
    TimeWindow,
    UnscheduledReason,
)
from .results import ResultAggregator
from .slots import SlotCatalog
from .utils import iter_dates, make_placement_id

logger = logging.getLogger(__name__)


@dataclass
class RunBudget:
    """Wall-clock and candidate limits for one run (None = unlimited)."""

    max_seconds: float | None = DEFAULT_TIME_LIMIT
    max_candidates: int | None = DEFAULT_MAX_CANDIDATES
    _started: float | None = field(default=None, init=False, repr=False)

    def start(self) -> None:
        self._started = time.monotonic()

    def exhausted(self, candidates: int) -> bool:
        """Check whether the run has used up its budget."""
        if self.max_candidates is not None and candidates >= self.max_candidates:
            return True
        if self.max_seconds is not None and self._started is not None:
            return time.monotonic() - self._started >= self.max_seconds
        return False


@dataclass
class _SearchOutcome:
    """What a search over the date range found for one course."""

    placement: Placement | None = None
    staff: list[StaffMember] = field(default_factory=list)
    free_room_windows: int = 0
    best_staff_found: int = 0
    budget_exhausted: bool = False


class ExamScheduler:
    """Greedy scheduler placing each course into a (date, window, room).

    Algorithm:
    1. Courses are taken in demand order (largest first, then course code)
    2. Dates: start to end, ascending
    3. Windows: feasible windows, tightest fit first
    4. Rooms: active rooms with enough capacity, ascending room_id
    5. A room is taken only if the full set of invigilators is free too;
       room and staff are then reserved together
    6. No backtracking: a committed placement is never moved
    """

    def __init__(
        self,
        rooms: list[Room],
        staff: list[StaffMember],
        windows_per_day: int = DEFAULT_WINDOWS_PER_DAY,
        conflict_index: ConflictIndex | None = None,
        invigilators_per_room: int = INVIGILATORS_PER_ROOM,
        budget: RunBudget | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            rooms: Room registry snapshot (inactive rooms are ignored)
            staff: Staff registry snapshot
            windows_per_day: How many catalog windows are usable per day
            conflict_index: Pre-seeded reservations, or None for an empty index
            invigilators_per_room: Staff required per placement
            budget: Optional run budget
        """
        self.catalog = SlotCatalog(windows_per_day)
        self.conflict_index = conflict_index or ConflictIndex()
        self.rooms = sorted((r for r in rooms if r.is_active), key=lambda r: r.room_id)
        self.assigner = InvigilatorAssigner(
            staff, self.conflict_index, invigilators_per_room
        )
        self.budget = budget or RunBudget()
        self.candidates_examined = 0

    def schedule(
        self,
        demand: list[CourseDemand],
        start_date: date,
        end_date: date,
        semester: str,
        exam_type: str,
    ) -> ScheduleReport:
        """Schedule every course in the demand list.

        Args:
            demand: Courses in processing order (see aggregate_demand)
            start_date: First exam date
            end_date: Last exam date (inclusive)
            semester: Semester of the scope
            exam_type: Exam type of the scope

        Returns:
            ScheduleReport with placements, invigilators and failures
        """
        results = ResultAggregator(semester, exam_type)
        self.budget.start()
        budget_spent = False

        logger.info(
            f"Scheduling {len(demand)} courses from {start_date} to {end_date} "
            f"using {len(self.catalog)} windows, {len(self.rooms)} rooms, "
            f"{self.assigner.pool_size} invigilators"
        )

        for course in demand:
            if not budget_spent and self.budget.exhausted(self.candidates_examined):
                budget_spent = True
                logger.warning(
                    f"Run budget exhausted after {self.candidates_examined} candidates"
                )
            if budget_spent:
                self._reject_budget(results, course)
                continue

            windows = self.catalog.feasible_windows(course.exam_duration_minutes)
            if not windows:
                self._reject(
                    results,
                    course,
                    UnscheduledReason.DURATION_EXCEEDS_WINDOWS,
                    f"Required duration {course.exam_duration_minutes} min exceeds "
                    f"all configured exam windows (max {self.catalog.max_duration} min)",
                )
                continue

            rooms = [r for r in self.rooms if r.capacity >= course.student_count]
            if not rooms:
                self._reject(
                    results,
                    course,
                    UnscheduledReason.NO_ROOM_CAPACITY,
                    f"No active room with capacity >= {course.student_count} students",
                )
                continue

            outcome = self._search(
                course, windows, rooms, start_date, end_date, semester, exam_type
            )

            if outcome.placement is not None:
                self._commit(outcome.placement, outcome.staff)
                results.add_scheduled(
                    outcome.placement,
                    self.assigner.build_assignments(outcome.placement, outcome.staff),
                )
                logger.debug(
                    f"Scheduled {course.course_code} on {outcome.placement.date} "
                    f"window {outcome.placement.window_id} in {outcome.placement.room_name}"
                )
            elif outcome.budget_exhausted:
                budget_spent = True
                logger.warning(
                    f"Run budget exhausted after {self.candidates_examined} candidates"
                )
                self._reject_budget(results, course)
            elif outcome.free_room_windows > 0:
                self._reject(
                    results,
                    course,
                    UnscheduledReason.INSUFFICIENT_INVIGILATORS,
                    f"Insufficient invigilators: {self.assigner.per_room} required, "
                    f"at most {outcome.best_staff_found} free in any of "
                    f"{outcome.free_room_windows} free room/window slots "
                    f"between {start_date} and {end_date}",
                )
            else:
                self._reject(
                    results,
                    course,
                    UnscheduledReason.NO_FREE_ROOM_WINDOW,
                    f"No free room/window in range {start_date} to {end_date} "
                    f"for {course.student_count} students, "
                    f"{course.exam_duration_minutes} min",
                )

        results.candidates_examined = self.candidates_examined
        report = results.build()
        logger.info(
            f"Scheduled {report.scheduled_count} of {report.total_to_schedule} courses, "
            f"{report.unscheduled_count} unscheduled"
        )
        return report

    def _search(
        self,
        course: CourseDemand,
        windows: list[TimeWindow],
        rooms: list[Room],
        start_date: date,
        end_date: date,
        semester: str,
        exam_type: str,
    ) -> _SearchOutcome:
        """Find the first (date, window, room) with a full set of invigilators."""
        outcome = _SearchOutcome()

        for day in iter_dates(start_date, end_date):
            for window in windows:
                for room in rooms:
                    if self.budget.exhausted(self.candidates_examined):
                        outcome.budget_exhausted = True
                        return outcome
                    self.candidates_examined += 1

                    if not self.conflict_index.room_window_free(day, room.room_id, window.id):
                        continue

                    outcome.free_room_windows += 1
                    staff = self.assigner.propose(day, window.id)
                    outcome.best_staff_found = max(outcome.best_staff_found, len(staff))
                    if not self.assigner.is_complete(staff):
                        continue

                    outcome.staff = staff
                    outcome.placement = Placement(
                        placement_id=make_placement_id(
                            semester, exam_type, course.course_id, day, window.id
                        ),
                        course_id=course.course_id,
                        course_code=course.course_code,
                        course_name=course.course_name,
                        room_id=room.room_id,
                        room_name=room.room_name,
                        date=day,
                        window_id=window.id,
                        start_time=window.start,
                        end_time=window.end,
                        student_count=course.student_count,
                        semester=semester,
                        exam_type=exam_type,
                    )
                    return outcome

        return outcome

    def _commit(self, placement: Placement, staff: list[StaffMember]) -> None:
        """Reserve the room and every invigilator of a placement."""
        self.conflict_index.reserve_room_window(
            placement.date, placement.room_id, placement.window_id
        )
        for member in staff:
            self.conflict_index.reserve_staff_window(
                placement.date, member.staff_id, placement.window_id
            )

    def _reject(
        self,
        results: ResultAggregator,
        course: CourseDemand,
        reason: UnscheduledReason,
        details: str,
    ) -> None:
        results.add_unscheduled(course, reason, details)
        logger.warning(f"Could not schedule {course.course_code}: {details}")

    def _reject_budget(self, results: ResultAggregator, course: CourseDemand) -> None:
        results.add_unscheduled(
            course,
            UnscheduledReason.RUN_BUDGET_EXHAUSTED,
            "Run budget exhausted before this course could be scheduled",
        )
