"""Collection of scheduling outcomes into the final report."""

from collections import defaultdict

from .models import (
    CourseDemand,
    InvigilatorAssignment,
    Placement,
    ScheduleReport,
    ScheduleStatistics,
    UnscheduledCourse,
    UnscheduledReason,
)


class ResultAggregator:
    """Accumulates placements and failures during a run.

    Every course handed to the scheduler ends up in exactly one of the two
    lists, so scheduled + unscheduled == total considered.
    """

    def __init__(self, semester: str, exam_type: str) -> None:
        self.semester = semester
        self.exam_type = exam_type
        self.total_considered = 0
        self.placements: list[Placement] = []
        self.assignments: list[InvigilatorAssignment] = []
        self.unscheduled: list[UnscheduledCourse] = []
        self.errors: list[str] = []
        self.candidates_examined = 0

    def add_scheduled(
        self, placement: Placement, assignments: list[InvigilatorAssignment]
    ) -> None:
        """Record a committed placement and its invigilators."""
        self.total_considered += 1
        self.placements.append(placement)
        self.assignments.extend(assignments)

    def add_unscheduled(
        self, demand: CourseDemand, reason: UnscheduledReason, details: str
    ) -> UnscheduledCourse:
        """Record a course that could not be placed."""
        self.total_considered += 1
        record = UnscheduledCourse(
            course_id=demand.course_id,
            course_code=demand.course_code,
            course_name=demand.course_name,
            student_count=demand.student_count,
            exam_duration_minutes=demand.exam_duration_minutes,
            reason=reason,
            details=details,
        )
        self.unscheduled.append(record)
        self.errors.append(
            f"Course {demand.course_code} ({demand.course_name}): {details}"
        )
        return record

    def _compute_statistics(self) -> ScheduleStatistics:
        by_date: dict[str, int] = defaultdict(int)
        by_window: dict[str, int] = defaultdict(int)
        by_room: dict[str, int] = defaultdict(int)
        by_reason: dict[str, int] = defaultdict(int)
        invigilator_load: dict[str, int] = defaultdict(int)

        for placement in self.placements:
            by_date[placement.date.isoformat()] += 1
            by_window[placement.window_id] += 1
            by_room[placement.room_name] += 1

        for assignment in self.assignments:
            invigilator_load[assignment.staff_name or assignment.staff_id] += 1

        for record in self.unscheduled:
            by_reason[record.reason.value] += 1

        return ScheduleStatistics(
            by_date=dict(sorted(by_date.items())),
            by_window=dict(sorted(by_window.items())),
            by_room=dict(sorted(by_room.items())),
            by_reason=dict(sorted(by_reason.items())),
            invigilator_load=dict(sorted(invigilator_load.items())),
            candidates_examined=self.candidates_examined,
        )

    def build(self) -> ScheduleReport:
        """Freeze the accumulated results into a report."""
        return ScheduleReport(
            semester=self.semester,
            exam_type=self.exam_type,
            total_to_schedule=self.total_considered,
            placements=tuple(self.placements),
            assignments=tuple(self.assignments),
            unscheduled=tuple(self.unscheduled),
            errors=tuple(self.errors),
            statistics=self._compute_statistics(),
        )
