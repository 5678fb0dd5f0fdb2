"""Data models for the exam timetabling system."""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any


class UnscheduledReason(str, Enum):
    """Reasons why a course could not be scheduled."""

    DURATION_EXCEEDS_WINDOWS = "duration_exceeds_windows"
    NO_ROOM_CAPACITY = "no_room_capacity"
    NO_FREE_ROOM_WINDOW = "no_free_room_window"
    INSUFFICIENT_INVIGILATORS = "insufficient_invigilators"
    RUN_BUDGET_EXHAUSTED = "run_budget_exhausted"


@dataclass(frozen=True)
class TimeWindow:
    """A fixed daily exam window."""

    id: str
    start: str
    end: str
    duration: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeWindow":
        """Create a TimeWindow from a catalog entry."""
        return cls(
            id=str(data["id"]),
            start=data["start"],
            end=data["end"],
            duration=int(data["duration"]),
        )

    @property
    def time_range(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass
class Course:
    """A course as recorded in the course registry."""

    course_id: str
    course_code: str
    course_name: str
    exam_duration_minutes: int
    is_active: bool = True


@dataclass(frozen=True)
class Registration:
    """A student's registration for a course in one semester."""

    student_id: str
    course_id: str
    semester: str


@dataclass(frozen=True)
class CourseDemand:
    """Scheduling demand of one course for the target semester."""

    course_id: str
    course_code: str
    course_name: str
    exam_duration_minutes: int
    student_count: int


@dataclass
class Room:
    """A physical exam room."""

    room_id: str
    room_name: str
    capacity: int
    is_active: bool = True

    def __hash__(self) -> int:
        return hash(self.room_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Room):
            return False
        return self.room_id == other.room_id


@dataclass
class StaffMember:
    """A staff member who may supervise exams."""

    staff_id: str
    full_name: str
    is_available_for_invigilation: bool = True

    def __hash__(self) -> int:
        return hash(self.staff_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StaffMember):
            return False
        return self.staff_id == other.staff_id


@dataclass
class Placement:
    """A committed (course, date, window, room) assignment."""

    placement_id: str
    course_id: str
    course_code: str
    course_name: str
    room_id: str
    room_name: str
    date: date
    window_id: str
    start_time: str
    end_time: str
    student_count: int
    semester: str
    exam_type: str

    def to_dict(self) -> dict[str, Any]:
        """Convert placement to dictionary."""
        return {
            "placement_id": self.placement_id,
            "course_id": self.course_id,
            "course_code": self.course_code,
            "course_name": self.course_name,
            "room_id": self.room_id,
            "room_name": self.room_name,
            "date": self.date.isoformat(),
            "window_id": self.window_id,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "student_count": self.student_count,
            "semester": self.semester,
            "exam_type": self.exam_type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Placement":
        """Create a Placement from a dictionary."""
        return cls(
            placement_id=data["placement_id"],
            course_id=data["course_id"],
            course_code=data.get("course_code", ""),
            course_name=data.get("course_name", ""),
            room_id=data["room_id"],
            room_name=data.get("room_name", ""),
            date=date.fromisoformat(data["date"]),
            window_id=str(data["window_id"]),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            student_count=data.get("student_count", 0),
            semester=data["semester"],
            exam_type=data["exam_type"],
        )


@dataclass
class InvigilatorAssignment:
    """A staff member supervising a placement."""

    assignment_id: str
    placement_id: str
    staff_id: str
    staff_name: str
    order: int
    role: str

    def to_dict(self) -> dict[str, Any]:
        """Convert assignment to dictionary."""
        return {
            "assignment_id": self.assignment_id,
            "placement_id": self.placement_id,
            "staff_id": self.staff_id,
            "staff_name": self.staff_name,
            "order": self.order,
            "role": self.role,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InvigilatorAssignment":
        """Create an InvigilatorAssignment from a dictionary."""
        return cls(
            assignment_id=data["assignment_id"],
            placement_id=data["placement_id"],
            staff_id=data["staff_id"],
            staff_name=data.get("staff_name", ""),
            order=int(data["order"]),
            role=data.get("role", ""),
        )


@dataclass
class UnscheduledCourse:
    """A course that could not be scheduled."""

    course_id: str
    course_code: str
    course_name: str
    student_count: int
    exam_duration_minutes: int
    reason: UnscheduledReason
    details: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "course_id": self.course_id,
            "course_code": self.course_code,
            "course_name": self.course_name,
            "student_count": self.student_count,
            "exam_duration_minutes": self.exam_duration_minutes,
            "reason": self.reason.value,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UnscheduledCourse":
        """Create an UnscheduledCourse from a dictionary."""
        return cls(
            course_id=data["course_id"],
            course_code=data["course_code"],
            course_name=data.get("course_name", ""),
            student_count=data.get("student_count", 0),
            exam_duration_minutes=data.get("exam_duration_minutes", 0),
            reason=UnscheduledReason(data["reason"]),
            details=data.get("details", ""),
        )


@dataclass
class ScheduleStatistics:
    """Statistics about the generated exam schedule."""

    by_date: dict[str, int] = field(default_factory=dict)
    by_window: dict[str, int] = field(default_factory=dict)
    by_room: dict[str, int] = field(default_factory=dict)
    by_reason: dict[str, int] = field(default_factory=dict)
    invigilator_load: dict[str, int] = field(default_factory=dict)
    candidates_examined: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "by_date": self.by_date,
            "by_window": self.by_window,
            "by_room": self.by_room,
            "by_reason": self.by_reason,
            "invigilator_load": self.invigilator_load,
            "candidates_examined": self.candidates_examined,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleStatistics":
        """Create statistics from a dictionary."""
        return cls(
            by_date=data.get("by_date", {}),
            by_window=data.get("by_window", {}),
            by_room=data.get("by_room", {}),
            by_reason=data.get("by_reason", {}),
            invigilator_load=data.get("invigilator_load", {}),
            candidates_examined=data.get("candidates_examined", 0),
        )


@dataclass(frozen=True)
class ScheduleReport:
    """Result of one exam schedule generation run.

    The report carries no timestamps, so identical inputs serialize to
    identical JSON.
    """

    semester: str
    exam_type: str
    total_to_schedule: int
    placements: tuple[Placement, ...] = ()
    assignments: tuple[InvigilatorAssignment, ...] = ()
    unscheduled: tuple[UnscheduledCourse, ...] = ()
    errors: tuple[str, ...] = ()
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    persisted: bool = False

    @property
    def scheduled_count(self) -> int:
        return len(self.placements)

    @property
    def unscheduled_count(self) -> int:
        return len(self.unscheduled)

    @property
    def success(self) -> bool:
        """True when every course in the demand list was placed."""
        return self.unscheduled_count == 0

    @property
    def unscheduled_courses(self) -> list[str]:
        return [u.course_code for u in self.unscheduled]

    def assignments_for(self, placement_id: str) -> list[InvigilatorAssignment]:
        """Invigilator assignments of one placement, ordered."""
        return sorted(
            (a for a in self.assignments if a.placement_id == placement_id),
            key=lambda a: a.order,
        )

    def mark_persisted(self) -> "ScheduleReport":
        """Return a copy flagged as committed to the store."""
        return replace(self, persisted=True)

    def scheduled_exams(self) -> list[dict[str, Any]]:
        """Human-readable summary of each committed placement."""
        return [
            {
                "placement_id": p.placement_id,
                "course_code": p.course_code,
                "course_name": p.course_name,
                "room_name": p.room_name,
                "date": p.date.isoformat(),
                "window_start": p.start_time,
                "window_end": p.end_time,
                "window_id": p.window_id,
                "student_count": p.student_count,
                "invigilators": [
                    a.staff_name or a.staff_id
                    for a in self.assignments_for(p.placement_id)
                ],
            }
            for p in self.placements
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "persisted": self.persisted,
            "semester": self.semester,
            "exam_type": self.exam_type,
            "total_to_schedule": self.total_to_schedule,
            "scheduled_count": self.scheduled_count,
            "unscheduled_count": self.unscheduled_count,
            "unscheduled_courses": self.unscheduled_courses,
            "errors": list(self.errors),
            "scheduled_exams": self.scheduled_exams(),
            "unscheduled": [u.to_dict() for u in self.unscheduled],
            "placements": [p.to_dict() for p in self.placements],
            "invigilator_assignments": [a.to_dict() for a in self.assignments],
            "statistics": self.statistics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleReport":
        """Rebuild a report from its serialized form."""
        return cls(
            semester=data["semester"],
            exam_type=data["exam_type"],
            total_to_schedule=data["total_to_schedule"],
            placements=tuple(Placement.from_dict(p) for p in data.get("placements", [])),
            assignments=tuple(
                InvigilatorAssignment.from_dict(a)
                for a in data.get("invigilator_assignments", [])
            ),
            unscheduled=tuple(
                UnscheduledCourse.from_dict(u) for u in data.get("unscheduled", [])
            ),
            errors=tuple(data.get("errors", [])),
            statistics=ScheduleStatistics.from_dict(data.get("statistics", {})),
            persisted=data.get("persisted", False),
        )
