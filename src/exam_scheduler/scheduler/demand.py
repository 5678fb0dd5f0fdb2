"""Aggregation of course registrations into scheduling demand."""

import logging
from collections import defaultdict

from ..exceptions import InvalidDataError
from .models import Course, CourseDemand, Registration

logger = logging.getLogger(__name__)


def count_registrations(
    registrations: list[Registration], semester: str
) -> dict[str, int]:
    """Count distinct registered students per course for one semester.

    Args:
        registrations: Registration snapshot (any semester)
        semester: Target semester

    Returns:
        Mapping of course_id to number of distinct students
    """
    students: dict[str, set[str]] = defaultdict(set)
    for registration in registrations:
        if registration.semester != semester:
            continue
        students[registration.course_id].add(registration.student_id)
    return {course_id: len(ids) for course_id, ids in students.items()}


def sort_demand_by_priority(demand: list[CourseDemand]) -> list[CourseDemand]:
    """Sort course demand by scheduling priority.

    Priority order:
    1. Student count (descending) - larger exams first
    2. Course code (ascending) - fixed tie-break for reproducible runs

    Args:
        demand: List of CourseDemand records

    Returns:
        Sorted list with highest priority first
    """
    return sorted(demand, key=lambda d: (-d.student_count, d.course_code))


def aggregate_demand(
    courses: list[Course],
    registrations: list[Registration],
    semester: str,
) -> list[CourseDemand]:
    """Build the ordered demand list for a semester.

    Inactive courses and courses without registrations in the semester
    have no exam to schedule and are left out.

    Args:
        courses: Course registry snapshot
        registrations: Registration snapshot
        semester: Target semester

    Returns:
        CourseDemand records sorted by sort_demand_by_priority

    Raises:
        InvalidDataError: If a scheduled course has a non-positive duration
    """
    counts = count_registrations(registrations, semester)

    demand: list[CourseDemand] = []
    for course in courses:
        if not course.is_active:
            continue
        student_count = counts.get(course.course_id, 0)
        if student_count == 0:
            continue
        if course.exam_duration_minutes <= 0:
            raise InvalidDataError(
                f"Course {course.course_code} has exam duration "
                f"{course.exam_duration_minutes} (must be > 0)",
                table="courses",
            )
        demand.append(
            CourseDemand(
                course_id=course.course_id,
                course_code=course.course_code,
                course_name=course.course_name,
                exam_duration_minutes=course.exam_duration_minutes,
                student_count=student_count,
            )
        )

    logger.info(
        f"Semester {semester}: {len(demand)} courses with registrations "
        f"out of {len(courses)} in registry"
    )
    return sort_demand_by_priority(demand)
