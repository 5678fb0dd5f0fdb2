"""Test fixtures for exam scheduler tests."""

import csv
from pathlib import Path

import pytest

from exam_scheduler.scheduler.models import CourseDemand, Room, StaffMember

SEMESTER = "2025-2026/1"


@pytest.fixture
def make_demand():
    """Factory for CourseDemand records."""

    def _make(code: str, students: int, duration: int = 90, course_id: str | None = None):
        return CourseDemand(
            course_id=course_id or f"id-{code}",
            course_code=code,
            course_name=f"Course {code}",
            exam_duration_minutes=duration,
            student_count=students,
        )

    return _make


@pytest.fixture
def make_rooms():
    """Factory for rooms: make_rooms(("R1", 50), ("R2", 100, False))."""

    def _make(*specs):
        rooms = []
        for spec in specs:
            room_id, capacity = spec[0], spec[1]
            is_active = spec[2] if len(spec) > 2 else True
            rooms.append(
                Room(
                    room_id=room_id,
                    room_name=f"Room {room_id}",
                    capacity=capacity,
                    is_active=is_active,
                )
            )
        return rooms

    return _make


@pytest.fixture
def make_staff():
    """Factory for staff: make_staff("S1", "S2") or make_staff(("S3", False))."""

    def _make(*specs):
        staff = []
        for spec in specs:
            if isinstance(spec, tuple):
                staff_id, available = spec
            else:
                staff_id, available = spec, True
            staff.append(
                StaffMember(
                    staff_id=staff_id,
                    full_name=f"Staff {staff_id}",
                    is_available_for_invigilation=available,
                )
            )
        return staff

    return _make


def _write_csv(path: Path, fieldnames: list[str], rows: list[dict]) -> Path:
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def registry_dir(tmp_path):
    """Create a registry data directory with CSV tables.

    Semester 2025-2026/1 demand: MATH101 (3 students, 90 min),
    PHYS101 (2 students, 120 min). CHEM101 is inactive, ART101 only has a
    registration in another semester.
    """
    data_dir = tmp_path / "data"
    data_dir.mkdir()

    _write_csv(
        data_dir / "courses.csv",
        ["course_id", "course_code", "course_name", "exam_duration_minutes", "is_active"],
        [
            {"course_id": "c1", "course_code": "MATH101", "course_name": "Calculus",
             "exam_duration_minutes": "90", "is_active": "true"},
            {"course_id": "c2", "course_code": "PHYS101", "course_name": "Mechanics",
             "exam_duration_minutes": "120", "is_active": "true"},
            {"course_id": "c3", "course_code": "CHEM101", "course_name": "Chemistry",
             "exam_duration_minutes": "90", "is_active": "false"},
            {"course_id": "c4", "course_code": "ART101", "course_name": "Drawing",
             "exam_duration_minutes": "90", "is_active": ""},
        ],
    )
    _write_csv(
        data_dir / "registrations.csv",
        ["student_id", "course_id", "semester"],
        [
            {"student_id": "st1", "course_id": "c1", "semester": SEMESTER},
            {"student_id": "st2", "course_id": "c1", "semester": SEMESTER},
            {"student_id": "st3", "course_id": "c1", "semester": SEMESTER},
            {"student_id": "st3", "course_id": "c1", "semester": SEMESTER},
            {"student_id": "st1", "course_id": "c2", "semester": SEMESTER},
            {"student_id": "st2", "course_id": "c2", "semester": SEMESTER},
            {"student_id": "st1", "course_id": "c3", "semester": SEMESTER},
            {"student_id": "st1", "course_id": "c4", "semester": "2024-2025/2"},
        ],
    )
    _write_csv(
        data_dir / "rooms.csv",
        ["room_id", "room_name", "capacity", "is_active"],
        [
            {"room_id": "r1", "room_name": "A-101", "capacity": "50", "is_active": "true"},
            {"room_id": "r2", "room_name": "B-202", "capacity": "100", "is_active": "false"},
        ],
    )
    _write_csv(
        data_dir / "staff.csv",
        ["staff_id", "full_name", "is_available_for_invigilation"],
        [
            {"staff_id": "s1", "full_name": "Nguyen An", "is_available_for_invigilation": "true"},
            {"staff_id": "s2", "full_name": "Tran Binh", "is_available_for_invigilation": "1"},
            {"staff_id": "s3", "full_name": "Le Chi", "is_available_for_invigilation": "yes"},
            {"staff_id": "s4", "full_name": "Pham Dung", "is_available_for_invigilation": "no"},
        ],
    )
    return data_dir
