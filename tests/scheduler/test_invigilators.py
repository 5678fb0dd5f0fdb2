"""Tests for InvigilatorAssigner class."""

from datetime import date

import pytest

from exam_scheduler.scheduler.conflicts import ConflictIndex
from exam_scheduler.scheduler.invigilators import InvigilatorAssigner
from exam_scheduler.scheduler.models import Placement

DAY_1 = date(2025, 7, 1)


@pytest.fixture
def placement():
    return Placement(
        placement_id="p1",
        course_id="c1",
        course_code="MATH101",
        course_name="Calculus",
        room_id="R1",
        room_name="Room R1",
        date=DAY_1,
        window_id="1",
        start_time="07:30",
        end_time="09:00",
        student_count=10,
        semester="2025-2026/1",
        exam_type="Final",
    )


class TestInvigilatorAssigner:
    """Tests for InvigilatorAssigner class."""

    def test_pool_excludes_unavailable(self, make_staff):
        assigner = InvigilatorAssigner(
            make_staff("S2", ("S1", False), "S3"), ConflictIndex()
        )
        assert assigner.pool_size == 2
        assert [s.staff_id for s in assigner.staff] == ["S2", "S3"]

    def test_propose_lowest_ids(self, make_staff):
        assigner = InvigilatorAssigner(make_staff("S3", "S2", "S1"), ConflictIndex())
        proposal = assigner.propose(DAY_1, "1")
        assert [s.staff_id for s in proposal] == ["S1", "S2"]
        assert assigner.is_complete(proposal)

    def test_busy_staff_skipped(self, make_staff):
        index = ConflictIndex()
        index.reserve_staff_window(DAY_1, "S1", "1")
        assigner = InvigilatorAssigner(make_staff("S1", "S2", "S3"), index)
        assert [s.staff_id for s in assigner.propose(DAY_1, "1")] == ["S2", "S3"]
        assert [s.staff_id for s in assigner.propose(DAY_1, "2")] == ["S1", "S2"]

    def test_incomplete_proposal(self, make_staff):
        index = ConflictIndex()
        index.reserve_staff_window(DAY_1, "S1", "1")
        assigner = InvigilatorAssigner(make_staff("S1", "S2"), index)
        proposal = assigner.propose(DAY_1, "1")
        assert len(proposal) == 1
        assert not assigner.is_complete(proposal)

    def test_propose_reserves_nothing(self, make_staff):
        index = ConflictIndex()
        assigner = InvigilatorAssigner(make_staff("S1", "S2"), index)
        assigner.propose(DAY_1, "1")
        assert index.total_reservations == 0

    def test_custom_team_size(self, make_staff):
        assigner = InvigilatorAssigner(
            make_staff("S1", "S2", "S3"), ConflictIndex(), per_room=3
        )
        assert len(assigner.propose(DAY_1, "1")) == 3

    def test_invalid_team_size(self, make_staff):
        with pytest.raises(ValueError):
            InvigilatorAssigner(make_staff("S1"), ConflictIndex(), per_room=0)

    def test_build_assignments(self, make_staff, placement):
        assigner = InvigilatorAssigner(make_staff("S1", "S2"), ConflictIndex())
        assignments = assigner.build_assignments(placement, assigner.propose(DAY_1, "1"))

        assert [a.order for a in assignments] == [1, 2]
        assert [a.role for a in assignments] == ["Invigilator 1", "Invigilator 2"]
        assert [a.staff_name for a in assignments] == ["Staff S1", "Staff S2"]
        assert all(a.placement_id == "p1" for a in assignments)
        assert len({a.assignment_id for a in assignments}) == 2

    def test_assignment_ids_are_stable(self, make_staff, placement):
        staff = make_staff("S1", "S2")
        first = InvigilatorAssigner(staff, ConflictIndex()).build_assignments(placement, staff)
        second = InvigilatorAssigner(staff, ConflictIndex()).build_assignments(placement, staff)
        assert [a.assignment_id for a in first] == [a.assignment_id for a in second]
