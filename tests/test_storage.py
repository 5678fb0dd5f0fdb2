"""Tests for the JSON schedule store."""

import json
from datetime import date

import pytest

from exam_scheduler.exceptions import PersistenceError
from exam_scheduler.scheduler.models import InvigilatorAssignment, Placement
from exam_scheduler.storage import ScheduleStore

SEMESTER = "2025-2026/1"


def make_placement(placement_id, exam_type="Final", day=date(2025, 7, 1), semester=SEMESTER):
    return Placement(
        placement_id=placement_id,
        course_id=f"c-{placement_id}",
        course_code=placement_id.upper(),
        course_name="Course",
        room_id="r1",
        room_name="A-101",
        date=day,
        window_id="1",
        start_time="07:30",
        end_time="09:00",
        student_count=10,
        semester=semester,
        exam_type=exam_type,
    )


def make_assignment(placement_id, staff_id="s1", order=1):
    return InvigilatorAssignment(
        f"{placement_id}-{staff_id}",
        placement_id,
        staff_id,
        f"Staff {staff_id}",
        order,
        f"Invigilator {order}",
    )


@pytest.fixture
def store(tmp_path):
    store = ScheduleStore(tmp_path / "output" / "schedules.json")
    store.replace_scope(
        SEMESTER,
        "Final",
        [make_placement("f1"), make_placement("f2", day=date(2025, 7, 5))],
        [make_assignment("f1"), make_assignment("f2")],
    )
    store.replace_scope(
        SEMESTER,
        "Midterm",
        [make_placement("m1", exam_type="Midterm")],
        [make_assignment("m1", "s2")],
    )
    return store


class TestScheduleStore:
    """Tests for ScheduleStore class."""

    def test_empty_store(self, tmp_path):
        store = ScheduleStore(tmp_path / "none.json")
        assert store.load() == ([], [])

    def test_round_trip(self, store):
        placements, assignments = store.load()
        assert [p.placement_id for p in placements] == ["f1", "f2", "m1"]
        assert placements[1].date == date(2025, 7, 5)
        assert len(assignments) == 3

    def test_load_scope(self, store):
        placements, assignments = store.load_scope(SEMESTER, "Midterm")
        assert [p.placement_id for p in placements] == ["m1"]
        assert [a.staff_id for a in assignments] == ["s2"]

    def test_replace_scope_purges_old_rows(self, store):
        purged = store.replace_scope(
            SEMESTER, "Final", [make_placement("f3")], [make_assignment("f3")]
        )
        assert purged == 2

        placements, assignments = store.load()
        assert sorted(p.placement_id for p in placements) == ["f3", "m1"]
        assert sorted(a.placement_id for a in assignments) == ["f3", "m1"]

    def test_replace_with_nothing(self, store):
        store.replace_scope(SEMESTER, "Final", [], [])
        assert store.load_scope(SEMESTER, "Final") == ([], [])
        assert len(store.load_scope(SEMESTER, "Midterm")[0]) == 1

    def test_bookings_outside_scope(self, store):
        placements, assignments = store.bookings_outside_scope(
            SEMESTER, "Midterm", date(2025, 7, 1), date(2025, 7, 3)
        )
        # f2 falls outside the date range, m1 is the scope itself
        assert [p.placement_id for p in placements] == ["f1"]
        assert [a.placement_id for a in assignments] == ["f1"]

    def test_other_semester_blocks(self, store):
        placements, _ = store.bookings_outside_scope(
            "2026-2027/1", "Final", date(2025, 7, 1), date(2025, 7, 31)
        )
        assert len(placements) == 3

    def test_document_format(self, store):
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["version"] == 1
        assert data["placements"][0]["date"] == "2025-07-01"
        assert data["invigilator_assignments"][0]["role"] == "Invigilator 1"


class TestStoreFailures:
    """Tests for read and write failures."""

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "schedules.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError, match="cannot read store"):
            ScheduleStore(path).load()

    def test_failed_replace_leaves_file_unchanged(self, store, monkeypatch):
        before = store.path.read_bytes()

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("exam_scheduler.storage.os.replace", fail_replace)

        with pytest.raises(PersistenceError) as exc_info:
            store.replace_scope(SEMESTER, "Final", [make_placement("f9")], [])

        assert "disk full" in str(exc_info.value)
        assert store.path.read_bytes() == before
        assert [p.name for p in store.path.parent.iterdir()] == ["schedules.json"]

    def test_row_missing_fields(self, tmp_path):
        path = tmp_path / "schedules.json"
        path.write_text(
            json.dumps(
                {
                    "version": 1,
                    "placements": [{"placement_id": "x", "semester": "A", "exam_type": "B"}],
                    "invigilator_assignments": [],
                }
            ),
            encoding="utf-8",
        )
        with pytest.raises(PersistenceError, match="malformed store: KeyError"):
            ScheduleStore(path).load()

    def test_row_with_bad_date(self, store):
        data = json.loads(store.path.read_text(encoding="utf-8"))
        data["placements"][0]["date"] = "01.07.2025"
        store.path.write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(PersistenceError, match="malformed store"):
            store.load()

    def test_malformed_rows_block_rewrite(self, store):
        data = json.loads(store.path.read_text(encoding="utf-8"))
        data["invigilator_assignments"].append({"staff_id": "s9"})
        store.path.write_text(json.dumps(data), encoding="utf-8")
        before = store.path.read_bytes()

        with pytest.raises(PersistenceError, match="malformed store"):
            store.replace_scope(SEMESTER, "Final", [], [])
        assert store.path.read_bytes() == before

    @pytest.mark.parametrize("document", ["[]", '"schedules"', "42"])
    def test_document_not_an_object(self, tmp_path, document):
        path = tmp_path / "schedules.json"
        path.write_text(document, encoding="utf-8")
        with pytest.raises(PersistenceError, match="expected an object"):
            ScheduleStore(path).load()

    @pytest.mark.parametrize("version", [2, None, "1"])
    def test_unsupported_version(self, tmp_path, version):
        path = tmp_path / "schedules.json"
        document = {"placements": [], "invigilator_assignments": []}
        if version is not None:
            document["version"] = version
        path.write_text(json.dumps(document), encoding="utf-8")
        with pytest.raises(PersistenceError, match="unsupported store version"):
            ScheduleStore(path).load()
