"""Tests for the generation entry point."""

import json
from datetime import date, datetime

import pytest

from exam_scheduler import (
    GenerationRequest,
    InvalidDataError,
    InvalidRequestError,
    PersistenceError,
    RegistryLoader,
    ScheduleStore,
    UnscheduledReason,
    generate,
)
from exam_scheduler.scheduler import export_report_json

SEMESTER = "2025-2026/1"
DAY = "2025-07-01"


@pytest.fixture
def registry(registry_dir):
    return RegistryLoader(registry_dir)


@pytest.fixture
def store(tmp_path):
    return ScheduleStore(tmp_path / "store" / "schedules.json")


class TestGenerationRequest:
    """Tests for request validation."""

    def test_valid_request(self):
        request = GenerationRequest.create("2025-07-01", date(2025, 7, 3), 4, " Final ", SEMESTER)
        assert request.start_date == date(2025, 7, 1)
        assert request.end_date == date(2025, 7, 3)
        assert request.exam_type == "Final"

    @pytest.mark.parametrize(
        "args, field",
        [
            (("07/01/2025", DAY, 6, "Final", SEMESTER), "start_date"),
            ((DAY, "", 6, "Final", SEMESTER), "end_date"),
            (("2025-07-02", DAY, 6, "Final", SEMESTER), "end_date"),
            ((DAY, DAY, 0, "Final", SEMESTER), "windows_per_day"),
            ((DAY, DAY, 7, "Final", SEMESTER), "windows_per_day"),
            ((DAY, DAY, "6", "Final", SEMESTER), "windows_per_day"),
            ((DAY, DAY, True, "Final", SEMESTER), "windows_per_day"),
            ((DAY, DAY, 6, "  ", SEMESTER), "exam_type"),
            ((DAY, DAY, 6, "Final", ""), "semester"),
        ],
    )
    def test_invalid_request(self, args, field):
        with pytest.raises(InvalidRequestError) as exc_info:
            GenerationRequest.create(*args)
        assert exc_info.value.field == field

    def test_invalid_request_touches_nothing(self, registry, store):
        with pytest.raises(InvalidRequestError):
            generate(DAY, "2025-06-30", 6, "Final", SEMESTER, registry=registry, store=store)
        assert not store.path.exists()


class TestGenerate:
    """Tests for full generation runs against a registry directory."""

    def test_dry_run(self, registry):
        report = generate(DAY, DAY, 6, "Final", SEMESTER, registry=registry)

        assert not report.persisted
        assert report.total_to_schedule == 2
        slots = {p.course_code: (p.room_id, p.window_id) for p in report.placements}
        assert slots == {"MATH101": ("r1", "1"), "PHYS101": ("r1", "5")}
        math = next(p for p in report.placements if p.course_code == "MATH101")
        assert math.student_count == 3
        assert [a.staff_id for a in report.assignments_for(math.placement_id)] == ["s1", "s2"]

    def test_committed_run(self, registry, store):
        report = generate(DAY, DAY, 6, "Final", SEMESTER, registry=registry, store=store)

        assert report.persisted
        placements, assignments = store.load_scope(SEMESTER, "Final")
        assert sorted(p.placement_id for p in placements) == sorted(
            p.placement_id for p in report.placements
        )
        assert len(assignments) == 4

    def test_rerun_replaces_scope(self, registry, store):
        generate(DAY, DAY, 6, "Final", SEMESTER, registry=registry, store=store)
        generate(DAY, DAY, 6, "Final", SEMESTER, registry=registry, store=store)

        placements, assignments = store.load()
        assert len(placements) == 2
        assert len(assignments) == 4

    def test_rerun_output_is_identical(self, registry, store, tmp_path):
        first = generate(DAY, DAY, 6, "Final", SEMESTER, registry=registry, store=store)
        export_report_json(first, tmp_path / "first.json")
        stored = store.path.read_bytes()

        second = generate(DAY, DAY, 6, "Final", SEMESTER, registry=registry, store=store)
        export_report_json(second, tmp_path / "second.json")

        assert (tmp_path / "first.json").read_bytes() == (tmp_path / "second.json").read_bytes()
        assert store.path.read_bytes() == stored

    def test_other_scope_blocks_resources(self, registry, store):
        generate(DAY, DAY, 6, "Final", SEMESTER, registry=registry, store=store)
        midterm = generate(DAY, DAY, 6, "Midterm", SEMESTER, registry=registry, store=store)

        slots = {p.course_code: p.window_id for p in midterm.placements}
        assert slots == {"MATH101": "2", "PHYS101": "6"}
        assert len(store.load()[0]) == 4

    def test_single_window_leaves_course_unscheduled(self, registry):
        report = generate(DAY, DAY, 1, "Final", SEMESTER, registry=registry)

        assert report.scheduled_count == 1
        assert report.unscheduled[0].course_code == "PHYS101"
        assert report.unscheduled[0].reason == UnscheduledReason.DURATION_EXCEEDS_WINDOWS

    def test_semester_without_registrations(self, registry):
        report = generate(DAY, DAY, 6, "Final", "1999-2000/1", registry=registry)
        assert report.total_to_schedule == 0
        assert report.success

    def test_bad_course_duration(self, registry_dir):
        courses = registry_dir / "courses.csv"
        courses.write_text(
            courses.read_text(encoding="utf-8").replace("c1,MATH101,Calculus,90", "c1,MATH101,Calculus,0"),
            encoding="utf-8",
        )
        with pytest.raises(InvalidDataError, match="MATH101"):
            generate(DAY, DAY, 6, "Final", SEMESTER, registry=RegistryLoader(registry_dir))


class TestPersistenceFailure:
    """Tests for a failing write-back."""

    def test_store_unchanged_and_report_attached(self, registry, store, monkeypatch):
        generate(DAY, DAY, 6, "Final", SEMESTER, registry=registry, store=store)
        before = store.path.read_bytes()

        def fail_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr("exam_scheduler.storage.os.replace", fail_replace)

        with pytest.raises(PersistenceError) as exc_info:
            generate(DAY, "2025-07-02", 6, "Final", SEMESTER, registry=registry, store=store)

        assert store.path.read_bytes() == before
        assert [p.name for p in store.path.parent.iterdir()] == ["schedules.json"]

        report = exc_info.value.report
        assert report is not None
        assert not report.persisted
        assert report.scheduled_count == 2
        assert json.loads(before)["version"] == 1


class TestDatetimeInput:
    """Tests for datetime arguments to generate."""

    def test_datetime_range_with_other_scope_stored(self, registry, store):
        generate(DAY, DAY, 6, "Midterm", SEMESTER, registry=registry, store=store)

        report = generate(
            datetime(2025, 7, 1, 8, 0),
            datetime(2025, 7, 1, 18, 0),
            6,
            "Final",
            SEMESTER,
            registry=registry,
            store=store,
        )

        assert report.persisted
        assert {p.date for p in report.placements} == {date(2025, 7, 1)}
        slots = {p.course_code: p.window_id for p in report.placements}
        assert slots == {"MATH101": "2", "PHYS101": "6"}

    def test_store_readable_after_datetime_run(self, registry, store):
        generate(
            datetime(2025, 7, 1), datetime(2025, 7, 1), 6, "Final", SEMESTER,
            registry=registry, store=store,
        )

        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert {p["date"] for p in data["placements"]} == {"2025-07-01"}
        placements, _ = store.load()
        assert len(placements) == 2
