"""Course and registration registry loader."""

from pathlib import Path

from ..exceptions import InvalidDataError
from ..scheduler.models import Course, Registration
from ..scheduler.utils import parse_bool
from .tables import read_table, require_value, to_int

COURSE_COLUMNS = ["course_id", "course_code", "course_name", "exam_duration_minutes"]
REGISTRATION_COLUMNS = ["student_id", "course_id", "semester"]


class CourseConfig:
    """Loader for courses (courses.csv) and registrations (registrations.csv)."""

    def __init__(
        self,
        courses_path: Path | None = None,
        registrations_path: Path | None = None,
    ):
        self.courses: list[Course] = []
        self.registrations: list[Registration] = []
        self._by_id: dict[str, Course] = {}

        if courses_path and courses_path.exists():
            self._load_courses(courses_path)
        if registrations_path and registrations_path.exists():
            self._load_registrations(registrations_path)

    def _load_courses(self, path: Path) -> None:
        """Load courses from a table file."""
        df = read_table(path, COURSE_COLUMNS)
        codes: set[str] = set()
        for row, record in enumerate(df.to_dict("records"), start=2):
            course_id = require_value(record["course_id"], "course_id", path.name, row)
            code = require_value(record["course_code"], "course_code", path.name, row)
            if course_id in self._by_id:
                raise InvalidDataError(
                    f"duplicate course_id '{course_id}'", table=path.name, row=row
                )
            if code in codes:
                raise InvalidDataError(
                    f"duplicate course_code '{code}'", table=path.name, row=row
                )
            course = Course(
                course_id=course_id,
                course_code=code,
                course_name=record["course_name"],
                exam_duration_minutes=to_int(
                    record["exam_duration_minutes"], "exam_duration_minutes", path.name, row
                ),
                is_active=parse_bool(record.get("is_active")),
            )
            self.courses.append(course)
            self._by_id[course_id] = course
            codes.add(code)

    def _load_registrations(self, path: Path) -> None:
        """Load registrations from a table file.

        Rows pointing at unknown courses are skipped.
        """
        df = read_table(path, REGISTRATION_COLUMNS)
        for row, record in enumerate(df.to_dict("records"), start=2):
            course_id = require_value(record["course_id"], "course_id", path.name, row)
            if self._by_id and course_id not in self._by_id:
                continue
            self.registrations.append(
                Registration(
                    student_id=require_value(
                        record["student_id"], "student_id", path.name, row
                    ),
                    course_id=course_id,
                    semester=require_value(record["semester"], "semester", path.name, row),
                )
            )

    def get_course(self, course_id: str) -> Course | None:
        """Get a course by id."""
        return self._by_id.get(course_id)

    def get_semesters(self) -> list[str]:
        """Get semesters that have registrations."""
        return sorted({r.semester for r in self.registrations})
