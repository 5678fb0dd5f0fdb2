"""Staff registry loader."""

from pathlib import Path

from ..exceptions import InvalidDataError
from ..scheduler.models import StaffMember
from ..scheduler.utils import parse_bool
from .tables import read_table, require_value

STAFF_COLUMNS = ["staff_id", "full_name"]


class StaffConfig:
    """Loader for the staff registry (staff.csv / staff.xlsx)."""

    def __init__(self, staff_path: Path | None = None):
        self.staff: list[StaffMember] = []
        self._by_id: dict[str, StaffMember] = {}

        if staff_path and staff_path.exists():
            self._load(staff_path)

    def _load(self, path: Path) -> None:
        """Load staff members from a table file."""
        df = read_table(path, STAFF_COLUMNS)
        for row, record in enumerate(df.to_dict("records"), start=2):
            staff_id = require_value(record["staff_id"], "staff_id", path.name, row)
            if staff_id in self._by_id:
                raise InvalidDataError(
                    f"duplicate staff_id '{staff_id}'", table=path.name, row=row
                )
            member = StaffMember(
                staff_id=staff_id,
                full_name=record["full_name"] or staff_id,
                is_available_for_invigilation=parse_bool(
                    record.get("is_available_for_invigilation")
                ),
            )
            self.staff.append(member)
            self._by_id[staff_id] = member

    def get_member(self, staff_id: str) -> StaffMember | None:
        """Get a staff member by id."""
        return self._by_id.get(staff_id)

    def get_invigilators(self) -> list[StaffMember]:
        """Get staff available for invigilation, ordered by staff_id."""
        return sorted(
            (s for s in self.staff if s.is_available_for_invigilation),
            key=lambda s: s.staff_id,
        )
