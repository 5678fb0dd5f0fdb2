"""JSON file store for exam placements and invigilator assignments."""

import json
import logging
import os
import tempfile
from datetime import date
from pathlib import Path

from .exceptions import PersistenceError
from .scheduler.models import InvigilatorAssignment, Placement

logger = logging.getLogger(__name__)

STORE_VERSION = 1


class ScheduleStore:
    """Persists placements and invigilator assignments in one JSON file.

    A (semester, exam_type) scope is always replaced as a whole: the old
    rows of the scope are purged and the new ones written in a single atomic
    file replacement. If writing fails, the previous file is left as it was.

    The store does not lock. Callers must not run two generations for the
    same scope at the same time.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> dict:
        """Read the raw store document (empty document if no file yet).

        Raises:
            PersistenceError: If the file cannot be read or is not a store
                document of this version
        """
        if not self.path.exists():
            return {"version": STORE_VERSION, "placements": [], "invigilator_assignments": []}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(self.path, f"cannot read store: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError(
                self.path, f"malformed store: expected an object, got {type(data).__name__}"
            )
        if data.get("version") != STORE_VERSION:
            raise PersistenceError(
                self.path,
                f"unsupported store version {data.get('version')!r} "
                f"(expected {STORE_VERSION})",
            )
        data.setdefault("placements", [])
        data.setdefault("invigilator_assignments", [])
        return data

    def _parse(self, data: dict) -> tuple[list[Placement], list[InvigilatorAssignment]]:
        """Build models from the raw rows of a store document.

        Raises:
            PersistenceError: If a row is missing fields or has bad values
        """
        try:
            placements = [Placement.from_dict(p) for p in data["placements"]]
            assignments = [
                InvigilatorAssignment.from_dict(a) for a in data["invigilator_assignments"]
            ]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise PersistenceError(
                self.path, f"malformed store: {type(e).__name__}: {e}"
            ) from e
        return placements, assignments

    def load(self) -> tuple[list[Placement], list[InvigilatorAssignment]]:
        """Load every stored placement and assignment."""
        return self._parse(self._read())

    def load_scope(
        self, semester: str, exam_type: str
    ) -> tuple[list[Placement], list[InvigilatorAssignment]]:
        """Load the placements and assignments of one scope."""
        placements, assignments = self.load()
        scoped = [p for p in placements if p.semester == semester and p.exam_type == exam_type]
        ids = {p.placement_id for p in scoped}
        return scoped, [a for a in assignments if a.placement_id in ids]

    def bookings_outside_scope(
        self,
        semester: str,
        exam_type: str,
        start_date: date,
        end_date: date,
    ) -> tuple[list[Placement], list[InvigilatorAssignment]]:
        """Load other scopes' bookings that fall inside a date range.

        These rooms and invigilators are already taken and must block the
        new run.
        """
        placements, assignments = self.load()
        blocking = [
            p
            for p in placements
            if not (p.semester == semester and p.exam_type == exam_type)
            and start_date <= p.date <= end_date
        ]
        ids = {p.placement_id for p in blocking}
        return blocking, [a for a in assignments if a.placement_id in ids]

    def replace_scope(
        self,
        semester: str,
        exam_type: str,
        placements: list[Placement],
        assignments: list[InvigilatorAssignment],
    ) -> int:
        """Purge a scope and store its new rows in one atomic write.

        Args:
            semester: Semester of the scope
            exam_type: Exam type of the scope
            placements: New placements of the scope
            assignments: Invigilator assignments of the new placements

        Returns:
            Number of purged placements

        Raises:
            PersistenceError: If the store cannot be read or written
        """
        data = self._read()
        # Never rewrite a store whose rows cannot be read back
        self._parse(data)

        purged_ids = {
            p["placement_id"]
            for p in data["placements"]
            if p.get("semester") == semester and p.get("exam_type") == exam_type
        }
        kept_placements = [p for p in data["placements"] if p["placement_id"] not in purged_ids]
        kept_assignments = [
            a for a in data["invigilator_assignments"] if a["placement_id"] not in purged_ids
        ]

        document = {
            "version": STORE_VERSION,
            "placements": kept_placements + [p.to_dict() for p in placements],
            "invigilator_assignments": kept_assignments
            + [a.to_dict() for a in assignments],
        }
        self._write_atomic(document)

        logger.info(
            f"Replaced scope {semester}/{exam_type}: purged {len(purged_ids)} placements, "
            f"stored {len(placements)} placements and {len(assignments)} invigilator assignments"
        )
        return len(purged_ids)

    def _write_atomic(self, document: dict) -> None:
        """Write the document to a temporary file, then swap it in."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(document, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Failed to write schedule store {self.path}: {e}")
            raise PersistenceError(self.path, str(e)) from e
