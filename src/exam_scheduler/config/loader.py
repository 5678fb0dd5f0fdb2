"""Unified registry loader."""

import logging
from pathlib import Path

from .courses import CourseConfig
from .rooms import RoomConfig
from .staff import StaffConfig
from .tables import find_table

logger = logging.getLogger(__name__)

# Tables a run cannot do without
REQUIRED_TABLES = ["courses", "registrations", "rooms", "staff"]


class RegistryLoader:
    """Unified loader for the registry snapshots of one run."""

    def __init__(self, data_dir: Path | None = None):
        """
        Initialize registry loader.

        Args:
            data_dir: Path to directory containing registry tables.
                      Expected files (CSV or Excel):
                      - courses.csv
                      - registrations.csv
                      - rooms.csv
                      - staff.csv
        """
        if data_dir is None:
            data_dir = Path("data")

        self.data_dir = Path(data_dir)

        self.courses = CourseConfig(
            courses_path=self._get_path("courses"),
            registrations_path=self._get_path("registrations"),
        )
        self.rooms = RoomConfig(self._get_path("rooms"))
        self.staff = StaffConfig(self._get_path("staff"))

        logger.info(
            f"Loaded registry from {self.data_dir}: {len(self.courses.courses)} courses, "
            f"{len(self.courses.registrations)} registrations, "
            f"{len(self.rooms.rooms)} rooms, {len(self.staff.staff)} staff"
        )

    def _get_path(self, table: str) -> Path | None:
        """Get path to a registry table if it exists."""
        return find_table(self.data_dir, table)

    def missing_tables(self) -> list[str]:
        """Names of required tables with no file in the data directory."""
        return [t for t in REQUIRED_TABLES if self._get_path(t) is None]
