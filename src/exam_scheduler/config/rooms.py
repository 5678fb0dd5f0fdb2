"""Room registry loader."""

from pathlib import Path

from ..exceptions import InvalidDataError
from ..scheduler.models import Room
from ..scheduler.utils import parse_bool
from .tables import read_table, require_value, to_int

ROOM_COLUMNS = ["room_id", "room_name", "capacity"]


class RoomConfig:
    """Loader for the room registry (rooms.csv / rooms.xlsx)."""

    def __init__(self, rooms_path: Path | None = None):
        self.rooms: list[Room] = []
        self._by_id: dict[str, Room] = {}

        if rooms_path and rooms_path.exists():
            self._load(rooms_path)

    def _load(self, path: Path) -> None:
        """Load rooms from a table file."""
        df = read_table(path, ROOM_COLUMNS)
        for row, record in enumerate(df.to_dict("records"), start=2):
            room_id = require_value(record["room_id"], "room_id", path.name, row)
            if room_id in self._by_id:
                raise InvalidDataError(
                    f"duplicate room_id '{room_id}'", table=path.name, row=row
                )
            capacity = to_int(record["capacity"], "capacity", path.name, row)
            if capacity < 1:
                raise InvalidDataError(
                    f"room '{room_id}' capacity must be at least 1",
                    table=path.name,
                    row=row,
                )
            room = Room(
                room_id=room_id,
                room_name=record["room_name"] or room_id,
                capacity=capacity,
                is_active=parse_bool(record.get("is_active")),
            )
            self.rooms.append(room)
            self._by_id[room.room_id] = room

    def get_room(self, room_id: str) -> Room | None:
        """Get a room by id."""
        return self._by_id.get(room_id)

    def get_all_rooms(self) -> list[Room]:
        """Get all rooms."""
        return self.rooms

    def get_active_rooms(self) -> list[Room]:
        """Get rooms that take part in scheduling, ordered by room_id."""
        return sorted((r for r in self.rooms if r.is_active), key=lambda r: r.room_id)
