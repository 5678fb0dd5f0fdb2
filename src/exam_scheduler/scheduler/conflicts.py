"""Reservation tracking for exam schedule generation."""

from datetime import date

from ..exceptions import ReservationConflictError
from .models import InvigilatorAssignment, Placement


class ConflictIndex:
    """Tracks room and staff reservations per (date, window).

    This class maintains two reservation sets:
    - room_reservations: (date, room_id, window_id) keys already booked
    - staff_reservations: (date, staff_id, window_id) keys already booked

    Windows are compared by id only. Two different windows never conflict,
    even where their clock times overlap.
    """

    def __init__(self) -> None:
        self.room_reservations: set[tuple[date, str, str]] = set()
        self.staff_reservations: set[tuple[date, str, str]] = set()

    def room_window_free(self, day: date, room_id: str, window_id: str) -> bool:
        """Check if a room is free in a window on a date."""
        return (day, room_id, window_id) not in self.room_reservations

    def staff_window_free(self, day: date, staff_id: str, window_id: str) -> bool:
        """Check if a staff member is free in a window on a date."""
        return (day, staff_id, window_id) not in self.staff_reservations

    def reserve_room_window(self, day: date, room_id: str, window_id: str) -> None:
        """Reserve a room for a window on a date.

        Raises:
            ReservationConflictError: If the room is already reserved
        """
        key = (day, room_id, window_id)
        if key in self.room_reservations:
            raise ReservationConflictError("room", room_id, day.isoformat(), window_id)
        self.room_reservations.add(key)

    def reserve_staff_window(self, day: date, staff_id: str, window_id: str) -> None:
        """Reserve a staff member for a window on a date.

        Raises:
            ReservationConflictError: If the staff member is already reserved
        """
        key = (day, staff_id, window_id)
        if key in self.staff_reservations:
            raise ReservationConflictError(
                "staff member", staff_id, day.isoformat(), window_id
            )
        self.staff_reservations.add(key)

    def seed(
        self,
        placements: list[Placement],
        assignments: list[InvigilatorAssignment],
    ) -> None:
        """Load bookings made outside the current run.

        Placements of other scopes already occupy their rooms, and their
        invigilators are busy for the same (date, window). Seeded keys may
        repeat, so they are added without the double-booking check.

        Args:
            placements: Existing placements to block
            assignments: Invigilator assignments of those placements
        """
        by_id = {}
        for placement in placements:
            by_id[placement.placement_id] = placement
            self.room_reservations.add(
                (placement.date, placement.room_id, placement.window_id)
            )

        for assignment in assignments:
            placement = by_id.get(assignment.placement_id)
            if placement is None:
                continue
            self.staff_reservations.add(
                (placement.date, assignment.staff_id, placement.window_id)
            )

    @property
    def total_reservations(self) -> int:
        return len(self.room_reservations) + len(self.staff_reservations)
