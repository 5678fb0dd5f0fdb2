"""Invigilator selection for exam placements."""

from datetime import date

from .conflicts import ConflictIndex
from .constants import INVIGILATOR_ROLE_TEMPLATE, INVIGILATORS_PER_ROOM
from .models import InvigilatorAssignment, Placement, StaffMember
from .utils import make_assignment_id


class InvigilatorAssigner:
    """Proposes supervising staff for a candidate (date, window).

    Staff not flagged available for invigilation are dropped. The rest are
    scanned in ascending staff_id order, and the first ``per_room`` staff
    free in the window are proposed.

    The assigner never reserves anything. The scheduler reserves the room
    and every proposed staff member together once all are known to be free.
    """

    def __init__(
        self,
        staff: list[StaffMember],
        conflict_index: ConflictIndex,
        per_room: int = INVIGILATORS_PER_ROOM,
    ) -> None:
        if per_room < 1:
            raise ValueError(f"per_room must be at least 1, got {per_room}")
        self.conflict_index = conflict_index
        self.per_room = per_room
        self.staff = sorted(
            (s for s in staff if s.is_available_for_invigilation),
            key=lambda s: s.staff_id,
        )

    @property
    def pool_size(self) -> int:
        """Number of staff eligible to invigilate."""
        return len(self.staff)

    def propose(self, day: date, window_id: str) -> list[StaffMember]:
        """Select staff free for a window on a date.

        Args:
            day: Exam date
            window_id: Exam window id

        Returns:
            Up to ``per_room`` free staff members. A shorter list means the
            window cannot be fully staffed.
        """
        selected: list[StaffMember] = []
        for member in self.staff:
            if self.conflict_index.staff_window_free(day, member.staff_id, window_id):
                selected.append(member)
                if len(selected) == self.per_room:
                    break
        return selected

    def is_complete(self, proposal: list[StaffMember]) -> bool:
        """Check whether a proposal fully staffs a placement."""
        return len(proposal) >= self.per_room

    def build_assignments(
        self, placement: Placement, staff: list[StaffMember]
    ) -> list[InvigilatorAssignment]:
        """Create ordered invigilator assignments for a committed placement."""
        return [
            InvigilatorAssignment(
                assignment_id=make_assignment_id(placement.placement_id, member.staff_id),
                placement_id=placement.placement_id,
                staff_id=member.staff_id,
                staff_name=member.full_name,
                order=order,
                role=INVIGILATOR_ROLE_TEMPLATE.format(order),
            )
            for order, member in enumerate(staff, 1)
        ]
