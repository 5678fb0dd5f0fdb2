"""Catalog of daily exam windows."""

from ..exceptions import InvalidRequestError
from .constants import EXAM_WINDOWS, MAX_WINDOWS_PER_DAY, MIN_WINDOWS_PER_DAY
from .models import TimeWindow


class SlotCatalog:
    """Fixed ordered table of daily exam windows, truncated to the first N.

    Only the first ``windows_per_day`` catalog entries are usable in a run.
    """

    def __init__(
        self,
        windows_per_day: int = MAX_WINDOWS_PER_DAY,
        catalog: list[dict] | None = None,
    ) -> None:
        entries = catalog if catalog is not None else EXAM_WINDOWS
        if not MIN_WINDOWS_PER_DAY <= windows_per_day <= len(entries):
            raise InvalidRequestError(
                "windows_per_day",
                f"must be between {MIN_WINDOWS_PER_DAY} and {len(entries)}, "
                f"got {windows_per_day}",
            )
        self.windows: list[TimeWindow] = [
            TimeWindow.from_dict(entry) for entry in entries[:windows_per_day]
        ]
        self._by_id = {w.id: w for w in self.windows}

    def __len__(self) -> int:
        return len(self.windows)

    def get(self, window_id: str) -> TimeWindow | None:
        """Get a configured window by id."""
        return self._by_id.get(str(window_id))

    @property
    def max_duration(self) -> int:
        """Longest duration among the configured windows."""
        return max(w.duration for w in self.windows)

    def feasible_windows(self, duration: int) -> list[TimeWindow]:
        """Get windows long enough for an exam of ``duration`` minutes.

        Tightest fit first, so longer windows stay free for longer exams.
        Ties keep catalog order.

        Args:
            duration: Required exam duration in minutes

        Returns:
            Windows with duration >= the requested one, ascending by duration
        """
        suitable = [w for w in self.windows if w.duration >= duration]
        return sorted(suitable, key=lambda w: w.duration)
