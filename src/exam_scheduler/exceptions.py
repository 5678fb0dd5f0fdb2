"""Custom exceptions for the exam scheduler."""

from pathlib import Path


class SchedulerError(Exception):
    """Base exception for exam scheduler errors."""

    pass


class InvalidRequestError(SchedulerError):
    """Generation request rejected before the run starts."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid request parameter '{field}': {message}")


class InvalidDataError(SchedulerError):
    """Registry data validation failed."""

    def __init__(self, message: str, table: str | None = None, row: int | None = None):
        self.table = table
        self.row = row
        location = ""
        if table:
            location += f" in table '{table}'"
        if row is not None:
            location += f" at row {row}"
        super().__init__(f"Invalid data{location}: {message}")


class ReservationConflictError(SchedulerError):
    """A resource was reserved twice for the same date and window."""

    def __init__(self, resource: str, resource_id: str, date: str, window_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.date = date
        self.window_id = window_id
        super().__init__(
            f"{resource.capitalize()} '{resource_id}' is already reserved "
            f"on {date} window {window_id}"
        )


class PersistenceError(SchedulerError):
    """Writing the schedule back to the store failed."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        # Report computed before the failed write, attached by the caller
        self.report = None
        super().__init__(
            f"Failed to persist schedule to '{self.path}': {reason}. "
            "Previously stored schedules were left unchanged."
        )
