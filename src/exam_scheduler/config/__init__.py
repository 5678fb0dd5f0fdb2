"""Registry loaders for the exam scheduler."""

from .courses import CourseConfig
from .loader import REQUIRED_TABLES, RegistryLoader
from .rooms import RoomConfig
from .staff import StaffConfig

__all__ = [
    "RegistryLoader",
    "CourseConfig",
    "RoomConfig",
    "StaffConfig",
    "REQUIRED_TABLES",
]
