"""Greedy exam timetabling and invigilator assignment.

This package places each course's exam into a (date, window, room) with a
full set of invigilators, largest courses first, without double-booking any
room or staff member.

Main classes:
- ExamScheduler: Greedy scheduler over dates, windows and rooms
- SlotCatalog: Daily exam windows usable in a run
- ConflictIndex: Room and staff reservations per (date, window)
- InvigilatorAssigner: Proposes supervising staff for a window

Usage:
    from exam_scheduler.scheduler import ExamScheduler, aggregate_demand

    demand = aggregate_demand(courses, registrations, "2025-2026/1")
    scheduler = ExamScheduler(rooms, staff, windows_per_day=6)
    report = scheduler.schedule(demand, start, end, "2025-2026/1", "Final")
"""

from .algorithm import ExamScheduler, RunBudget
from .conflicts import ConflictIndex
from .constants import (
    EXAM_WINDOWS,
    INVIGILATORS_PER_ROOM,
    MAX_WINDOWS_PER_DAY,
    MIN_WINDOWS_PER_DAY,
)
from .demand import aggregate_demand, sort_demand_by_priority
from .excel_generator import generate_exam_excel
from .exporter import export_report_json, load_report_json
from .invigilators import InvigilatorAssigner
from .models import (
    Course,
    CourseDemand,
    InvigilatorAssignment,
    Placement,
    Registration,
    Room,
    ScheduleReport,
    ScheduleStatistics,
    StaffMember,
    TimeWindow,
    UnscheduledCourse,
    UnscheduledReason,
)
from .results import ResultAggregator
from .slots import SlotCatalog

__all__ = [
    # Scheduling
    "ExamScheduler",
    "RunBudget",
    "SlotCatalog",
    "ConflictIndex",
    "InvigilatorAssigner",
    "ResultAggregator",
    "aggregate_demand",
    "sort_demand_by_priority",
    # Models
    "Course",
    "CourseDemand",
    "InvigilatorAssignment",
    "Placement",
    "Registration",
    "Room",
    "ScheduleReport",
    "ScheduleStatistics",
    "StaffMember",
    "TimeWindow",
    "UnscheduledCourse",
    "UnscheduledReason",
    # Export
    "export_report_json",
    "load_report_json",
    "generate_exam_excel",
    # Constants
    "EXAM_WINDOWS",
    "INVIGILATORS_PER_ROOM",
    "MAX_WINDOWS_PER_DAY",
    "MIN_WINDOWS_PER_DAY",
]
