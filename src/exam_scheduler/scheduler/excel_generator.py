"""Excel workbook generator for exam schedule reports."""

from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .constants import INVIGILATOR_ROLE_TEMPLATE, INVIGILATORS_PER_ROOM
from .models import InvigilatorAssignment, Placement, ScheduleReport

# Readable labels for UnscheduledReason values
UNSCHEDULED_REASON_LABELS = {
    "duration_exceeds_windows": "Duration exceeds all exam windows",
    "no_room_capacity": "No room large enough",
    "no_free_room_window": "No free room/window in range",
    "insufficient_invigilators": "Insufficient invigilators",
    "run_budget_exhausted": "Run budget exhausted",
}

STRINGS = {
    "timetable_title": "EXAM TIMETABLE",
    "roster_title": "INVIGILATOR ROSTER",
    "unscheduled_title": "UNSCHEDULED COURSES",
    "scope": "Scope:",
    "scheduled": "Scheduled:",
    "unscheduled": "Unscheduled:",
    "status": "Status:",
    "committed": "Committed",
    "not_committed": "Computed, not committed",
}

TIMETABLE_HEADERS = [
    ("A", "Date", 12.0),
    ("B", "Window", 8.0),
    ("C", "Time", 13.0),
    ("D", "Course", 12.0),
    ("E", "Course name", 36.0),
    ("F", "Room", 14.0),
    ("G", "Students", 10.0),
]

# One timetable column per invigilator position, after TIMETABLE_HEADERS
INVIGILATOR_COLUMN_WIDTH = 26.0

ROSTER_HEADERS = [
    ("A", "Invigilator", 28.0),
    ("B", "Date", 12.0),
    ("C", "Window", 8.0),
    ("D", "Time", 13.0),
    ("E", "Course", 12.0),
    ("F", "Room", 14.0),
    ("G", "Role", 14.0),
]

UNSCHEDULED_HEADERS = [
    ("A", "№", 5.0),
    ("B", "Course", 12.0),
    ("C", "Course name", 36.0),
    ("D", "Students", 10.0),
    ("E", "Duration", 10.0),
    ("F", "Reason", 32.0),
    ("G", "Details", 60.0),
]

# Fonts
FONT_TITLE = Font(name="Times New Roman", size=16, bold=True)
FONT_HEADER = Font(name="Times New Roman", size=12, bold=True)
FONT_SUMMARY = Font(name="Times New Roman", size=11, bold=False)
FONT_SUMMARY_BOLD = Font(name="Times New Roman", size=11, bold=True)
FONT_CELL = Font(name="Times New Roman", size=11, bold=False)

# Alignments
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)
ALIGN_LEFT = Alignment(horizontal="left", vertical="center", wrap_text=True)

# Borders
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

# Highlight for the header row
HEADER_FILL = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")

# First table row, below the title and summary block
TABLE_START_ROW = 7


class ExamExcelGenerator:
    """Generates an Excel workbook from a schedule report.

    Sheets:
    - Timetable: one row per placement, ordered by date, window, room
    - Invigilators: one row per assignment, grouped by staff member
    - Unscheduled: courses that could not be placed, with reasons
    """

    def __init__(self, report: ScheduleReport):
        self.report = report
        self._placements = {p.placement_id: p for p in report.placements}

    @staticmethod
    def translate_reason(reason: str) -> str:
        """Readable label for a reason code (the code itself if unknown)."""
        return UNSCHEDULED_REASON_LABELS.get(reason, reason)

    def sorted_placements(self) -> list[Placement]:
        """Placements ordered by date, start time, room name."""
        return sorted(
            self.report.placements,
            key=lambda p: (p.date, p.start_time, p.window_id, p.room_name),
        )

    def sorted_assignments(self) -> list[tuple[InvigilatorAssignment, Placement]]:
        """Assignments with their placement, ordered by staff, date, time."""
        rows = [
            (a, self._placements[a.placement_id])
            for a in self.report.assignments
            if a.placement_id in self._placements
        ]
        return sorted(
            rows,
            key=lambda r: (r[0].staff_name or r[0].staff_id, r[1].date, r[1].start_time),
        )

    def setup_title(self, ws, title: str, last_col: str) -> None:
        """Set up the title and summary block shared by all sheets."""
        ws.merge_cells(f"A1:{last_col}1")
        ws["A1"] = title
        ws["A1"].font = FONT_TITLE
        ws["A1"].alignment = ALIGN_CENTER

        summary = [
            (STRINGS["scope"], f"{self.report.semester} / {self.report.exam_type}"),
            (STRINGS["scheduled"], self.report.scheduled_count),
            (STRINGS["unscheduled"], self.report.unscheduled_count),
            (
                STRINGS["status"],
                STRINGS["committed"] if self.report.persisted else STRINGS["not_committed"],
            ),
        ]
        for row, (label, value) in enumerate(summary, 2):
            ws[f"A{row}"] = label
            ws[f"A{row}"].font = FONT_SUMMARY_BOLD
            ws[f"B{row}"] = value
            ws[f"B{row}"].font = FONT_SUMMARY

    def setup_table_header(self, ws, headers: list[tuple[str, str, float]]) -> None:
        """Write table header cells and column widths."""
        for col, text, width in headers:
            ws.column_dimensions[col].width = width
            cell = ws[f"{col}{TABLE_START_ROW}"]
            cell.value = text
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER
            cell.fill = HEADER_FILL
        ws.row_dimensions[TABLE_START_ROW].height = 25.0
        ws.freeze_panes = f"A{TABLE_START_ROW + 1}"

    def write_row(self, ws, row: int, values: list, centered: set[int]) -> None:
        """Write one bordered table row."""
        for index, value in enumerate(values):
            cell = ws.cell(row=row, column=index + 1, value=value)
            cell.font = FONT_CELL
            cell.border = THIN_BORDER
            cell.alignment = ALIGN_CENTER if index in centered else ALIGN_LEFT

    def team_size(self) -> int:
        """Number of invigilator columns (largest assignment order, at least 2)."""
        return max([INVIGILATORS_PER_ROOM] + [a.order for a in self.report.assignments])

    def timetable_headers(self) -> list[tuple[str, str, float]]:
        """Timetable headers with one column per invigilator position."""
        headers = list(TIMETABLE_HEADERS)
        for order in range(1, self.team_size() + 1):
            headers.append(
                (
                    get_column_letter(len(headers) + 1),
                    INVIGILATOR_ROLE_TEMPLATE.format(order),
                    INVIGILATOR_COLUMN_WIDTH,
                )
            )
        return headers

    def fill_timetable(self, ws) -> None:
        """Fill the timetable sheet."""
        headers = self.timetable_headers()
        team_size = self.team_size()
        self.setup_title(ws, STRINGS["timetable_title"], headers[-1][0])
        self.setup_table_header(ws, headers)

        for row, placement in enumerate(self.sorted_placements(), TABLE_START_ROW + 1):
            invigilators = [""] * team_size
            for assignment in self.report.assignments_for(placement.placement_id):
                invigilators[assignment.order - 1] = assignment.staff_name or assignment.staff_id
            self.write_row(
                ws,
                row,
                [
                    placement.date.strftime("%d.%m.%Y"),
                    placement.window_id,
                    f"{placement.start_time}-{placement.end_time}",
                    placement.course_code,
                    placement.course_name,
                    placement.room_name,
                    placement.student_count,
                    *invigilators,
                ],
                centered={0, 1, 2, 6},
            )

    def fill_roster(self, ws) -> None:
        """Fill the invigilator roster sheet."""
        self.setup_title(ws, STRINGS["roster_title"], ROSTER_HEADERS[-1][0])
        self.setup_table_header(ws, ROSTER_HEADERS)

        for row, (assignment, placement) in enumerate(
            self.sorted_assignments(), TABLE_START_ROW + 1
        ):
            self.write_row(
                ws,
                row,
                [
                    assignment.staff_name or assignment.staff_id,
                    placement.date.strftime("%d.%m.%Y"),
                    placement.window_id,
                    f"{placement.start_time}-{placement.end_time}",
                    placement.course_code,
                    placement.room_name,
                    assignment.role,
                ],
                centered={1, 2, 3},
            )

    def fill_unscheduled(self, ws) -> None:
        """Fill the unscheduled courses sheet."""
        self.setup_title(ws, STRINGS["unscheduled_title"], UNSCHEDULED_HEADERS[-1][0])
        self.setup_table_header(ws, UNSCHEDULED_HEADERS)

        for i, course in enumerate(self.report.unscheduled, 1):
            row = TABLE_START_ROW + i
            self.write_row(
                ws,
                row,
                [
                    i,
                    course.course_code,
                    course.course_name,
                    course.student_count,
                    course.exam_duration_minutes,
                    self.translate_reason(course.reason.value),
                    course.details,
                ],
                centered={0, 3, 4},
            )
            ws.row_dimensions[row].height = 30.0

    def create_workbook(self) -> Workbook:
        """Create the workbook with all three sheets."""
        wb = Workbook()
        timetable = wb.active
        timetable.title = "Timetable"
        self.fill_timetable(timetable)
        self.fill_roster(wb.create_sheet("Invigilators"))
        self.fill_unscheduled(wb.create_sheet("Unscheduled"))
        return wb

    def save(self, wb: Workbook, output_path: Path) -> None:
        """Save workbook to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)


def generate_exam_excel(report: ScheduleReport, output_path: Path | str) -> Path:
    """Generate the Excel workbook for a schedule report.

    Args:
        report: Schedule report
        output_path: Output Excel file path

    Returns:
        Path to generated file
    """
    output = Path(output_path)
    generator = ExamExcelGenerator(report)
    wb = generator.create_workbook()
    generator.save(wb, output)
    return output
