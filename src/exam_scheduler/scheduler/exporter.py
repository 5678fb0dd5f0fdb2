"""Export functions for exam schedule reports."""

import json
from pathlib import Path

from .models import ScheduleReport


def export_report_json(report: ScheduleReport, output_path: Path | str) -> None:
    """Export schedule report to JSON file.

    Args:
        report: ScheduleReport to export
        output_path: Path to output JSON file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with open(output, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)


def load_report_json(input_path: Path | str) -> ScheduleReport:
    """Load a schedule report from JSON file.

    Args:
        input_path: Path to report JSON file

    Returns:
        ScheduleReport rebuilt from the file
    """
    with open(input_path, encoding="utf-8") as f:
        return ScheduleReport.from_dict(json.load(f))
