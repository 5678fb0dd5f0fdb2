"""CLI entry point for the exam scheduler."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import RegistryLoader
from .exceptions import InvalidDataError, InvalidRequestError, PersistenceError
from .scheduler import (
    RunBudget,
    ScheduleReport,
    export_report_json,
    generate_exam_excel,
    load_report_json,
)
from .scheduler.constants import DEFAULT_WINDOWS_PER_DAY
from .service import generate as generate_schedule
from .storage import ScheduleStore

app = typer.Typer(
    name="exam-scheduler",
    help="Generate exam timetables and invigilator assignments",
    add_completion=False,
)
console = Console()

# Default paths
DEFAULT_DATA_DIR = Path("data")
DEFAULT_STORE = Path("output/schedules.json")
DEFAULT_REPORT = Path("output/report.json")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _show_summary(report: ScheduleReport, verbose: bool) -> None:
    """Print the run summary and distributions."""
    console.print("\n[bold]Exam Schedule Results:[/bold]")
    console.print(f"  Scope: {report.semester} / {report.exam_type}")
    console.print(f"  Courses to schedule: {report.total_to_schedule}")
    console.print(f"  Scheduled: {report.scheduled_count}")
    console.print(f"  Unscheduled: {report.unscheduled_count}")

    if report.statistics.by_date:
        console.print("\n[bold]Distribution by date:[/bold]")
        for day, count in report.statistics.by_date.items():
            console.print(f"  {day}: {count}")

    if report.statistics.by_reason:
        console.print("\n[bold yellow]Unscheduled by reason:[/bold yellow]")
        for reason, count in sorted(
            report.statistics.by_reason.items(), key=lambda x: -x[1]
        ):
            console.print(f"  [yellow]{reason}: {count}[/yellow]")

    if verbose and report.placements:
        table = Table(title="Scheduled Exams")
        table.add_column("Date", style="cyan")
        table.add_column("Window", style="blue")
        table.add_column("Course", style="green")
        table.add_column("Room", style="magenta")
        table.add_column("Students", justify="right")
        table.add_column("Invigilators", style="yellow")

        for exam in report.scheduled_exams()[:50]:  # Limit to first 50
            table.add_row(
                exam["date"],
                f"{exam['window_start']}-{exam['window_end']}",
                exam["course_code"],
                exam["room_name"],
                str(exam["student_count"]),
                ", ".join(exam["invigilators"]),
            )

        if report.scheduled_count > 50:
            table.add_row("...", "...", "...", "...", "...", "...")

        console.print(table)

    if verbose and report.errors:
        console.print(f"\n[bold yellow]Unscheduled courses ({len(report.errors)}):[/bold yellow]")
        for error in report.errors[:10]:
            console.print(f"  [yellow]- {error}[/yellow]")
        if len(report.errors) > 10:
            console.print(f"  [yellow]... and {len(report.errors) - 10} more[/yellow]")


@app.command()
def generate(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with courses, registrations, rooms and staff tables"),
    ] = DEFAULT_DATA_DIR,
    start: Annotated[
        str,
        typer.Option("--start", "-s", help="First exam date (YYYY-MM-DD)"),
    ] = "",
    end: Annotated[
        str,
        typer.Option("--end", "-e", help="Last exam date (YYYY-MM-DD)"),
    ] = "",
    windows: Annotated[
        int,
        typer.Option("--windows", "-w", help="Exam windows usable per day (1-6)"),
    ] = DEFAULT_WINDOWS_PER_DAY,
    exam_type: Annotated[
        str,
        typer.Option("--exam-type", "-t", help="Exam type, e.g. 'Final'"),
    ] = "",
    semester: Annotated[
        str,
        typer.Option("--semester", help="Semester, e.g. '2025-2026/1'"),
    ] = "",
    store_path: Annotated[
        Path,
        typer.Option("--store", help="Schedule store JSON file"),
    ] = DEFAULT_STORE,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Report JSON file path"),
    ] = None,
    excel: Annotated[
        Optional[Path],
        typer.Option("--excel", help="Also write an Excel workbook to this path"),
    ] = None,
    time_limit: Annotated[
        Optional[float],
        typer.Option("--time-limit", help="Stop the search after this many seconds"),
    ] = None,
    max_candidates: Annotated[
        Optional[int],
        typer.Option("--max-candidates", help="Stop after examining this many room/window candidates"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute the schedule without storing it"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate the exam schedule for one semester and exam type."""
    _setup_logging(verbose)

    if not data_dir.is_dir():
        console.print(f"[bold red]Error:[/bold red] Data directory not found: {data_dir}")
        raise typer.Exit(1)

    try:
        with console.status("[bold green]Loading registry..."):
            registry = RegistryLoader(data_dir)
    except InvalidDataError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    missing = registry.missing_tables()
    if missing:
        console.print(
            f"[bold red]Error:[/bold red] Missing registry tables: {', '.join(missing)}"
        )
        raise typer.Exit(1)

    store = None if dry_run else ScheduleStore(store_path)
    budget = RunBudget(max_seconds=time_limit, max_candidates=max_candidates)

    console.print(f"\n[bold]Exam Schedule Generation for:[/bold] {data_dir}")
    console.print(f"  Date range: {start} to {end}, {windows} window(s) per day")

    try:
        with console.status("[bold green]Creating schedule..."):
            report = generate_schedule(
                start,
                end,
                windows,
                exam_type,
                semester,
                registry=registry,
                store=store,
                budget=budget,
            )
    except (InvalidRequestError, InvalidDataError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except PersistenceError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if e.report is not None:
            console.print(
                "[bold yellow]Schedule was computed but NOT committed.[/bold yellow]"
            )
            _show_summary(e.report, verbose)
        raise typer.Exit(1)

    _show_summary(report, verbose)

    output_path = output or DEFAULT_REPORT
    if output_path.suffix != ".json":
        output_path = output_path.with_suffix(".json")
    with console.status(f"[bold green]Exporting to {output_path}..."):
        export_report_json(report, output_path)
    console.print(f"\n[bold green]✓[/bold green] Report exported to: {output_path}")

    if excel:
        excel_path = generate_exam_excel(report, excel)
        console.print(f"[bold green]✓[/bold green] Workbook exported to: {excel_path}")

    if report.persisted:
        console.print(f"[bold green]✓[/bold green] Schedule committed to: {store_path}")
    else:
        console.print("[bold yellow]Dry run:[/bold yellow] schedule was not committed")


@app.command()
def validate(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with registry tables"),
    ] = DEFAULT_DATA_DIR,
) -> None:
    """Validate registry tables without generating a schedule."""
    if not data_dir.is_dir():
        console.print(f"[bold red]Error:[/bold red] Data directory not found: {data_dir}")
        raise typer.Exit(1)

    try:
        with console.status("[bold green]Validating registry..."):
            registry = RegistryLoader(data_dir)
    except InvalidDataError as e:
        console.print(f"[bold red]✗ Registry has issues[/bold red]\n  [red]• {e}[/red]")
        raise typer.Exit(1)

    overview = Table(title="Registry", show_header=False)
    overview.add_column("Table", style="cyan")
    overview.add_column("Value", style="green")
    overview.add_row("Courses", str(len(registry.courses.courses)))
    overview.add_row("Registrations", str(len(registry.courses.registrations)))
    overview.add_row("Semesters", ", ".join(registry.courses.get_semesters()) or "-")
    overview.add_row(
        "Rooms (active)",
        f"{len(registry.rooms.rooms)} ({len(registry.rooms.get_active_rooms())})",
    )
    overview.add_row(
        "Staff (invigilators)",
        f"{len(registry.staff.staff)} ({len(registry.staff.get_invigilators())})",
    )
    console.print(overview)

    missing = registry.missing_tables()
    if missing:
        console.print(f"\n[bold red]Missing tables:[/bold red] {', '.join(missing)}")
        raise typer.Exit(1)

    console.print("[bold green]✓ Registry is valid[/bold green]")


@app.command("export-excel")
def export_excel(
    input_file: Annotated[
        Path,
        typer.Argument(help="Report JSON file from the generate command"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output Excel file path"),
    ] = None,
) -> None:
    """Generate an Excel workbook from a report JSON file."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    report = load_report_json(input_file)
    output_path = output or input_file.with_suffix(".xlsx")

    with console.status("[bold green]Generating Excel file..."):
        generate_exam_excel(report, output_path)

    console.print(f"\n[bold green]✓[/bold green] Workbook exported to: {output_path}")


if __name__ == "__main__":
    app()
