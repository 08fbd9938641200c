"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel

from ..config import AppConfig, load_config
from ..domain.exceptions import StudioBreakError
from ..domain.models import BreakWindow, SplitResult
from ..adapters.json_store import JsonFileScheduleStore
from ..services.schedule_planner import (
    BreakOption,
    ScheduleGroupService,
    SchedulePlanner,
    ScheduleRow,
    ShootingRequest,
)

app = typer.Typer(
    name="studiobreak",
    help="Check studio bookings against break times and split them",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
BreakStartOption = Annotated[Optional[str], typer.Option("--break-start", help="Custom break start (HH:MM)")]
BreakEndOption = Annotated[Optional[str], typer.Option("--break-end", help="Custom break end (HH:MM)")]


def _load(config_file: Optional[Path], verbose: bool = False) -> AppConfig:
    config = load_config(config_file)
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    return config


def _resolve_break_window(
    config: AppConfig,
    start: str,
    end: str,
    break_start: Optional[str],
    break_end: Optional[str],
) -> BreakWindow | None:
    """
    Pick the break window to apply.

    An explicit --break-start/--break-end pair overrides the suggested
    window; otherwise the window the booking collides with is used.
    """
    if (break_start is None) != (break_end is None):
        console.print("[red]Error: --break-start and --break-end must be given together.[/red]")
        raise typer.Exit(1)

    conflict = config.build_calculator().check_conflict(start, end)

    if break_start and break_end:
        base = conflict.suggested_break or BreakWindow(
            name="custom", start_time=break_start, end_time=break_end
        )
        return base.with_times(break_start, break_end)

    return conflict.suggested_break


def _print_split(split: SplitResult) -> None:
    if not split.needs_split:
        console.print("[green]✓ No split needed[/green]")
        return

    console.print("[bold]Split result:[/bold]")
    if split.first_schedule:
        console.print(f"  1st shoot: {split.first_schedule.start} ~ {split.first_schedule.end}")
    console.print(f"  Break:     {split.break_window.start_time} ~ {split.break_window.end_time}")
    if split.second_schedule:
        console.print(f"  2nd shoot: {split.second_schedule.start} ~ {split.second_schedule.end}")


def _rows_table(rows: list[ScheduleRow]) -> Table:
    table = Table(title="Planned bookings", show_header=True, header_style="bold cyan")
    table.add_column("#", style="bold yellow")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Break", style="dim")
    table.add_column("Notes")

    for row in rows:
        break_text = (
            f"{row.break_start_time}-{row.break_end_time} ({row.break_duration_minutes} min)"
            if row.break_time_enabled
            else "-"
        )
        table.add_row(
            str(row.sequence_order),
            row.shoot_date,
            f"{row.start_time}-{row.end_time}",
            break_text,
            escape(row.notes),
        )
    return table


@app.command()
def check(
    start: Annotated[str, typer.Argument(help="Booking start (HH:MM)")],
    end: Annotated[str, typer.Argument(help="Booking end (HH:MM)")],
    config_file: ConfigOption = None,
):
    """
    Check whether a booking collides with a break window.
    """
    try:
        config = _load(config_file)
        calculator = config.build_calculator()

        conflict = calculator.check_conflict(start, end)
        if not conflict.has_conflict:
            console.print(f"[green]✓ {start}-{end} does not touch any break window[/green]")
            return

        window = conflict.suggested_break
        console.print(
            f"[yellow]⚠ {conflict.conflict_type.value} conflict:[/yellow] "
            f"{start}-{end} overlaps {window.start_time}-{window.end_time}"
        )

        others = calculator.find_conflicts(start, end)[1:]
        for other in others:
            console.print(f"[dim]  also overlaps {other}[/dim]")

    except (StudioBreakError, ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def split(
    start: Annotated[str, typer.Argument(help="Booking start (HH:MM)")],
    end: Annotated[str, typer.Argument(help="Booking end (HH:MM)")],
    break_start: BreakStartOption = None,
    break_end: BreakEndOption = None,
    config_file: ConfigOption = None,
):
    """
    Preview how a booking is split around a break.
    """
    try:
        config = _load(config_file)
        window = _resolve_break_window(config, start, end, break_start, break_end)

        if window is None:
            console.print("[green]✓ No split needed[/green]")
            return

        _print_split(config.build_calculator().calculate_split(start, end, window))

    except (StudioBreakError, ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def effective(
    start: Annotated[str, typer.Argument(help="Booking start (HH:MM)")],
    end: Annotated[str, typer.Argument(help="Booking end (HH:MM)")],
    break_start: BreakStartOption = None,
    break_end: BreakEndOption = None,
    config_file: ConfigOption = None,
):
    """
    Show the working minutes of a booking with the break taken out.
    """
    try:
        config = _load(config_file)
        window = _resolve_break_window(config, start, end, break_start, break_end)
        minutes = config.build_calculator().effective_work_minutes(start, end, window)
        console.print(f"Effective work time: [bold]{minutes}[/bold] min")

    except (StudioBreakError, ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def plan(
    professor: Annotated[str, typer.Option("--professor", "-p", help="Professor name")],
    date: Annotated[str, typer.Option("--date", help="Shoot date (YYYY-MM-DD)")],
    start: Annotated[str, typer.Option("--start", help="Booking start (HH:MM)")],
    end: Annotated[str, typer.Option("--end", help="Booking end (HH:MM)")],
    shooting_type: Annotated[str, typer.Option("--type", "-t", help="Shooting type")],
    option: Annotated[BreakOption, typer.Option("--option", "-o", help="Break handling")] = BreakOption.NONE,
    studio: Annotated[Optional[int], typer.Option("--studio", help="Preferred studio id")] = None,
    course: Annotated[str, typer.Option("--course", help="Course name")] = "",
    notes: Annotated[str, typer.Option("--notes", help="Free-text notes")] = "",
    break_start: BreakStartOption = None,
    break_end: BreakEndOption = None,
    save: Annotated[bool, typer.Option("--save", help="Store the rows in the configured JSON file")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    config_file: ConfigOption = None,
):
    """
    Plan the booking rows for a shooting request.

    Examples:

        studiobreak plan -p kim --date 2024-11-25 --start 10:00 --end 15:00 -t PPT --option split

        studiobreak plan -p kim --date 2024-11-25 --start 10:00 --end 15:00 -t PPT --option skip --save
    """
    try:
        config = _load(config_file, verbose=verbose)

        request = ShootingRequest(
            professor_name=professor,
            shoot_date=date,
            start_time=start,
            end_time=end,
            shooting_type=shooting_type,
            preferred_studio_id=studio,
            course_name=course,
            notes=notes,
        )

        window = _resolve_break_window(config, start, end, break_start, break_end)
        planner = SchedulePlanner(config.build_calculator(), team_id=config.team_id)

        conflict = planner.detect_conflict(request)
        if conflict.has_conflict:
            console.print(
                f"[yellow]⚠ {conflict.conflict_type.value} conflict with "
                f"{conflict.suggested_break.start_time}-{conflict.suggested_break.end_time}[/yellow]"
            )

        if save:
            if config.store_path is None:
                console.print("[red]Error: no store_path configured for --save.[/red]")
                raise typer.Exit(1)
            service = ScheduleGroupService(planner, JsonFileScheduleStore(config.store_path))
            result = asyncio.run(service.submit(request, option, window))
            rows = result.rows
            console.print(f"[green]✓ {result.message}[/green]")
        else:
            rows = planner.plan(request, option, window)

        # Only a split takes the break out of the worked minutes.
        applied_window = window if option is BreakOption.SPLIT else None
        minutes = planner.effective_minutes(request, applied_window)

        console.print()
        console.print(_rows_table(rows))
        console.print(f"\nEffective work time: [bold]{minutes}[/bold] min\n")

    except (StudioBreakError, ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def list_breaks(config_file: ConfigOption = None):
    """
    List all configured break windows.
    """
    try:
        config = _load(config_file)

        table = Table(
            title="Configured break windows",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name", style="bold yellow")
        table.add_column("Window")
        table.add_column("Minutes", style="dim")
        table.add_column("Enabled")

        for window in config.get_break_windows():
            table.add_row(
                window.name,
                f"{window.start_time}-{window.end_time}",
                str(window.duration_minutes),
                "yes" if window.enabled else "no",
            )

        console.print()
        console.print(table)
        console.print()

    except (ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(Panel.fit(f"[bold cyan]studiobreak[/bold cyan] version [bold]{__version__}[/bold]"))


if __name__ == "__main__":
    app()
