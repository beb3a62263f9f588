"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.json_booking_source import JsonBookingSource
from ..adapters.memory_booking_source import InMemoryBookingSource
from ..config import AppConfig, SchedulingConfig, load_config
from ..domain.exceptions import SlotbookError
from ..domain.models import Slot
from ..domain.timezone import format_in_zone, parse_date
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="slotbook",
    help="List bookable meeting slots across timezones",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
BookingsOption = Annotated[
    Optional[Path],
    typer.Option("--bookings", "-b", help="JSON file with existing bookings"),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_booking_source(config: AppConfig, bookings_file: Optional[Path]):
    path = bookings_file or config.bookings_file
    if path is None:
        return InMemoryBookingSource()
    return JsonBookingSource(data_file=path)


def _override_scheduling(
    scheduling: SchedulingConfig,
    *,
    start: Optional[str],
    end: Optional[str],
    duration: Optional[int],
) -> SchedulingConfig:
    """Apply command line overrides, re-running config validation."""
    overrides = {
        key: value
        for key, value in (("start_time", start), ("end_time", end), ("duration_minutes", duration))
        if value is not None
    }
    if not overrides:
        return scheduling
    return SchedulingConfig(**{**scheduling.model_dump(), **overrides})


@app.command()
def slots(
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD) in the host's timezone")],
    config_file: ConfigOption = None,
    timezone: Annotated[Optional[str], typer.Option("--timezone", "-t", help="Host timezone (IANA)")] = None,
    visitor_timezone: Annotated[Optional[str], typer.Option("--visitor-timezone", help="Timezone to display slot times in")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Window start (HH:mm)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="Window end (HH:mm)")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot duration in minutes")] = None,
    bookings_file: BookingsOption = None,
    verbose: VerboseOption = False,
):
    """
    List the free slots of a day.

    Examples:

        slotbook slots 2024-06-03

        slotbook slots 2024-06-03 --timezone America/Mexico_City --duration 45

        slotbook slots 2024-06-03 --bookings bookings.json --visitor-timezone Europe/Madrid
    """
    _configure_logging(verbose)

    try:
        config = load_config(config_file)
        host_tz = timezone or config.timezone
        scheduling = _override_scheduling(
            config.scheduling, start=start, end=end, duration=duration
        )
        day = parse_date(date)

        service = AvailabilityService(
            booking_source=_build_booking_source(config, bookings_file),
            scheduling=scheduling,
            timezone=host_tz,
        )
        free_slots = service.find_slots(date=day, visitor_timezone=visitor_timezone)

    except (SlotbookError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    shown_tz = visitor_timezone or host_tz
    console.print(
        f"\n[bold cyan]{day.isoformat()}[/bold cyan] "
        f"{scheduling.get_window()} ({host_tz}), "
        f"{scheduling.duration_minutes} min slots\n"
    )

    if not free_slots:
        console.print("[yellow]No available slots found.[/yellow]\n")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim")
    table.add_column(f"Slot ({shown_tz})", style="bold yellow")
    table.add_column("UTC start")

    for idx, slot in enumerate(free_slots, 1):
        display = Slot(
            start=pendulum.parse(slot.datetime),
            duration_minutes=scheduling.duration_minutes,
        ).format_display(shown_tz)
        table.add_row(str(idx), display, slot.datetime)

    console.print(table)
    console.print(f"\n[bold green]{len(free_slots)} slot(s) available[/bold green]\n")


@app.command()
def check(
    start: Annotated[str, typer.Argument(help="Candidate start (ISO-8601)")],
    end: Annotated[str, typer.Argument(help="Candidate end (ISO-8601)")],
    config_file: ConfigOption = None,
    bookings_file: BookingsOption = None,
    verbose: VerboseOption = False,
):
    """
    Check whether an interval is still free.
    """
    _configure_logging(verbose)

    try:
        config = load_config(config_file)
        slot_start = pendulum.parse(start)
        slot_end = pendulum.parse(end)
        if not isinstance(slot_start, pendulum.DateTime) or not isinstance(slot_end, pendulum.DateTime):
            raise ValueError("START and END must be ISO-8601 date-times")

        service = AvailabilityService(
            booking_source=_build_booking_source(config, bookings_file),
            scheduling=config.scheduling,
            timezone=config.timezone,
        )
        free = service.check_slot(slot_start, slot_end)

    except (SlotbookError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    window = (
        f"{format_in_zone(slot_start, config.timezone, 'YYYY-MM-DD HH:mm')} - "
        f"{format_in_zone(slot_end, config.timezone, 'HH:mm')} ({config.timezone})"
    )
    if free:
        console.print(f"[bold green]✓ Available:[/bold green] {window}")
    else:
        console.print(f"[bold red]✗ Conflicts with an existing booking:[/bold red] {window}")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotbook[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
