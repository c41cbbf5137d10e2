"""CLI interface for haru."""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from haru.calendar import build_month, cap_entries, month_grid, relative_label, timeline, weekday_headers
from haru.config import HaruConfig, load_config, merge_cli_overrides
from haru.content import (
    PhotoPlaceholderSegment,
    ResolvedPhotoSegment,
    TextSegment,
    render_entry,
    summarize_entry,
    text_to_content,
)
from haru.errors import HaruError
from haru.store import DiaryStore, EntryCreate

app = typer.Typer(
    name="haru",
    help="Mood journal: monthly calendar and entry rendering.",
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .haru.toml file."),
]
StoreOption = Annotated[
    Optional[Path],
    typer.Option("--store", "-s", help="Directory holding the diary store file."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from haru import __version__

        console.print(f"haru {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging."),
    ] = False,
) -> None:
    """haru - Mood journal calendar and entry viewer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def _resolve_config(config_path: Path | None, **overrides: object) -> HaruConfig:
    try:
        return merge_cli_overrides(load_config(config_path), **overrides)
    except ValidationError as exc:
        _fail(f"Invalid configuration: {exc}")


def _open_store(config: HaruConfig) -> DiaryStore:
    return DiaryStore(config.store.path, daily_limit=config.entries.daily_limit)


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid date format: {value}")
        console.print("Use YYYY-MM-DD format (e.g., 2025-09-17)")
        raise typer.Exit(1)


@app.command(name="calendar")
def calendar_cmd(
    month: Annotated[
        Optional[int],
        typer.Option("--month", "-m", help="Month to show (1-12). Defaults to this month."),
    ] = None,
    year: Annotated[
        Optional[int],
        typer.Option("--year", "-y", help="Year to show. Defaults to this year."),
    ] = None,
    max_per_day: Annotated[
        Optional[int],
        typer.Option("--max-per-day", help="Moods shown per day before '+N'."),
    ] = None,
    store: StoreOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Show a month of entries as a mood calendar."""
    config = _resolve_config(config_path, store_directory=store, max_entries_per_day=max_per_day)
    today = date.today()
    month = month if month is not None else today.month
    year = year if year is not None else today.year

    try:
        entries = _open_store(config).list_entries()
        cells = build_month(entries, month, year)
    except HaruError as exc:
        _fail(str(exc))

    week_start = config.calendar.first_weekday
    table = Table(title=f"{year}-{month:02d}", show_lines=True)
    for header in weekday_headers(week_start):
        table.add_column(header, justify="center", min_width=6)

    for week in month_grid(cells, week_start):
        row: list[str] = []
        for cell in week:
            if cell is None:
                row.append("")
                continue
            capped = cap_entries(cell.entries, config.calendar.max_entries_per_day)
            label = f"[bold]{cell.day}[/bold]" if cell.date == today else str(cell.day)
            moods = " ".join(escape(e.mood) for e in capped.shown)
            if capped.overflow_count:
                moods = f"{moods} +{capped.overflow_count}"
            row.append(f"{label}\n{moods}" if moods else label)
        table.add_row(*row)

    console.print(table)


@app.command(name="show")
def show_cmd(
    entry_id: Annotated[str, typer.Argument(help="Id of the entry to show.")],
    store: StoreOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Render a single entry with its photos."""
    config = _resolve_config(config_path, store_directory=store)
    try:
        entry = _open_store(config).get_entry(entry_id)
    except HaruError as exc:
        _fail(str(exc))

    heading = escape(entry.title or "Untitled")
    console.print(f"{escape(entry.mood)} [bold]{heading}[/bold]  ({relative_label(entry.date, date.today())})")
    console.print()
    for segment in render_entry(entry):
        if isinstance(segment, TextSegment):
            console.print(segment.value, end="", markup=False, highlight=False)
        elif isinstance(segment, ResolvedPhotoSegment):
            caption = f" - {segment.caption}" if segment.caption else ""
            console.print(f"\n[cyan]\\[photo][/cyan] {escape(segment.storage_path + caption)}\n", highlight=False)
        elif isinstance(segment, PhotoPlaceholderSegment):
            console.print(f"[blue]📷 {segment.label}[/blue]", end="")
    console.print()


@app.command(name="timeline")
def timeline_cmd(
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum entries to list."),
    ] = 20,
    store: StoreOption = None,
    config_path: ConfigOption = None,
) -> None:
    """List entries, most recent first."""
    config = _resolve_config(config_path, store_directory=store)
    entries = timeline(_open_store(config).list_entries())
    if not entries:
        console.print("[yellow]No entries yet.[/yellow]")
        raise typer.Exit(0)

    today = date.today()
    for entry in entries[:limit]:
        summary = summarize_entry(entry, config.entries.preview_length)
        photo = " 📷" if summary.has_photo else ""
        console.print(
            f"{escape(summary.mood)} [bold]{escape(summary.title or 'Untitled')}[/bold]"
            f" [dim]{relative_label(entry.date, today)} · {entry.id}[/dim]{photo}"
        )
        if summary.preview:
            console.print(f"  {summary.preview}", markup=False, highlight=False)


@app.command(name="add")
def add_cmd(
    mood: Annotated[str, typer.Option("--mood", help="Mood emoji for the entry.")],
    text: Annotated[str, typer.Option("--text", "-t", help="Entry text; blank lines separate paragraphs.")],
    entry_date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Entry date (YYYY-MM-DD). Defaults to today."),
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", help="Entry title.")] = None,
    photo_url: Annotated[
        Optional[str],
        typer.Option("--photo-url", help="Image embedded after the text."),
    ] = None,
    caption: Annotated[Optional[str], typer.Option("--caption", help="Caption for --photo-url.")] = None,
    store: StoreOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Write a new entry."""
    config = _resolve_config(config_path, store_directory=store)
    day = _parse_date(entry_date) if entry_date else date.today()
    try:
        data = EntryCreate(
            date=day,
            mood=mood,
            title=title,
            content=text_to_content(text, photo_url, caption),
        )
        entry = _open_store(config).create_entry(data)
    except (HaruError, ValidationError) as exc:
        _fail(str(exc))

    console.print(f"[green]Saved entry[/green] {entry.id} for {entry.date}")


@app.command(name="attach")
def attach_cmd(
    entry_id: Annotated[str, typer.Argument(help="Entry to attach the photo to.")],
    storage_path: Annotated[str, typer.Argument(help="Where the photo is stored.")],
    position: Annotated[
        int,
        typer.Option("--position", "-p", help="One-based photo number used in PHOTO markers."),
    ],
    caption: Annotated[Optional[str], typer.Option("--caption", help="Photo caption.")] = None,
    store: StoreOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Attach a stored photo to an entry."""
    config = _resolve_config(config_path, store_directory=store)
    try:
        photo = _open_store(config).add_photo(entry_id, storage_path, position - 1, caption=caption)
    except HaruError as exc:
        _fail(str(exc))

    console.print(f"[green]Attached[/green] {escape(photo.storage_path)} as {escape(f'[PHOTO:{position}]')}")


@app.command(name="delete")
def delete_cmd(
    entry_id: Annotated[str, typer.Argument(help="Entry to delete.")],
    store: StoreOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Delete an entry (it stays in the store file, flagged as deleted)."""
    config = _resolve_config(config_path, store_directory=store)
    try:
        _open_store(config).delete_entry(entry_id)
    except HaruError as exc:
        _fail(str(exc))

    console.print(f"[green]Deleted[/green] {entry_id}")


if __name__ == "__main__":
    app()
