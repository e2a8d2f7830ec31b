#!/usr/bin/env python3
"""
Notes CLI.

Primary entry point for all application operations.
Use --service to select what to run.

Usage:
    python cli.py --help
    python cli.py --service tui
    python cli.py --service list
    python cli.py --service new --title "Groceries" --content "Milk, eggs"
    python cli.py --service show --note-id <id>
    python cli.py --service search --query groceries
    python cli.py --service delete --note-id <id>
    python cli.py --service config
"""

import asyncio
import random
import sys
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from notes_app.core.database import dispose_engine, session_scope
from notes_app.core.exceptions import ApplicationError
from notes_app.core.logging import get_logger, resolve_log_level, setup_logging
from notes_app.models.note import Note
from notes_app.models.palette import PALETTE
from notes_app.schemas.note import NoteSnapshot
from notes_app.services.editor import CloseOutcome, NoteEditor
from notes_app.services.store import NoteStore

console = Console()


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["tui", "list", "new", "show", "delete", "search", "config", "info"]),
    default="list",
    help="Service or command to run.",
)
@click.option(
    "--note-id", "-n",
    default=None,
    help="Note identifier (show, delete).",
)
@click.option(
    "--title", "-t",
    default="",
    help="Title for a new note.",
)
@click.option(
    "--content", "-c",
    default="",
    help="Content for a new note.",
)
@click.option(
    "--color",
    type=click.Choice(list(PALETTE)),
    default=None,
    help="Colour for a new note (random if omitted).",
)
@click.option(
    "--query", "-q",
    default="",
    help="Search text (search).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
def main(
    service: str,
    note_id: str | None,
    title: str,
    content: str,
    color: str | None,
    query: str,
    verbose: bool,
    debug: bool,
) -> None:
    """
    Notes CLI.

    Use --service to select what to run. Note commands open the local
    store, run once and exit; --service tui starts the interactive grid.

    \b
    Examples:
        python cli.py --service tui
        python cli.py --service list
        python cli.py --service new --title "Groceries" --color "Note 2"
        python cli.py --service show --note-id 3f2c...
        python cli.py --service search --query milk
        python cli.py --service delete --note-id 3f2c...
        python cli.py --service config
    """
    validate_project_root()

    log_level = resolve_log_level(debug, verbose, default="WARNING")

    if service == "tui":
        # The TUI owns the terminal, so logs go to the file only.
        setup_logging(level=log_level, enable_console=False)
        structlog.contextvars.bind_contextvars(source="tui")
        run_tui()
        return

    setup_logging(level=log_level, format_type="console", enable_console=True)

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)

    logger.debug("CLI invoked", extra={"service": service, "log_level": log_level})

    try:
        if service == "list":
            asyncio.run(list_notes())
        elif service == "new":
            asyncio.run(new_note(title, content, color))
        elif service == "show":
            asyncio.run(show_note(_require_note_id(note_id)))
        elif service == "delete":
            asyncio.run(delete_note(_require_note_id(note_id)))
        elif service == "search":
            asyncio.run(search_notes(query))
        elif service == "config":
            show_config()
        elif service == "info":
            show_info()
    except ApplicationError as e:
        logger.error("Command failed", extra={"service": service, "code": e.code, "error": e.message})
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)


def _require_note_id(note_id: str | None) -> str:
    if not note_id:
        click.echo(click.style("Error: --note-id is required for this service.", fg="red"), err=True)
        sys.exit(2)
    return note_id


def run_tui() -> None:
    """Start the interactive card grid."""
    from notes_app.tui.app import NotesApp

    app = NotesApp()
    app.run()
    if app.return_code:
        sys.exit(app.return_code)


def _notes_table(notes: list[Note], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title")
    table.add_column("Colour")
    table.add_column("Created", no_wrap=True)

    for note in notes:
        snapshot = NoteSnapshot.model_validate(note)
        table.add_row(
            snapshot.id,
            escape(snapshot.title) if snapshot.title else "[dim]Untitled[/dim]",
            f"[{snapshot.color}]■[/] {snapshot.color_key}",
            snapshot.date_created.strftime("%Y-%m-%d %H:%M"),
        )
    return table


async def list_notes() -> None:
    """Print every note, newest first."""
    try:
        async with session_scope() as session:
            notes = await NoteStore(session).list_all()
    finally:
        await dispose_engine()

    if not notes:
        click.echo("No notes.")
        return
    console.print(_notes_table(notes, f"Notes ({len(notes)})"))


async def search_notes(query: str) -> None:
    """Print notes whose title or content contains the query."""
    try:
        async with session_scope() as session:
            notes = await NoteStore(session).search(query)
    finally:
        await dispose_engine()

    if not notes:
        click.echo(f"No notes match {query!r}.")
        return
    console.print(_notes_table(notes, f"Matches for {query!r} ({len(notes)})"))


async def new_note(title: str, content: str, color: str | None) -> None:
    """
    Create a note the same way the grid does: insert, edit, close.

    A note created with neither title nor content is discarded on close.
    """
    try:
        async with session_scope() as session:
            editor = NoteEditor(NoteStore(session))
            draft = await editor.create_note(rng=random)
            editor.update_title(title)
            editor.update_content(content)
            if color is not None:
                editor.set_color(color)
            outcome = await editor.close()
    finally:
        await dispose_engine()

    if outcome is CloseOutcome.DISCARDED:
        click.echo(click.style("Empty note discarded; nothing was kept.", fg="yellow"))
        return
    click.echo(click.style(f"Created note {draft.id}", fg="green"))


async def show_note(note_id: str) -> None:
    """Print one note in its colour."""
    try:
        async with session_scope() as session:
            note = NoteSnapshot.model_validate(await NoteStore(session).get(note_id))
    finally:
        await dispose_engine()

    console.print(Panel(
        escape(note.content) if note.content else "[dim]No content[/dim]",
        title=escape(note.title) if note.title else "Untitled",
        subtitle=f"{note.color_key} · created {note.date_created:%Y-%m-%d %H:%M}",
        border_style=note.color,
    ))


async def delete_note(note_id: str) -> None:
    """Delete one note; deleting a missing note is reported, not an error."""
    try:
        async with session_scope() as session:
            deleted = await NoteStore(session).delete(note_id)
    finally:
        await dispose_engine()

    if deleted:
        click.echo(click.style(f"Deleted note {note_id}", fg="green"))
    else:
        click.echo(f"Note {note_id} was already absent.")


def show_config() -> None:
    """Display the validated YAML configuration."""
    from notes_app.core.config import get_app_config, get_database_url

    config = get_app_config()

    click.echo("Application Configuration:\n")
    for name, section in (
        ("Application", config.application),
        ("Database", config.database),
        ("Logging", config.logging),
    ):
        click.echo(f"{name} Settings (from YAML):")
        click.echo("-" * 40)
        for key, value in section.model_dump().items():
            click.echo(f"  {key}: {value}")
        click.echo()

    click.echo(f"Resolved database URL: {get_database_url()}")


def show_info() -> None:
    """Display application information."""
    from notes_app.core.config import get_app_config

    app = get_app_config().application
    console.print(Panel(
        f"[bold]{app.name}[/bold]\n"
        f"Version: {app.version}\n"
        f"Description: {app.description}\n"
        f"Environment: {app.environment}",
        title="Application Info",
    ))


if __name__ == "__main__":
    main()
