"""CLI entry point for filenotes."""

import logging

import click

from . import __version__
from .environment import HOME_ENV_VAR, HostEnvironment
from .errors import NoteStoreError
from .models import Note
from .store import NoteStore

# Note background colors as packed ARGB values
COLORS = {
    "white": 0xFFFFFFFF,
    "yellow": 0xFFFFF9C4,
    "blue": 0xFFB3E5FC,
    "green": 0xFFDCEDC8,
    "orange": 0xFFFFE0B2,
    "pink": 0xFFF8BBD0,
}
DEFAULT_COLOR = "white"


def color_name(value: int) -> str:
    """Get the palette name for a color, or its hex value if it has none."""
    for name, argb in COLORS.items():
        if argb == value:
            return name
    return f"#{value:08X}"


def format_date(note: Note) -> str:
    """Format a note's date for display in local time."""
    try:
        return note.timestamp.astimezone().strftime("%b %d, %Y %H:%M")
    except (ValueError, OverflowError, OSError):
        return "Unknown"


def preview(content: str, width: int = 50) -> str:
    """First line of content, cut to width."""
    text = content.replace("\n", " ")
    return text[:width] + "..." if len(text) > width else text


def read_body(body: str | None) -> str:
    """Get body from option or stdin."""
    import sys

    if body is not None:
        return body
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


def open_in_editor(text: str) -> str:
    """Open text in $EDITOR and return the edited result."""
    import os
    import subprocess
    import tempfile

    editor_cmd = os.environ.get("EDITOR", "vim")
    with tempfile.NamedTemporaryFile(mode="w", suffix=".md", delete=False, encoding="utf-8") as f:
        f.write(text)
        temp_path = f.name

    try:
        result = subprocess.run([editor_cmd, temp_path])
        if result.returncode != 0:
            raise click.ClickException(f"Editor exited with code {result.returncode}")

        with open(temp_path, encoding="utf-8") as f:
            return f.read()
    finally:
        os.unlink(temp_path)


def confirm_permission(message: str) -> bool:
    return click.confirm(message, default=True)


@click.group()
@click.version_option(version=__version__, prog_name="notes")
@click.option(
    "--home",
    envvar=HOME_ENV_VAR,
    type=click.Path(file_okay=False),
    help="Storage root (the Notes folder is created inside it).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, home: str | None, verbose: bool):
    """filenotes - a notebook of JSON files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.obj is None:
        ctx.obj = NoteStore(HostEnvironment(home=home, prompt=confirm_permission))


@cli.command()
@click.pass_obj
def list(store: NoteStore):
    """List all notes, newest first."""
    try:
        notes = store.list()
    except NoteStoreError as e:
        raise click.ClickException(str(e))

    if not notes:
        click.echo("No notes yet. Create one!")
        return

    click.echo(f"{'ID':<32} {'Title':<40} {'Date':<18} {'Color'}")
    click.echo("-" * 100)

    for note in notes:
        title = note.title[:38] + ".." if len(note.title) > 40 else note.title
        click.echo(f"{note.id:<32} {title:<40} {format_date(note):<18} {color_name(note.color)}")
        if note.content:
            click.echo(f"    {preview(note.content)}")

    click.echo(f"\nTotal: {len(notes)} notes")


@cli.command()
@click.argument("note_id")
@click.pass_obj
def show(store: NoteStore, note_id: str):
    """Show a note."""
    try:
        note = store.get(note_id)
    except NoteStoreError as e:
        raise click.ClickException(str(e))

    click.echo(note.title)
    click.echo(f"{format_date(note)}  ({color_name(note.color)})")
    click.echo("")
    click.echo(note.content)


@cli.command()
@click.argument("title")
@click.option("--body", "-b", help="Note body")
@click.option(
    "--color", "-c",
    type=click.Choice(sorted(COLORS)),
    default=DEFAULT_COLOR,
    show_default=True,
    help="Note color",
)
@click.pass_obj
def create(store: NoteStore, title: str, body: str | None, color: str):
    """Create a new note.

    Body can be provided via --body option or piped from stdin.
    """
    if not title.strip():
        raise click.ClickException("Please enter a title")

    note = Note.create(title=title, content=read_body(body), color=COLORS[color])
    try:
        store.save(note)
    except NoteStoreError as e:
        raise click.ClickException(str(e))

    click.echo(f"Created note '{title}' (ID: {note.id})")


@cli.command()
@click.argument("note_id")
@click.option("--title", "-t", help="New title")
@click.option("--body", "-b", help="New body")
@click.option("--editor", "-e", is_flag=True, help="Open body in $EDITOR")
@click.option("--color", "-c", type=click.Choice(sorted(COLORS)), help="New color")
@click.pass_obj
def edit(
    store: NoteStore,
    note_id: str,
    title: str | None,
    body: str | None,
    editor: bool,
    color: str | None,
):
    """Edit an existing note.

    Use --editor to open the body in $EDITOR, or --body to set it directly.
    Content can also be piped from stdin.
    """
    import sys

    try:
        note = store.get(note_id)

        if title is not None and not title.strip():
            raise click.ClickException("Please enter a title")

        content = body
        if content is None and editor:
            content = open_in_editor(note.content)
        elif content is None and not sys.stdin.isatty():
            content = sys.stdin.read() or None

        if title is None and content is None and color is None:
            raise click.ClickException(
                "Nothing to change. Use --title, --body, --editor, --color or pipe content."
            )

        revised = note.revise(
            title=title,
            content=content,
            color=COLORS[color] if color else None,
        )
        if (revised.title, revised.content, revised.color) == (note.title, note.content, note.color):
            click.echo("No changes made.")
            return

        store.save(revised)
        click.echo(f"Updated note '{revised.title}'")

    except NoteStoreError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument("note_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def delete(store: NoteStore, note_id: str, yes: bool):
    """Delete a note."""
    if not yes and not click.confirm("Are you sure you want to delete this note?"):
        click.echo("Delete cancelled.")
        return

    try:
        removed = store.delete(note_id)
    except NoteStoreError as e:
        raise click.ClickException(str(e))

    if removed:
        click.echo("Note deleted")
    else:
        click.echo(f"No note with ID {note_id}")


@cli.command()
@click.pass_obj
def export(store: NoteStore):
    """Export all notes to a single JSON file."""
    try:
        path = store.export_all()
    except NoteStoreError as e:
        raise click.ClickException(f"Error exporting notes: {e}")

    click.echo("Notes exported successfully")
    click.echo(str(path))


@cli.command()
def colors():
    """List the available note colors."""
    for name, argb in COLORS.items():
        click.echo(f"{name:<8} #{argb:08X}")


if __name__ == "__main__":
    cli()
