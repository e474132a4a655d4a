"""
Note Commands.

Commands for listing, viewing, creating, editing and deleting notes.
Each command opens the configured workspace, performs one action and
closes it, which waits for the write to storage.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table

from notekeeper.core.dependencies import build_workspace
from notekeeper.core.exceptions import WriteError
from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.services.workspace import Confirm, NotesWorkspace, always_confirm

app = typer.Typer(help="Note commands")
console = Console()
logger = get_logger(__name__)


@contextmanager
def _workspace(ctx: typer.Context, confirm: Confirm = always_confirm) -> Iterator[NotesWorkspace]:
    """Open a workspace for the command; report write failures on close."""
    options = ctx.obj or {}
    workspace = build_workspace(
        backend=options.get("backend"),
        path=options.get("store"),
        confirm=confirm,
    )
    try:
        yield workspace
    finally:
        try:
            workspace.close()
        except WriteError as e:
            log_with_source(logger, "cli", "error", "Notes not saved", error=e.message)
            console.print(f"[red]Error: notes were not saved: {e.message}[/red]")
            raise typer.Exit(1)


def _select_or_exit(workspace: NotesWorkspace, note_id: str) -> None:
    if workspace.select(note_id) is None:
        console.print(f"[red]Note not found: {note_id}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_notes(
    ctx: typer.Context,
    query: str = typer.Option("", "--query", "-q", help="Only notes whose title or content contains this text"),
) -> None:
    """
    List notes, most recently updated first.

    Examples:
        cli.py notes list
        cli.py notes list -q groceries
    """
    with _workspace(ctx) as workspace:
        workspace.set_query(query)
        rows = workspace.list_view()

        if not rows:
            console.print("[yellow]No notes found[/yellow]")
            console.print("[dim]Create a new note or clear your search.[/dim]")
            return

        table = Table(title="Notes", show_header=True)
        table.add_column("Title", style="cyan")
        table.add_column("Updated")
        table.add_column("Preview", style="dim")
        table.add_column("ID", style="dim")
        for row in rows:
            table.add_row(escape(row.title), row.updated, escape(row.preview), row.id)

        console.print(table)
        console.print(f"[dim]{workspace.count_label()}[/dim]")


@app.command()
def show(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note ID"),
) -> None:
    """
    Show one note.
    """
    with _workspace(ctx) as workspace:
        _select_or_exit(workspace, note_id)
        view = workspace.editor_view()
        console.print(Panel(
            escape(view.content) or "[dim]No content[/dim]",
            title=f"[bold]{escape(view.title)}[/bold]",
            subtitle=f"Created {view.created} · Updated {view.updated}",
        ))


@app.command()
def new(
    ctx: typer.Context,
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Note title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="Note content"),
) -> None:
    """
    Create a note.

    Examples:
        cli.py notes new -t "Groceries" -c "buy milk"
    """
    with _workspace(ctx) as workspace:
        note = workspace.create_note(title, content)
        console.print(f"[green]Created[/green] {escape(note.title)} [dim]({note.id})[/dim]")


@app.command()
def edit(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New content"),
) -> None:
    """
    Change a note's title or content and save it.

    A blank title is saved as the placeholder title.
    """
    with _workspace(ctx) as workspace:
        _select_or_exit(workspace, note_id)
        if title is not None:
            workspace.edit_title(title)
        if content is not None:
            workspace.edit_content(content)

        note = workspace.save()
        if note is None:
            console.print("[dim]No changes[/dim]")
        else:
            console.print(f"[green]Saved[/green] {escape(note.title)} [dim]({note.id})[/dim]")


@app.command()
def delete(
    ctx: typer.Context,
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """
    Delete a note.
    """
    confirm = always_confirm if yes else typer.confirm
    with _workspace(ctx, confirm=confirm) as workspace:
        if workspace.store.get(note_id) is None:
            console.print(f"[red]Note not found: {note_id}[/red]")
            raise typer.Exit(1)
        if workspace.delete_note(note_id):
            console.print(f"[green]Deleted[/green] {note_id}")
        else:
            console.print("[yellow]Cancelled[/yellow]")
