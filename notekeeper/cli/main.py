"""
CLI Application.

Typer application that registers the command groups and handles the
global options.

Options:
    --store PATH      Storage directory (file) or database file (sqlite)
    --backend NAME    Storage backend: memory, file or sqlite
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from notekeeper.cli.commands import notes_app, system_app

app = typer.Typer(
    name="notekeeper",
    help="Notekeeper CLI - Create, search, edit and delete local notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(notes_app, name="notes")
app.add_typer(system_app, name="system")


@app.callback()
def main(
    ctx: typer.Context,
    store: Optional[Path] = typer.Option(
        None,
        "--store",
        help="Storage location (overrides storage.yaml and NOTEKEEPER_STORAGE_PATH)",
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        help="Storage backend: memory, file or sqlite",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notekeeper CLI.

    Notes are kept locally; every change is written to storage before
    the command exits.
    """
    from notekeeper.core.config import get_settings, validate_project_root
    from notekeeper.core.logging import setup_logging

    validate_project_root()
    ctx.obj = {"store": store, "backend": backend}

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = get_settings().log_level or "WARNING"

    setup_logging(level=log_level, format_type="console")
    if debug:
        console.print("[dim]Debug mode enabled[/dim]")


if __name__ == "__main__":
    app()
