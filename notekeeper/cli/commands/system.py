"""
System Commands.

Commands for application information and configuration.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

app = typer.Typer(help="System information commands")
console = Console()


@app.command()
def info() -> None:
    """
    Display application information.

    Shows app name, version, and where notes are stored.
    """
    try:
        from notekeeper.core.config import get_app_config, get_storage_path

        app_config = get_app_config()

        console.print(Panel(
            f"[bold]{app_config.application.name}[/bold]\n"
            f"Version: {app_config.application.version}\n"
            f"Description: {app_config.application.description}\n"
            f"Storage: {app_config.storage.backend} at {get_storage_path()}",
            title="Application Info",
        ))

    except (OSError, RuntimeError, ValueError) as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def config(
    section: Optional[str] = typer.Argument(None, help="Config section to show (application, notes, storage, logging)"),
) -> None:
    """
    Display configuration settings.

    Shows all configuration or a specific section.
    """
    try:
        from notekeeper.core.config import get_app_config

        app_config = get_app_config()

        sections = {
            "application": app_config.application.model_dump(),
            "notes": app_config.notes.model_dump(),
            "storage": app_config.storage.model_dump(),
            "logging": app_config.logging.model_dump(),
        }

    except (OSError, RuntimeError, ValueError) as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)

    if section:
        if section not in sections:
            console.print(f"[red]Unknown section: {section}[/red]")
            console.print(f"Available sections: {', '.join(sections.keys())}")
            raise typer.Exit(1)

        _display_config_section(section, sections[section])
    else:
        for name, data in sections.items():
            _display_config_section(name, data)
            console.print()


def _display_config_section(name: str, data: dict) -> None:
    """Display a configuration section as a tree."""
    tree = Tree(f"[bold cyan]{name}[/bold cyan]")

    def add_items(parent: Tree, items: dict) -> None:
        for key, value in items.items():
            if isinstance(value, dict):
                branch = parent.add(f"[cyan]{key}[/cyan]")
                add_items(branch, value)
            else:
                parent.add(f"[cyan]{key}[/cyan]: {escape(str(value))}")

    add_items(tree, data)
    console.print(tree)


@app.command()
def version() -> None:
    """
    Display version information.
    """
    from notekeeper import __version__

    console.print(f"[bold]{__version__}[/bold]")
