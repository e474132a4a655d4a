"""
CLI Module.

Command-line front end built with Typer and Rich. It is a thin
presentation layer: every change goes through NotesWorkspace.

Usage:
    python cli.py --help
    python cli.py notes list -q milk
    python cli.py notes new -t "Groceries" -c "buy milk"
"""
