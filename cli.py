#!/usr/bin/env python3
"""
Notekeeper CLI.

Command-line client for the local note store.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                               # Show help

    # Notes
    python cli.py notes list                           # All notes, newest first
    python cli.py notes list -q tax                    # Search titles and content
    python cli.py notes show <id>                      # Show one note
    python cli.py notes new -t "Title" -c "Body"       # Create a note
    python cli.py notes edit <id> -c "New body"        # Edit and save
    python cli.py notes delete <id>                    # Delete (asks first)

    # System info
    python cli.py system info                          # Show app info
    python cli.py system config                        # Show configuration

Options:
    --store PATH      Storage location override
    --backend NAME    memory, file or sqlite
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notekeeper.cli.main import app

if __name__ == "__main__":
    app()
