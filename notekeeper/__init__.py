"""
notekeeper.

Single-user note store with draft editing, search and local persistence.

- core/: configuration, logging, exceptions, ids, utilities
- schemas/: note, draft and view models (pydantic)
- models/: SQLAlchemy table for the SQLite medium
- repositories/: the note store
- storage/: codec, durable media, persistence synchronizer
- services/: draft controller, search pipeline, workspace
- cli/: command-line front end (Typer + Rich)
"""

__version__ = "0.1.0"
