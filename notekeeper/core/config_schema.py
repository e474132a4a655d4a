"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    NotesSchema        → notes.yaml
    StorageSchema      → storage.yaml
    LoggingSchema      → logging.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str


# =============================================================================
# notes.yaml
# =============================================================================


class NotesSchema(_StrictBase):
    placeholder_title: str = Field(min_length=1)
    preview_length: int = Field(ge=2)


# =============================================================================
# storage.yaml
# =============================================================================


class StorageSchema(_StrictBase):
    backend: Literal["memory", "file", "sqlite"]
    path: str
    key: str = Field(min_length=1)
    legacy_keys: list[str]
    deferred_writes: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema
