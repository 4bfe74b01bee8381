"""Core infrastructure components for xcexport."""

from .config import Config, OutputStyle, ToolConfig
from .exceptions import (
    ArchiveError,
    ArchiveNotFoundError,
    ExportPathConflictError,
    ExportToolError,
    ManifestNotFoundError,
    NoArchivesFoundError,
    ProfileError,
    ProfileIdentifierNotFoundError,
    ProfileNameError,
    ProfileNotFoundError,
    ToolNotFoundError,
    UserAbortError,
    ValidationError,
    XcExportError,
)
from .logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    "Config",
    "OutputStyle",
    "ToolConfig",
    "ArchiveError",
    "ArchiveNotFoundError",
    "ExportPathConflictError",
    "ExportToolError",
    "ManifestNotFoundError",
    "NoArchivesFoundError",
    "ProfileError",
    "ProfileIdentifierNotFoundError",
    "ProfileNameError",
    "ProfileNotFoundError",
    "ToolNotFoundError",
    "UserAbortError",
    "ValidationError",
    "XcExportError",
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
]
