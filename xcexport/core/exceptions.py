"""
Custom exception hierarchy for xcexport.

All exceptions inherit from XcExportError so the CLI can report any fatal step
failure in one place. Each exception carries the exit status the process should
terminate with and context for debugging and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class XcExportError(Exception):
    """Base exception for all xcexport errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    exit_code = 1

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"

    def lines(self) -> list[str]:
        """Human-readable lines for the error channel."""
        return [self.message]


@dataclass
class ValidationError(XcExportError):
    """Raised when input validation fails."""

    field_name: str | None = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class ArchiveError(XcExportError):
    """Raised when an archive cannot be selected or located."""


@dataclass
class NoArchivesFoundError(ArchiveError):
    """Raised when the archives root holds no candidate bundles."""

    search_root: Path | None = None

    def lines(self) -> list[str]:
        if self.search_root is None:
            return [self.message]
        return [self.message, f"Searched [{self.search_root}]"]


@dataclass
class ArchiveNotFoundError(ArchiveError):
    """Raised when the selected archive is not an existing directory."""

    archive_path: str = ""


@dataclass
class ProfileError(XcExportError):
    """Raised when the signing identity cannot be resolved."""


@dataclass
class ManifestNotFoundError(ProfileError):
    """Raised when the archive carries no embedded provisioning profile."""

    search_path: Path | None = None


@dataclass
class ProfileIdentifierNotFoundError(ProfileError):
    """Raised when the embedded profile holds no UUID-shaped identifier."""

    manifest_path: Path | None = None


@dataclass
class ProfileNotFoundError(ProfileError):
    """Raised when no installed profile matches the detected identifier."""

    profile_path: Path | None = None
    install_hint: str = "You probably need to install it"

    def lines(self) -> list[str]:
        return [self.message, self.install_hint]


@dataclass
class ProfileNameError(ProfileError):
    """Raised when the profile's display name is missing or garbled.

    ``reason`` is ``"missing"`` when no ``Name`` entry was found and
    ``"empty"`` when one was found but carried no usable text.
    """

    profile_path: Path | None = None
    reason: str = "missing"


@dataclass
class ExportPathConflictError(XcExportError):
    """Raised when the user declines to clear an occupied export path."""

    export_path: Path | None = None


@dataclass
class UserAbortError(XcExportError):
    """Raised when the user declines to continue or input ends."""


@dataclass
class ToolNotFoundError(XcExportError):
    """Raised when a required external tool is not available."""

    tool_name: str = ""
    install_hint: str = ""

    exit_code = 127

    def __str__(self) -> str:
        hint = f" Install hint: {self.install_hint}" if self.install_hint else ""
        return f"Tool '{self.tool_name}' not found.{hint}"

    def lines(self) -> list[str]:
        hint = [self.install_hint] if self.install_hint else []
        return [self.message, *hint]


@dataclass
class ExportToolError(XcExportError):
    """Raised when the external export tool exits with a failure status."""

    returncode: int = 1
    command: list[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        # Killed by a signal: follow the shell convention of 128 + signal number.
        if self.returncode < 0:
            return 128 + abs(self.returncode)
        return self.returncode or 1

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (exit status {self.returncode})"
