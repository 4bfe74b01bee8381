"""
Archive export data models.

These are transient, process-lifetime values passed between the workflow steps.
Nothing here is persisted.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field


class ArchiveCandidate(BaseModel):
    """An .xcarchive bundle discovered under the archives root."""

    path: Path = Field(description="Absolute path to the bundle directory")
    modified_at: datetime | None = Field(default=None, description="Bundle modification time")

    @property
    def name(self) -> str:
        """Get the bundle's file name.

        Returns:
            str: The last path component (e.g., 'MyApp 1-2-24, 10.15.xcarchive').
        """
        return self.path.name

    @classmethod
    def from_path(cls, path: Path) -> ArchiveCandidate:
        """Build a candidate, reading the modification time from disk."""
        try:
            modified_at = datetime.fromtimestamp(path.stat().st_mtime)
        except OSError:
            modified_at = None
        return cls(path=path, modified_at=modified_at)


class SigningIdentity(BaseModel):
    """The provisioning profile an archive was signed with."""

    uuid: str = Field(description="Profile identifier found in the archive")
    name: str = Field(description="Human-readable profile name")
    profile_path: Path = Field(description="Installed profile file")


class ExportDestination(BaseModel):
    """A cleared target path for the exported package."""

    path: Path = Field(description="Destination .ipa path")
    base_name: str = Field(description="Name derived from the archive")
    replaced_existing: bool = Field(
        default=False, description="Whether an existing file was deleted to clear the path"
    )


class ExportPlan(BaseModel):
    """Everything needed to invoke the export tool."""

    archive: Path
    identity: SigningIdentity
    destination: ExportDestination
    command: list[str] = Field(default_factory=list, description="Exact export command line")


class ExportResult(BaseModel):
    """Result of a complete workflow run."""

    success: bool
    plan: ExportPlan
    returncode: int = 0
    dry_run: bool = False
