"""Data models for xcexport."""

from .archive import (
    ArchiveCandidate,
    ExportDestination,
    ExportPlan,
    ExportResult,
    SigningIdentity,
)

__all__ = [
    "ArchiveCandidate",
    "ExportDestination",
    "ExportPlan",
    "ExportResult",
    "SigningIdentity",
]
