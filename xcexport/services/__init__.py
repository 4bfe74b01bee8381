"""Workflow services for xcexport."""

from .archives import discover_archives, select_archive, verify_archive
from .export_path import derive_base_name, export_path_for, resolve_export_path
from .exporter import build_export_command, run_export
from .profiles import (
    extract_profile_identifier,
    profile_path_for,
    resolve_profile_name,
    resolve_signing_identity,
)

__all__ = [
    "discover_archives",
    "select_archive",
    "verify_archive",
    "derive_base_name",
    "export_path_for",
    "resolve_export_path",
    "build_export_command",
    "run_export",
    "extract_profile_identifier",
    "profile_path_for",
    "resolve_profile_name",
    "resolve_signing_identity",
]
