"""
Export Path Resolver.

Derives the destination .ipa path from the archive name and clears it, with
the user's consent, if something is already there.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from ..core.config import Config, NamingRule
from ..core.exceptions import ExportPathConflictError, ValidationError
from ..core.logging import get_logger
from ..models.archive import ExportDestination
from ..ui.console import Messenger

logger = get_logger(__name__)

EXPORT_EXTENSION = ".ipa"


def derive_base_name(
    archive: Path,
    rule: NamingRule = "first-word",
    suffix: str = ".xcarchive",
) -> str:
    """Derive the package name from an archive's file name.

    Xcode names archives ``<Scheme> <date>, <time>.xcarchive``. The default
    ``first-word`` rule keeps only the first whitespace-delimited token, which
    breaks for scheme names containing spaces. ``full-name`` keeps the whole
    name minus the suffix.

    Raises:
        ValidationError: If no name remains
    """
    name = archive.name
    if suffix and name.endswith(suffix) and name != suffix:
        name = name[: -len(suffix)]

    if rule == "first-word":
        tokens = name.split()
        base = tokens[0] if tokens else ""
    else:
        base = name.strip()

    if not base:
        raise ValidationError(
            message=f"Cannot derive an export name from [{archive}]",
            field_name="archive",
        )
    return base


def export_path_for(
    archive: Path,
    export_dir: Path,
    rule: NamingRule = "first-word",
    suffix: str = ".xcarchive",
) -> Path:
    """Destination path for an archive; depends only on its name and the root."""
    return export_dir / f"{derive_base_name(archive, rule, suffix)}{EXPORT_EXTENSION}"


def _occupied(path: Path) -> bool:
    return path.exists() or path.is_symlink()


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def resolve_export_path(archive: Path, config: Config, messenger: Messenger) -> ExportDestination:
    """Compute the export path and make sure nothing is in the way.

    Deletion only happens after a yes/no answer obtained for this exact path,
    and never during a dry run.

    Raises:
        ExportPathConflictError: If the user declines to delete an existing file
    """
    base_name = derive_base_name(archive, config.naming_rule, config.archive_suffix)
    export_path = config.export_dir / f"{base_name}{EXPORT_EXTENSION}"
    replaced = False

    if _occupied(export_path):
        messenger.warn(f"Export path [{export_path}] exists", indent=True)
        answer = messenger.prompt_yes_no(
            "Should I delete the file that is at the current export path [y/n]"
        )
        if answer != "y":
            raise ExportPathConflictError(
                message="Export path needs to be changed, or current file moved. Exiting...",
                export_path=export_path,
            )
        if config.dry_run:
            messenger.warn(f"Would delete [{export_path}]", indent=True)
        else:
            messenger.warn(f"Deleting [{export_path}]", indent=True)
            _remove(export_path)
            logger.info("Deleted existing export target", export_path=str(export_path))
            replaced = True

    messenger.info(f"Export path [{export_path}] is clear", indent=True)
    return ExportDestination(path=export_path, base_name=base_name, replaced_existing=replaced)
