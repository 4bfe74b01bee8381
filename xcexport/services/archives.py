"""
Archive Selector.

Lists the most recent .xcarchive bundles under the archives root and lets the
user pick one. Xcode stores archives as ``<root>/<yyyy-mm-dd>/<name>.xcarchive``,
so a descending sort on the full path is newest first.
"""

from __future__ import annotations

from pathlib import Path

from ..core.config import Config
from ..core.exceptions import ArchiveNotFoundError, NoArchivesFoundError
from ..core.logging import get_logger
from ..models.archive import ArchiveCandidate
from ..ui.console import Messenger

logger = get_logger(__name__)

# Bundles live exactly this many levels below the archives root.
ARCHIVE_DEPTH = 2


def discover_archives(
    archives_dir: Path,
    limit: int,
    suffix: str = ".xcarchive",
) -> list[ArchiveCandidate]:
    """Find the ``limit`` most recent archive bundles.

    Args:
        archives_dir: Root directory to scan
        limit: Maximum number of candidates to return
        suffix: Bundle directory suffix

    Returns:
        Candidates in descending lexicographic order of their full path
    """
    if not archives_dir.is_dir():
        logger.debug("Archives root missing", archives_dir=str(archives_dir))
        return []

    pattern = "/".join(["*"] * (ARCHIVE_DEPTH - 1) + [f"*{suffix}"])
    paths = [p for p in archives_dir.glob(pattern) if p.is_dir()]
    paths.sort(key=str, reverse=True)

    logger.debug("Discovered archives", total=len(paths), limit=limit)
    return [ArchiveCandidate.from_path(p) for p in paths[:limit]]


def _parse_index(value: str, count: int) -> int | None:
    try:
        index = int(value)
    except ValueError:
        return None
    return index if 1 <= index <= count else None


def choose_candidate(
    candidates: list[ArchiveCandidate],
    messenger: Messenger,
    search_root: Path | None = None,
) -> ArchiveCandidate:
    """Present a numbered list and read a valid 1-based index.

    Raises:
        NoArchivesFoundError: If there is nothing to choose from
    """
    if not candidates:
        raise NoArchivesFoundError(
            message="No archives available to choose from",
            search_root=search_root,
        )

    count = len(candidates)
    messenger.numbered([str(c.path) for c in candidates])

    prompt = f"Which of the above archives do you want to export/sign [1-{count}]"
    index = _parse_index(messenger.prompt_line(prompt), count)
    while index is None:
        messenger.warn("Invalid input")
        index = _parse_index(messenger.prompt_line(prompt), count)

    return candidates[index - 1]


def select_archive(config: Config, messenger: Messenger) -> Path:
    """Resolve the archive to operate on.

    An explicit override is returned untouched; existence is checked later by
    :func:`verify_archive`.

    Raises:
        NoArchivesFoundError: If discovery finds no bundles
    """
    if config.archive_override is not None:
        logger.debug("Using archive override", archive=str(config.archive_override))
        return config.archive_override

    candidates = discover_archives(config.archives_dir, config.num_archives, config.archive_suffix)
    if not candidates:
        raise NoArchivesFoundError(
            message="No archives found",
            search_root=config.archives_dir,
        )

    return choose_candidate(candidates, messenger, search_root=config.archives_dir).path


def verify_archive(archive: Path | None) -> Path:
    """Check that the selected archive is an existing directory.

    Raises:
        ArchiveNotFoundError: If the path is empty or not a directory
    """
    if archive is None or str(archive) in ("", ".") or not archive.is_dir():
        raise ArchiveNotFoundError(
            message="Archive doesn't exist",
            archive_path=str(archive or ""),
        )
    return archive
