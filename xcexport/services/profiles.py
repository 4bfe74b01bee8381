"""
Signing-Identity Resolver.

Detects which provisioning profile an archive was built with and looks up its
display name among the installed profiles.

Two small parsers do the work:

* :func:`extract_profile_identifier` scans the raw bytes of the archive's
  ``embedded.mobileprovision`` (a CMS-wrapped plist) for the first
  ``8-4-4-4-12`` hexadecimal UUID.
* :func:`resolve_profile_name` finds ``<key>Name</key>`` in the installed
  profile and returns the text of the ``<string>`` element that follows it,
  trimmed of surrounding non-word characters.

Both raise a specific :class:`ProfileError` instead of returning an empty string,
so "not found" and "found but empty" stay distinguishable.
"""

from __future__ import annotations

import re
from pathlib import Path
from xml.sax.saxutils import unescape

from ..core.config import Config
from ..core.exceptions import (
    ManifestNotFoundError,
    ProfileIdentifierNotFoundError,
    ProfileNameError,
    ProfileNotFoundError,
)
from ..core.logging import get_logger
from ..models.archive import SigningIdentity
from ..ui.console import Messenger

logger = get_logger(__name__)

MANIFEST_NAME = "embedded.mobileprovision"
MANIFEST_SEARCH_SUBPATH = Path("Products") / "Applications"

UUID_PATTERN = re.compile(
    rb"[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}"
)

_NAME_KEY = re.compile(r"<key>\s*Name\s*</key>")
_STRING_VALUE = re.compile(r"\s*(?:<string>(.*?)</string>|<string\s*/>)", re.DOTALL)
# Leading and trailing non-word characters are dropped.
_TRIMMED = re.compile(r"\w(?:.*\w)?", re.DOTALL)


def find_embedded_manifest(archive: Path) -> Path:
    """Locate the provisioning profile embedded in an archive.

    Args:
        archive: Path to the .xcarchive bundle

    Returns:
        The first ``embedded.mobileprovision`` under ``Products/Applications``

    Raises:
        ManifestNotFoundError: If the archive carries no embedded profile
    """
    search_path = archive / MANIFEST_SEARCH_SUBPATH
    matches = sorted(p for p in search_path.rglob(MANIFEST_NAME) if p.is_file())
    if not matches:
        raise ManifestNotFoundError(
            message=f"No {MANIFEST_NAME} found in archive",
            search_path=search_path,
        )
    if len(matches) > 1:
        logger.debug("Multiple embedded profiles, using first", count=len(matches))
    return matches[0]


def extract_profile_identifier(archive: Path) -> str:
    """Extract the profile UUID from an archive's embedded profile.

    Raises:
        ManifestNotFoundError: If the archive carries no embedded profile
        ProfileIdentifierNotFoundError: If no UUID-shaped value is present
    """
    manifest = find_embedded_manifest(archive)
    match = UUID_PATTERN.search(manifest.read_bytes())
    if match is None:
        raise ProfileIdentifierNotFoundError(
            message="No profile UUID found in embedded profile",
            manifest_path=manifest,
        )
    identifier = match.group(0).decode("ascii")
    logger.debug("Extracted profile identifier", uuid=identifier, manifest=str(manifest))
    return identifier


def profile_path_for(identifier: str, profiles_dir: Path, extension: str = ".mobileprovision") -> Path:
    """Build the conventional installed-profile path for an identifier."""
    return profiles_dir / f"{identifier}{extension}"


def parse_profile_name(text: str) -> str | None:
    """Return the raw ``Name`` value from profile text, or None if absent.

    Accepts the value on the line after the key or on the same line.
    """
    key = _NAME_KEY.search(text)
    if key is None:
        return None
    value = _STRING_VALUE.match(text, key.end())
    if value is None:
        return None
    return unescape(value.group(1) or "", {"&quot;": '"', "&apos;": "'"})


def resolve_profile_name(profile_path: Path) -> str:
    """Read an installed profile's human-readable name.

    Args:
        profile_path: Installed .mobileprovision file

    Returns:
        The display name with markup and surrounding non-word characters removed

    Raises:
        ProfileNameError: ``reason="missing"`` when there is no Name entry,
            ``reason="empty"`` when the entry holds no usable text
    """
    text = profile_path.read_bytes().decode("utf-8", errors="replace")

    raw = parse_profile_name(text)
    if raw is None:
        raise ProfileNameError(
            message="Provisioning profile has no Name entry",
            profile_path=profile_path,
            reason="missing",
        )

    trimmed = _TRIMMED.search(raw.strip())
    if trimmed is None:
        raise ProfileNameError(
            message="Provisioning profile name is empty",
            profile_path=profile_path,
            reason="empty",
        )
    return trimmed.group(0)


def resolve_signing_identity(archive: Path, config: Config, messenger: Messenger) -> SigningIdentity:
    """Detect the archive's profile and confirm it is installed.

    Raises:
        ProfileError: If any part of the lookup fails
    """
    messenger.info("Detecting which provisioning profile was used to build the archive", indent=True)
    identifier = extract_profile_identifier(archive)
    messenger.hl_info(f"Detected profile with UUID [{identifier}]", indent=True)

    profile_path = profile_path_for(identifier, config.profiles_dir, config.profile_extension)
    messenger.info(f"Searching for installed profile at [{profile_path}]", indent=True)
    if not profile_path.is_file():
        raise ProfileNotFoundError(
            message="No provisioning profile found",
            profile_path=profile_path,
        )
    messenger.info("Profile located", indent=True)

    messenger.info("Detecting provisioning profile name", indent=True)
    name = resolve_profile_name(profile_path)
    messenger.hl_info(f"Detected provisioning profile name [{name}]", indent=True)

    return SigningIdentity(uuid=identifier, name=name, profile_path=profile_path)
