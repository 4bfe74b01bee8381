"""
Export tool invocation.

Wraps ``xcodebuild -exportArchive``. The tool's normal output is discarded;
its error stream is inherited so failures reach the user unchanged.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from ..core.config import Config
from ..core.exceptions import ExportToolError, ToolNotFoundError
from ..core.logging import get_logger

logger = get_logger(__name__)


def build_export_command(
    config: Config,
    archive: Path,
    destination: Path,
    profile_name: str,
) -> list[str]:
    """Build the export command line.

    Args:
        config: Resolved configuration (tool name and export format)
        archive: Source .xcarchive
        destination: Target package path
        profile_name: Provisioning profile display name

    Returns:
        Argument vector suitable for :func:`subprocess.run`
    """
    return [
        config.tool.executable,
        "-exportArchive",
        "-archivePath",
        str(archive),
        "-exportPath",
        str(destination),
        "-exportFormat",
        config.tool.export_format,
        "-exportProvisioningProfile",
        profile_name,
    ]


def run_export(command: list[str], install_hint: str = "") -> int:
    """Run the export tool synchronously.

    Returns:
        The tool's exit status (always 0 on return)

    Raises:
        ToolNotFoundError: If the executable cannot be located
        ExportToolError: If the tool exits non-zero
    """
    tool = command[0]
    resolved = shutil.which(tool)
    if resolved is None:
        raise ToolNotFoundError(
            message=f"Export tool [{tool}] not found",
            tool_name=tool,
            install_hint=install_hint,
        )

    logger.info("Running export tool", command=command)
    try:
        result = subprocess.run(
            [resolved, *command[1:]],
            stdout=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        raise ExportToolError(
            message=f"Could not run [{tool}]",
            command=command,
            cause=e,
        )

    if result.returncode != 0:
        logger.warning("Export tool failed", returncode=result.returncode)
        raise ExportToolError(
            message="Exporting the signed archive failed",
            returncode=result.returncode,
            command=command,
        )
    return result.returncode
