"""
Export workflow orchestration.

Runs the four steps in strict order: ARCHIVE, PROVISIONING PROFILE,
EXPORT PATH, SIGNING/EXPORTING. A failing step raises and ends the run; nothing
is retried and nothing is rolled back.
"""

from __future__ import annotations

import shlex
from enum import Enum
from pathlib import Path

from ..core.config import Config
from ..core.exceptions import UserAbortError
from ..core.logging import bind_context, clear_context, get_logger
from ..models.archive import ExportDestination, ExportPlan, ExportResult, SigningIdentity
from ..services.archives import select_archive, verify_archive
from ..services.export_path import resolve_export_path
from ..services.exporter import build_export_command, run_export
from ..services.profiles import resolve_signing_identity
from ..ui.console import Messenger

logger = get_logger(__name__)


class ExportStep(str, Enum):
    """Steps of the export workflow, in execution order."""

    ARCHIVE = "ARCHIVE"
    PROVISIONING_PROFILE = "PROVISIONING PROFILE"
    EXPORT_PATH = "EXPORT PATH"
    SIGNING = "SIGNING/EXPORTING"

    @property
    def number(self) -> int:
        return list(ExportStep).index(self) + 1


class ExportWorkflow:
    """Interactive archive export for programmatic use."""

    def __init__(self, config: Config, messenger: Messenger | None = None) -> None:
        """Initialize the workflow.

        Args:
            config: Resolved configuration
            messenger: Output/prompt wrapper; built from config if omitted
        """
        self.config = config
        self.messenger = messenger or Messenger.from_config(config)

    def _begin(self, step: ExportStep) -> None:
        bind_context(step=step.name)
        logger.debug("Starting step", step=step.value)
        self.messenger.step(step.number, len(ExportStep), step.value)

    def choose_archive(self) -> Path:
        self._begin(ExportStep.ARCHIVE)
        m = self.messenger

        archive = select_archive(self.config, m)
        m.hl_info(f"Archive selected [{archive}]", indent=True)
        m.info("Verifying archive exists", indent=True)
        verify_archive(archive)
        m.info("Archive located", indent=True)
        return archive

    def detect_identity(self, archive: Path) -> SigningIdentity:
        self._begin(ExportStep.PROVISIONING_PROFILE)
        return resolve_signing_identity(archive, self.config, self.messenger)

    def clear_destination(self, archive: Path) -> ExportDestination:
        self._begin(ExportStep.EXPORT_PATH)
        return resolve_export_path(archive, self.config, self.messenger)

    def export(self, plan: ExportPlan) -> ExportResult:
        self._begin(ExportStep.SIGNING)
        m = self.messenger

        m.info(
            f"Building and moving to [{plan.destination.path}] using [{plan.identity.name}]",
            indent=True,
        )
        if m.prompt_yes_no("Shall I proceed [y/n]") != "y":
            raise UserAbortError(message="Aborting...")

        if self.config.dry_run:
            m.hl_info(f"Dry run, would execute: {shlex.join(plan.command)}", indent=True)
            return ExportResult(success=True, plan=plan, dry_run=True)

        m.hl_info("Exporting signed archive...", indent=True)
        returncode = run_export(plan.command, install_hint=self.config.tool.install_hint)
        m.hl_info("Done", indent=True)
        return ExportResult(success=True, plan=plan, returncode=returncode)

    def run(self) -> ExportResult:
        """Run all four steps.

        Returns:
            ExportResult for a successful (or dry) run

        Raises:
            XcExportError: From whichever step failed
        """
        try:
            archive = self.choose_archive()
            identity = self.detect_identity(archive)
            destination = self.clear_destination(archive)
            plan = ExportPlan(
                archive=archive,
                identity=identity,
                destination=destination,
                command=build_export_command(
                    self.config, archive, destination.path, identity.name
                ),
            )
            result = self.export(plan)
            logger.info("Export workflow finished", destination=str(destination.path))
            return result
        finally:
            clear_context()


def run_export_flow(config: Config, messenger: Messenger | None = None) -> ExportResult:
    """Convenience function to run the export workflow.

    Args:
        config: Resolved configuration
        messenger: Optional output/prompt wrapper

    Returns:
        ExportResult of the run
    """
    return ExportWorkflow(config, messenger).run()
