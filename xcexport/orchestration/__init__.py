"""Orchestration module for xcexport."""

from .pipeline import ExportStep, ExportWorkflow, run_export_flow

__all__ = [
    "ExportStep",
    "ExportWorkflow",
    "run_export_flow",
]
