"""
Configuration management for xcexport.

Provides a single, type-safe configuration object built once at startup from
defaults, environment variables (including a local .env file) and command-line
overrides. Components receive it explicitly; nothing reads ambient globals.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

ENV_PREFIX = "XCEXPORT_"

NamingRule = Literal["first-word", "full-name"]


def _home() -> Path:
    return Path(os.environ.get("HOME", "~")).expanduser()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_path(name: str) -> Path | None:
    value = os.environ.get(f"{ENV_PREFIX}{name}")
    return Path(value).expanduser() if value else None


class OutputStyle(BaseModel):
    """Display formatting for leveled status lines."""

    spacer: str = Field(default="    ", description="Indentation after the level tag")
    hl_info_style: str = Field(default="bold white", description="Highlighted info style")
    info_style: str = Field(default="grey70", description="Info style")
    warn_style: str = Field(default="yellow", description="Warning style")
    error_style: str = Field(default="red", description="Error style")


class ToolConfig(BaseModel):
    """External export tool configuration."""

    executable: str = Field(default="xcodebuild", description="Export tool name or path")
    export_format: str = Field(default="ipa", description="Value passed to -exportFormat")
    install_hint: str = Field(
        default="Install Xcode and its command line tools (xcode-select --install)",
        description="Shown when the tool cannot be found",
    )


class Config(BaseModel):
    """Root configuration for xcexport."""

    auto_accept: bool = Field(default=False, description="Answer 'y' to every confirmation")
    num_archives: int = Field(default=5, ge=1, description="Number of recent archives to list")
    archive_override: Path | None = Field(
        default=None, description="Explicit .xcarchive to operate on, skipping selection"
    )
    archives_dir: Path = Field(
        default_factory=lambda: _home() / "Library/Developer/Xcode/Archives",
        description="Where .xcarchive bundles are stored",
    )
    profiles_dir: Path = Field(
        default_factory=lambda: _home() / "Library/MobileDevice/Provisioning Profiles",
        description="Where .mobileprovision files are installed",
    )
    export_dir: Path = Field(
        default_factory=lambda: _home() / "Desktop",
        description="Where the resulting .ipa is written",
    )
    naming_rule: NamingRule = Field(
        default="first-word", description="How the .ipa name is derived from the archive name"
    )
    dry_run: bool = Field(default=False, description="Print the export command instead of running it")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Diagnostic logging level"
    )

    archive_suffix: str = Field(default=".xcarchive", description="Archive bundle suffix")
    profile_extension: str = Field(default=".mobileprovision", description="Installed profile suffix")
    output: OutputStyle = Field(default_factory=OutputStyle)
    tool: ToolConfig = Field(default_factory=ToolConfig)

    model_config = {"extra": "ignore", "frozen": True}

    @field_validator("archive_override", mode="before")
    @classmethod
    def _blank_override_is_unset(cls, value: Any) -> Any:
        # Path("") collapses to Path("."), so both spellings mean "not given".
        if value is not None and str(value).strip() in ("", "."):
            return None
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """Create configuration from environment variables.

        Args:
            **overrides: Values taken from the command line. ``None`` means
                "not given" and leaves the environment/default value in place.

        Returns:
            The resolved, immutable configuration.
        """
        values: dict[str, Any] = {
            "auto_accept": _env_bool("AUTO_ACCEPT"),
            "dry_run": _env_bool("DRY_RUN"),
            "log_level": os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper(),
            "naming_rule": os.environ.get(f"{ENV_PREFIX}NAMING", "first-word"),
            "tool": ToolConfig(
                executable=os.environ.get(f"{ENV_PREFIX}EXPORT_TOOL", "xcodebuild"),
            ),
        }
        if num := os.environ.get(f"{ENV_PREFIX}NUM_ARCHIVES"):
            values["num_archives"] = num
        for key, env_name in (
            ("archive_override", "ARCHIVE"),
            ("archives_dir", "ARCHIVES_DIR"),
            ("profiles_dir", "PROFILES_DIR"),
            ("export_dir", "EXPORT_DIR"),
        ):
            path = _env_path(env_name)
            if path is not None:
                values[key] = path

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
