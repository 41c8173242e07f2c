# /*
# Copyright 2026 The Grove Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */


"""Configuration classes and install options."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.table import Table

from tool_manager import console
from tool_manager.constants import (
    BIN_DIR_NAME,
    DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    ENV_PREFIX,
    PRODUCT_DIR_NAME,
)
from tool_manager.policy import InstallPolicy


def default_install_dir() -> Path:
    """Per-user binary directory.

    - Linux/Unix: ``$HOME/.tool-manager/bin``
    - Windows: ``%USERPROFILE%\\.tool-manager\\bin``
    """
    return Path.home() / PRODUCT_DIR_NAME / BIN_DIR_NAME


# ============================================================================
# Configuration classes
# ============================================================================

class InstallSettings(BaseSettings):
    """Installer defaults, auto-loaded from TOOL_MANAGER_* env vars.

    Attributes:
        install_dir: Directory holding versioned executables and symlinks.
        install_policy: Always, IfNotPresent, or Never.
        noninteractive: Skip confirmation prompts and accept every install.
        dry_run: Only report what would be installed.
        download_timeout: HTTP client timeout in seconds.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    install_dir: Path = Field(default_factory=default_install_dir)
    install_policy: InstallPolicy = InstallPolicy.IF_NOT_PRESENT
    noninteractive: bool = False
    dry_run: bool = False
    download_timeout: float = Field(default=DEFAULT_DOWNLOAD_TIMEOUT_SECONDS, gt=0)

    @field_validator("install_policy", mode="before")
    @classmethod
    def _parse_policy(cls, value: object) -> InstallPolicy:
        return InstallPolicy.parse(value)

    @field_validator("install_dir", mode="after")
    @classmethod
    def _expand_install_dir(cls, value: Path) -> Path:
        return value.expanduser()


# ============================================================================
# Install options
# ============================================================================

@dataclass(frozen=True)
class InstallOptions:
    """Options for one Manager call.

    Attributes:
        install_dir: Directory holding versioned executables and symlinks.
        install_policy: Policy deciding whether an install may proceed.
        noninteractive: Bypass confirmation and selection prompts.
        dry_run: Report the install without any network or filesystem I/O.
        download_timeout: HTTP client timeout in seconds.
    """

    install_dir: Path = field(default_factory=default_install_dir)
    install_policy: InstallPolicy = InstallPolicy.IF_NOT_PRESENT
    noninteractive: bool = False
    dry_run: bool = False
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS

    @classmethod
    def from_settings(cls, settings: InstallSettings) -> InstallOptions:
        return cls(
            install_dir=settings.install_dir,
            install_policy=settings.install_policy,
            noninteractive=settings.noninteractive,
            dry_run=settings.dry_run,
            download_timeout=settings.download_timeout,
        )


def resolve_install_options(
    *,
    install_dir: Path | None = None,
    install_policy: str | None = None,
    noninteractive: bool | None = None,
    dry_run: bool | None = None,
    download_timeout: float | None = None,
) -> InstallOptions:
    """Merge CLI overrides on top of environment-derived settings.

    Args:
        install_dir: Override for the install directory, or None.
        install_policy: Override policy name, or None.
        noninteractive: Override for non-interactive mode, or None.
        dry_run: Override for dry-run mode, or None.
        download_timeout: Override timeout in seconds, or None.

    Returns:
        Frozen install options.

    Raises:
        ValueError: If the policy name or timeout is invalid.
    """
    settings = InstallSettings()
    overrides: dict = {}
    if install_dir is not None:
        overrides["install_dir"] = Path(install_dir).expanduser()
    if install_policy is not None:
        overrides["install_policy"] = InstallPolicy.parse(install_policy)
    if noninteractive is not None:
        overrides["noninteractive"] = noninteractive
    if dry_run is not None:
        overrides["dry_run"] = dry_run
    if download_timeout is not None:
        if download_timeout <= 0:
            raise ValueError("download timeout must be positive")
        overrides["download_timeout"] = download_timeout
    if overrides:
        settings = settings.model_copy(update=overrides)
    return InstallOptions.from_settings(settings)


def display_options(options: InstallOptions) -> None:
    """Print the effective install options as a table."""
    table = Table(title="Install options", show_header=False)
    table.add_column("Option", style="bold")
    table.add_column("Value")
    table.add_row("Install dir", str(options.install_dir))
    table.add_row("Install policy", str(options.install_policy))
    table.add_row("Non-interactive", str(options.noninteractive))
    table.add_row("Dry run", str(options.dry_run))
    table.add_row("Download timeout", f"{options.download_timeout:g}s")
    console.print(table)
