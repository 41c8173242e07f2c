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


"""Dependency manager: presence, policy, confirmation, and installation."""

from __future__ import annotations

import shutil
import tempfile
import threading
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

import httpx
from rich.panel import Panel

from tool_manager import console, logger
from tool_manager.archive import ArchiveFormat, archive_format, extract, locate_binary
from tool_manager.config import InstallOptions
from tool_manager.constants import CONFIRM_HELP, SELECT_HELP, TEMP_DIR_PREFIX
from tool_manager.descriptor import Descriptor, Platform
from tool_manager.download import check_cancelled, download
from tool_manager.errors import FilesystemError, PolicyViolationError
from tool_manager.installer import install_executable, is_present, versioned_path
from tool_manager.policy import Action, InstallPolicy, decide
from tool_manager.prompt import Prompter
from tool_manager.search_path import SearchPath


class Outcome(str, Enum):
    """Why a dependency ended up in its final state."""

    INSTALLED = "installed"
    SKIPPED_ALREADY_PRESENT = "already-present"
    SKIPPED_POLICY = "skipped-by-policy"
    SKIPPED_USER_DECLINED = "declined"
    SKIPPED_DRY_RUN = "dry-run"


class Manager:
    """Ensures versioned third-party executables are installed.

    Operations are synchronous and assume no other Manager is writing the
    same install directory concurrently.

    Args:
        prompter: Asks for confirmation when not running non-interactively.
        search_path: Process search path, extended once the install
            directory holds a usable executable.
        platform: Target platform, or None for the running host.
        client: Shared httpx client for downloads, or None for one per download.
    """

    def __init__(
        self,
        prompter: Prompter,
        search_path: SearchPath,
        platform: Platform | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.prompter = prompter
        self.search_path = search_path
        self.platform = platform or Platform.current()
        self.client = client

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_present(self, descriptor: Descriptor, options: InstallOptions | None = None) -> bool:
        """Whether the pinned version of *descriptor* is in the install directory."""
        opts = options or InstallOptions()
        return is_present(opts.install_dir, descriptor, self.platform)

    def install(
        self,
        descriptor: Descriptor,
        options: InstallOptions | None = None,
        cancel: threading.Event | None = None,
    ) -> Outcome:
        """Ensure a single dependency is installed.

        Args:
            descriptor: Tool to ensure.
            options: Install options, or None for defaults.
            cancel: Token polled at every stage and during transfer.

        Returns:
            The outcome for *descriptor*.

        Raises:
            PolicyViolationError: If the tool is missing under the Never policy.
            ToolManagerError: Any rendering, download, archive, or filesystem
                failure, unchanged.
        """
        opts = options or InstallOptions()
        logger.debug("Ensuring required dependency %s", descriptor)
        check_cancelled(cancel, f"install of {descriptor}")

        action = self._decide(descriptor, opts)
        if action is Action.SKIP:
            return self._skip(descriptor, opts)

        if not opts.noninteractive and not self._confirm(descriptor):
            logger.debug("Aborting installation of dependency %s", descriptor)
            return Outcome.SKIPPED_USER_DECLINED

        return self._install(descriptor, opts, cancel)

    def install_bulk(
        self,
        descriptors: Iterable[Descriptor],
        options: InstallOptions | None = None,
        cancel: threading.Event | None = None,
    ) -> dict[str, Outcome]:
        """Ensure several dependencies are installed.

        Every dependency is checked against the policy before anything is
        downloaded, so one Never-policy violation leaves the whole batch
        untouched. Missing tools are installed one at a time in the given
        order and the first failure stops the batch.

        Args:
            descriptors: Tools to ensure; repeated names are ignored.
            options: Install options, or None for defaults.
            cancel: Token polled at every stage and during transfer.

        Returns:
            Mapping of tool name to outcome, in input order.

        Raises:
            PolicyViolationError: If any tool is missing under the Never policy.
            ToolManagerError: The first install failure, unchanged.
        """
        opts = options or InstallOptions()
        logger.debug("Ensuring required dependencies...")

        batch = list({d.name: d for d in descriptors}.values())
        actions = [(descriptor, self._decide(descriptor, opts)) for descriptor in batch]

        outcomes: dict[str, Outcome] = {}
        missing: list[Descriptor] = []
        for descriptor, action in actions:
            if action is Action.SKIP:
                outcomes[descriptor.name] = self._skip(descriptor, opts)
            else:
                missing.append(descriptor)

        chosen = missing
        if missing and not opts.noninteractive:
            chosen = self._select(missing)
        for descriptor in missing:
            if descriptor not in chosen:
                logger.debug("Dependency %s deselected", descriptor)
                outcomes[descriptor.name] = Outcome.SKIPPED_USER_DECLINED

        if chosen:
            console.print(Panel.fit("Installing required dependencies", style="bold blue"))
        for descriptor in chosen:
            check_cancelled(cancel, f"install of {descriptor}")
            outcomes[descriptor.name] = self._install(descriptor, opts, cancel)

        return {d.name: outcomes[d.name] for d in batch}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _decide(self, descriptor: Descriptor, opts: InstallOptions) -> Action:
        present = is_present(opts.install_dir, descriptor, self.platform)
        action = decide(opts.install_policy, present)
        logger.debug(
            "Dependency %s: present=%s policy=%s action=%s",
            descriptor, present, opts.install_policy, action.value,
        )
        if action is Action.VIOLATION:
            raise PolicyViolationError(descriptor.name, descriptor.version)
        return action

    def _skip(self, descriptor: Descriptor, opts: InstallOptions) -> Outcome:
        path = versioned_path(opts.install_dir, descriptor, self.platform)
        logger.debug("Dependency already installed: %s (%s)", descriptor, path)
        if not opts.dry_run:
            self.search_path.ensure(opts.install_dir)
        if opts.install_policy is InstallPolicy.NEVER:
            return Outcome.SKIPPED_POLICY
        return Outcome.SKIPPED_ALREADY_PRESENT

    def _confirm(self, descriptor: Descriptor) -> bool:
        message = f"Install missing required dependency {descriptor.name} version {descriptor.version}?"
        return self.prompter.confirm(message, help=CONFIRM_HELP)

    def _select(self, missing: list[Descriptor]) -> list[Descriptor]:
        names = [d.name for d in missing]
        selected = set(self.prompter.select_multi(
            "Install missing required dependencies (deselect to avoid auto installing)",
            names,
            names,
            help=SELECT_HELP,
        ))
        return [d for d in missing if d.name in selected]

    def _install(self, descriptor: Descriptor, opts: InstallOptions, cancel: threading.Event | None) -> Outcome:
        if opts.dry_run:
            logger.debug("Would install %s to %s", descriptor, opts.install_dir)
            console.print(f"[yellow]\u2139\ufe0f  Would install {descriptor} to {opts.install_dir}[/yellow]")
            return Outcome.SKIPPED_DRY_RUN

        url = descriptor.render_url(self.platform)
        console.print(f"[yellow]\u2139\ufe0f  Installing dependency {descriptor}...[/yellow]")
        url_path = httpx.URL(url).path
        fmt = archive_format(url_path)
        try:
            scratch = Path(tempfile.mkdtemp(prefix=f"{TEMP_DIR_PREFIX}{descriptor.name}-"))
        except OSError as err:
            raise FilesystemError(f"cannot create a temporary directory: {err}") from err

        try:
            artifact = download(
                url,
                scratch / (Path(url_path).name or descriptor.name),
                timeout=opts.download_timeout,
                client=self.client,
                cancel=cancel,
            )
            source = artifact
            if fmt is not ArchiveFormat.NONE:
                root = extract(artifact, scratch / "extracted", fmt, cancel=cancel)
                source = locate_binary(root, descriptor.upstream_binary_name + self.platform.extension)
            check_cancelled(cancel, f"install of {descriptor}")
            target = install_executable(source, descriptor, opts.install_dir, self.platform)
        finally:
            shutil.rmtree(scratch, ignore_errors=True)

        self.search_path.ensure(opts.install_dir)
        console.print(f"[green]\u2705 Installed {descriptor} ({target})[/green]")
        return Outcome.INSTALLED
