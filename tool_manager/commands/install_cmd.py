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


"""Install subcommands (tool, group)."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from tool_manager import console
from tool_manager.config import InstallOptions, display_options, resolve_install_options
from tool_manager.descriptor import Descriptor, default_registry
from tool_manager.manager import Manager, Outcome
from tool_manager.prompt import ConsolePrompter
from tool_manager.search_path import process_search_path

app = typer.Typer(help="Install dependencies.")

_OUTCOME_STYLES = {
    Outcome.INSTALLED: "green",
    Outcome.SKIPPED_ALREADY_PRESENT: "dim",
    Outcome.SKIPPED_POLICY: "yellow",
    Outcome.SKIPPED_USER_DECLINED: "yellow",
    Outcome.SKIPPED_DRY_RUN: "cyan",
}


def _run(descriptors: list[Descriptor], options: InstallOptions) -> None:
    """Install *descriptors* with the process-wide search path and print a summary."""
    if options.dry_run:
        display_options(options)
    manager = Manager(ConsolePrompter(), process_search_path())
    if len(descriptors) == 1:
        outcomes = {descriptors[0].name: manager.install(descriptors[0], options)}
    else:
        outcomes = manager.install_bulk(descriptors, options)

    table = Table(title="Dependencies")
    table.add_column("Name")
    table.add_column("Version")
    table.add_column("Outcome")
    for descriptor in descriptors:
        outcome = outcomes[descriptor.name]
        table.add_row(descriptor.name, descriptor.version, f"[{_OUTCOME_STYLES[outcome]}]{outcome.value}")
    console.print(table)


@app.command()
def tool(
    names: list[str] = typer.Argument(..., help="Dependency names (e.g. kubectl kops)"),
    install_dir: Path | None = typer.Option(None, "--install-dir", help="Binary directory"),
    install_policy: str | None = typer.Option(
        None, "--install-policy", help="Always, IfNotPresent, or Never"),
    noninteractive: bool = typer.Option(
        False, "--noninteractive", "-n", help="Disable confirmation prompts"),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Only print the actions that would be executed"),
    timeout: float | None = typer.Option(None, "--timeout", help="Download timeout in seconds"),
) -> None:
    """Install dependencies by name."""
    options = resolve_install_options(
        install_dir=install_dir,
        install_policy=install_policy,
        noninteractive=noninteractive or None,
        dry_run=dry_run or None,
        download_timeout=timeout,
    )
    _run(default_registry().resolve(names), options)


@app.command()
def group(
    name: str = typer.Argument(..., help="Dependency group (e.g. kubernetes)"),
    install_dir: Path | None = typer.Option(None, "--install-dir", help="Binary directory"),
    install_policy: str | None = typer.Option(
        None, "--install-policy", help="Always, IfNotPresent, or Never"),
    noninteractive: bool = typer.Option(
        False, "--noninteractive", "-n", help="Disable confirmation prompts"),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Only print the actions that would be executed"),
    timeout: float | None = typer.Option(None, "--timeout", help="Download timeout in seconds"),
) -> None:
    """Install every dependency of a group."""
    options = resolve_install_options(
        install_dir=install_dir,
        install_policy=install_policy,
        noninteractive=noninteractive or None,
        dry_run=dry_run or None,
        download_timeout=timeout,
    )
    descriptors = default_registry().group(name)
    _run(descriptors, options)
