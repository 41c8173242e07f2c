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


"""Show subcommands (tools, groups, url, version)."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from tool_manager import console
from tool_manager.config import resolve_install_options
from tool_manager.descriptor import Platform, default_registry
from tool_manager.installer import active_executable, is_present
from tool_manager.search_path import process_search_path
from tool_manager.utils import tool_version, version_args

app = typer.Typer(help="Inspect registered dependencies.")


@app.command()
def tools(
    install_dir: Path | None = typer.Option(None, "--install-dir", help="Binary directory"),
) -> None:
    """List registered dependencies and their install state."""
    options = resolve_install_options(install_dir=install_dir)
    platform = Platform.current()

    table = Table(title=f"Dependencies ({options.install_dir})")
    table.add_column("Name")
    table.add_column("Version")
    table.add_column("Installed", justify="center")
    table.add_column("Active")
    for descriptor in default_registry():
        present = is_present(options.install_dir, descriptor, platform)
        active = active_executable(options.install_dir, descriptor, platform) or "-"
        table.add_row(
            descriptor.name,
            descriptor.version,
            "[green]\u2713[/green]" if present else "[red]\u2717[/red]",
            active,
        )
    console.print(table)


@app.command()
def groups() -> None:
    """List dependency groups."""
    registry = default_registry()
    for name in registry.group_names:
        members = ", ".join(d.name for d in registry.group(name))
        typer.echo(f"{name}: {members}")


@app.command()
def url(
    name: str = typer.Argument(..., help="Dependency name"),
) -> None:
    """Print the download URL of a dependency for this host."""
    typer.echo(default_registry().get(name).render_url(Platform.current()))


@app.command()
def version(
    name: str = typer.Argument(..., help="Dependency name"),
    install_dir: Path | None = typer.Option(None, "--install-dir", help="Binary directory"),
) -> None:
    """Run the installed dependency's version command."""
    descriptor = default_registry().get(name)
    options = resolve_install_options(install_dir=install_dir)
    search_path = process_search_path()
    search_path.ensure(options.install_dir)
    stable = descriptor.stable_name(Platform.current())
    path = search_path.which(stable)
    if path is None:
        raise RuntimeError(f"{stable} not found on PATH; run 'install tool {descriptor.name}' first")
    typer.echo(tool_version(path, version_args(descriptor.name)))
