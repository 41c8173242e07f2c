#!/usr/bin/env python3
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


"""
cli.py - Install and inspect the third-party executables the operations CLI needs.

Subcommands:
    install    Install dependencies (tool, group)
    show       Inspect registered dependencies (tools, groups, url, version)

Examples:
    # Install kubectl, asking before the download
    ./cli.py install tool kubectl

    # Install everything Kubernetes commands need, without prompts
    ./cli.py install group kubernetes -n

    # Only print what would be installed
    ./cli.py install group kubernetes --dry-run

    # Refuse to download; fail if something is missing
    ./cli.py install tool kops --install-policy Never

    # Show the download URL for this host
    ./cli.py show url eksctl-spot

For detailed usage information, run: ./cli.py --help
"""

from __future__ import annotations

import logging
import sys

import typer

from tool_manager import console
from tool_manager.commands import install_cmd, show_cmd

app = typer.Typer(
    help="Install and inspect the third-party executables the operations CLI needs.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.add_typer(install_cmd.app, name="install")
app.add_typer(show_cmd.app, name="show")


def main() -> None:
    """Console-script entry point."""
    try:
        app()
    except Exception as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
