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


"""Interactive confirmation and multi-selection prompts."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import typer
from rich.table import Table

from tool_manager import console


class Prompter(Protocol):
    """Yes/no and pick-many questions asked before installing."""

    def confirm(self, message: str, help: str = "") -> bool: ...

    def select_multi(
        self,
        message: str,
        options: Sequence[str],
        defaults: Sequence[str],
        help: str = "",
    ) -> list[str]: ...


def parse_selection(answer: str, options: Sequence[str]) -> list[str]:
    """Turn a free-form answer into a subset of *options*.

    Accepts ``all``, ``none``, or a comma separated list of 1-based indexes
    and option names. The result keeps the order of *options*.

    Raises:
        ValueError: If a token matches no option.
    """
    answer = answer.strip().lower()
    if answer == "all":
        return list(options)
    if answer in ("", "none"):
        return []

    chosen: set[str] = set()
    for token in (t.strip() for t in answer.split(",")):
        if not token:
            continue
        if token.isdigit() and 1 <= int(token) <= len(options):
            chosen.add(options[int(token) - 1])
        elif token in options:
            chosen.add(token)
        else:
            raise ValueError(f"invalid selection {token!r}")
    return [option for option in options if option in chosen]


class ConsolePrompter:
    """Prompts on the controlling terminal."""

    def confirm(self, message: str, help: str = "") -> bool:
        if help:
            console.print(f"[dim]{help}[/dim]")
        return typer.confirm(message, default=True)

    def select_multi(
        self,
        message: str,
        options: Sequence[str],
        defaults: Sequence[str],
        help: str = "",
    ) -> list[str]:
        if not options:
            return []
        if help:
            console.print(f"[dim]{help}[/dim]")

        table = Table(title=message)
        table.add_column("#", justify="right")
        table.add_column("Dependency")
        table.add_column("Selected", justify="center")
        for idx, option in enumerate(options, start=1):
            table.add_row(str(idx), option, "\u2713" if option in defaults else "")
        console.print(table)

        preselected = [str(idx) for idx, option in enumerate(options, start=1) if option in defaults]
        default_answer = ",".join(preselected) or "none"
        while True:
            answer = typer.prompt("Install which (numbers, 'all' or 'none')", default=default_answer)
            try:
                return parse_selection(answer, options)
            except ValueError as err:
                console.print(f"[red]{err}[/red]")
