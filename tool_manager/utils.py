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


"""Utility functions for command lookups and version probes."""

from __future__ import annotations

from collections.abc import Sequence

import sh

from tool_manager.constants import DEFAULT_VERSION_ARGS, VERSION_ARGS, VERSION_PROBE_TIMEOUT_SECONDS


def require_command(cmd: str) -> str:
    """Check if a command exists on the system PATH.

    Args:
        cmd: Name of the CLI command to check.

    Returns:
        Absolute path of the command.

    Raises:
        RuntimeError: If the command is not found.
    """
    try:
        path = sh.which(cmd)
    except sh.ErrorReturnCode:
        path = None
    if not path:
        raise RuntimeError(f"Required command '{cmd}' not found. Please install it first.")
    return str(path).strip()


def version_args(name: str) -> tuple[str, ...]:
    """Arguments that make *name* print its version."""
    return VERSION_ARGS.get(name, DEFAULT_VERSION_ARGS)


def tool_version(cmd: str, args: Sequence[str] | None = None, timeout: int = VERSION_PROBE_TIMEOUT_SECONDS) -> str:
    """Run ``<cmd> version`` through the search path and return its output.

    Args:
        cmd: Executable name (e.g. ``kubectl``) or absolute path.
        args: Version arguments, or None for the per-tool default.
        timeout: Maximum seconds to wait for the command.

    Returns:
        Stripped stdout of the command.

    Raises:
        RuntimeError: If the command is missing, fails, or times out.
    """
    path = require_command(cmd)
    args = tuple(args) if args is not None else version_args(cmd)
    try:
        result = sh.Command(path)(*args, _timeout=timeout)
    except sh.ErrorReturnCode as err:
        stderr = err.stderr.decode(errors="replace").strip()
        raise RuntimeError(f"'{cmd} {' '.join(args)}' failed: {stderr[:200]}") from err
    except sh.TimeoutException as err:
        raise RuntimeError(f"'{cmd} {' '.join(args)}' timed out after {timeout}s") from err
    return str(result).strip()
