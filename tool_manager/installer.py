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


"""Presence checks and placement of versioned executables."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from tool_manager import logger
from tool_manager.constants import EXECUTABLE_MODE
from tool_manager.descriptor import Descriptor, Platform
from tool_manager.errors import FilesystemError


def versioned_path(install_dir: Path, descriptor: Descriptor, platform: Platform) -> Path:
    return Path(install_dir) / descriptor.executable(platform)


def stable_path(install_dir: Path, descriptor: Descriptor, platform: Platform) -> Path:
    return Path(install_dir) / descriptor.stable_name(platform)


def is_present(install_dir: Path, descriptor: Descriptor, platform: Platform) -> bool:
    """Check whether the versioned executable of *descriptor* exists.

    Only the filename is checked; the file is not validated.

    Raises:
        FilesystemError: If the path cannot be inspected for a reason other
            than not existing.
    """
    path = versioned_path(install_dir, descriptor, platform)
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as err:
        raise FilesystemError(f"cannot stat {path}: {err}") from err
    return True


def active_executable(install_dir: Path, descriptor: Descriptor, platform: Platform) -> str | None:
    """Return the filename the stable symlink points at, or None."""
    link = stable_path(install_dir, descriptor, platform)
    if not link.is_symlink():
        return None
    return Path(os.readlink(link)).name


def _copy_executable(source: Path, target: Path) -> None:
    tmp: Path | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
        tmp = Path(tmp_name)
        with os.fdopen(fd, "wb") as out, open(source, "rb") as src:
            shutil.copyfileobj(src, out)
        tmp.chmod(EXECUTABLE_MODE)
        os.replace(tmp, target)
    except OSError as err:
        if tmp is not None:
            tmp.unlink(missing_ok=True)
        raise FilesystemError(f"cannot install {source} as {target}: {err}") from err


def _point_symlink(link: Path, target_name: str) -> None:
    try:
        if link.is_symlink() or link.is_file():
            link.unlink()
        elif link.exists():
            raise FilesystemError(f"cannot replace {link}: not a file or symlink")
        link.symlink_to(target_name)
    except OSError as err:
        raise FilesystemError(f"cannot link {link} -> {target_name}: {err}") from err


def install_executable(
    source: Path,
    descriptor: Descriptor,
    install_dir: Path,
    platform: Platform,
) -> Path:
    """Install *source* as the active version of *descriptor*.

    Copies the file to ``<install_dir>/<name><ext>-<version>`` with mode
    0755, then re-points the ``<name><ext>`` symlink at it. Older versioned
    files are left in place.

    Args:
        source: Downloaded binary or the binary located in an archive.
        descriptor: Tool being installed.
        install_dir: Destination directory; created if missing.
        platform: Platform that decides the executable extension.

    Returns:
        Path of the versioned executable.

    Raises:
        FilesystemError: If any copy, chmod, or symlink step fails.
    """
    install_dir = Path(install_dir)
    try:
        install_dir.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise FilesystemError(f"cannot create {install_dir}: {err}") from err

    target = versioned_path(install_dir, descriptor, platform)
    link = stable_path(install_dir, descriptor, platform)
    _copy_executable(Path(source), target)
    _point_symlink(link, target.name)
    logger.debug("Linked %s -> %s", link, target.name)
    return target
