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


"""Archive detection, extraction, and binary lookup."""

from __future__ import annotations

import tarfile
import threading
import zipfile
from enum import Enum
from pathlib import Path

from tool_manager import logger
from tool_manager.download import check_cancelled
from tool_manager.errors import ArchiveError

_TAR_FILTER = {"filter": "data"} if hasattr(tarfile, "data_filter") else {}


class ArchiveFormat(str, Enum):
    """Artifact packaging understood by the extractor."""

    NONE = "none"
    TAR_GZ = "tar.gz"
    ZIP = "zip"


_SUFFIXES: tuple[tuple[str, ArchiveFormat], ...] = (
    (".tar.gz", ArchiveFormat.TAR_GZ),
    (".tgz", ArchiveFormat.TAR_GZ),
    (".zip", ArchiveFormat.ZIP),
)


def detect_archive(path: str) -> tuple[str, bool]:
    """Classify *path* (usually a URL path) by suffix.

    Args:
        path: File or URL path; matching is case-sensitive.

    Returns:
        Tuple of (matched_suffix, is_archive); ``("", False)`` for raw binaries.
    """
    for suffix, _ in _SUFFIXES:
        if path.endswith(suffix):
            return suffix, True
    return "", False


def archive_format(path: str) -> ArchiveFormat:
    """Return the ArchiveFormat for *path*, ``NONE`` for raw binaries."""
    for suffix, fmt in _SUFFIXES:
        if path.endswith(suffix):
            return fmt
    return ArchiveFormat.NONE


def _member_target(root: Path, name: str) -> Path:
    target = (root / name).resolve()
    if target != root and root not in target.parents:
        raise ArchiveError(f"archive member {name!r} escapes {root}")
    return target


def _extract_tar(archive: Path, root: Path, cancel: threading.Event | None) -> None:
    with tarfile.open(archive, mode="r:gz") as tar:
        for member in tar:
            check_cancelled(cancel, f"extraction of {archive.name}")
            _member_target(root, member.name)
            if member.issym():
                _member_target(root, str(Path(member.name).parent / member.linkname))
            elif member.islnk():
                _member_target(root, member.linkname)
            tar.extract(member, root, **_TAR_FILTER)


def _extract_zip(archive: Path, root: Path, cancel: threading.Event | None) -> None:
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            check_cancelled(cancel, f"extraction of {archive.name}")
            _member_target(root, info.filename)
            zf.extract(info, root)


def extract(
    archive: Path,
    dest_dir: Path,
    fmt: ArchiveFormat,
    cancel: threading.Event | None = None,
) -> Path:
    """Unpack *archive* into *dest_dir*, keeping its directory structure.

    Args:
        archive: Path of the downloaded archive.
        dest_dir: Directory to unpack into; created if missing.
        fmt: Archive format, usually from :func:`archive_format`.
        cancel: Token polled between members.

    Returns:
        The destination directory.

    Raises:
        ArchiveError: If the archive is corrupt, has unsafe members, or
            *fmt* is ``NONE``.
    """
    archive = Path(archive)
    if fmt is ArchiveFormat.NONE:
        raise ArchiveError(f"{archive.name} is not an archive")

    root = Path(dest_dir)
    logger.debug("Extracting %s (%s) into %s", archive, fmt.value, root)
    try:
        root.mkdir(parents=True, exist_ok=True)
        root = root.resolve()
        if fmt is ArchiveFormat.TAR_GZ:
            _extract_tar(archive, root, cancel)
        else:
            _extract_zip(archive, root, cancel)
    except (tarfile.TarError, zipfile.BadZipFile, EOFError, OSError) as err:
        raise ArchiveError(f"cannot extract {archive.name}: {err}") from err
    return root


def locate_binary(root: Path, name: str) -> Path:
    """Find the regular file called *name* anywhere under *root*.

    The shallowest match wins when the archive ships several copies.

    Raises:
        ArchiveError: If no such file exists.
    """
    root = Path(root)
    matches = sorted(
        (p for p in root.rglob("*") if p.name == name and p.is_file() and not p.is_symlink()),
        key=lambda p: (len(p.relative_to(root).parts), str(p)),
    )
    if not matches:
        raise ArchiveError(f"binary {name!r} not found in extracted archive")
    return matches[0]
