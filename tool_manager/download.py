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


"""Streamed HTTP download of release artifacts."""

from __future__ import annotations

import threading
from pathlib import Path

import httpx
from rich.progress import BarColumn, DownloadColumn, Progress, SpinnerColumn, TextColumn, TransferSpeedColumn

from tool_manager import console, logger
from tool_manager.constants import DEFAULT_DOWNLOAD_TIMEOUT_SECONDS, DOWNLOAD_CHUNK_SIZE
from tool_manager.errors import DownloadError, FilesystemError, InstallCancelledError


def check_cancelled(cancel: threading.Event | None, what: str) -> None:
    """Raise InstallCancelledError if *cancel* has been set.

    Args:
        cancel: Cancellation token, or None when the caller cannot cancel.
        what: Description of the interrupted work, used in the message.
    """
    if cancel is not None and cancel.is_set():
        raise InstallCancelledError(f"cancelled: {what}")


def download(
    url: str,
    dest: Path,
    timeout: float = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
    client: httpx.Client | None = None,
    cancel: threading.Event | None = None,
) -> Path:
    """Fetch *url* into *dest*.

    The parent directory of *dest* is created if needed. The file is left
    with default permissions since it may be an archive. A partially written
    file is not removed; callers download into a scratch directory they own.

    Args:
        url: Absolute http(s) URL.
        dest: Destination file path.
        timeout: Client timeout in seconds.
        client: Shared httpx client, or None to open a private one.
        cancel: Token polled before the request and between chunks.

    Returns:
        The destination path.

    Raises:
        DownloadError: On a non-200 response or a transport failure.
        FilesystemError: If the destination cannot be written.
        InstallCancelledError: If *cancel* is set mid-transfer.
    """
    dest = Path(dest)
    check_cancelled(cancel, f"download of {url}")
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise FilesystemError(f"cannot create {dest.parent}: {err}") from err

    http = client or httpx.Client()
    logger.debug("Downloading %s to %s (timeout=%ss)", url, dest, timeout)
    try:
        with http.stream("GET", url, timeout=timeout, follow_redirects=True) as response:
            if response.status_code != httpx.codes.OK:
                raise DownloadError(url, status_code=response.status_code)
            length = response.headers.get("Content-Length", "")
            total = int(length) if length.isdigit() and int(length) > 0 else None
            with open(dest, "wb") as out, Progress(
                SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
                BarColumn(), DownloadColumn(), TransferSpeedColumn(),
                console=console, transient=True,
            ) as progress:
                task = progress.add_task(f"[cyan]Downloading {dest.name}...", total=total)
                for chunk in response.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                    check_cancelled(cancel, f"download of {url}")
                    out.write(chunk)
                    progress.update(task, completed=response.num_bytes_downloaded)
    except httpx.HTTPError as err:
        raise DownloadError(url, reason=str(err) or type(err).__name__) from err
    except OSError as err:
        raise FilesystemError(f"cannot write {dest}: {err}") from err
    finally:
        if client is None:
            http.close()
    return dest
