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


"""Exception hierarchy for dependency installation."""

from __future__ import annotations


class ToolManagerError(Exception):
    """Base class for every error raised by tool_manager."""


class TemplateError(ToolManagerError):
    """A descriptor URL template could not be parsed or rendered."""


class URLError(ToolManagerError):
    """A rendered URL is not a valid absolute http(s) URL."""


class DownloadError(ToolManagerError):
    """Fetching an artifact failed.

    Attributes:
        url: The URL that was requested.
        status_code: HTTP status of the response, or None for transport failures.
    """

    def __init__(self, url: str, status_code: int | None = None, reason: str | None = None) -> None:
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            message = f"download of {url} failed with return code {status_code}"
        else:
            message = f"download of {url} failed: {reason or 'unknown error'}"
        super().__init__(message)


class ArchiveError(ToolManagerError):
    """An archive could not be unpacked or did not contain the expected binary."""


class FilesystemError(ToolManagerError):
    """A stat, copy, chmod, or symlink operation failed."""


class PolicyViolationError(ToolManagerError):
    """A dependency is missing but the install policy forbids installing it."""

    def __init__(self, name: str, version: str) -> None:
        self.name = name
        self.version = version
        super().__init__(
            f"required dependency {name}-{version} is missing and install policy is Never"
        )


class InstallCancelledError(ToolManagerError):
    """The caller cancelled an in-flight installation."""


class DuplicateDescriptorError(ToolManagerError, ValueError):
    """Two descriptors with the same name were registered."""


class UnknownToolError(ToolManagerError, KeyError):
    """No descriptor or group is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
