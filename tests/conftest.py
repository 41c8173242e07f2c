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
Shared pytest fixtures for tool_manager tests.

This module provides:
- FakeServer: httpx.MockTransport backed artifact server that counts requests
- FakePrompter: scripted answers for confirmation and selection prompts
- Archive builders for tar.gz and zip artifacts
"""

from __future__ import annotations

import io
import os
import tarfile
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass, field

import httpx
import pytest

from tool_manager.config import InstallOptions
from tool_manager.constants import ENV_PREFIX
from tool_manager.descriptor import Descriptor, Platform
from tool_manager.manager import Manager
from tool_manager.policy import InstallPolicy
from tool_manager.search_path import SearchPath

BASE_URL = "https://downloads.example.com"


# =============================================================================
# HTTP
# =============================================================================

class FakeServer:
    """Serves canned artifacts by URL and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, bytes]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, body: bytes = b"", status: int = 200) -> None:
        self.routes[url] = (status, body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(str(request.url), (404, b"not found"))
        return httpx.Response(status, content=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


# =============================================================================
# Prompts
# =============================================================================

@dataclass
class FakePrompter:
    """Prompter with fixed answers.

    ``selection`` of None keeps the defaults offered by the caller.
    """

    confirm_answer: bool = True
    selection: list[str] | None = None
    confirms: list[str] = field(default_factory=list)
    selects: list[list[str]] = field(default_factory=list)

    def confirm(self, message: str, help: str = "") -> bool:
        self.confirms.append(message)
        return self.confirm_answer

    def select_multi(
        self,
        message: str,
        options: Sequence[str],
        defaults: Sequence[str],
        help: str = "",
    ) -> list[str]:
        self.selects.append(list(options))
        return list(defaults) if self.selection is None else list(self.selection)


# =============================================================================
# Archives
# =============================================================================

def make_tar_gz(files: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def make_zip(files: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return buf.getvalue()


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep TOOL_MANAGER_* variables of the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


@pytest.fixture
def linux() -> Platform:
    return Platform(os="linux", arch="amd64")


@pytest.fixture
def install_dir(tmp_path):
    return tmp_path / "bin"


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def search_path() -> SearchPath:
    return SearchPath({"PATH": "/usr/local/bin:/usr/bin"})


@pytest.fixture
def options(install_dir):
    def _options(**overrides) -> InstallOptions:
        values = {
            "install_dir": install_dir,
            "install_policy": InstallPolicy.IF_NOT_PRESENT,
            "noninteractive": True,
            "dry_run": False,
        }
        values.update(overrides)
        return InstallOptions(**values)

    return _options


@pytest.fixture
def manager(prompter, search_path, linux, server) -> Manager:
    return Manager(prompter, search_path, platform=linux, client=server.client())


@pytest.fixture
def demo() -> Descriptor:
    return Descriptor(
        name="demo",
        version="1.2.3",
        url=BASE_URL + "/demo/v{{ version }}/{{ os }}/{{ arch }}/demo{{ extension }}",
    )


@pytest.fixture
def bundled() -> Descriptor:
    """Descriptor shipped inside a tar.gz under a different binary name."""
    return Descriptor(
        name="bundled-spot",
        upstream_binary_name="bundled",
        version="0.26.0",
        url=BASE_URL + "/bundled/v{{ version }}/bundled_{{ os | capitalize }}_{{ arch }}.tar.gz",
    )
