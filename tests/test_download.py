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


"""Tests for the streamed downloader."""

from __future__ import annotations

import threading

import httpx
import pytest

from conftest import BASE_URL
from tool_manager.download import download
from tool_manager.errors import DownloadError, InstallCancelledError

URL = BASE_URL + "/kubectl"


def test_writes_body_and_creates_parents(server, tmp_path):
    server.add(URL, b"binary-bytes")
    dest = tmp_path / "nested" / "dir" / "kubectl"

    assert download(URL, dest, client=server.client()) == dest

    assert dest.read_bytes() == b"binary-bytes"
    assert server.calls == 1
    assert server.requests[0].method == "GET"


@pytest.mark.parametrize("status", [404, 500, 204])
def test_non_200_status(server, tmp_path, status):
    server.add(URL, b"", status=status)
    with pytest.raises(DownloadError) as exc_info:
        download(URL, tmp_path / "kubectl", client=server.client())
    assert exc_info.value.status_code == status
    assert str(status) in str(exc_info.value)


def test_follows_redirects(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/latest":
            return httpx.Response(302, headers={"Location": URL})
        return httpx.Response(200, content=b"redirected")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    dest = download(BASE_URL + "/latest", tmp_path / "kubectl", client=client)
    assert dest.read_bytes() == b"redirected"


def test_transport_failure(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(DownloadError) as exc_info:
        download(URL, tmp_path / "kubectl", client=client)
    assert exc_info.value.status_code is None
    assert "connection refused" in str(exc_info.value)


def test_cancelled_before_request(server, tmp_path):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(InstallCancelledError):
        download(URL, tmp_path / "kubectl", client=server.client(), cancel=cancel)
    assert server.calls == 0


def test_cancelled_during_transfer(tmp_path):
    cancel = threading.Event()

    def body():
        yield b"first"
        cancel.set()
        yield b"second"

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body())

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(InstallCancelledError):
        download(URL, tmp_path / "kubectl", client=client, cancel=cancel)


def test_shared_client_left_open(server, tmp_path):
    server.add(URL, b"x")
    client = server.client()
    download(URL, tmp_path / "kubectl", client=client)
    assert not client.is_closed


def test_malformed_content_length(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Length": "abc"}, content=b"body")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    dest = download(URL, tmp_path / "kubectl", client=client)
    assert dest.read_bytes() == b"body"
