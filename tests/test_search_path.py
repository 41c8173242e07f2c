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


"""Tests for the once-only PATH manager."""

from __future__ import annotations

import os

from tool_manager.search_path import SearchPath


def test_ensure_prepends_once(tmp_path):
    environ = {"PATH": os.pathsep.join(["/usr/local/bin", "/usr/bin"])}
    search_path = SearchPath(environ)

    assert search_path.ensure(tmp_path / "bin")
    assert environ["PATH"] == os.pathsep.join([str(tmp_path / "bin"), "/usr/local/bin", "/usr/bin"])
    assert search_path.initialized

    assert not search_path.ensure(tmp_path / "other")
    assert environ["PATH"].count(os.pathsep) == 2


def test_directory_already_on_path():
    environ = {"PATH": os.pathsep.join(["/opt/tools/bin", "/usr/bin"])}
    search_path = SearchPath(environ)

    assert not search_path.ensure("/opt/tools/bin/")
    assert environ["PATH"] == os.pathsep.join(["/opt/tools/bin", "/usr/bin"])
    assert search_path.initialized


def test_empty_path():
    environ: dict[str, str] = {}
    search_path = SearchPath(environ)

    assert search_path.ensure("/opt/tools/bin")
    assert environ["PATH"] == "/opt/tools/bin"


def test_reset_allows_another_mutation():
    environ = {"PATH": "/usr/bin"}
    search_path = SearchPath(environ)
    search_path.ensure("/a")
    search_path.reset()

    assert search_path.ensure("/b")
    assert search_path.entries() == ["/b", "/a", "/usr/bin"]


def test_which_uses_managed_path(tmp_path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    tool = bin_dir / "demo"
    tool.write_text("#!/bin/sh\n")
    tool.chmod(0o755)
    search_path = SearchPath({"PATH": "/nonexistent"})

    assert search_path.which("demo") is None
    search_path.ensure(bin_dir)
    assert search_path.which("demo") == str(tool)
