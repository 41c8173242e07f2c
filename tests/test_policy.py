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


"""Tests for the install policy decision table."""

from __future__ import annotations

import pytest

from tool_manager.policy import Action, InstallPolicy, decide


@pytest.mark.parametrize("policy,present,expected", [
    (InstallPolicy.ALWAYS, True, Action.PROCEED),
    (InstallPolicy.ALWAYS, False, Action.PROCEED),
    (InstallPolicy.IF_NOT_PRESENT, True, Action.SKIP),
    (InstallPolicy.IF_NOT_PRESENT, False, Action.PROCEED),
    (InstallPolicy.NEVER, True, Action.SKIP),
    (InstallPolicy.NEVER, False, Action.VIOLATION),
])
def test_decide(policy, present, expected):
    assert decide(policy, present) is expected


@pytest.mark.parametrize("value,expected", [
    ("Always", InstallPolicy.ALWAYS),
    ("always", InstallPolicy.ALWAYS),
    ("IfNotPresent", InstallPolicy.IF_NOT_PRESENT),
    ("ifnotpresent", InstallPolicy.IF_NOT_PRESENT),
    ("NEVER", InstallPolicy.NEVER),
    (InstallPolicy.NEVER, InstallPolicy.NEVER),
])
def test_parse(value, expected):
    assert InstallPolicy.parse(value) is expected


def test_parse_unknown():
    with pytest.raises(ValueError, match="Sometimes"):
        InstallPolicy.parse("Sometimes")


def test_str_is_value():
    assert str(InstallPolicy.IF_NOT_PRESENT) == "IfNotPresent"
