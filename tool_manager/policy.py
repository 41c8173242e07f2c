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


"""Install policy and the decision table it drives."""

from __future__ import annotations

from enum import Enum


class InstallPolicy(str, Enum):
    """If/when the manager may install a dependency."""

    ALWAYS = "Always"
    IF_NOT_PRESENT = "IfNotPresent"
    NEVER = "Never"

    @classmethod
    def parse(cls, value: str | InstallPolicy) -> InstallPolicy:
        """Parse a policy name case-insensitively.

        Raises:
            ValueError: If *value* names no policy.
        """
        if isinstance(value, cls):
            return value
        for policy in cls:
            if policy.value.lower() == str(value).strip().lower():
                return policy
        choices = ", ".join(p.value for p in cls)
        raise ValueError(f"unknown install policy {value!r} (expected one of: {choices})")

    def __str__(self) -> str:
        return self.value


class Action(str, Enum):
    """What the manager does with one dependency."""

    PROCEED = "proceed"
    SKIP = "skip"
    VIOLATION = "violation"


_DECISIONS: dict[tuple[InstallPolicy, bool], Action] = {
    (InstallPolicy.ALWAYS, True): Action.PROCEED,
    (InstallPolicy.ALWAYS, False): Action.PROCEED,
    (InstallPolicy.IF_NOT_PRESENT, True): Action.SKIP,
    (InstallPolicy.IF_NOT_PRESENT, False): Action.PROCEED,
    (InstallPolicy.NEVER, True): Action.SKIP,
    (InstallPolicy.NEVER, False): Action.VIOLATION,
}


def decide(policy: InstallPolicy, present: bool) -> Action:
    """Map (policy, presence) to an action.

    Args:
        policy: Install policy in effect.
        present: Whether the versioned executable already exists.

    Returns:
        ``PROCEED``, ``SKIP``, or ``VIOLATION`` (Never + missing).
    """
    return _DECISIONS[(InstallPolicy.parse(policy), bool(present))]
