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


"""Tool descriptors, host platform detection, URL rendering, and the registry."""

from __future__ import annotations

import platform as pyplatform
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache

import httpx
import jinja2

from tool_manager.constants import (
    ARCH_AMD64,
    ARCH_ARM64,
    DEPENDENCIES,
    MACHINE_ARCH_ALIASES,
    OS_DARWIN,
    OS_LINUX,
    OS_WINDOWS,
    WINDOWS_EXTENSION,
)
from tool_manager.errors import (
    DuplicateDescriptorError,
    TemplateError,
    UnknownToolError,
    URLError,
)

_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")
_TEMPLATE_ENV = jinja2.Environment(undefined=jinja2.StrictUndefined, autoescape=False)


# ============================================================================
# Platform
# ============================================================================

@dataclass(frozen=True)
class Platform:
    """Host identifiers used when rendering download URLs.

    Attributes:
        os: Operating system name (``linux``, ``darwin``, ``windows``).
        arch: CPU architecture (``amd64``, ``arm64``, ``386``, ``arm``).
    """

    os: str
    arch: str

    @classmethod
    def current(cls) -> Platform:
        """Detect the running host."""
        system = pyplatform.system().lower() or OS_LINUX
        machine = pyplatform.machine().lower()
        return cls(os=system, arch=MACHINE_ARCH_ALIASES.get(machine, machine))

    @property
    def extension(self) -> str:
        """Executable file extension for this platform."""
        return WINDOWS_EXTENSION if self.os == OS_WINDOWS else ""


def validate_url(value: str) -> str:
    """Check that *value* is an absolute http(s) URL.

    Args:
        value: Rendered URL string.

    Returns:
        The unchanged URL string.

    Raises:
        URLError: If the string does not parse or is not absolute.
    """
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as err:
        raise URLError(f"invalid URL {value!r}: {err}") from err
    if url.scheme not in ("http", "https") or not url.host:
        raise URLError(f"URL {value!r} is not an absolute http(s) URL")
    return value


# ============================================================================
# Descriptor
# ============================================================================

@dataclass(frozen=True)
class Descriptor:
    """An installable third-party executable pinned to one version.

    Attributes:
        name: Lower-case single-token tool name, also the stable executable name.
        version: Opaque version string used verbatim in filenames and URLs.
        url: Jinja2 URL template (``version``, ``os``, ``arch``, ``extension``).
        upstream_binary_name: Binary name inside an archive; defaults to *name*.
        rosetta_arch_override: Download amd64 builds on darwin/arm64 hosts.
    """

    name: str
    version: str
    url: str
    upstream_binary_name: str = ""
    rosetta_arch_override: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not _NAME_PATTERN.match(self.name):
            raise ValueError(f"dependency name must be a lower-case single token, got {self.name!r}")
        if not self.version:
            raise ValueError(f"dependency {self.name} must have a version")
        if not self.url:
            raise ValueError(f"dependency {self.name} must have a URL template")
        if not self.upstream_binary_name:
            object.__setattr__(self, "upstream_binary_name", self.name)

    def executable(self, platform: Platform) -> str:
        """Versioned on-disk filename, ``<name><extension>-<version>``."""
        return f"{self.name}{platform.extension}-{self.version}"

    def stable_name(self, platform: Platform) -> str:
        """Version-independent name the symlink is published under."""
        return f"{self.name}{platform.extension}"

    def template_vars(self, platform: Platform) -> dict[str, str]:
        arch = platform.arch
        if self.rosetta_arch_override and platform.os == OS_DARWIN and arch == ARCH_ARM64:
            arch = ARCH_AMD64
        return {
            "version": self.version,
            "os": platform.os,
            "arch": arch,
            "extension": platform.extension,
        }

    def render_url(self, platform: Platform) -> str:
        """Render the download URL for *platform*.

        Raises:
            TemplateError: If the template cannot be parsed or references
                an unknown variable.
            URLError: If the result is not an absolute http(s) URL.
        """
        try:
            rendered = _TEMPLATE_ENV.from_string(self.url).render(**self.template_vars(platform))
        except jinja2.TemplateError as err:
            raise TemplateError(f"cannot render URL template of {self.name}: {err}") from err
        return validate_url(rendered.strip())

    def __str__(self) -> str:
        return f"{self.name}-{self.version}"


# ============================================================================
# Registry
# ============================================================================

class Registry:
    """Named descriptors plus named groups of descriptors."""

    def __init__(
        self,
        descriptors: Iterable[Descriptor] = (),
        groups: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self._descriptors: dict[str, Descriptor] = {}
        self._groups: dict[str, tuple[str, ...]] = {}
        for descriptor in descriptors:
            self.register(descriptor)
        for name, members in (groups or {}).items():
            self.add_group(name, members)

    @classmethod
    def from_dependencies(cls, data: Mapping) -> Registry:
        """Build a registry from the parsed ``dependencies.yaml`` layout.

        Args:
            data: Mapping with ``tools`` and optional ``groups`` sections.

        Returns:
            A populated registry.

        Raises:
            ValueError: If a tool entry lacks ``version`` or ``url``.
        """
        descriptors = []
        for name, entry in (data.get("tools") or {}).items():
            entry = entry or {}
            missing = [key for key in ("version", "url") if not entry.get(key)]
            if missing:
                raise ValueError(f"dependency {name} is missing {', '.join(missing)}")
            descriptors.append(Descriptor(
                name=name,
                version=str(entry["version"]),
                url=entry["url"],
                upstream_binary_name=entry.get("upstream_binary_name") or "",
                rosetta_arch_override=bool(entry.get("rosetta_arch_override", False)),
            ))
        return cls(descriptors, data.get("groups") or {})

    def register(self, descriptor: Descriptor) -> None:
        """Add *descriptor*, refusing a second descriptor with the same name."""
        if descriptor.name in self._descriptors:
            raise DuplicateDescriptorError(f"dependency named {descriptor.name!r} already registered")
        self._descriptors[descriptor.name] = descriptor

    def add_group(self, name: str, members: Iterable[str]) -> None:
        members = tuple(members)
        for member in members:
            self.get(member)
        self._groups[name] = members

    def get(self, name: str) -> Descriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownToolError(f"no dependency named {name!r} is registered") from None

    def group(self, name: str) -> list[Descriptor]:
        try:
            members = self._groups[name]
        except KeyError:
            raise UnknownToolError(f"no dependency group named {name!r} is registered") from None
        return [self._descriptors[member] for member in members]

    def resolve(self, names: Iterable[str]) -> list[Descriptor]:
        """Look up several names, keeping their order and dropping repeats."""
        seen: set[str] = set()
        result = []
        for name in names:
            if name not in seen:
                seen.add(name)
                result.append(self.get(name))
        return result

    @property
    def group_names(self) -> list[str]:
        return list(self._groups)

    def __iter__(self) -> Iterator[Descriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors


@lru_cache(maxsize=1)
def default_registry() -> Registry:
    """Registry of the packaged ``dependencies.yaml``, built once per process."""
    return Registry.from_dependencies(DEPENDENCIES)
