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


"""Constants and loading of the pinned dependency file."""

from __future__ import annotations

from pathlib import Path

import yaml

DEPENDENCIES_FILE = Path(__file__).resolve().parent / "dependencies.yaml"


def load_dependencies(path: Path | None = None) -> dict:
    """Load pinned tool descriptors and groups from dependencies.yaml.

    Args:
        path: Alternative YAML file, or None for the packaged one.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    with open(path or DEPENDENCIES_FILE) as f:
        return yaml.safe_load(f) or {}


DEPENDENCIES = load_dependencies()


# -- Install directory --
PRODUCT_DIR_NAME = ".tool-manager"
BIN_DIR_NAME = "bin"

# -- Environment --
ENV_PREFIX = "TOOL_MANAGER_"
PATH_ENV_VAR = "PATH"

# -- Download --
DEFAULT_DOWNLOAD_TIMEOUT_SECONDS = 3600.0
DOWNLOAD_CHUNK_SIZE = 64 * 1024
TEMP_DIR_PREFIX = "tool-manager-"

# -- Files --
EXECUTABLE_MODE = 0o755
WINDOWS_EXTENSION = ".exe"

# -- Platform identifiers --
OS_DARWIN = "darwin"
OS_LINUX = "linux"
OS_WINDOWS = "windows"
ARCH_AMD64 = "amd64"
ARCH_ARM64 = "arm64"
ARCH_386 = "386"
ARCH_ARM = "arm"

MACHINE_ARCH_ALIASES = {
    "x86_64": ARCH_AMD64,
    "amd64": ARCH_AMD64,
    "aarch64": ARCH_ARM64,
    "arm64": ARCH_ARM64,
    "i386": ARCH_386,
    "i686": ARCH_386,
    "x86": ARCH_386,
    "armv7l": ARCH_ARM,
    "armv6l": ARCH_ARM,
}

# -- Prompts --
CONFIRM_HELP = "tool-manager would like to install a missing required dependency"
SELECT_HELP = "tool-manager would like to install missing required dependencies"

# -- Version probes (arguments passed to `<tool>`) --
DEFAULT_VERSION_ARGS = ("version",)
VERSION_ARGS = {
    "kubectl": ("version", "--client"),
    "eksctl-spot": ("version", "--output", "json"),
}
VERSION_PROBE_TIMEOUT_SECONDS = 30
