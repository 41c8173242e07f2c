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


"""Executable search path management."""

from __future__ import annotations

import os
import shutil
import threading
from collections.abc import MutableMapping
from functools import lru_cache
from pathlib import Path

from tool_manager import logger
from tool_manager.constants import PATH_ENV_VAR


class SearchPath:
    """A ``PATH`` variable that is extended at most once.

    Construct one instance at startup and pass it to every Manager. The
    first :meth:`ensure` call decides the prepended directory; later calls
    are no-ops until :meth:`reset`.

    Args:
        environ: Environment mapping to mutate; defaults to ``os.environ`` so
            child processes inherit the change.
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ
        self._lock = threading.Lock()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def value(self) -> str:
        return self._environ.get(PATH_ENV_VAR, "")

    def entries(self) -> list[str]:
        value = self.value
        return value.split(os.pathsep) if value else []

    def contains(self, directory: str | Path) -> bool:
        wanted = os.path.normpath(str(directory))
        return any(entry and os.path.normpath(entry) == wanted for entry in self.entries())

    def ensure(self, directory: str | Path) -> bool:
        """Prepend *directory* to ``PATH`` unless already initialized or present.

        Returns:
            True if the variable was changed by this call.
        """
        with self._lock:
            if self._initialized:
                return False
            self._initialized = True
            if self.contains(directory):
                logger.debug("%s already on %s", directory, PATH_ENV_VAR)
                return False
            logger.debug("Initializing %s by adding %s", PATH_ENV_VAR, directory)
            self._environ[PATH_ENV_VAR] = os.pathsep.join([str(directory), *self.entries()])
            return True

    def reset(self) -> None:
        """Allow the next :meth:`ensure` call to mutate again."""
        with self._lock:
            self._initialized = False

    def which(self, name: str) -> str | None:
        """Resolve a bare executable name against this ``PATH``."""
        return shutil.which(name, path=self.value)


@lru_cache(maxsize=1)
def process_search_path() -> SearchPath:
    """The search path of the running process, shared by all managers."""
    return SearchPath()
