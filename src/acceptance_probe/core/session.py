# Copyright 2025 iGenius S.p.A
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

from __future__ import annotations

import threading
from typing import Any

from acceptance_probe.core.readiness import ReadinessProbe
from acceptance_probe.core.version import VersionInfo
from acceptance_probe.exceptions import TargetStartError
from acceptance_probe.helpers.logger import setup_logger
from acceptance_probe.platform.protocols import RestartTrigger, TargetController

LEGACY_BASELINE = VersionInfo.parse("2.0")

logger = setup_logger(__name__)


class TargetSession:
    """
    Entry point to one running target, owning its version cache.

    The cached :class:`VersionInfo` is cleared the moment a restart is
    initiated and is only fetched again on the next access to :attr:`version`.
    """

    def __init__(self, probe: ReadinessProbe):
        self.probe = probe
        self._version: VersionInfo | None = None
        self._lock = threading.Lock()

    @classmethod
    def start(cls, controller: TargetController, **probe_kwargs: Any) -> TargetSession:
        """Start the target through its controller and wait until it identifies itself."""
        try:
            controller.start()
        except OSError as e:
            raise TargetStartError(f"Failed to start target: {e}") from e
        session = cls(ReadinessProbe(controller.url, **probe_kwargs))
        session.wait_for_started()
        return session

    @property
    def url(self) -> str:
        return self.probe.base_url

    @property
    def cached_version(self) -> VersionInfo | None:
        return self._version

    @property
    def version(self) -> VersionInfo:
        with self._lock:
            if self._version is None:
                self._version = self.probe.fetch_version()
            return self._version

    def invalidate_version(self) -> None:
        with self._lock:
            self._version = None

    def wait_for_started(self, timeout_s: float | None = None) -> VersionInfo:
        version = self.probe.wait_for_startup(timeout_s)
        with self._lock:
            self._version = version
        return version

    def is_older_than(self, baseline: VersionInfo | str) -> bool:
        return self.version.is_older_than(baseline)

    def is_legacy_line(self) -> bool:
        """True when the target runs a 1.x line."""
        return self.is_older_than(LEGACY_BASELINE)

    def wait_for_reload(self, timeout_s: float | None = None) -> None:
        # the restart may have swapped the running build
        self.invalidate_version()
        self.probe.wait_for_reload(timeout_s)

    def restart(self, trigger: RestartTrigger, timeout_s: float | None = None) -> None:
        """Issue the restart through ``trigger`` and wait until the target is back."""
        self.invalidate_version()
        logger.info(f"Restarting {self.url}")
        trigger()
        self.wait_for_reload(timeout_s)
