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

import time
from typing import Callable

import requests
from rich.markup import escape

from acceptance_probe.config.settings import Settings, get_settings
from acceptance_probe.core.version import VersionInfo
from acceptance_probe.exceptions import PollFailure, ProtocolFailure
from acceptance_probe.helpers.logger import setup_logger
from acceptance_probe.platform import http_probe
from acceptance_probe.platform.protocols import BrowserSession, HttpGet
from acceptance_probe.platform.readiness import Readiness
from acceptance_probe.polling.poller import Poller
from acceptance_probe.polling.policy import FailureKind, PollPolicy

STARTUP_IGNORED = frozenset({FailureKind.ASSERTION, FailureKind.TRANSPORT})
RELOAD_IGNORED = frozenset(
    {
        FailureKind.ASSERTION,
        FailureKind.ELEMENT_NOT_FOUND,
        FailureKind.PROTOCOL,
        FailureKind.TRANSPORT,
    }
)

logger = setup_logger(__name__)


class ReadinessProbe(Readiness):
    """
    Startup and post-restart readiness checks for one target.

    Startup: poll the base URL until the version header shows up.
    Reload: re-navigate the browsing session (if any) to its own URL and
    query the status endpoint until it answers with JSON. While restarting,
    the target serves a placeholder page and refuses the status endpoint;
    both count as "not back yet".

    Any error the browsing session raises while reloading is reported as a
    :class:`ProtocolFailure`, so a driver hiccup during the restart window is
    retried. Pass narrower ``driver_errors`` to make other driver errors fatal.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: BrowserSession | None = None,
        settings: Settings | None = None,
        driver_errors: tuple[type[Exception], ...] = (Exception,),
        http_get: HttpGet = requests.get,
        now: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url
        self.session = session
        self.settings = settings or get_settings()
        self.driver_errors = driver_errors
        self._http_get = http_get
        self._poller = Poller(now=now, sleep=sleep)

    def fetch_version(self) -> VersionInfo:
        """Single, non-polling version lookup."""
        return http_probe.fetch_version(
            self.base_url,
            header=self.settings.version_header,
            timeout_s=self.settings.request_timeout_s,
            http_get=self._http_get,
        )

    def wait_for_startup(self, timeout_s: float | None = None) -> VersionInfo:
        found: list[VersionInfo] = []

        def _identified() -> bool:
            found.append(self.fetch_version())
            return True

        policy = PollPolicy(
            timeout=self.settings.startup_probe_timeout_s if timeout_s is None else timeout_s,
            poll_interval=self.settings.poll_interval_s,
            ignored=STARTUP_IGNORED,
            message=f"{self.base_url} to identify itself",
        )
        self._poller.wait_until(_identified, policy)
        logger.info(f"[bold green]{escape(self.base_url)} is up → version {found[-1]}")
        return found[-1]

    def _renavigate(self) -> None:
        if self.session is None:
            return
        try:
            # the page does not always reload on its own while the server bounces
            self.session.navigate(self.session.current_url())
        except PollFailure:
            raise
        except self.driver_errors as e:
            raise ProtocolFailure(f"Browser error while reloading: {e}", e) from e

    def status(self) -> dict:
        return http_probe.get_status(
            self.base_url,
            path=self.settings.status_path,
            tree=self.settings.status_tree,
            timeout_s=self.settings.request_timeout_s,
            http_get=self._http_get,
        )

    def wait_for_reload(self, timeout_s: float | None = None) -> None:
        def _reloaded() -> bool:
            self._renavigate()
            self.status()
            return True

        policy = PollPolicy(
            timeout=self.settings.startup_timeout_s if timeout_s is None else timeout_s,
            poll_interval=self.settings.poll_interval_s,
            ignored=RELOAD_IGNORED,
            message=f"{self.base_url} to come back after restart",
        )
        self._poller.wait_until(_reloaded, policy)
        logger.info(f"[bold green]{escape(self.base_url)} reloaded")
