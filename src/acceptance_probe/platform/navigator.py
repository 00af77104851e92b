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

import requests

from acceptance_probe.exceptions import ElementNotFound, ProtocolFailure
from acceptance_probe.platform.http_probe import http_get_checked
from acceptance_probe.platform.protocols import BrowserSession, HttpGet


class HttpNavigator(BrowserSession):
    """
    Headless stand-in for a browsing session: "navigating" is a GET.

    A 404 is reported as :class:`ElementNotFound` (page not there yet), any
    other non-2xx answer, such as the 503 placeholder served while the
    target restarts, as :class:`ProtocolFailure`.
    """

    def __init__(
        self,
        start_url: str,
        *,
        timeout_s: float = 5.0,
        http_get: HttpGet = requests.get,
    ):
        self._url = start_url
        self.timeout_s = timeout_s
        self._http_get = http_get

    def current_url(self) -> str:
        return self._url

    def navigate(self, url: str) -> None:
        r = http_get_checked(url, timeout_s=self.timeout_s, http_get=self._http_get)
        if r.status_code == 404:
            raise ElementNotFound(f"{url} answered HTTP 404")
        if not 200 <= r.status_code < 300:
            raise ProtocolFailure(f"{url} answered HTTP {r.status_code}", status_code=r.status_code)
        # follow redirects the way a browser address bar would
        final = getattr(r, "url", None)
        self._url = final if isinstance(final, str) and final else url
