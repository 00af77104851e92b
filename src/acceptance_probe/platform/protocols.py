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

from collections.abc import Mapping
from typing import Any, Callable, Protocol, runtime_checkable

RestartTrigger = Callable[[], None]


class HttpGet(Protocol):
    """Subset of ``requests.get`` used by the probes."""

    def __call__(
        self,
        url: str,
        *,
        timeout: float,
        params: Mapping[str, str] | None = None,
    ) -> Any: ...


@runtime_checkable
class BrowserSession(Protocol):
    """Browsing session driven by the tests (a WebDriver wrapper, usually).

    Implementations signal "page not rendered yet" by raising
    :class:`~acceptance_probe.exceptions.ElementNotFound` and "server answered
    with a placeholder" by raising
    :class:`~acceptance_probe.exceptions.ProtocolFailure`.
    """

    def navigate(self, url: str) -> None: ...

    def current_url(self) -> str: ...


@runtime_checkable
class TargetController(Protocol):
    """Starts the target and knows where it listens."""

    url: str

    def start(self) -> None: ...
