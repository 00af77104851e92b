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

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

try:
    __version__ = version("acceptance-probe")
except PackageNotFoundError:  # during dev
    __version__ = "0.0.0"

__all__ = [
    "FailureKind",
    "PollPolicy",
    "Poller",
    "ReadinessProbe",
    "TargetSession",
    "VersionInfo",
    "wait_until",
]


def __getattr__(name: str):
    if name in ("FailureKind", "PollPolicy"):
        from .polling import policy

        return getattr(policy, name)
    if name in ("Poller", "wait_until"):
        from .polling import poller

        return getattr(poller, name)
    if name == "ReadinessProbe":
        from .core.readiness import ReadinessProbe

        return ReadinessProbe
    if name == "TargetSession":
        from .core.session import TargetSession

        return TargetSession
    if name == "VersionInfo":
        from .core.version import VersionInfo

        return VersionInfo
    raise AttributeError(name)


if TYPE_CHECKING:
    from .core.readiness import ReadinessProbe
    from .core.session import TargetSession
    from .core.version import VersionInfo
    from .polling.policy import FailureKind, PollPolicy
    from .polling.poller import Poller, wait_until
