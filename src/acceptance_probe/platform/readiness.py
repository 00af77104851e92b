from typing import Protocol

from acceptance_probe.core.version import VersionInfo


class Readiness(Protocol):
    def wait_for_startup(self, timeout_s: float | None = None) -> VersionInfo:
        """Block (or poll) until the target identifies itself and return its version."""
        ...

    def wait_for_reload(self, timeout_s: float | None = None) -> None:
        """Block (or poll) until a restarting target serves its status endpoint again."""
        ...
