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

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, field_validator

from acceptance_probe.config.settings import get_settings
from acceptance_probe.exceptions import PollFailure
from acceptance_probe.polling.kinds import FailureKind

__all__ = ["FailureKind", "OutcomeStatus", "PollOutcome", "PollPolicy", "WaitState"]


class PollPolicy(BaseModel):
    """Timeout, interval and ignorable failure kinds for one wait call.

    Attributes
    ----------
    timeout: float
        Wall-clock budget in seconds, measured from the first attempt.
    poll_interval: float
        Pause between two attempts, in seconds. Defaults to
        ``ACCEPTANCE_PROBE_POLL_INTERVAL_S``.
    ignored: frozenset[FailureKind]
        Failure kinds treated as "not ready yet". Anything else aborts the wait.
    message: str | None
        What is being waited for; used in the timeout report.
    """

    model_config = ConfigDict(frozen=True)

    timeout: PositiveFloat
    poll_interval: PositiveFloat = Field(default_factory=lambda: get_settings().poll_interval_s)
    ignored: frozenset[FailureKind] = Field(default_factory=frozenset)
    message: str | None = None

    @field_validator("ignored", mode="before")
    @classmethod
    def _coerce_ignored(cls, v):
        if isinstance(v, FailureKind):
            return frozenset({v})
        return frozenset(v)

    def ignores(self, failure: PollFailure) -> bool:
        return failure.kind in self.ignored


class OutcomeStatus(str, Enum):
    SUCCESS = "SUCCESS"
    RETRYABLE = "RETRYABLE"
    FATAL = "FATAL"


@dataclass(frozen=True)
class PollOutcome:
    """Result of a single poll attempt."""

    status: OutcomeStatus
    failure: PollFailure | None = None
    error: Exception | None = None

    def __post_init__(self):
        if self.status is OutcomeStatus.RETRYABLE and self.failure is None:
            raise ValueError("a retryable outcome needs the failure it retries on")
        if self.status is OutcomeStatus.FATAL and self.error is None:
            raise ValueError("a fatal outcome needs the error to propagate")

    @classmethod
    def success(cls) -> "PollOutcome":
        return cls(OutcomeStatus.SUCCESS)

    @classmethod
    def retryable(cls, failure: PollFailure) -> "PollOutcome":
        return cls(OutcomeStatus.RETRYABLE, failure=failure)

    @classmethod
    def fatal(cls, error: Exception) -> "PollOutcome":
        return cls(OutcomeStatus.FATAL, error=error)

    @property
    def kind(self) -> FailureKind | None:
        return self.failure.kind if self.failure is not None else None


class WaitState(str, Enum):
    """Lifecycle of a single wait call."""

    POLLING = "POLLING"
    SUCCEEDED = "SUCCEEDED"
    FAILED_FATAL = "FAILED_FATAL"
    FAILED_TIMEOUT = "FAILED_TIMEOUT"
