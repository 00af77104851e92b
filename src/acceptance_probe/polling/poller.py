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
from typing import Callable, cast

from rich.markup import escape

from acceptance_probe.exceptions import AssertionFailure, PollFailure, TimeoutExceeded
from acceptance_probe.helpers.logger import setup_logger
from acceptance_probe.polling.policy import OutcomeStatus, PollOutcome, PollPolicy, WaitState

Predicate = Callable[[], bool]

logger = setup_logger(__name__)


class Poller:
    """
    Run a predicate until it returns True, a non-ignored failure is raised,
    or the policy deadline passes.

    Only ``Exception`` subclasses are inspected. ``KeyboardInterrupt``,
    ``SystemExit`` and any other cancellation signal deriving directly from
    ``BaseException`` propagate from the predicate or from ``sleep`` untouched.

    Testability: pass fake `now` and `sleep` callables.
    """

    def __init__(
        self,
        *,
        now: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._now = now
        self._sleep = sleep

    def attempt(self, predicate: Predicate, policy: PollPolicy) -> PollOutcome:
        """Invoke ``predicate`` once and classify what happened."""
        try:
            ready = predicate()
        except PollFailure as failure:
            if policy.ignores(failure):
                return PollOutcome.retryable(failure)
            return PollOutcome.fatal(failure)
        except Exception as exc:
            return PollOutcome.fatal(exc)

        if ready:
            return PollOutcome.success()
        return PollOutcome.retryable(AssertionFailure(f"predicate returned {ready!r}"))

    def wait_until(self, predicate: Predicate, policy: PollPolicy) -> None:
        deadline = self._now() + policy.timeout
        what = escape(policy.message or "condition")
        attempts = 0
        last_failure: PollFailure | None = None
        state = WaitState.POLLING

        while state is WaitState.POLLING:
            attempts += 1
            outcome = self.attempt(predicate, policy)

            if outcome.status is OutcomeStatus.SUCCESS:
                state = WaitState.SUCCEEDED
                logger.info(f"{what} satisfied after {attempts} attempt(s)")
                return

            if outcome.status is OutcomeStatus.FATAL:
                state = WaitState.FAILED_FATAL
                error = cast(Exception, outcome.error)
                logger.debug(f"{what}: attempt {attempts} failed fatally: {escape(repr(error))}")
                raise error

            last_failure = outcome.failure
            if self._now() >= deadline:
                state = WaitState.FAILED_TIMEOUT
                logger.warning(
                    f"Gave up on {what} after {policy.timeout:g}s "
                    f"({attempts} attempts); last failure: {escape(str(last_failure))}"
                )
                raise TimeoutExceeded(policy.timeout, last_failure, attempts, policy.message)

            logger.debug(
                f"{what} not ready (attempt {attempts}, {outcome.kind}): {escape(str(last_failure))}"
            )
            self._sleep(policy.poll_interval)


def wait_until(
    predicate: Predicate,
    policy: PollPolicy,
    *,
    now: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Block until ``predicate`` returns True; see :class:`Poller`.

    Raises:
        TimeoutExceeded: the deadline passed; carries the last ignored failure.
        Exception: any failure whose kind the policy does not ignore, as is.
    """
    Poller(now=now, sleep=sleep).wait_until(predicate, policy)
