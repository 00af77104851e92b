"""Custom exceptions."""

from acceptance_probe.polling.kinds import FailureKind


class AcceptanceProbeError(Exception):
    """Base class for all custom exceptions.

    Useful to catch all of them.
    """


class PollFailure(AcceptanceProbeError):
    """A failure observed during a single poll attempt.

    Subclasses pin the :class:`FailureKind`; whether the failure is transient
    is decided by the policy of the wait that observes it, never by the
    failure itself.
    """

    kind: FailureKind

    def __init__(self, message: str, cause: BaseException | None = None):
        """Raise a poll failure.

        Args:
            message (str): Human readable description of what was observed.
            cause (BaseException | None): The originating error, if any.
        """
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class AssertionFailure(PollFailure):
    """The predicate signaled that the target is not ready yet."""

    kind = FailureKind.ASSERTION


class ElementNotFound(PollFailure):
    """The navigation target is not rendering the expected content yet."""

    kind = FailureKind.ELEMENT_NOT_FOUND


class TransportFailure(PollFailure):
    """Connection level error (refused, reset, DNS, read timeout)."""

    kind = FailureKind.TRANSPORT


class ProtocolFailure(PollFailure):
    """The target answered, but not with something usable (e.g. a 503)."""

    kind = FailureKind.PROTOCOL

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code


class MalformedVersion(AcceptanceProbeError, ValueError):
    """The version header is present but cannot be parsed.

    Never retried: it means the target is not the expected application.
    """

    def __init__(self, raw: str):
        super().__init__(f"Cannot parse version string {raw!r}")
        self.raw = raw


class TimeoutExceeded(AcceptanceProbeError, TimeoutError):
    """The deadline passed while every observed failure was still ignorable."""

    def __init__(
        self,
        timeout: float,
        last_failure: PollFailure | None,
        attempts: int,
        message: str | None = None,
    ):
        what = message or "condition"
        detail = f": {last_failure}" if last_failure is not None else ""
        super().__init__(
            f"Timed out after {timeout:g}s ({attempts} attempts) waiting for {what}{detail}"
        )
        self.timeout = timeout
        self.last_failure = last_failure
        self.attempts = attempts
        if last_failure is not None:
            self.__cause__ = last_failure


class TargetStartError(AcceptanceProbeError):
    """The controller collaborator failed to start the target."""
