import pytest
from pydantic import ValidationError

from acceptance_probe.exceptions import AssertionFailure, TransportFailure
from acceptance_probe.polling.policy import FailureKind, OutcomeStatus, PollOutcome, PollPolicy


def test_policy_defaults():
    policy = PollPolicy(timeout=60)
    assert policy.poll_interval == 1.0
    assert policy.ignored == frozenset()
    assert policy.message is None


@pytest.mark.parametrize("field", ["timeout", "poll_interval"])
@pytest.mark.parametrize("value", [0, -1])
def test_policy_rejects_non_positive_durations(field, value):
    kwargs = {"timeout": 10, field: value}
    with pytest.raises(ValidationError):
        PollPolicy(**kwargs)


def test_policy_is_immutable():
    policy = PollPolicy(timeout=10)
    with pytest.raises(ValidationError):
        policy.timeout = 20  # type: ignore[misc]


def test_policy_coerces_ignored_kinds():
    assert PollPolicy(timeout=1, ignored=FailureKind.PROTOCOL).ignored == {FailureKind.PROTOCOL}
    assert PollPolicy(timeout=1, ignored=["TRANSPORT"]).ignored == {FailureKind.TRANSPORT}


def test_policy_ignores_by_kind():
    policy = PollPolicy(timeout=1, ignored={FailureKind.ASSERTION})
    assert policy.ignores(AssertionFailure("not yet"))
    assert not policy.ignores(TransportFailure("refused"))


def test_failures_carry_their_cause():
    cause = ConnectionRefusedError("refused")
    failure = TransportFailure("cannot connect", cause)
    assert failure.kind is FailureKind.TRANSPORT
    assert failure.cause is cause
    assert failure.__cause__ is cause


def test_outcome_kind():
    assert PollOutcome.success().kind is None
    assert PollOutcome.retryable(AssertionFailure("x")).kind is FailureKind.ASSERTION
    assert PollOutcome.fatal(RuntimeError("x")).kind is None


def test_policy_interval_defaults_to_settings(monkeypatch):
    from acceptance_probe.config.settings import reload_settings_cache

    monkeypatch.setenv("ACCEPTANCE_PROBE_POLL_INTERVAL_S", "2.5")
    reload_settings_cache()

    assert PollPolicy(timeout=1).poll_interval == 2.5
    assert PollPolicy(timeout=1, poll_interval=0.5).poll_interval == 0.5


@pytest.mark.parametrize("status", [OutcomeStatus.RETRYABLE, OutcomeStatus.FATAL])
def test_outcome_requires_its_payload(status):
    with pytest.raises(ValueError):
        PollOutcome(status)
