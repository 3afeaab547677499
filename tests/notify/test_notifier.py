"""Tests for outcome.notify.notifier - the synchronous notification contract.

Covers:
- At most one observer per call, never both
- Matching observer invoked exactly once with the payload
- Missing observers: no call, no fault
- Unobserved policy (skip vs run)
- Faults from work and observers propagate unchanged
- Non-Outcome return values rejected
"""

from types import SimpleNamespace

import pytest

from outcome.core.errors import InvalidConfigError, InvalidObserverError, OutcomeContractError
from outcome.core.result import Failure, Success, capture
from outcome.notify.notifier import OutcomeNotifier, notify
from outcome.notify.observers import Observers, UnobservedPolicy


class CountingWork:
    """Work callable that returns a fixed outcome and counts its runs."""

    def __init__(self, result):
        self.result = result
        self.runs = 0

    def __call__(self):
        self.runs += 1
        return self.result


# ── Scenarios ────────────────────────────────────────────────────────────


class TestScenarios:
    def test_success_42_with_success_observer(self, calls):
        work = CountingWork(Success(42))
        notify(work, on_success=calls.on_success)
        assert work.runs == 1
        assert calls.roles() == ["success"]
        assert calls.payloads() == [42]

    def test_disk_full_with_failure_observer(self, calls):
        notify(CountingWork(Failure("disk full")), on_failure=calls.on_failure)
        assert calls.roles() == ["failure"]
        assert calls.payloads() == ["disk full"]

    def test_failure_without_observers_is_silent(self, calls):
        work = CountingWork(Failure("x"))
        notify(work)  # no exception
        assert calls.calls == []


# ── Dispatch properties ──────────────────────────────────────────────────


class TestDispatch:
    @pytest.mark.parametrize(
        "result, expected_role",
        [(Success("img"), "success"), (Failure("err"), "failure")],
    )
    def test_exactly_matching_observer(self, calls, result, expected_role):
        notify(CountingWork(result), on_success=calls.on_success, on_failure=calls.on_failure)
        assert calls.roles() == [expected_role]
        assert calls.payloads() == [result.payload]

    def test_success_without_success_observer(self, calls):
        work = CountingWork(Success(1))
        notify(work, on_failure=calls.on_failure)
        assert work.runs == 1
        assert calls.calls == []

    def test_returns_none(self, calls):
        assert notify(CountingWork(Success(1)), on_success=calls.on_success) is None

    def test_exception_payload_is_data_not_fault(self, calls):
        error = OSError("disk full")
        notify(CountingWork(Failure(error)), on_failure=calls.on_failure)
        assert calls.payloads() == [error]

    def test_observers_not_retained(self, calls):
        notifier = OutcomeNotifier()
        notifier.notify(CountingWork(Success(1)), on_success=calls.on_success)
        assert vars(notifier) == {"policy": UnobservedPolicy.SKIP, "name": "notifier"}


# ── Unobserved policy ────────────────────────────────────────────────────


class TestUnobservedPolicy:
    def test_skip_does_not_run_work(self):
        work = CountingWork(Success(1))
        notify(work)
        assert work.runs == 0

    def test_run_policy_runs_work(self):
        work = CountingWork(Failure("x"))
        notify(work, policy=UnobservedPolicy.RUN)
        assert work.runs == 1

    def test_policy_accepts_string(self):
        work = CountingWork(Success(1))
        OutcomeNotifier(policy="run").notify(work)
        assert work.runs == 1

    def test_from_settings(self):
        settings = SimpleNamespace(unobserved_policy=UnobservedPolicy.RUN)
        notifier = OutcomeNotifier.from_settings(settings, name="images")
        assert notifier.policy is UnobservedPolicy.RUN
        assert notifier.name == "images"

    def test_env_policy_drives_notify(self, monkeypatch):
        monkeypatch.setenv("OUTCOME_UNOBSERVED_POLICY", "run")
        work = CountingWork(Success(1))
        notify(work)
        assert work.runs == 1

    def test_env_policy_default_for_notifier(self, monkeypatch):
        monkeypatch.setenv("OUTCOME_UNOBSERVED_POLICY", "run")
        assert OutcomeNotifier().policy is UnobservedPolicy.RUN

    def test_explicit_policy_beats_env(self, monkeypatch):
        monkeypatch.setenv("OUTCOME_UNOBSERVED_POLICY", "run")
        work = CountingWork(Success(1))
        notify(work, policy="skip")
        assert work.runs == 0

    def test_invalid_env_policy_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("OUTCOME_UNOBSERVED_POLICY", "sometimes")
        with pytest.raises(InvalidConfigError) as excinfo:
            notify(CountingWork(Success(1)), on_success=print)
        assert excinfo.value.key == "unobserved_policy"


# ── Faults ───────────────────────────────────────────────────────────────


class TestFaults:
    def test_work_fault_propagates_unmodified(self, calls):
        error = ZeroDivisionError("boom")

        def work():
            raise error

        with pytest.raises(ZeroDivisionError) as excinfo:
            notify(work, on_success=calls.on_success, on_failure=calls.on_failure)
        assert excinfo.value is error
        assert calls.calls == []

    def test_capture_routes_fault_to_failure_observer(self, calls):
        notify(lambda: capture(lambda: 1 / 0, str), on_failure=calls.on_failure)
        assert calls.payloads() == ["division by zero"]

    def test_observer_fault_propagates(self):
        def explode(_):
            raise RuntimeError("observer broke")

        with pytest.raises(RuntimeError, match="observer broke"):
            notify(CountingWork(Success(1)), on_success=explode)

    def test_non_outcome_rejected(self, calls):
        with pytest.raises(OutcomeContractError) as excinfo:
            notify(lambda: True, on_success=calls.on_success)
        assert excinfo.value.returned is True
        assert excinfo.value.context.notifier == "notify"
        assert calls.calls == []

    def test_invalid_observer_rejected_before_work(self):
        work = CountingWork(Success(1))
        with pytest.raises(InvalidObserverError):
            notify(work, on_success="print")
        assert work.runs == 0


class TestNotifyWith:
    def test_prebuilt_observers(self, calls):
        observers = Observers().with_failure(calls.on_failure)
        OutcomeNotifier(name="images").notify_with(CountingWork(Failure("x")), observers)
        assert calls.payloads() == ["x"]

    def test_repr(self):
        assert repr(OutcomeNotifier(name="images")) == "OutcomeNotifier(name='images', policy=skip)"
