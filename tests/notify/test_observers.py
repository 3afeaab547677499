"""Tests for outcome.notify.observers module."""

import pytest

from outcome.core.errors import InvalidObserverError, OutcomeContractError
from outcome.core.result import Failure, Success
from outcome.notify.notifier import deliver
from outcome.notify.observers import Observers, UnobservedPolicy, variant_name


class TestObserversConstruction:
    def test_empty_by_default(self):
        assert Observers().is_empty is True

    def test_one_observer_not_empty(self):
        assert Observers(on_failure=print).is_empty is False

    @pytest.mark.parametrize("role", ["on_success", "on_failure"])
    def test_non_callable_rejected(self, role):
        with pytest.raises(InvalidObserverError) as excinfo:
            Observers(**{role: "not callable"})
        assert excinfo.value.role == role

    def test_builder_returns_new_instances(self):
        base = Observers()
        built = base.with_success(print).with_failure(repr)
        assert base.is_empty
        assert built.on_success is print
        assert built.on_failure is repr

    def test_builder_can_clear(self):
        assert Observers(on_success=print).with_success(None).is_empty

    def test_builder_validates(self):
        with pytest.raises(InvalidObserverError):
            Observers().with_failure(42)


class TestForOutcome:
    def test_picks_matching_observer(self):
        obs = Observers(on_success=print, on_failure=repr)
        assert obs.for_outcome(Success(1)) is print
        assert obs.for_outcome(Failure("x")) is repr

    def test_missing_observer_is_none(self):
        assert Observers(on_success=print).for_outcome(Failure("x")) is None

    def test_rejects_non_outcome(self):
        with pytest.raises(OutcomeContractError):
            Observers(on_success=print).for_outcome(True)


class TestDeliver:
    def test_success_delivered_once(self, calls):
        obs = Observers(on_success=calls.on_success, on_failure=calls.on_failure)
        assert deliver(Success(42), obs, notifier="images") is True
        assert calls.roles() == ["success"]
        assert calls.payloads() == [42]

    def test_failure_delivered_once(self, calls):
        obs = Observers(on_success=calls.on_success, on_failure=calls.on_failure)
        assert deliver(Failure("disk full"), obs, notifier="images") is True
        assert calls.roles() == ["failure"]
        assert calls.payloads() == ["disk full"]

    def test_missing_observer_no_call(self, calls):
        assert deliver(Failure("x"), Observers(on_success=calls.on_success), notifier="images") is False
        assert calls.calls == []

    def test_observer_fault_propagates(self):
        def explode(_):
            raise RuntimeError("observer broke")

        with pytest.raises(RuntimeError, match="observer broke"):
            deliver(Success(1), Observers(on_success=explode), notifier="images")


class TestHelpers:
    def test_variant_name(self):
        assert variant_name(Success(1)) == "success"
        assert variant_name(Failure(1)) == "failure"

    def test_policy_values(self):
        assert UnobservedPolicy("skip") is UnobservedPolicy.SKIP
        assert UnobservedPolicy("run") is UnobservedPolicy.RUN
