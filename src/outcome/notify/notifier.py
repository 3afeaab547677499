"""
Outcome notifier: run a unit of work once, tell at most one observer.

Contract::

    notify(work, on_success=None, on_failure=None) -> None

    work()        ──► Success(v) ──► on_success(v)   if supplied
                  └─► Failure(e) ──► on_failure(e)   if supplied

- If both observers are absent and the policy is ``SKIP`` the work is not
  run at all. Under ``RUN`` it runs for its side effects and the outcome is
  discarded.
- The non-matching observer is never invoked; the matching one is invoked
  exactly once.
- A Failure with no failure observer is dropped without raising.
- Exceptions raised by ``work`` or by an observer propagate unchanged. Use
  ``outcome.core.result.capture`` to route raised exceptions to
  ``on_failure`` instead.

The notifier keeps no per-call state: observers are referenced only for the
duration of the call.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from outcome.core.errors import OutcomeContractError
from outcome.core.logging import get_logger
from outcome.core.result import Outcome, is_outcome
from outcome.notify.observers import Observers, UnobservedPolicy, variant_name

logger = get_logger(__name__)

T = TypeVar("T")
E = TypeVar("E")

Work = Callable[[], Outcome[T, E]]


def resolve_policy(policy: UnobservedPolicy | str | None) -> UnobservedPolicy:
    """An explicit policy wins; None falls back to ``OUTCOME_UNOBSERVED_POLICY``."""
    if policy is None:
        from outcome.core.settings import get_settings

        return get_settings().unobserved_policy
    return UnobservedPolicy(policy)


def check_outcome(result: Any, *, notifier: str) -> Outcome[Any, Any]:
    """Reject anything that is not exactly one Success or Failure."""
    if not is_outcome(result):
        raise OutcomeContractError(result).with_context(notifier=notifier)
    logger.debug("outcome_produced", notifier=notifier, variant=variant_name(result))
    return result


def run_work(work: Work, *, notifier: str = "notify") -> Outcome[Any, Any]:
    """Run the work once and check that it produced exactly one Outcome."""
    return check_outcome(work(), notifier=notifier)


def should_skip(observers: Observers, policy: UnobservedPolicy) -> bool:
    return observers.is_empty and policy is UnobservedPolicy.SKIP


def select_observer(
    result: Outcome[Any, Any], observers: Observers, *, notifier: str
) -> Callable[[Any], Any] | None:
    """The observer matching the outcome; a missing one is logged as a drop."""
    observer = observers.for_outcome(result)
    if observer is None:
        logger.debug(f"{variant_name(result)}_dropped", notifier=notifier)
    return observer


def observed(result: Outcome[Any, Any], *, notifier: str) -> None:
    logger.debug("observer_invoked", notifier=notifier, variant=variant_name(result))


def deliver(result: Outcome[Any, Any], observers: Observers, *, notifier: str) -> bool:
    """Invoke the matching observer once; True if one was invoked."""
    observer = select_observer(result, observers, notifier=notifier)
    if observer is None:
        return False
    observer(result.payload)
    observed(result, notifier=notifier)
    return True


class OutcomeNotifier:
    """
    Synchronous notifier with a fixed unobserved-work policy.

    ``policy=None`` takes the policy from the settings when the notifier is
    built.

    Example:
        >>> notifier = OutcomeNotifier(policy=UnobservedPolicy.SKIP)
        >>> notifier.notify(lambda: Success(42), on_success=print)
        42
    """

    def __init__(
        self,
        policy: UnobservedPolicy | str | None = None,
        *,
        name: str = "notifier",
    ):
        self.policy = resolve_policy(policy)
        self.name = name

    @classmethod
    def from_settings(cls, settings: Any, *, name: str = "notifier") -> OutcomeNotifier:
        return cls(policy=settings.unobserved_policy, name=name)

    def notify(
        self,
        work: Work,
        on_success: Callable[[Any], Any] | None = None,
        on_failure: Callable[[Any], Any] | None = None,
    ) -> None:
        self.notify_with(work, Observers(on_success=on_success, on_failure=on_failure))

    def notify_with(self, work: Work, observers: Observers) -> None:
        """Like notify(), with the observers already bundled."""
        if should_skip(observers, self.policy):
            logger.debug("notify_skipped", notifier=self.name)
            return
        result = run_work(work, notifier=self.name)
        deliver(result, observers, notifier=self.name)

    def __repr__(self) -> str:
        return f"OutcomeNotifier(name={self.name!r}, policy={self.policy.value})"


def notify(
    work: Work,
    on_success: Callable[[Any], Any] | None = None,
    on_failure: Callable[[Any], Any] | None = None,
    *,
    policy: UnobservedPolicy | str | None = None,
) -> None:
    """Module-level shortcut for ``OutcomeNotifier(policy).notify(...)``."""
    OutcomeNotifier(policy=policy, name="notify").notify(work, on_success, on_failure)


__all__ = [
    "OutcomeNotifier",
    "notify",
    "resolve_policy",
    "check_outcome",
    "run_work",
    "should_skip",
    "select_observer",
    "observed",
    "deliver",
    "Work",
]
