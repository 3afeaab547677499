"""
Optional success/failure observers passed explicitly at call time.

An ``Observers`` value bundles the two optional handlers for a single
notify call. Absence is represented by ``None``, never by a do-nothing
closure, so "nobody is listening" is something the notifier can see and act
on (see ``UnobservedPolicy``).

Examples:
    Explicit options:

    >>> obs = Observers(on_success=print)
    >>> obs.is_empty
    False

    Builder style:

    >>> obs = Observers().with_failure(print).with_success(print)
    >>> obs.for_outcome(Failure("x")) is print
    True
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from outcome.core.errors import InvalidObserverError, OutcomeContractError
from outcome.core.result import Failure, Outcome, Success

T = TypeVar("T")
E = TypeVar("E")


class UnobservedPolicy(str, Enum):
    """What to do with the work when neither observer was supplied."""

    SKIP = "skip"  # return without running the work
    RUN = "run"    # run the work anyway, for its side effects


def _check_observer(role: str, observer: Any) -> None:
    if observer is not None and not callable(observer):
        raise InvalidObserverError(role, observer)


@dataclass(frozen=True, slots=True)
class Observers(Generic[T, E]):
    """The pair of optional observers for one notification."""

    on_success: Callable[[T], Any] | None = None
    on_failure: Callable[[E], Any] | None = None

    def __post_init__(self) -> None:
        _check_observer("on_success", self.on_success)
        _check_observer("on_failure", self.on_failure)

    @property
    def is_empty(self) -> bool:
        return self.on_success is None and self.on_failure is None

    def with_success(self, observer: Callable[[T], Any] | None) -> Observers[T, E]:
        return replace(self, on_success=observer)

    def with_failure(self, observer: Callable[[E], Any] | None) -> Observers[T, E]:
        return replace(self, on_failure=observer)

    def for_outcome(self, result: Outcome[T, E]) -> Callable[[Any], Any] | None:
        """Return the observer matching the outcome's variant, or None."""
        if isinstance(result, Success):
            return self.on_success
        if isinstance(result, Failure):
            return self.on_failure
        raise OutcomeContractError(result)


def variant_name(result: Outcome[Any, Any]) -> str:
    return "success" if isinstance(result, Success) else "failure"


__all__ = ["Observers", "UnobservedPolicy", "variant_name"]
