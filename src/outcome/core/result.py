"""
Outcome envelope: the tagged result of a unit of work.

A unit of work produces exactly one ``Outcome``: either ``Success(value)``
or ``Failure(error)``. Representing the result as a two-variant union (and
not as two independent callback slots reading shared state) is what makes
"never both, always exactly one" a property of the value itself.

Unlike a classic Result type the failure payload is domain-defined. It may
be an exception, but it may just as well be a string such as ``"disk full"``
or an error record; nothing here requires ``Exception``.

Manifesto:
    - **Exactly one variant:** A value is a Success or a Failure, never both
    - **Failure is data:** A declared failure is a value routed to an
      observer, not an exception unwinding the stack
    - **Faults stay faults:** Nothing here converts raised exceptions into
      Failure unless the caller asks for it with ``capture()``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Outcome[T, E]                            │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │   Success[T]    │   Failure[E]    │     Utilities           │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: E      │ • from_bool()           │
        │ • map()         │ • map_failure() │ • from_optional()       │
        │ • flat_map()    │ • or_else()     │ • capture()             │
        │ • unwrap()      │ • unwrap_or()   │ • partition_outcomes()  │
        └─────────────────┴─────────────────┴─────────────────────────┘

Usage:
    from outcome.core.result import Outcome, Success, Failure

    def fetch_image(path: str) -> Outcome[bytes, str]:
        if not os.path.exists(path):
            return Failure("not found")
        return Success(Path(path).read_bytes())

    match fetch_image("cat.png"):
        case Success(data):
            show(data)
        case Failure(reason):
            log.warning("fetch_failed", reason=reason)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from outcome.core.errors import NotifierError, UnwrapError


T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """
    Successful outcome carrying a value.

    Examples:
        >>> ok = Success(42)
        >>> ok.is_success(), ok.is_failure()
        (True, False)
        >>> Success(10).map(lambda x: x * 2).unwrap()
        20
    """

    value: T

    @property
    def payload(self) -> T:
        """The carried value (shared name with Failure.payload)."""
        return self.value

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Success."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Outcome[U, Any]:
        """Transform the value."""
        return Success(f(self.value))

    def map_failure(self, f: Callable[[Any], F]) -> Outcome[T, F]:
        """No-op for Success."""
        return self

    def flat_map(self, f: Callable[[T], Outcome[U, E]]) -> Outcome[U, E]:
        """Chain to another Outcome-returning function."""
        return f(self.value)

    def or_else(self, f: Callable[[Any], Outcome[T, F]]) -> Outcome[T, F]:
        return self

    def inspect(self, f: Callable[[T], None]) -> Outcome[T, Any]:
        """Call f with the value for side effects, return self."""
        f(self.value)
        return self

    def inspect_failure(self, f: Callable[[Any], None]) -> Outcome[T, Any]:
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"success": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    """
    Declared failure carrying a domain-defined error payload.

    ``map``/``flat_map`` pass a Failure through unchanged; ``or_else`` and
    ``unwrap_or`` are the recovery points.

    Examples:
        >>> bad = Failure("disk full")
        >>> bad.is_failure()
        True
        >>> bad.unwrap_or(b"")
        b''
        >>> Failure("x").map(lambda v: v + 1)
        Failure('x')
    """

    error: E

    @property
    def payload(self) -> E:
        """The carried error (shared name with Success.payload)."""
        return self.error

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """
        Raise instead of returning a value.

        Exceptions are re-raised as-is; any other payload is wrapped in
        ``UnwrapError`` so it can still be inspected via ``.payload``.
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapError(self.error)

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        return f(self.error)

    def map(self, f: Callable[[Any], U]) -> Outcome[U, E]:
        """No-op for Failure."""
        return self

    def map_failure(self, f: Callable[[E], F]) -> Outcome[Any, F]:
        """Transform the error payload."""
        return Failure(f(self.error))

    def flat_map(self, f: Callable[[Any], Outcome[U, E]]) -> Outcome[U, E]:
        """No-op for Failure."""
        return self

    def or_else(self, f: Callable[[E], Outcome[T, F]]) -> Outcome[T, F]:
        """Call f with the error to try recovery."""
        return f(self.error)

    def inspect(self, f: Callable[[Any], None]) -> Outcome[Any, E]:
        return self

    def inspect_failure(self, f: Callable[[E], None]) -> Outcome[Any, E]:
        """Call f with the error for side effects, return self."""
        f(self.error)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, NotifierError):
            return {"success": False, "error": self.error.to_dict()}
        if isinstance(self.error, BaseException):
            return {
                "success": False,
                "error": {
                    "error_type": type(self.error).__name__,
                    "message": str(self.error),
                },
            }
        return {"success": False, "error": self.error}

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


# Type alias for the two-variant union
Outcome = Success[T] | Failure[E]


# =============================================================================
# CONSTRUCTORS AND UTILITIES
# =============================================================================


def is_outcome(obj: Any) -> bool:
    """True if obj is a Success or a Failure."""
    return isinstance(obj, (Success, Failure))


def from_bool(condition: bool, value: T, error: E) -> Outcome[T, E]:
    """
    Create an Outcome from a success flag.

    Work that only knows *whether* it succeeded (``did_succeed = expensive()``)
    picks its variant here.

    Examples:
        >>> from_bool(True, "image", "failed")
        Success('image')
        >>> from_bool(False, "image", "failed")
        Failure('failed')
    """
    if condition:
        return Success(value)
    return Failure(error)


def from_optional(value: T | None, error: E) -> Outcome[T, E]:
    """
    Convert an optional value to an Outcome; None becomes Failure(error).

    Examples:
        >>> cache = {"cat": b"..."}
        >>> from_optional(cache.get("dog"), "cache miss")
        Failure('cache miss')
    """
    if value is None:
        return Failure(error)
    return Success(value)


def capture(
    work: Callable[[], T],
    error_mapper: Callable[[Exception], Any] | None = None,
) -> Outcome[T, Any]:
    """
    Run a plain callable and turn a raised exception into a Failure.

    The notifier never converts faults on its own; wrap work with
    ``capture`` when raised exceptions *should* reach the failure observer:

        notifier.notify(lambda: capture(load_image), on_failure=show_error)

    Args:
        work: Zero-argument callable that may raise
        error_mapper: Optional function turning the exception into the
            failure payload (e.g. ``str``)

    Returns:
        Success with the return value, or Failure with the (mapped) exception
    """
    try:
        return Success(work())
    except Exception as e:
        if error_mapper is not None:
            return Failure(error_mapper(e))
        return Failure(e)


def partition_outcomes(
    outcomes: Iterable[Outcome[T, E]],
) -> tuple[list[T], list[E]]:
    """
    Split outcomes into success values and failure payloads, order preserved.

    Examples:
        >>> partition_outcomes([Success(1), Failure("a"), Success(2)])
        ([1, 2], ['a'])
    """
    values: list[T] = []
    errors: list[E] = []
    for item in outcomes:
        match item:
            case Success(value):
                values.append(value)
            case Failure(error):
                errors.append(error)
    return values, errors


__all__ = [
    "Outcome",
    "Success",
    "Failure",
    "is_outcome",
    "from_bool",
    "from_optional",
    "capture",
    "partition_outcomes",
]
