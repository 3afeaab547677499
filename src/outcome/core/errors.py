"""
Structured error types for the notifier.

Only misuse of the notifier itself is reported through these types: a work
callable that returns something other than an Outcome, an observer that is
not callable, a dispatcher used after shutdown, bad configuration. Faults
raised *inside* the work or an observer are never wrapped; they reach the
caller exactly as they were raised.

Manifesto:
    - **Two channels, kept apart:** ``Failure(e)`` is data routed to the
      failure observer; a NotifierError is a programming or setup mistake
    - **Rich context:** Errors carry the notifier name, outcome variant and
      observer role for structured logging
    - **Chaining:** ``cause`` is preserved as ``__cause__``

Architecture:
    ::

        NotifierError
        ├── OutcomeContractError     work returned a non-Outcome
        ├── InvalidObserverError     observer is neither None nor callable
        ├── UnwrapError              unwrap() on a Failure with a plain payload
        ├── DispatchError            background/async dispatch problems
        │   └── DispatcherClosedError
        └── ConfigError
            └── InvalidConfigError

Examples:
    >>> err = OutcomeContractError("work returned int").with_context(notifier="images")
    >>> err.to_dict()["context"]
    {'notifier': 'images'}

Tags:
    errors, error-handling, outcome-notifier
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Classification used in logs and ``to_dict()`` output."""

    CONTRACT = "CONTRACT"         # Work broke the exactly-one-outcome contract
    OBSERVER = "OBSERVER"         # Observer argument misuse
    DISPATCH = "DISPATCH"         # Executor lifecycle, handoff
    CONFIG = "CONFIG"             # Settings and policies
    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata attached to a NotifierError.

    Attributes:
        notifier: Name of the notifier that raised
        variant: Outcome variant involved ("success" / "failure")
        observer: Observer role ("on_success" / "on_failure")
        dispatch_id: Identifier of a background or async dispatch
        metadata: Additional key-value pairs
    """

    notifier: str | None = None
    variant: str | None = None
    observer: str | None = None
    dispatch_id: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["notifier", "variant", "observer", "dispatch_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class NotifierError(Exception):
    """
    Base exception for notifier misuse.

    Subclasses set ``default_category``; callers may override it per
    instance. ``with_context()`` adds metadata fluently after creation.

    Examples:
        >>> NotifierError("boom").category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> NotifierError("boom", category=ErrorCategory.DISPATCH).category.value
        'DISPATCH'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> NotifierError:
        """
        Add context to this error (fluent API).

        Usage:
            raise InvalidObserverError("not callable").with_context(
                observer="on_success",
                notifier="images",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONTRACT / OBSERVER ERRORS
# =============================================================================


class OutcomeContractError(NotifierError, TypeError):
    """The work callable returned something other than Success or Failure."""

    default_category = ErrorCategory.CONTRACT

    def __init__(self, returned: Any, message: str | None = None):
        self.returned = returned
        super().__init__(
            message
            or f"Work must return Success or Failure, got {type(returned).__name__}"
        )


class InvalidObserverError(NotifierError, TypeError):
    """An observer argument was neither None nor callable."""

    default_category = ErrorCategory.OBSERVER

    def __init__(self, role: str, value: Any):
        self.role = role
        self.value = value
        super().__init__(
            f"{role} must be callable or None, got {type(value).__name__}",
            context=ErrorContext(observer=role),
        )


class UnwrapError(NotifierError):
    """
    unwrap() was called on a Failure whose payload is not an exception.

    The original payload is kept on ``payload``.
    """

    default_category = ErrorCategory.CONTRACT

    def __init__(self, payload: Any):
        self.payload = payload
        super().__init__(
            f"Called unwrap() on Failure({payload!r})",
            context=ErrorContext(variant="failure"),
        )


# =============================================================================
# DISPATCH ERRORS
# =============================================================================


class DispatchError(NotifierError):
    """Problem handing work or an outcome between execution contexts."""

    default_category = ErrorCategory.DISPATCH


class DispatcherClosedError(DispatchError):
    """notify() was called on a dispatcher after shutdown()."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Dispatcher {name!r} is shut down",
            context=ErrorContext(notifier=name),
        )


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(NotifierError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(
        self,
        key: str,
        value: Any,
        message: str | None = None,
        *,
        cause: Exception | None = None,
    ):
        self.key = key
        self.value = value
        super().__init__(
            message or f"Invalid configuration for {key}: {value!r}",
            context=ErrorContext(metadata={"key": key}),
            cause=cause,
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: BaseException) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, NotifierError):
        return error.category
    if isinstance(error, TypeError):
        return ErrorCategory.CONTRACT
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "NotifierError",
    "OutcomeContractError",
    "InvalidObserverError",
    "UnwrapError",
    "DispatchError",
    "DispatcherClosedError",
    "ConfigError",
    "InvalidConfigError",
    "categorize_error",
]
