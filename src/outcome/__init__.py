"""outcome -- success/failure dual-observer notification.

Architecture::

    Layer 1 -- Types & errors
        core/result.py           Success / Failure / Outcome, from_bool, capture
        core/errors.py           NotifierError hierarchy
        core/logging.py          structlog over stdlib, silent until configured
        core/settings.py         NotifierSettings (OUTCOME_* env vars)

    Layer 2 -- Notification
        notify/observers.py      Observers, UnobservedPolicy
        notify/notifier.py       notify(), OutcomeNotifier

    Layer 3 -- Execution contexts
        execution/background.py       BackgroundNotifier (thread pool + callback thread)
        execution/async_dispatch.py   AsyncNotifier, notify_async

Quick start::

    from outcome import Failure, Success, notify

    def fetch_image():
        data = cache.get("cat.png")
        return Success(data) if data else Failure("not cached")

    notify(fetch_image, on_success=show, on_failure=log_error)
"""

from outcome.core.errors import (
    ConfigError,
    DispatcherClosedError,
    InvalidConfigError,
    InvalidObserverError,
    NotifierError,
    OutcomeContractError,
    UnwrapError,
)
from outcome.core.result import (
    Failure,
    Outcome,
    Success,
    capture,
    from_bool,
    from_optional,
    is_outcome,
    partition_outcomes,
)
from outcome.core.logging import configure_logging
from outcome.core.settings import get_settings
from outcome.execution.async_dispatch import AsyncNotifier, notify_async
from outcome.execution.background import BackgroundNotifier
from outcome.notify.notifier import OutcomeNotifier, notify
from outcome.notify.observers import Observers, UnobservedPolicy

__version__ = "0.1.0"

__all__ = [
    "Outcome",
    "Success",
    "Failure",
    "is_outcome",
    "from_bool",
    "from_optional",
    "capture",
    "partition_outcomes",
    "Observers",
    "UnobservedPolicy",
    "OutcomeNotifier",
    "notify",
    "BackgroundNotifier",
    "AsyncNotifier",
    "notify_async",
    "NotifierError",
    "OutcomeContractError",
    "InvalidObserverError",
    "UnwrapError",
    "DispatcherClosedError",
    "ConfigError",
    "InvalidConfigError",
    "configure_logging",
    "get_settings",
]
