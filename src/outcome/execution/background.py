"""Background notifier: work on a thread pool, observers on a callback thread.

The familiar mobile pattern of "do the expensive part on a background queue,
then hop back to the main queue to report" expressed with
``concurrent.futures``.

ARCHITECTURE
────────────
::

    BackgroundNotifier(max_workers=4, callback_thread=True)
      ├── .notify(work, on_success, on_failure) -> Future[Outcome | None]
      │       work ──► worker pool ──► outcome ──► callback thread ──► observer
      │                                                      └──► Future resolved
      └── .shutdown()  ─ drain both pools

The returned Future is the single-assignment cell for the handoff. It
resolves to the Outcome once the matching observer (if any) has returned,
or to ``None`` when the work was skipped because nobody was listening.
Faults from the work or the observer are set on the Future; nothing is
converted into a Failure.

Tags:
    execution, thread-pool, callbacks, outcome-notifier
"""

from __future__ import annotations

import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from outcome.core.errors import DispatcherClosedError, categorize_error
from outcome.core.logging import LogContext, get_logger
from outcome.core.result import Outcome
from outcome.core.settings import get_settings
from outcome.notify.notifier import Work, deliver, resolve_policy, run_work, should_skip
from outcome.notify.observers import Observers, UnobservedPolicy

logger = get_logger(__name__)


class BackgroundNotifier:
    """ThreadPoolExecutor-based notifier.

    Arguments left as ``None`` are read from the settings
    (``OUTCOME_MAX_WORKERS``, ``OUTCOME_CALLBACK_THREAD``,
    ``OUTCOME_UNOBSERVED_POLICY``).

    Example:
        >>> with BackgroundNotifier(max_workers=2) as notifier:
        ...     done = notifier.notify(fetch_image, on_success=show_image)
        ...     done.result(timeout=5)
    """

    def __init__(
        self,
        max_workers: int | None = None,
        *,
        callback_thread: bool | None = None,
        policy: UnobservedPolicy | str | None = None,
        name: str = "background",
    ):
        """Initialize worker and callback pools.

        Args:
            max_workers: Worker pool size for the work callables
            callback_thread: Deliver outcomes on one dedicated thread; when
                False, observers run on the worker that ran the work
            policy: Unobserved-work policy
            name: Used as thread-name prefix and in log events
        """
        if max_workers is None:
            max_workers = get_settings().max_workers
        if callback_thread is None:
            callback_thread = get_settings().callback_thread

        self.name = name
        self.policy = resolve_policy(policy)
        self.max_workers = max_workers
        self.pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=f"{name}-work")
        self.callbacks: ThreadPoolExecutor | None = (
            ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"{name}-callback")
            if callback_thread
            else None
        )
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Any, *, name: str = "background") -> BackgroundNotifier:
        return cls(
            max_workers=settings.max_workers,
            callback_thread=settings.callback_thread,
            policy=settings.unobserved_policy,
            name=name,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def notify(
        self,
        work: Work,
        on_success: Callable[[Any], Any] | None = None,
        on_failure: Callable[[Any], Any] | None = None,
    ) -> Future[Outcome[Any, Any] | None]:
        return self.notify_with(work, Observers(on_success=on_success, on_failure=on_failure))

    def notify_with(self, work: Work, observers: Observers) -> Future[Outcome[Any, Any] | None]:
        """Submit work; observers are invoked later from the callback context.

        Raises:
            DispatcherClosedError: If shutdown() was already called
        """
        dispatch_id = f"{self.name}-{uuid.uuid4().hex[:8]}"
        done: Future[Outcome[Any, Any] | None] = Future()

        with self._lock:
            if self._closed:
                raise DispatcherClosedError(self.name).with_context(dispatch_id=dispatch_id)
            if should_skip(observers, self.policy):
                logger.debug("notify_skipped", notifier=self.name, dispatch_id=dispatch_id)
                done.set_result(None)
                return done
            work_future = self.pool.submit(self._run, work, dispatch_id)
            # registered before shutdown() can observe the pool, so the
            # handoff reaches the callback pool while it still accepts work
            work_future.add_done_callback(
                lambda f: self._handoff(f, observers, done, dispatch_id)
            )
        return done

    def _run(self, work: Work, dispatch_id: str) -> Outcome[Any, Any]:
        with LogContext(notifier=self.name, dispatch_id=dispatch_id):
            return run_work(work, notifier=self.name)

    def _handoff(
        self,
        work_future: Future[Outcome[Any, Any]],
        observers: Observers,
        done: Future[Outcome[Any, Any] | None],
        dispatch_id: str,
    ) -> None:
        error = work_future.exception()
        if error is not None:
            logger.debug(
                "work_raised",
                notifier=self.name,
                dispatch_id=dispatch_id,
                category=categorize_error(error).value,
                error=repr(error),
            )
            done.set_exception(error)
            return

        result = work_future.result()
        if observers.for_outcome(result) is None or self.callbacks is None:
            self._deliver(result, observers, done, dispatch_id)
            return
        try:
            self.callbacks.submit(self._deliver, result, observers, done, dispatch_id)
        except RuntimeError as exc:
            # callback pool already shut down (shutdown(wait=False))
            done.set_exception(
                DispatcherClosedError(self.name).with_context(dispatch_id=dispatch_id)
            )
            logger.debug("handoff_refused", notifier=self.name, dispatch_id=dispatch_id, error=str(exc))

    def _deliver(
        self,
        result: Outcome[Any, Any],
        observers: Observers,
        done: Future[Outcome[Any, Any] | None],
        dispatch_id: str,
    ) -> None:
        with LogContext(notifier=self.name, dispatch_id=dispatch_id):
            try:
                deliver(result, observers, notifier=self.name)
            except Exception as exc:
                logger.debug("observer_raised", category=categorize_error(exc).value, error=repr(exc))
                done.set_exception(exc)
                return
        done.set_result(result)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and shut down both pools.

        With ``wait=True`` every notification accepted before this call has
        delivered its outcome when this returns.
        """
        with self._lock:
            self._closed = True
        self.pool.shutdown(wait=wait)
        if self.callbacks is not None:
            self.callbacks.shutdown(wait=wait)
        logger.debug("dispatcher_shutdown", notifier=self.name)

    def __enter__(self) -> BackgroundNotifier:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(wait=True)

    def __repr__(self) -> str:
        return (
            f"BackgroundNotifier(name={self.name!r}, max_workers={self.max_workers}, "
            f"policy={self.policy.value}, closed={self._closed})"
        )


__all__ = ["BackgroundNotifier"]
