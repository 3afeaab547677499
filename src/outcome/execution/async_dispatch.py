"""asyncio notifier: work off the loop, observers on the loop.

Coroutine-function work is awaited directly; plain callables run in an
executor (the loop default unless one is given) so blocking work never
stalls the loop. Whatever the work hands back is awaited while it is
awaitable, so a lambda returning a coroutine or an object with an
``async def __call__`` behaves like a coroutine function. The outcome is
then delivered on the event-loop thread. An observer may be a coroutine
function; its awaitable is awaited before ``notify`` returns.
"""

from __future__ import annotations

import asyncio
import contextvars
import inspect
import uuid
from concurrent.futures import Executor
from typing import Any, Callable

from outcome.core.logging import LogContext, get_logger
from outcome.core.result import Outcome
from outcome.notify.notifier import (
    check_outcome,
    observed,
    resolve_policy,
    select_observer,
    should_skip,
)
from outcome.notify.observers import Observers, UnobservedPolicy

logger = get_logger(__name__)


def _is_async_callable(work: Any) -> bool:
    return inspect.iscoroutinefunction(work) or inspect.iscoroutinefunction(
        getattr(work, "__call__", None)
    )


class AsyncNotifier:
    """Event-loop notifier.

    ``policy=None`` takes the policy from the settings.

    Example:
        >>> notifier = AsyncNotifier()
        >>> result = await notifier.notify(fetch_image, on_failure=show_error)
    """

    def __init__(
        self,
        executor: Executor | None = None,
        *,
        policy: UnobservedPolicy | str | None = None,
        name: str = "async",
    ):
        self.executor = executor
        self.policy = resolve_policy(policy)
        self.name = name

    @classmethod
    def from_settings(cls, settings: Any, *, executor: Executor | None = None, name: str = "async") -> AsyncNotifier:
        return cls(executor, policy=settings.unobserved_policy, name=name)

    async def notify(
        self,
        work: Callable[[], Any],
        on_success: Callable[[Any], Any] | None = None,
        on_failure: Callable[[Any], Any] | None = None,
    ) -> Outcome[Any, Any] | None:
        """Run work, deliver on the loop; returns the Outcome (None if skipped)."""
        return await self.notify_with(work, Observers(on_success=on_success, on_failure=on_failure))

    async def notify_with(self, work: Callable[[], Any], observers: Observers) -> Outcome[Any, Any] | None:
        dispatch_id = f"{self.name}-{uuid.uuid4().hex[:8]}"
        async with LogContext(notifier=self.name, dispatch_id=dispatch_id):
            if should_skip(observers, self.policy):
                logger.debug("notify_skipped", notifier=self.name)
                return None

            result = check_outcome(await self._run(work), notifier=self.name)
            observer = select_observer(result, observers, notifier=self.name)
            if observer is None:
                return result

            returned = observer(result.payload)
            if inspect.isawaitable(returned):
                await returned
            observed(result, notifier=self.name)
            return result

    async def _run(self, work: Callable[[], Any]) -> Any:
        if _is_async_callable(work):
            result = work()
        else:
            loop = asyncio.get_running_loop()
            ctx = contextvars.copy_context()
            result = await loop.run_in_executor(self.executor, ctx.run, work)
        while inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"AsyncNotifier(name={self.name!r}, policy={self.policy.value})"


async def notify_async(
    work: Callable[[], Any],
    on_success: Callable[[Any], Any] | None = None,
    on_failure: Callable[[Any], Any] | None = None,
    *,
    executor: Executor | None = None,
    policy: UnobservedPolicy | str | None = None,
) -> Outcome[Any, Any] | None:
    """Module-level shortcut for ``AsyncNotifier(...).notify(...)``."""
    notifier = AsyncNotifier(executor, policy=policy, name="notify_async")
    return await notifier.notify(work, on_success, on_failure)


__all__ = ["AsyncNotifier", "notify_async"]
