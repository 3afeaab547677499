"""Background (thread pool) and asyncio notifiers."""

from outcome.execution.async_dispatch import AsyncNotifier, notify_async
from outcome.execution.background import BackgroundNotifier

__all__ = ["BackgroundNotifier", "AsyncNotifier", "notify_async"]
