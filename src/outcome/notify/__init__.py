"""Synchronous outcome notification."""

from outcome.notify.notifier import OutcomeNotifier, notify
from outcome.notify.observers import Observers, UnobservedPolicy

__all__ = ["Observers", "UnobservedPolicy", "OutcomeNotifier", "notify"]
