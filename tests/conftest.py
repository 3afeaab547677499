"""
Shared pytest fixtures for outcome tests.

- ``calls``: a recorder observers append to, with the thread they ran on
- ``clean_env``: strips OUTCOME_* variables and the settings cache (autouse)
"""

import sys
import threading
from pathlib import Path

import pytest

# Ensure outcome package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from outcome.core.settings import clear_settings_cache


class CallRecorder:
    """Collects (role, payload, thread name) for every observer call."""

    def __init__(self):
        self.calls: list[tuple[str, object, str]] = []
        self._lock = threading.Lock()

    def observer(self, role: str):
        def _record(payload):
            with self._lock:
                self.calls.append((role, payload, threading.current_thread().name))
        return _record

    @property
    def on_success(self):
        return self.observer("success")

    @property
    def on_failure(self):
        return self.observer("failure")

    def roles(self) -> list[str]:
        return [role for role, _, _ in self.calls]

    def payloads(self) -> list[object]:
        return [payload for _, payload, _ in self.calls]


@pytest.fixture
def calls() -> CallRecorder:
    return CallRecorder()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No OUTCOME_* env vars, no stray .env file, empty settings cache.

    Autouse: notifiers built without explicit arguments read their defaults
    from the settings, so no test may see the developer's environment.
    """
    import os

    for key in list(os.environ):
        if key.startswith("OUTCOME_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()
