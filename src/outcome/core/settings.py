"""Environment-driven settings for notifiers.

``NotifierSettings`` reads ``OUTCOME_*`` environment variables (and a local
``.env`` file) through pydantic-settings.

Fields
──────
unobserved_policy : "skip" leaves the work unrun when no observer is given
max_workers       : BackgroundNotifier thread-pool size
callback_thread   : Deliver background outcomes on a dedicated callback thread
log_level         : structlog level
log_json          : Force JSON (true) or console (false); unset = auto

Notifier arguments left as None read their defaults from here, as does
``configure_logging()``. An invalid value surfaces as ``InvalidConfigError``.

Examples:
    >>> NotifierSettings(unobserved_policy="run").unobserved_policy
    <UnobservedPolicy.RUN: 'run'>
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from outcome.core.errors import InvalidConfigError
from outcome.notify.observers import UnobservedPolicy

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class NotifierSettings(BaseSettings):
    """Settings shared by OutcomeNotifier, BackgroundNotifier and AsyncNotifier."""

    model_config = SettingsConfigDict(
        env_prefix="OUTCOME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Dispatch policy ──────────────────────────────────────────
    unobserved_policy: UnobservedPolicy = Field(default=UnobservedPolicy.SKIP)

    # ── Background execution ─────────────────────────────────────
    max_workers: int = Field(default=4, ge=1)
    callback_thread: bool = Field(default=True)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


_settings_cache: dict[str, NotifierSettings] = {}


def get_settings(*, force_reload: bool = False) -> NotifierSettings:
    """Load, validate, and cache a :class:`NotifierSettings` instance.

    Raises:
        InvalidConfigError: An ``OUTCOME_*`` value failed validation; the
            pydantic ValidationError is kept as ``cause``
    """
    if force_reload or "default" not in _settings_cache:
        try:
            _settings_cache["default"] = NotifierSettings()
        except ValidationError as exc:
            first = exc.errors()[0]
            key = str(first["loc"][0]) if first["loc"] else "settings"
            raise InvalidConfigError(
                key,
                first.get("input"),
                f"Invalid OUTCOME_{key.upper()}: {first['msg']}",
                cause=exc,
            ) from exc
    return _settings_cache["default"]


def clear_settings_cache() -> None:
    _settings_cache.clear()


__all__ = ["NotifierSettings", "get_settings", "clear_settings_cache"]
