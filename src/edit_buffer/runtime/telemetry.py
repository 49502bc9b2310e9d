"""Structured logging for buffer and command operations, built on telelog.

``telelog.get_logger`` owns handler setup (console stream, rotating log
file, line format). This module layers three things on top of it:

``configure(...)`` -- choose settings from the environment or a preset
``record_event(name, ...)`` -- log ``event::<name>`` with key/value data
``span(name, ...)`` -- time a block, log its outcome, re-raise failures
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional

import telelog  # type: ignore[import]

ENV_PREFIX = "EDIT_BUFFER_"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class TelemetrySettings:
    """Arguments handed to ``telelog.get_logger`` for every engine logger."""

    logger_name: str = "edit_buffer"
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    log_format: str = "default"

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        return cls(
            logger_name=_env("LOGGER") or "edit_buffer",
            level=(_env("LOG_LEVEL") or "INFO").upper(),
            console=not _env_flag("DISABLE_CONSOLE", False),
            log_file=_env("LOG_FILE") or None,
            log_format=_env("LOG_FORMAT") or "default",
        )

    @classmethod
    def preset(cls, name: str) -> "TelemetrySettings":
        base = cls.from_env()
        key = name.lower()
        if key == "development":
            return replace(base, level="DEBUG", console=True)
        if key == "production":
            return replace(
                base,
                level="INFO",
                console=False,
                log_file=base.log_file or "edit_buffer.log",
            )
        raise ValueError(f"Unknown preset '{name}'.")


_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_ACTIVE_SETTINGS = TelemetrySettings.from_env()


def configure(
    *, settings: Optional[TelemetrySettings] = None, preset: Optional[str] = None
) -> TelemetrySettings:
    """Adopt new settings and drop cached loggers so they are rebuilt.

    With neither argument the settings are re-read from the ``EDIT_BUFFER_*``
    environment variables.
    """

    global _ACTIVE_SETTINGS
    if settings is not None and preset:
        raise ValueError("Provide either `settings` or `preset`, not both.")

    if preset:
        settings = TelemetrySettings.preset(preset)
    elif settings is None:
        settings = TelemetrySettings.from_env()

    _ACTIVE_SETTINGS = settings
    _LOGGER_CACHE.clear()
    return settings


def active_settings() -> TelemetrySettings:
    return _ACTIVE_SETTINGS


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for ``name``, building it through telelog."""

    settings = _ACTIVE_SETTINGS
    logger_name = name or settings.logger_name
    if logger_name not in _LOGGER_CACHE:
        # passing the existing logger makes telelog reset its handlers
        _LOGGER_CACHE[logger_name] = telelog.get_logger(
            logger=logging.getLogger(logger_name),
            level=settings.level,
            log_path=settings.log_file,
            terminal=settings.console,
            log_format=settings.log_format,
        )
    return _LOGGER_CACHE[logger_name]


def _level_number(level: str) -> int:
    try:
        return _LEVELS[level.lower()]
    except KeyError as exc:
        raise ValueError(f"Unsupported log level '{level}'.") from exc


def _log_kv(
    logger: logging.Logger, level: str, message: str, payload: Dict[str, Any]
) -> None:
    pairs = " ".join(f"{key}={value}" for key, value in payload.items())
    logger.log(
        _level_number(level),
        f"{message} {pairs}" if pairs else message,
        extra={"payload": dict(payload)},
    )


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _log_kv(get_logger(logger_name), level, f"event::{name}", dict(data or {}))


@dataclass
class SpanHandle:
    """Yielded by ``span``; lets the block report a skip or a failure."""

    logger: logging.Logger
    span_name: str
    component: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000.0

    def _emit(self, level: str, message: str, **extra: Any) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload.update(extra)
        _log_kv(self.logger, level, message, payload)

    def skip(self, reason: str) -> None:
        self._emit("debug", "span::skip", reason=reason)

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", reason=reason)

    def done(self) -> None:
        self._emit("debug", "span::done", elapsed_ms=f"{self.elapsed_ms:.3f}")


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time the enclosed block under ``name``.

    Success logs ``span::done`` with the elapsed time. An exception escaping
    the block logs ``span::fail`` and propagates unchanged.
    """

    handle = SpanHandle(
        logger=get_logger(logger_name),
        span_name=name,
        component=component,
        metadata={key: str(value) for key, value in (metadata or {}).items()},
    )
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    handle.done()


__all__ = [
    "SpanHandle",
    "TelemetrySettings",
    "active_settings",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
