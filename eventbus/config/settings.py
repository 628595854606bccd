"""
eventbus Config — Dispatcher Settings
=======================================
Construction-time options for a Dispatcher.

Settings are immutable once built. A Dispatcher created without
a config uses DispatcherConfig() defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from eventbus.events.errors import ListenerInvocationError


DEFAULT_LOGGER_NAME = "eventbus.events"


@dataclass(frozen=True)
class DispatcherConfig:
    """
    Dispatcher behaviour switches.

    error_handler receives every ListenerInvocationError after it has
    been logged. It is an extra sink, not a replacement for the log.
    """

    logger_name: str = DEFAULT_LOGGER_NAME
    thread_safe: bool = True
    log_tracebacks: bool = True
    error_handler: Optional[Callable[["ListenerInvocationError"], None]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.logger_name, str) or not self.logger_name.strip():
            raise ValueError("logger_name must be a non-empty string.")
        if self.error_handler is not None and not callable(self.error_handler):
            raise ValueError(
                f"error_handler must be callable, got "
                f"{type(self.error_handler).__name__}."
            )
