"""
eventbus — Public API
=======================
Synchronous in-process event dispatcher.

    bus = Dispatcher()
    unsubscribe = bus.subscribe("greet", print)
    bus.emit("greet", "hi")
    unsubscribe()
"""

from eventbus.config import DispatcherConfig
from eventbus.events import (
    UNBOUND,
    Dispatcher,
    EventBusError,
    EventKey,
    EventToken,
    InvalidListenerError,
    ListenerInvocationError,
)

__all__ = [
    "Dispatcher",
    "DispatcherConfig",
    "EventKey",
    "EventToken",
    "UNBOUND",
    "EventBusError",
    "InvalidListenerError",
    "ListenerInvocationError",
]
