"""
eventbus Events — Public API
==============================
In-process publish/subscribe: keys, listener registry, dispatcher.
"""

from eventbus.events.dispatcher import Dispatcher
from eventbus.events.errors import (
    EventBusError,
    InvalidListenerError,
    ListenerInvocationError,
)
from eventbus.events.keys import EventKey, EventToken
from eventbus.events.registry import UNBOUND, ListenerRecord, ListenerRegistry

__all__ = [
    "Dispatcher",
    "EventKey",
    "EventToken",
    "ListenerRecord",
    "ListenerRegistry",
    "UNBOUND",
    "EventBusError",
    "InvalidListenerError",
    "ListenerInvocationError",
]
