"""
eventbus Events — Errors
==========================
Error types for the dispatch layer.

Listener failures never escape emit(). They are wrapped in
ListenerInvocationError and handed to the diagnostic channel.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Hashable

from eventbus.events.keys import describe_key

if TYPE_CHECKING:
    from eventbus.events.registry import ListenerRecord


class EventBusError(Exception):
    """Base error for event bus operations."""
    pass


class InvalidListenerError(EventBusError):
    """Callback passed to subscribe is not callable."""

    def __init__(self, event_key: Hashable, callback: Any):
        self.event_key = event_key
        self.callback = callback
        super().__init__(
            f"Listener for event {describe_key(event_key)} must be "
            f"callable, got {type(callback).__name__}."
        )


class ListenerInvocationError(EventBusError):
    """A listener raised while an event was being delivered."""

    def __init__(
        self,
        event_key: Hashable,
        listener: "ListenerRecord",
        original: BaseException,
    ):
        self.event_key = event_key
        self.listener = listener
        self.original = original
        super().__init__(
            f"Listener {listener.name} failed for event "
            f"{describe_key(event_key)}: "
            f"{type(original).__name__}: {original}"
        )
