"""
eventbus Events — Dispatcher
==============================
Synchronous in-process publish/subscribe.

Emit behavior:
1. Claim the listeners registered for the key (snapshot; once-listeners
   are marked so no other emit delivers to them)
2. Invoke them in registration order, inline
3. Catch listener exceptions per listener
4. Log the failure (and forward it to the configured error handler)
5. Continue to the next listener
6. After the pass, remove every once-listener that was delivered to
7. Prune the key if nothing is left

A listener failure must NOT:
- Stop delivery to later listeners
- Keep a once-listener subscribed
- Reach the caller of emit()

Context binding: a listener subscribed with a context is called as
callback(context, payload); without one as callback(payload).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Optional

from eventbus.config.settings import DispatcherConfig
from eventbus.events.errors import InvalidListenerError, ListenerInvocationError
from eventbus.events.keys import describe_key
from eventbus.events.registry import UNBOUND, ListenerRecord, ListenerRegistry

Callback = Callable[..., Any]
Unsubscribe = Callable[[], None]


class Dispatcher:
    """
    Event bus instance.

    Construct one and pass it to whoever needs it; there is no
    module-level shared dispatcher.
    """

    def __init__(self, config: Optional[DispatcherConfig] = None):
        self._config = config or DispatcherConfig()
        self._registry = ListenerRegistry(thread_safe=self._config.thread_safe)
        self._logger = logging.getLogger(self._config.logger_name)

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    # ── Subscription ─────────────────────────────────────────

    def subscribe(
        self, key: Hashable, callback: Callback, context: Any = None
    ) -> Unsubscribe:
        """
        Register a persistent listener.

        Returns a handle that removes exactly this subscription.
        Calling the handle more than once is harmless.
        """
        return self._register(key, callback, context, once=False)

    def subscribe_once(
        self, key: Hashable, callback: Callback, context: Any = None
    ) -> Unsubscribe:
        """Register a listener that is dropped after its first delivery."""
        return self._register(key, callback, context, once=True)

    def _register(
        self, key: Hashable, callback: Callback, context: Any, once: bool
    ) -> Unsubscribe:
        if not callable(callback):
            raise InvalidListenerError(key, callback)

        record = ListenerRecord(callback=callback, context=context, once=once)
        self._registry.add(key, record)
        self._logger.debug(
            f"Listener subscribed: {record.name} → {describe_key(key)}"
            f"{' (once)' if once else ''}"
        )

        def unsubscribe() -> None:
            if self._registry.discard(key, record):
                self._logger.debug(
                    f"Listener unsubscribed: {record.name} ← {describe_key(key)}"
                )

        return unsubscribe

    def off(
        self,
        key: Hashable,
        callback: Optional[Callback] = None,
        context: Any = UNBOUND,
    ) -> None:
        """
        Remove listeners.

        off(key)                     every listener under key
        off(key, callback)           that callback, whatever its context
        off(key, callback, context)  only that callback/context pair
        """
        if callback is None:
            removed = self._registry.drop(key)
        else:
            removed = self._registry.discard_matching(key, callback, context)

        if removed:
            self._logger.debug(
                f"Removed {removed} listener(s) from {describe_key(key)}"
            )

    def clear(self, key: Hashable = UNBOUND) -> None:
        """Remove one key with all its listeners, or everything."""
        if key is UNBOUND:
            removed = self._registry.drop_all()
            self._logger.debug(f"Cleared all events ({removed} listener(s))")
        else:
            removed = self._registry.drop(key)
            self._logger.debug(
                f"Cleared {describe_key(key)} ({removed} listener(s))"
            )

    # ── Delivery ─────────────────────────────────────────────

    def emit(self, key: Hashable, payload: Any = None) -> None:
        """
        Deliver payload to every listener of key.

        Listeners added while the emit is in progress only see later
        emissions. This method NEVER raises because of a listener.
        """
        listeners = self._registry.claim(key)
        if not listeners:
            self._logger.debug(f"No listeners for event {describe_key(key)}")
            return

        failed = 0
        for listener in listeners:
            try:
                listener.invoke(payload)
            except Exception as exc:
                failed += 1
                self._report(ListenerInvocationError(key, listener, exc))

        spent = [listener for listener in listeners if listener.once]
        if spent:
            self._registry.discard_many(key, spent)

        self._logger.debug(
            f"Emitted {describe_key(key)}: {len(listeners)} listener(s), "
            f"{failed} failed, {len(spent)} once-listener(s) retired"
        )

    def _report(self, error: ListenerInvocationError) -> None:
        error.__cause__ = error.original
        self._logger.error(
            f"Error in event listener for {describe_key(error.event_key)}: "
            f"{error.listener.name} raised "
            f"{type(error.original).__name__}: {error.original}",
            exc_info=error.original if self._config.log_tracebacks else None,
        )

        handler = self._config.error_handler
        if handler is None:
            return
        try:
            handler(error)
        except Exception as exc:
            self._logger.error(
                f"Error handler failed while reporting a listener error "
                f"for {describe_key(error.event_key)}: {exc}",
                exc_info=self._config.log_tracebacks,
            )

    # ── Introspection ────────────────────────────────────────

    def listener_count(self, key: Hashable) -> int:
        return self._registry.count(key)

    def has_listeners(self, key: Hashable) -> bool:
        return self.listener_count(key) > 0

    def event_keys(self) -> tuple[Hashable, ...]:
        """Keys with at least one listener, as a snapshot."""
        return self._registry.keys()

    def __len__(self) -> int:
        return self._registry.total()

    def __contains__(self, key: Hashable) -> bool:
        return self.has_listeners(key)

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{describe_key(key)}: {self._registry.count(key)}"
            for key in self._registry.keys()
        )
        return f"Dispatcher({{{counts}}})"
