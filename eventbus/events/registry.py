"""
eventbus Events — Listener Registry
=====================================
Holds which listeners are subscribed to which event keys.

Rules:
- Multiple listeners per event key allowed
- The same callback may be registered again (new record each time)
- Insertion order is preserved within a key
- A key with no listeners left is pruned immediately
- A once-record is handed to at most one emit (claim)
- Reads return snapshots, never live views
- Thread-safe (one lock around the whole mapping)
- No callback is ever invoked while the lock is held
"""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Hashable, Iterable, Optional

from eventbus.events.keys import describe_key

logger = logging.getLogger("eventbus.events")


class _Unbound:
    """Marker for an omitted argument where None is a meaningful value."""

    _instance: Optional["_Unbound"] = None

    def __new__(cls) -> "_Unbound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNBOUND"

    def __bool__(self) -> bool:
        return False


UNBOUND: Any = _Unbound()


# ══════════════════════════════════════════════════════════════
# LISTENER RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(eq=False, slots=True)
class ListenerRecord:
    """
    One subscription.

    Records compare by identity: subscribing the same callback twice
    produces two independent records.
    """

    callback: Callable[..., Any]
    context: Any = None
    once: bool = False
    claimed: bool = False  # once-record already handed to an emit

    @property
    def name(self) -> str:
        return getattr(self.callback, "__qualname__", repr(self.callback))

    def matches(self, callback: Callable[..., Any], context: Any = UNBOUND) -> bool:
        """
        Callbacks match by equality (bound methods of one object are
        equal but not identical), contexts by identity. An UNBOUND
        context matches any record context.
        """
        if self.callback != callback:
            return False
        return context is UNBOUND or self.context is context

    def invoke(self, payload: Any) -> None:
        if self.context is None:
            self.callback(payload)
        else:
            self.callback(self.context, payload)


# ══════════════════════════════════════════════════════════════
# REGISTRY
# ══════════════════════════════════════════════════════════════

class ListenerRegistry:
    """
    In-memory mapping of event key to an ordered list of records.
    """

    def __init__(self, thread_safe: bool = True):
        self._listeners: dict[Hashable, list[ListenerRecord]] = {}
        self._lock = Lock() if thread_safe else contextlib.nullcontext()

    def _prune(self, key: Hashable) -> None:
        if not self._listeners.get(key, True):
            del self._listeners[key]
            logger.debug(f"Pruned empty event key {describe_key(key)}")

    def add(self, key: Hashable, record: ListenerRecord) -> None:
        with self._lock:
            self._listeners.setdefault(key, []).append(record)

    def snapshot(self, key: Hashable) -> tuple[ListenerRecord, ...]:
        """Records for a key at this instant. Empty tuple if none."""
        with self._lock:
            return tuple(self._listeners.get(key, ()))

    def claim(self, key: Hashable) -> tuple[ListenerRecord, ...]:
        """
        Delivery set for one emit.

        Once-records already claimed by another emit (concurrent or
        nested) are left out, and the once-records returned are marked
        claimed under the same lock. They stay registered until the
        caller discards them after its pass.
        """
        with self._lock:
            deliverable = tuple(
                r for r in self._listeners.get(key, ()) if not r.claimed
            )
            for record in deliverable:
                if record.once:
                    record.claimed = True
            return deliverable

    def discard(self, key: Hashable, record: ListenerRecord) -> bool:
        """Remove one record by identity. False if it was already gone."""
        return self.discard_many(key, (record,)) > 0

    def discard_many(self, key: Hashable, records: Iterable[ListenerRecord]) -> int:
        doomed = {id(record) for record in records}
        with self._lock:
            current = self._listeners.get(key)
            if not current:
                return 0
            kept = [r for r in current if id(r) not in doomed]
            removed = len(current) - len(kept)
            current[:] = kept
            self._prune(key)
            return removed

    def discard_matching(
        self,
        key: Hashable,
        callback: Callable[..., Any],
        context: Any = UNBOUND,
    ) -> int:
        with self._lock:
            current = self._listeners.get(key)
            if not current:
                return 0
            kept = [r for r in current if not r.matches(callback, context)]
            removed = len(current) - len(kept)
            current[:] = kept
            self._prune(key)
            return removed

    def drop(self, key: Hashable) -> int:
        """Remove a key and all its records. Returns how many went."""
        with self._lock:
            return len(self._listeners.pop(key, ()))

    def drop_all(self) -> int:
        with self._lock:
            removed = sum(len(records) for records in self._listeners.values())
            self._listeners.clear()
            return removed

    def count(self, key: Hashable) -> int:
        with self._lock:
            return len(self._listeners.get(key, ()))

    def total(self) -> int:
        with self._lock:
            return sum(len(records) for records in self._listeners.values())

    def keys(self) -> tuple[Hashable, ...]:
        with self._lock:
            return tuple(self._listeners)
