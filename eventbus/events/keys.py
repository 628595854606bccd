"""
eventbus Events — Event Keys
==============================
Listeners are grouped under an event key.

Two kinds of key are supported:
- plain strings, equal by value ("user.saved" == "user.saved")
- EventToken instances, equal by identity only

Tokens play the role of private, collision-free keys: two tokens
with the same description are still different keys.
"""

from __future__ import annotations

from typing import Hashable, Union


class EventToken:
    """
    Unique event key.

    Equality and hashing fall back to object identity, so every
    token is distinct. The description is for humans and logs only.
    """

    __slots__ = ("_description",)

    def __init__(self, description: str = "") -> None:
        self._description = description

    @property
    def description(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"EventToken({self._description!r})"

    def __str__(self) -> str:
        return self.__repr__()


EventKey = Union[str, EventToken]


def describe_key(key: Hashable) -> str:
    """Render a key for log messages."""
    if isinstance(key, str):
        return repr(key)
    return str(key)
