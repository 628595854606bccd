"""
eventbus Config — Public API
==============================
"""

from eventbus.config.settings import DEFAULT_LOGGER_NAME, DispatcherConfig

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DispatcherConfig",
]
