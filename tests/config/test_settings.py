"""
Tests for eventbus.config — DispatcherConfig.
"""

import pytest

from eventbus import Dispatcher
from eventbus.config import DEFAULT_LOGGER_NAME, DispatcherConfig


class TestDispatcherConfig:
    def test_defaults(self):
        config = DispatcherConfig()
        assert config.logger_name == DEFAULT_LOGGER_NAME == "eventbus.events"
        assert config.thread_safe is True
        assert config.log_tracebacks is True
        assert config.error_handler is None

    def test_frozen_immutability(self):
        config = DispatcherConfig()
        with pytest.raises(AttributeError):
            config.thread_safe = False

    def test_empty_logger_name_rejected(self):
        with pytest.raises(ValueError, match="logger_name"):
            DispatcherConfig(logger_name="  ")

    def test_non_callable_error_handler_rejected(self):
        with pytest.raises(ValueError, match="error_handler must be callable"):
            DispatcherConfig(error_handler="log")

    def test_dispatcher_uses_default_config(self):
        assert Dispatcher().config == DispatcherConfig()

    def test_dispatcher_keeps_given_config(self):
        config = DispatcherConfig(logger_name="app.bus", thread_safe=False)
        assert Dispatcher(config).config is config
