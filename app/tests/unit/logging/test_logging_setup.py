"""Unit tests for glossa.logging.setup module.

Tests cover:
- configure_logging function
- get_logger and get_module_logger functions
- Test logging suppression in test environment
"""

import importlib
import logging
from unittest.mock import Mock

import pytest
import structlog

import glossa.logging.setup
from glossa.configuration import Settings
from glossa.logging.setup import (
    _is_test_environment,
    configure_logging,
    get_logger,
    get_module_logger,
)


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.is_production = False
    return settings


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_returns_bound_logger(self, mock_settings):
        """configure_logging returns a usable logger."""
        logger = configure_logging(settings=mock_settings)

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")

    def test_suppresses_output_in_tests(self, mock_settings):
        """The root logger is silenced during tests."""
        configure_logging(settings=mock_settings, log_level="DEBUG", is_production=True)

        assert logging.root.level > logging.CRITICAL

    def test_idempotent(self, mock_settings):
        """Multiple configure_logging calls are safe."""
        assert configure_logging(settings=mock_settings) is not None
        assert configure_logging(settings=mock_settings) is not None


@pytest.mark.unit
class TestGetLoggers:
    """Test suite for logger accessors."""

    def test_get_logger_with_name(self):
        """get_logger binds the given name."""
        logger = get_logger("glossa.test")
        logger.info("test_event", value=1)

        assert logger is not None

    def test_get_logger_without_name(self):
        """get_logger detects the calling module."""
        assert get_logger() is not None

    def test_get_module_logger_binds_context(self):
        """get_module_logger binds component and module path."""
        logger = get_module_logger()
        logger.warning("test_event")

        assert logger is not None

    def test_module_logger_follows_later_configuration(self):
        """A logger obtained before configuration uses the config active at first use."""
        logger = get_module_logger()

        with structlog.testing.capture_logs() as captured:
            logger.info("late_event")

        assert captured[0]["event"] == "late_event"
        assert captured[0]["module_path"] == __name__
        assert captured[0]["component"] == __name__.split(".")[-1]


@pytest.fixture
def host_structlog_config():
    """Install a host application's structlog config and restore the previous one."""
    previous = structlog.get_config()
    processors = [structlog.processors.KeyValueRenderer()]
    structlog.configure(processors=processors)
    yield processors
    structlog.configure(**previous)


@pytest.mark.unit
class TestImportSideEffects:
    """Importing glossa must not configure logging."""

    def test_import_keeps_host_structlog_config(self, host_structlog_config):
        """Module loggers leave the host's processors in place."""
        importlib.reload(glossa.logging.setup)
        glossa.logging.setup.get_module_logger().info("test_event")

        assert structlog.get_config()["processors"] == host_structlog_config

    def test_import_keeps_root_logger_level(self):
        """Loading the logging module leaves the root logger alone."""
        previous = logging.root.level
        logging.root.setLevel(logging.WARNING)
        try:
            importlib.reload(glossa.logging.setup)

            assert logging.root.level == logging.WARNING
        finally:
            logging.root.setLevel(previous)

    def test_import_does_not_read_settings(self, monkeypatch):
        """Invalid settings in the environment do not break loading."""
        monkeypatch.setenv("TRANSLATION_CACHE_SIZE", "0")

        importlib.reload(glossa.logging.setup)

        assert glossa.logging.setup.get_logger("glossa.test") is not None
