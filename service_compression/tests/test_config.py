"""
Tests for shared configuration, errors and logging.
"""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from shared.config import DEFAULT_SECTION_PATH, get_config
from shared.errors import ConfigurationError, CompressionLayerException
from shared.logging import configure_logging, get_logger


def test_config_defaults(monkeypatch):
    """Test configuration defaults."""
    for name in ("HTTPCOMPRESS_CONFIG_FILE", "HTTPCOMPRESS_SECTION_PATH", "HTTPCOMPRESS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = get_config()

    assert config.config_file is None
    assert config.section_path == DEFAULT_SECTION_PATH
    assert config.log_level == "info"


def test_config_from_environment(monkeypatch):
    """Test configuration is read from prefixed variables."""
    monkeypatch.setenv("HTTPCOMPRESS_CONFIG_FILE", "/etc/app/web.config")
    monkeypatch.setenv("HTTPCOMPRESS_SECTION_PATH", "system.web/compression")
    monkeypatch.setenv("HTTPCOMPRESS_LOG_LEVEL", "debug")

    config = get_config()

    assert config.config_file == "/etc/app/web.config"
    assert config.section_path == "system.web/compression"
    assert config.log_level == "debug"


def test_configuration_error_response():
    """Test configuration errors convert to the standard response."""
    error = ConfigurationError("Unknown path expression type 'glob'", details={"type": "glob"})

    response = error.to_response()

    assert isinstance(error, CompressionLayerException)
    assert isinstance(error, ValueError)
    assert response.code == "CONFIGURATION_ERROR"
    assert response.message == "Unknown path expression type 'glob'"
    assert response.details == {"type": "glob"}


@pytest.fixture
def restore_logging():
    """Put structlog and the root logger back after a test configures them."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


def test_logging_configuration(restore_logging):
    """Test configure_logging sets the level and service context."""
    configure_logging("compression", "debug")

    assert structlog.is_configured()
    assert logging.getLogger().level == logging.DEBUG
    assert structlog.contextvars.get_contextvars()["service"] == "compression"

    with capture_logs() as logs:
        get_logger("compression.tests").info("Logging configured", check=True)

    assert len(logs) == 1
    assert logs[0]["event"] == "Logging configured"
    assert logs[0]["log_level"] == "info"
    assert logs[0]["check"] is True
