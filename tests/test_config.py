"""Unit tests for configuration and logging setup.

Tests cover:
- RenderSettings defaults, normalization and validation
- Reading settings from GLINT_* environment variables
- setup_logging handlers and levels
"""

import logging
import logging.handlers
from pathlib import Path

import pytest

from glint import config
from glint.config import RenderSettings
from glint.logging_config import setup_logging


@pytest.fixture
def logger_name(request):
    """A logger name unique to the test, cleaned up afterwards."""
    name = f"glint.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestRenderSettings:
    """Tests for RenderSettings."""

    def test_defaults_come_from_module(self):
        """Defaults mirror the module-level constants."""
        s = RenderSettings()
        assert s.width == config.WIDTH
        assert s.height == config.HEIGHT
        assert s.max_depth == config.MAX_DEPTH
        assert s.output == config.OUTPUT

    def test_normalizes_fields(self):
        """Output becomes a Path and the level is upper-cased."""
        s = RenderSettings(output="render.ppm", log_level="debug")
        assert s.output == Path("render.ppm")
        assert s.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"width": 0}, "dimensions"),
            ({"height": -5}, "dimensions"),
            ({"max_depth": -1}, "max_depth"),
            ({"log_level": "chatty"}, "log level"),
        ],
    )
    def test_invalid_settings_raise(self, kwargs, match):
        """Invalid values are rejected on construction."""
        with pytest.raises(ValueError, match=match):
            RenderSettings(**kwargs)

    def test_from_env(self, monkeypatch):
        """GLINT_* variables override the defaults."""
        monkeypatch.setenv("GLINT_WIDTH", "64")
        monkeypatch.setenv("GLINT_HEIGHT", "32")
        monkeypatch.setenv("GLINT_MAX_DEPTH", "2")
        monkeypatch.setenv("GLINT_OUTPUT", "out/env.ppm")
        monkeypatch.setenv("GLINT_LOG_LEVEL", "warning")
        s = RenderSettings.from_env()
        assert (s.width, s.height, s.max_depth) == (64, 32, 2)
        assert s.output == Path("out/env.ppm")
        assert s.log_level == "WARNING"

    def test_from_env_validates(self, monkeypatch):
        """Bad environment values fail validation."""
        monkeypatch.setenv("GLINT_MAX_DEPTH", "-3")
        with pytest.raises(ValueError):
            RenderSettings.from_env()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler(self, logger_name):
        """A console handler is attached at the requested level."""
        logger = setup_logging(logger_name, "DEBUG")
        assert logger.level == logging.DEBUG
        stream = [h for h in logger.handlers if type(h) is logging.StreamHandler]
        assert len(stream) == 1
        assert stream[0].level == logging.DEBUG

    def test_repeated_setup_does_not_duplicate(self, logger_name):
        """Calling again only updates the level."""
        setup_logging(logger_name, "INFO")
        logger = setup_logging(logger_name, "ERROR")
        assert len(logger.handlers) == 1
        assert logger.level == logging.ERROR
        assert logger.handlers[0].level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self, logger_name):
        """Unrecognized level names mean INFO."""
        assert setup_logging(logger_name, "loud").level == logging.INFO

    def test_file_handler(self, logger_name, tmp_path):
        """A rotating file handler writes to the given file."""
        log_file = tmp_path / "logs" / "glint.log"
        logger = setup_logging(logger_name, "INFO", log_file=log_file)
        setup_logging(logger_name, "INFO", log_file=log_file)

        files = [
            h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(files) == 1

        logger.info("hello from the test")
        files[0].flush()
        assert "hello from the test" in log_file.read_text(encoding="utf-8")
