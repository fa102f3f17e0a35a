"""Tests for logging configuration."""

from __future__ import annotations

import io
import logging

from mdbundle.utils.logging_config import configure_logging, get_logger


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_extra_fields_are_appended(self) -> None:
        """Fields passed through extra= show up as key=value pairs."""
        stream = io.StringIO()
        configure_logging(logging.INFO, stream=stream)

        get_logger("mdbundle.test").info("Wrote bundle", extra={"destination": "build", "files": 2})

        assert stream.getvalue().strip() == "INFO mdbundle.test: Wrote bundle destination=build files=2"

    def test_level_filters_records(self) -> None:
        """Records below the configured level are dropped."""
        stream = io.StringIO()
        configure_logging(logging.ERROR, stream=stream)

        get_logger("mdbundle.test").warning("hidden")

        assert stream.getvalue() == ""

    def test_reconfiguring_replaces_handler(self) -> None:
        """Calling configure_logging twice does not duplicate output."""
        stream = io.StringIO()
        configure_logging(logging.INFO, stream=io.StringIO())
        configure_logging(logging.INFO, stream=stream)

        get_logger("mdbundle.test").info("once")

        assert stream.getvalue().count("once") == 1
