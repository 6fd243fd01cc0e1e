"""
Unit tests for the structlog-backed log sink.
"""

import pytest
from unittest.mock import MagicMock

from pickup_catalog.log_sink import StructlogSink
from shared.errors import FetchError


class TestStructlogSink:
    """Test cases for StructlogSink."""

    @pytest.fixture
    def bound_logger(self):
        return MagicMock()

    @pytest.fixture
    def sink(self, bound_logger):
        return StructlogSink(logger=bound_logger)

    def test_log_maps_to_info(self, sink, bound_logger):
        sink.log("The list of markets is updated")

        bound_logger.info.assert_called_once_with("The list of markets is updated")

    def test_debug(self, sink, bound_logger):
        sink.debug("cache hit")

        bound_logger.debug.assert_called_once_with("cache hit")

    def test_mapping_options_become_fields(self, sink, bound_logger):
        sink.error("Error in obtaining markets", {"attempt": 1})

        bound_logger.error.assert_called_once_with("Error in obtaining markets", attempt=1)

    def test_other_options_are_nested(self, sink, bound_logger):
        sink.log("snapshot size", 42)

        bound_logger.info.assert_called_once_with("snapshot size", options=42)

    def test_exception_message(self, sink, bound_logger):
        error = FetchError("http://catalog.test", "Unexpected status 502", status_code=502)

        sink.error(error)

        bound_logger.error.assert_called_once_with("Unexpected status 502", error_type="FetchError")

    def test_default_logger(self):
        sink = StructlogSink("pickup_catalog.test")

        sink.log("structlog default sink works")
