"""Tests for the correlation-aware logger."""

import logging

import pytest

from lenient_xml.shared import ComponentLogger, get_logger


class TestComponentLogger:
    """Test context injection."""

    def test_component_defaults_to_module_name(self) -> None:
        """Test the component is the last dotted part of the name."""
        logger = get_logger("lenient_xml.tree.builder")

        assert isinstance(logger, ComponentLogger)
        assert logger.component == "builder"
        assert logger.correlation_id is None

    def test_extra_includes_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test records carry component, correlation ID and caller extras."""
        logger = get_logger("lenient_xml.test", "req-9", "scanner")

        with caplog.at_level(logging.DEBUG, logger="lenient_xml.test"):
            logger.debug("scanned", extra={"position": 4})

        record = caplog.records[-1]
        assert record.getMessage() == "scanned"
        assert record.component == "scanner"
        assert record.correlation_id == "req-9"
        assert record.position == 4

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test each helper logs at its level."""
        logger = get_logger("lenient_xml.levels")

        with caplog.at_level(logging.DEBUG, logger="lenient_xml.levels"):
            logger.debug("d")
            logger.info("i")
            logger.warning("w")
            logger.error("e", exc_info=False)

        assert [r.levelno for r in caplog.records] == [
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR
        ]

    def test_is_enabled_for(self) -> None:
        """Test level checks pass through to the wrapped logger."""
        logger = get_logger("lenient_xml.enabled")
        logger.logger.setLevel(logging.WARNING)

        assert not logger.is_enabled_for(logging.DEBUG)
        assert logger.is_enabled_for(logging.ERROR)
