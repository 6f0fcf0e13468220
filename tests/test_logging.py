"""
Logging Tests - engine logger setup and level control.

Dependencies
------------
pytest
"""

import logging

from common.logging_config import DEFAULT_FORMAT, get_logger, set_level
from geoloc.polyconic import Polyconic


class TestLogging:

    def test_single_handler(self):
        logger = get_logger("geoloc.test_handler")
        get_logger("geoloc.test_handler")
        assert len(logger.handlers) == 1
        assert logger.handlers[0].formatter._fmt == DEFAULT_FORMAT

    def test_set_level(self):
        logger = get_logger("geoloc.test_level")
        try:
            set_level(logging.DEBUG)
            assert logger.level == logging.DEBUG
            assert logging.getLogger("geoloc.polyconic").level == logging.DEBUG
        finally:
            set_level(logging.INFO)
        assert logger.level == logging.INFO

    def test_construction_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="geoloc.polyconic"):
            Polyconic(10.0, 20.0)
        assert any("Constructed Polyconic" in record.message for record in caplog.records)
