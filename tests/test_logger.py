"""
Tests for the structured logger.
"""

import json
import logging
import os
import tempfile

from gpgid.logger import get_logger


class TestGetLogger:
    """Test logger setup."""

    def test_handlers_added_once(self):
        logger = get_logger("gpgid.test.once")
        get_logger("gpgid.test.once")

        assert len(logger.handlers) == 1

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("GPGID_LOG_LEVEL", "debug")

        logger = get_logger("gpgid.test.env")

        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back(self):
        logger = get_logger("gpgid.test.bogus", level="loud")

        assert logger.level == logging.INFO

    def test_json_lines_to_file(self):
        """Test that file output is one JSON object per line."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "logs", "gpgid.log")
            logger = get_logger("gpgid.test.file", level="INFO", to_file=path)

            logger.info("exported key")
            for handler in logger.handlers:
                handler.flush()

            with open(path) as fh:
                record = json.loads(fh.readline())

            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

        assert record["msg"] == "exported key"
        assert record["level"] == "INFO"
        assert record["name"] == "gpgid.test.file"
        assert record["ts"].endswith("Z")

    def test_quotes_stay_valid_json(self):
        """Test that messages with quotes and newlines still produce one JSON object."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "gpgid.log")
            logger = get_logger("gpgid.test.quotes", level="INFO", to_file=path)

            logger.error('Cannot parse "admin.gpg":\nbad packet')
            for handler in logger.handlers:
                handler.flush()

            with open(path) as fh:
                lines = fh.read().splitlines()

            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

        assert len(lines) == 1
        assert json.loads(lines[0])["msg"] == 'Cannot parse "admin.gpg":\nbad packet'
