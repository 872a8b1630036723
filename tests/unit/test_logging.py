"""Tests for logging helpers."""
import asyncio
import logging

import pytest

from alidrive import setup_logging
from alidrive.core.logging import get_logger
from alidrive.core.upload import UploadCoordinator, UploadConfig

from conftest import session_response


class TestLogging:
    """Test suite for logger configuration."""

    @pytest.fixture(autouse=True)
    def restore_levels(self):
        names = ['alidrive', 'alidrive.upload.negotiator', 'alidrive.upload.part']
        saved = {name: logging.getLogger(name).level for name in names}
        yield
        for name, level in saved.items():
            logging.getLogger(name).setLevel(level)

    def test_get_logger_propagates(self):
        """Test loggers propagate to root."""
        logger = get_logger('alidrive.test')

        assert logger.name == 'alidrive.test'
        assert logger.propagate is True

    def test_setup_logging_sets_module_levels(self):
        """Test setup_logging sets package logger levels."""
        setup_logging(logging.DEBUG)

        assert logging.getLogger('alidrive').level == logging.DEBUG
        assert logging.getLogger('alidrive.upload.negotiator').level == logging.DEBUG
        assert logging.getLogger('alidrive.upload.part').level == logging.DEBUG

    def test_negotiator_logs_rapid_upload(self, caplog, fake_api, temp_dir, sample_data):
        """Test rapid upload is logged at info level."""
        fake_api.create_responses = [session_response(rapid=True)]
        coordinator = UploadCoordinator(fake_api, 'drive-1', UploadConfig(temp_dir=temp_dir))

        with caplog.at_level(logging.INFO, logger='alidrive.upload.negotiator'):
            asyncio.run(coordinator.upload(sample_data, name='x.bin'))

        assert "Rapid upload confirmed for x.bin" in caplog.text
