"""Tests for the loguru logging helpers."""

import logging
import sys

from loguru import logger
from pydantic import SecretStr
import pytest

from podcaster.config import (
    configure_sqlalchemy_logging,
    get_logger,
    log_startup_info,
    settings,
    setup_loguru_logger,
)


@pytest.fixture
def captured():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


class TestLogging:
    def test_get_logger_binds_module_and_service(self, captured):
        get_logger("podcaster.tests").info("hello")

        record = captured[-1]
        assert record["message"] == "hello"
        assert record["extra"]["module"] == "podcaster.tests"
        assert record["extra"]["service"] == "podcaster"

    def test_structured_fields_are_kept_in_extra(self, captured):
        get_logger(__name__).info("Podcast created", podcast_id=5)

        assert captured[-1]["extra"]["podcast_id"] == 5

    def test_sqlalchemy_warnings_are_forwarded(self, captured):
        configure_sqlalchemy_logging()

        logging.getLogger("sqlalchemy.pool").warning("pool overflow")

        forwarded = [r for r in captured if r["message"] == "pool overflow"]
        assert forwarded
        assert forwarded[0]["level"].name == "WARNING"
        assert forwarded[0]["extra"]["module"] == "sqlalchemy.pool"

    def test_sqlalchemy_info_is_filtered(self, captured):
        configure_sqlalchemy_logging()

        logging.getLogger("sqlalchemy.engine").info("SELECT 1")

        assert not any(r["message"] == "SELECT 1" for r in captured)


class TestSetup:
    def test_file_sink_receives_startup_info(self, tmp_path, monkeypatch):
        log_file = tmp_path / "logs" / "podcaster.log"
        monkeypatch.setattr(settings.logging, "log_file", log_file)
        monkeypatch.setattr(settings.logging, "real_time_debug", True)
        monkeypatch.setattr(settings.security, "private_key", SecretStr("hidden-key"))

        try:
            setup_loguru_logger(verbose=True)
            log_startup_info()
        finally:
            logger.remove()
            logger.add(sys.stderr)

        contents = log_file.read_text()
        assert "Podcaster service layer" in contents
        assert "PRIVATE_KEY" in contents
        assert "hidden-key" not in contents
