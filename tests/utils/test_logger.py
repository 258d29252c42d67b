"""
Tests for logging setup.

Tests cover:
1. Bound context rendered into log lines
2. File sink creation
3. Configuration-driven setup and debug override
"""

import pytest
from loguru import logger

from memora.config import Config, LoggingConfig
from memora.utils import get_logger, setup_logging, setup_logging_from_config


@pytest.fixture(autouse=True)
def reset_sinks():
    yield
    logger.remove()


def read_log(log_dir) -> str:
    logger.complete()
    files = list(log_dir.glob("memora_*.log"))
    assert len(files) == 1
    return files[0].read_text()


class TestSetupLogging:
    """Tests for sink configuration."""

    def test_file_sink_created(self, tmp_path):
        log_dir = tmp_path / "logs"
        setup_logging(level="INFO", log_to_file=True, log_dir=str(log_dir), serialize=False)

        get_logger("memora.test").info("Store ready")

        text = read_log(log_dir)
        assert "memora.test" in text
        assert "Store ready" in text

    def test_level_filters_records(self, tmp_path):
        setup_logging(level="WARNING", log_to_file=True, log_dir=str(tmp_path), serialize=False)

        log = get_logger("memora.test")
        log.info("quiet")
        log.warning("loud")

        text = read_log(tmp_path)
        assert "quiet" not in text
        assert "loud" in text

    def test_bound_context(self, tmp_path):
        setup_logging(level="INFO", log_to_file=True, log_dir=str(tmp_path), serialize=False)

        get_logger("memora.test", session_id="net_1", user_id="user_1").info("Opened")

        assert "[session_id=net_1 user_id=user_1] - Opened" in read_log(tmp_path)

    def test_no_context_no_brackets(self, tmp_path):
        setup_logging(level="INFO", log_to_file=True, log_dir=str(tmp_path), serialize=False)

        get_logger("memora.test").info("Plain")

        assert "memora.test" in read_log(tmp_path)
        assert "[" not in read_log(tmp_path)


class TestSetupLoggingFromConfig:
    """Tests for configuration-driven setup."""

    def test_uses_logging_settings(self, tmp_path):
        config = Config(
            logging=LoggingConfig(
                level="ERROR", log_to_file=True, log_dir=str(tmp_path), serialize=False
            )
        )
        setup_logging_from_config(config)

        log = get_logger("memora.test")
        log.warning("skipped")
        log.error("kept")

        text = read_log(tmp_path)
        assert "skipped" not in text
        assert "kept" in text

    def test_debug_forces_debug_level(self, tmp_path):
        config = Config(
            debug=True,
            logging=LoggingConfig(
                level="ERROR", log_to_file=True, log_dir=str(tmp_path), serialize=False
            ),
        )
        setup_logging_from_config(config)

        get_logger("memora.test").debug("details")

        assert "details" in read_log(tmp_path)
