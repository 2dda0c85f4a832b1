"""
Settings and Logging Tests
"""

import logging

import pytest

from app.core.config import DEFAULT_SECRET_KEY, Settings, insecure_settings_warnings
from app.core.logging import QUIET_LOGGERS, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    quiet_levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
        for name, quiet_level in quiet_levels.items():
            logging.getLogger(name).setLevel(quiet_level)


class TestSetupLogging:
    def test_level_and_format_are_applied(self, restore_root_logger):
        setup_logging("debug", "%(levelname)s:%(message)s", "%H:%M")

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        formatter = root.handlers[0].formatter
        assert formatter._fmt == "%(levelname)s:%(message)s"
        assert formatter.datefmt == "%H:%M"

        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
        assert formatter.format(record) == "INFO:hello"

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging("LOUD", "%(message)s")
        assert restore_root_logger.level == logging.INFO

    def test_library_loggers_quiet_unless_debug(self, restore_root_logger):
        setup_logging("INFO", "%(message)s")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

        setup_logging("DEBUG", "%(message)s")
        assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG

    def test_settings_drive_format(self, restore_root_logger):
        config = Settings(LOG_LEVEL="WARNING", LOG_FORMAT="[%(name)s] %(message)s")
        setup_logging(config.LOG_LEVEL, config.LOG_FORMAT, config.LOG_DATE_FORMAT)

        assert restore_root_logger.level == logging.WARNING
        assert restore_root_logger.handlers[0].formatter._fmt == "[%(name)s] %(message)s"


class TestInsecureSettings:
    def test_default_secret_key_is_reported(self):
        config = Settings(SECRET_KEY=DEFAULT_SECRET_KEY, SESSION_HTTPS_ONLY=True)

        warnings = insecure_settings_warnings(config)

        assert len(warnings) == 1
        assert "SECRET_KEY" in warnings[0]

    def test_plain_http_cookie_is_reported(self):
        config = Settings(SECRET_KEY="s3cret", SESSION_HTTPS_ONLY=False)

        warnings = insecure_settings_warnings(config)

        assert len(warnings) == 1
        assert "SESSION_HTTPS_ONLY" in warnings[0]

    def test_hardened_settings_are_quiet(self):
        config = Settings(SECRET_KEY="s3cret", SESSION_HTTPS_ONLY=True)
        assert insecure_settings_warnings(config) == []

    def test_user_store_is_validated(self):
        with pytest.raises(ValueError):
            Settings(USER_STORE="ldap")
