"""Tests for logging setup."""

import logging

import isoplot.log as log_module


class TestSetupLogging:
    def test_idempotent(self, monkeypatch):
        monkeypatch.setattr(log_module, "_LOGGER_CONFIGURED", False)
        logger = logging.getLogger("isoplot")
        before = list(logger.handlers)
        try:
            log_module.setup_logging(logging.DEBUG)
            log_module.setup_logging(logging.DEBUG)
            added = [h for h in logger.handlers if h not in before]
            assert len(added) == 1
            assert logger.level == logging.DEBUG
        finally:
            for h in logger.handlers:
                if h not in before:
                    logger.removeHandler(h)
            logger.setLevel(logging.NOTSET)

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("ISOPLOT_LOG_LEVEL", "warning")
        assert log_module._level_from_env() == logging.WARNING

    def test_unknown_env_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("ISOPLOT_LOG_LEVEL", "chatty")
        assert log_module._level_from_env() == logging.INFO
