import logging

from totp_mcp import log


def test_level_defaults_to_info(monkeypatch) -> None:
    monkeypatch.delenv(log.LOG_LEVEL_ENV, raising=False)
    assert log.level_from_env() == logging.INFO


def test_level_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv(log.LOG_LEVEL_ENV, " debug ")
    assert log.level_from_env() == logging.DEBUG


def test_unknown_level_falls_back(monkeypatch) -> None:
    monkeypatch.setenv(log.LOG_LEVEL_ENV, "chatty")
    assert log.level_from_env() == logging.INFO


def test_handler_installed_once() -> None:
    handlers = [h for h in log.logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(handlers) == 1
