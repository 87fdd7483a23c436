"""Pytest configuration and fixtures."""

import logging

import pytest

from expecto.config import default_config


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset expecto loggers after each test to prevent handler collisions.

    Loggers stay registered: module-level loggers keep their parent links.
    """
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("expecto"):
            continue
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Run every test against the built-in report config."""
    monkeypatch.delenv("EXPECTO_CONFIG", raising=False)
    default_config.cache_clear()
    yield
    default_config.cache_clear()


class Spy:
    """Callable that counts its invocations and returns a fixed result."""

    def __init__(self, result=True):
        self.result = result
        self.calls = 0

    def __call__(self, value):
        self.calls += 1
        return self.result


@pytest.fixture
def spy():
    return Spy
