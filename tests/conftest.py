"""Shared test fixtures for the Schoolgate test suite."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from schoolgate.config import PolicyConfig
from schoolgate.remote.client import OperationTable
from schoolgate.tools.catalog import OperationCatalog, smartschool_catalog
from schoolgate.tools.dispatcher import Dispatcher


class SpyRemote:
    """RemoteClient that records every call and returns canned results."""

    def __init__(self, results: dict[str, Any] | None = None, errors: dict[str, Exception] | None = None):
        self.results = results or {}
        self.errors = errors or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def call(self, operation: str, params: dict[str, Any]) -> Any:
        self.calls.append((operation, dict(params)))
        if operation in self.errors:
            raise self.errors[operation]
        return self.results.get(operation, True)

    def count(self, operation: str | None = None) -> int:
        if operation is None:
            return len(self.calls)
        return sum(1 for name, _ in self.calls if name == operation)


@pytest.fixture
def locked_config():
    """The defaults: destructive disabled, confirmation required."""
    return PolicyConfig()


@pytest.fixture
def open_config():
    return PolicyConfig(allow_destructive=True, require_confirmation=True)


@pytest.fixture
def unguarded_config():
    return PolicyConfig(allow_destructive=True, require_confirmation=False)


@pytest.fixture
def catalog() -> OperationCatalog:
    return smartschool_catalog()


@pytest.fixture
def spy():
    return SpyRemote()


@pytest.fixture
def make_dispatcher(catalog, spy):
    def _make(config: PolicyConfig, remote=None, timeout: float | None = None) -> Dispatcher:
        return Dispatcher(catalog, remote or spy, config, timeout=timeout)

    return _make


@pytest.fixture
def table_remote():
    return OperationTable()


@pytest.fixture
def make_spy():
    return SpyRemote


@pytest.fixture
def schoolgate_logs(caplog):
    """caplog wired to the schoolgate logger, which does not propagate."""
    logger = logging.getLogger("schoolgate")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="schoolgate")
    yield caplog
    logger.removeHandler(caplog.handler)
