"""Tests for the remote collaborator boundary."""

import pytest

from schoolgate.exceptions import RemoteCallError, RemoteOperationNotFoundError
from schoolgate.remote.client import OperationTable, RemoteClient


class FakeSmartschoolClient:
    def __init__(self):
        self.seen = []

    async def getCourses(self, params):
        self.seen.append(("getCourses", params))
        return ["Math", "Dutch"]

    def checkStatus(self, params):
        return "done"

    def _private(self, params):
        return "secret"

    not_callable = "value"


class TestOperationTable:
    async def test_async_handler(self):
        async def handler(params):
            return params["x"] * 2

        table = OperationTable({"double": handler})
        assert await table.call("double", {"x": 2}) == 4

    async def test_sync_handler(self):
        table = OperationTable({"echo": lambda params: params})
        assert await table.call("echo", {"a": 1}) == {"a": 1}

    async def test_missing_operation(self):
        with pytest.raises(RemoteOperationNotFoundError) as exc_info:
            await OperationTable().call("getCourses", {})
        assert isinstance(exc_info.value, RemoteCallError)
        assert exc_info.value.operation == "getCourses"
        assert "getCourses" in str(exc_info.value)

    async def test_handler_errors_propagate(self):
        def broken(params):
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            await OperationTable({"broken": broken}).call("broken", {})

    def test_add(self):
        table = OperationTable()
        table.add("ping", lambda params: "pong")
        assert "ping" in table
        assert len(table) == 1

    def test_satisfies_protocol(self):
        assert isinstance(OperationTable(), RemoteClient)


class TestFromClient:
    async def test_binds_only_listed_names(self):
        client = FakeSmartschoolClient()
        table = OperationTable.from_client(client, ["getCourses", "checkStatus"])
        assert await table.call("getCourses", {"a": 1}) == ["Math", "Dutch"]
        assert await table.call("checkStatus", {}) == "done"
        assert client.seen == [("getCourses", {"a": 1})]
        assert "_private" not in table

    def test_missing_and_non_callable_skipped(self):
        table = OperationTable.from_client(FakeSmartschoolClient(), ["getCourses", "delUser", "not_callable"])
        assert len(table) == 1
        assert "delUser" not in table
