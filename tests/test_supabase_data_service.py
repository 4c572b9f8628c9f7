"""Supabase data service against a recording stand-in for the PostgREST query builder."""
from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from typing import Any, List, Optional

import httpx
import pytest
from postgrest.exceptions import APIError

from bizadmin.services.data_service import DataServiceError, SupabaseDataService


class RecordingQuery:
    def __init__(self, client: "RecordingClient", table: str) -> None:
        self.client = client
        self.ops: List[tuple] = [("table", table)]
        client.queries.append(self)

    def select(self, columns: str) -> "RecordingQuery":
        self.ops.append(("select", columns))
        return self

    def eq(self, column: str, value: Any) -> "RecordingQuery":
        self.ops.append(("eq", column, value))
        return self

    def insert(self, rows: Any) -> "RecordingQuery":
        self.ops.append(("insert", rows))
        return self

    def update(self, payload: Any) -> "RecordingQuery":
        self.ops.append(("update", payload))
        return self

    def delete(self) -> "RecordingQuery":
        self.ops.append(("delete",))
        return self

    async def execute(self):
        if self.client.error is not None:
            raise self.client.error
        return SimpleNamespace(data=self.client.data)


class RecordingPostgrest:
    def __init__(self) -> None:
        self.closed = 0

    async def aclose(self) -> None:
        self.closed += 1


class RecordingClient:
    def __init__(self, data: Optional[list] = None, error: Optional[Exception] = None) -> None:
        self.data = data if data is not None else []
        self.error = error
        self.queries: List[RecordingQuery] = []
        self.postgrest = RecordingPostgrest()

    def table(self, name: str) -> RecordingQuery:
        return RecordingQuery(self, name)


@pytest.mark.asyncio
async def test_select_all_returns_rows():
    client = RecordingClient(data=[{"code": 1, "name": "Electrician"}])
    service = SupabaseDataService("https://example.supabase.co", "key", client=client)

    assert await service.select_all("categ") == [{"code": 1, "name": "Electrician"}]
    assert client.queries[0].ops == [("table", "categ"), ("select", "*")]


@pytest.mark.asyncio
async def test_select_by_key_filters_on_key_column():
    client = RecordingClient(data=[])
    service = SupabaseDataService("https://example.supabase.co", "key", client=client)

    assert await service.select_by_key("job", "code", 4) is None
    assert client.queries[0].ops[-1] == ("eq", "code", 4)


@pytest.mark.asyncio
async def test_insert_sends_json_ready_row_and_returns_stored_row():
    client = RecordingClient(data=[{"code": 9, "ref": "PO-9", "cost": 12.5}])
    service = SupabaseDataService("https://example.supabase.co", "key", client=client)

    created = await service.insert("purchase_order", {"ref": "PO-9", "cost": Decimal("12.5")})

    assert created["code"] == 9
    op, rows = client.queries[0].ops[-1]
    assert op == "insert"
    assert rows[0]["ref"] == "PO-9"
    assert not isinstance(rows[0]["cost"], Decimal)


@pytest.mark.asyncio
async def test_update_and_delete_filter_by_key():
    client = RecordingClient(data=[{"code": 2, "name": "B"}])
    service = SupabaseDataService("https://example.supabase.co", "key", client=client)

    assert await service.update("job", {"name": "B"}, "code", 2) == {"code": 2, "name": "B"}
    await service.delete("job", "code", 2)

    update_ops, delete_ops = client.queries[0].ops, client.queries[1].ops
    assert update_ops[1:] == [("update", {"name": "B"}), ("eq", "code", 2)]
    assert delete_ops[1:] == [("delete",), ("eq", "code", 2)]


@pytest.mark.asyncio
async def test_insert_without_returned_row_is_an_error():
    service = SupabaseDataService("https://example.supabase.co", "key", client=RecordingClient(data=[]))

    with pytest.raises(DataServiceError):
        await service.insert("job", {"name": "A"})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        APIError({"message": "relation does not exist", "code": "42P01"}),
        httpx.ConnectError("connection refused"),
    ],
)
async def test_backend_errors_become_data_service_error(error):
    service = SupabaseDataService("https://example.supabase.co", "key", client=RecordingClient(error=error))

    with pytest.raises(DataServiceError) as excinfo:
        await service.select_all("job")
    assert excinfo.value.operation == "select"
    assert excinfo.value.table == "job"


@pytest.mark.asyncio
async def test_aclose_closes_postgrest_session_once():
    client = RecordingClient()
    service = SupabaseDataService("https://example.supabase.co", "key", client=client)

    await service.aclose()
    await service.aclose()

    assert client.postgrest.closed == 1
