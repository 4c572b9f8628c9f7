"""
Pytest configuration and fixtures.

Provides:
- InMemoryDataService: a table store implementing the DataService contract,
  with failure injection and an optional gate that holds calls in flight
- FastAPI test client with the data service dependency overridden
"""
from __future__ import annotations

import asyncio
import os
from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

# App settings are read at import time; keep startup free of database work.
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("AUTO_SEED", "false")
os.environ.setdefault("DATA_BACKEND", "sql")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from bizadmin.api.main import app  # noqa: E402
from bizadmin.core.deps import get_data_service  # noqa: E402
from bizadmin.services.data_service import DataService, DataServiceError, Row  # noqa: E402

FailureKey = Union[str, Tuple[str, str]]


class InMemoryDataService(DataService):
    """Dict-backed tables keyed by `code`, assigned on insert like a backend sequence."""

    def __init__(self, tables: Optional[Mapping[str, Iterable[Row]]] = None) -> None:
        self.tables: Dict[str, List[Row]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.failures: Set[FailureKey] = set()
        self.gate: Optional[asyncio.Event] = None
        self.calls: List[Tuple[str, str]] = []
        self.closed = False

    def fail(self, operation: str, table: Optional[str] = None) -> None:
        """Make `operation` (optionally only on `table`) raise DataServiceError."""
        self.failures.add((operation, table) if table else operation)

    async def _enter(self, operation: str, table: str) -> List[Row]:
        self.calls.append((operation, table))
        if self.gate is not None:
            await self.gate.wait()
        if operation in self.failures or (operation, table) in self.failures:
            raise DataServiceError(operation, table, "injected failure")
        return self.tables.setdefault(table, [])

    async def select_all(self, table: str) -> List[Row]:
        rows = await self._enter("select", table)
        return deepcopy(rows)

    async def select_by_key(self, table: str, key_col: str, value: Any) -> Optional[Row]:
        rows = await self._enter("select", table)
        for row in rows:
            if row.get(key_col) == value:
                return dict(row)
        return None

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        rows = await self._enter("insert", table)
        code = max((r["code"] for r in rows), default=0) + 1
        stored = {**dict(row), "code": code}
        rows.append(stored)
        return dict(stored)

    async def update(self, table: str, row: Mapping[str, Any], key_col: str, value: Any) -> Optional[Row]:
        rows = await self._enter("update", table)
        for stored in rows:
            if stored.get(key_col) == value:
                stored.update(row)
                return dict(stored)
        return None

    async def delete(self, table: str, key_col: str, value: Any) -> None:
        rows = await self._enter("delete", table)
        rows[:] = [r for r in rows if r.get(key_col) != value]

    async def aclose(self) -> None:
        self.closed = True


CATEGORIES = [
    {"code": 1, "name": "Electrician"},
    {"code": 2, "name": "Plumber"},
]

JOBS = [
    {"code": 1, "job_category_id": 1, "name": "Kitchen rewire", "description": "Replace old wiring"},
    {"code": 2, "job_category_id": 2, "name": "Bathroom", "description": "Fix leaking pipe"},
    {"code": 3, "job_category_id": 7, "name": "Fence", "description": None},
]

PURCHASE_ORDERS = [
    {
        "code": 1,
        "job_id": 1,
        "by_id": 1,
        "project_id": 2,
        "cost": 120.5,
        "ref": "PO-1001",
        "contact": "Dana Reid",
        "create_at": "2024-01-02T00:00:00+00:00",
        "updated_at": "2024-01-02T00:00:00+00:00",
        "due_at": "2024-02-01T00:00:00+00:00",
    },
    {
        "code": 2,
        "job_id": 2,
        "by_id": 2,
        "project_id": 1,
        "cost": 80,
        "ref": "PO-1002",
        "contact": "Sam Hill",
        "create_at": None,
        "updated_at": None,
        "due_at": None,
    },
]

PROJECTS = [
    {"code": 1, "project_name": "Project1", "description": None, "manager": "Alex", "status": "active"},
]

CONTRACTORS = [
    {
        "code": 1,
        "company_name": "Sparks & Co",
        "contact_person": "Dana Reid",
        "phone_number": None,
        "email": None,
        "bsb": None,
        "account_no": None,
        "account_name": None,
        "address": None,
    },
]


@pytest.fixture
def data_service() -> InMemoryDataService:
    """In-memory backend seeded with a few rows per table."""
    return InMemoryDataService(
        {
            "categ": CATEGORIES,
            "job": JOBS,
            "purchase_order": PURCHASE_ORDERS,
            "project": PROJECTS,
            "contractor": CONTRACTORS,
        }
    )


@pytest.fixture
def client(data_service):
    """
    FastAPI test client with the data service dependency overridden.
    """
    app.dependency_overrides[get_data_service] = lambda: data_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
