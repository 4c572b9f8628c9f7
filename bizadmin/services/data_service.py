from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, List, Mapping, Optional

from httpx import HTTPError
from postgrest.exceptions import APIError
from pydantic_core import to_jsonable_python
from sqlalchemy import MetaData, Table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from supabase import AsyncClient, acreate_client

from bizadmin.core.settings import AppSettings
from bizadmin.db.base import Base
from bizadmin.repositories.tables import TableRepository

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

KEY_COLUMN = "code"


class DataServiceError(Exception):
    """
    A backend call failed.

    Validation errors, missing tables and transport failures are deliberately
    not distinguished; callers treat every failure the same way.
    """

    def __init__(self, operation: str, table: str, message: str) -> None:
        super().__init__(f"{operation} on '{table}' failed: {message}")
        self.operation = operation
        self.table = table
        self.message = message


class DataService(ABC):
    """
    Table-oriented CRUD backend.

    Rows are flat dicts. Keyed operations filter on `key_col` (normally `code`,
    which the backend assigns on insert).
    """

    @abstractmethod
    async def select_all(self, table: str) -> List[Row]:
        """Return every row of `table` in backend order."""

    @abstractmethod
    async def select_by_key(self, table: str, key_col: str, value: Any) -> Optional[Row]:
        """Return the first row whose `key_col` equals `value`, or None."""

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Insert `row` (without key) and return the stored row including its key."""

    @abstractmethod
    async def update(self, table: str, row: Mapping[str, Any], key_col: str, value: Any) -> Optional[Row]:
        """Write the columns present in `row` to the matching row and return it."""

    @abstractmethod
    async def delete(self, table: str, key_col: str, value: Any) -> None:
        """Delete rows whose `key_col` equals `value`."""

    async def aclose(self) -> None:
        """Release backend resources."""


class SqlDataService(DataService):
    """
    Data service backed by this service's own database.

    Each call runs in its own session, so concurrent calls (e.g. the list and
    lookup fetches of an editor) never share a connection.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        metadata: MetaData = Base.metadata,
    ) -> None:
        self._session_maker = session_maker
        self._metadata = metadata

    def _table(self, operation: str, name: str) -> Table:
        table = self._metadata.tables.get(name)
        if table is None:
            raise DataServiceError(operation, name, "unknown table")
        return table

    @asynccontextmanager
    async def _repository(self, operation: str, table: str) -> AsyncIterator[TableRepository]:
        tbl = self._table(operation, table)
        async with self._session_maker() as session:
            repo = TableRepository(session, tbl)
            try:
                yield repo
            except (SQLAlchemyError, KeyError, ValueError) as exc:
                await repo.rollback()
                raise DataServiceError(operation, table, str(exc)) from exc

    async def select_all(self, table: str) -> List[Row]:
        async with self._repository("select", table) as repo:
            return await repo.list_rows()

    async def select_by_key(self, table: str, key_col: str, value: Any) -> Optional[Row]:
        async with self._repository("select", table) as repo:
            return await repo.get_row(key_col, value)

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        async with self._repository("insert", table) as repo:
            return await repo.insert_row(row)

    async def update(self, table: str, row: Mapping[str, Any], key_col: str, value: Any) -> Optional[Row]:
        async with self._repository("update", table) as repo:
            return await repo.update_row(row, key_col, value)

    async def delete(self, table: str, key_col: str, value: Any) -> None:
        async with self._repository("delete", table) as repo:
            await repo.delete_row(key_col, value)


class SupabaseDataService(DataService):
    """
    Data service backed by a hosted Supabase (PostgREST) project.

    The async client is created on first use unless one is supplied.
    """

    def __init__(self, url: str, key: str, client: Optional[AsyncClient] = None) -> None:
        self._url = url
        self._key = key
        self._client = client

    async def _get_client(self, operation: str, table: str) -> AsyncClient:
        if self._client is None:
            try:
                self._client = await acreate_client(self._url, self._key)
            except Exception as exc:
                raise DataServiceError(operation, table, f"cannot create Supabase client: {exc}") from exc
        return self._client

    async def _execute(self, operation: str, table: str, build: Callable[[Any], Any]) -> List[Row]:
        client = await self._get_client(operation, table)
        try:
            response = await build(client.table(table)).execute()
        except (APIError, HTTPError) as exc:
            raise DataServiceError(operation, table, str(exc)) from exc
        return list(response.data or [])

    async def select_all(self, table: str) -> List[Row]:
        return await self._execute("select", table, lambda q: q.select("*"))

    async def select_by_key(self, table: str, key_col: str, value: Any) -> Optional[Row]:
        rows = await self._execute("select", table, lambda q: q.select("*").eq(key_col, value))
        return rows[0] if rows else None

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        payload = to_jsonable_python(dict(row))
        rows = await self._execute("insert", table, lambda q: q.insert([payload]))
        if not rows:
            raise DataServiceError("insert", table, "no row returned")
        return rows[0]

    async def update(self, table: str, row: Mapping[str, Any], key_col: str, value: Any) -> Optional[Row]:
        payload = to_jsonable_python(dict(row))
        rows = await self._execute("update", table, lambda q: q.update(payload).eq(key_col, value))
        return rows[0] if rows else None

    async def delete(self, table: str, key_col: str, value: Any) -> None:
        await self._execute("delete", table, lambda q: q.delete().eq(key_col, value))

    async def aclose(self) -> None:
        """Close the PostgREST HTTP session of the client, if one was created."""
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.postgrest.aclose()
        logger.info("Supabase client closed")


# PUBLIC_INTERFACE
def build_data_service(
    settings: AppSettings,
    session_maker: Optional[async_sessionmaker[AsyncSession]] = None,
) -> DataService:
    """
    Build the data service selected by `settings.DATA_BACKEND`.

    Raises:
        ValueError: when the Supabase backend is selected without URL/key.
    """
    if settings.DATA_BACKEND == "supabase":
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            raise ValueError("DATA_BACKEND=supabase requires SUPABASE_URL and SUPABASE_KEY.")
        logger.info("Using Supabase data service at %s", settings.SUPABASE_URL)
        return SupabaseDataService(settings.SUPABASE_URL, settings.SUPABASE_KEY)

    if session_maker is None:
        from bizadmin.db.session import get_session_maker

        session_maker = get_session_maker()
    logger.info("Using SQL data service")
    return SqlDataService(session_maker)
