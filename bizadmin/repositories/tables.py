from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Column, Table, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository

Row = Dict[str, Any]


def coerce_value(column: Column, value: Any) -> Any:
    """
    Convert a raw (often string) form value to the column's Python type.

    Empty strings become NULL for non-text columns. Raises ValueError when the
    value cannot be represented.
    """
    if value is None:
        return None
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    if python_type is str:
        return value if isinstance(value, str) else str(value)
    if isinstance(value, python_type) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return None
        if python_type is datetime:
            return datetime.fromisoformat(text)
        if python_type is date:
            return date.fromisoformat(text)
        if python_type is Decimal:
            try:
                return Decimal(text)
            except InvalidOperation as exc:
                raise ValueError(f"{column.name}: invalid numeric value {value!r}") from exc
        return python_type(text)
    if python_type is Decimal and isinstance(value, (int, float)):
        return Decimal(str(value))
    if python_type is int and isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"{column.name}: cannot store {type(value).__name__} value {value!r}")


class TableRepository(BaseRepository):
    """
    Keyed CRUD over a single table, returning rows as plain dicts.

    Rows are listed in primary key order. Any column may be used as the filter
    column for the keyed operations.
    """

    def __init__(self, session: AsyncSession, table: Table) -> None:
        super().__init__(session)
        self.table = table

    def _column(self, name: str) -> Column:
        if name not in self.table.c:
            raise KeyError(f"Unknown column '{name}' on table '{self.table.name}'")
        return self.table.c[name]

    def coerce(self, values: Mapping[str, Any]) -> Row:
        """Validate column names and coerce values to column types."""
        return {name: coerce_value(self._column(name), value) for name, value in values.items()}

    async def list_rows(self) -> List[Row]:
        stmt = select(self.table).order_by(*self.table.primary_key.columns)
        result = await self.execute(stmt)
        return [dict(r) for r in result.mappings().all()]

    async def get_row(self, key_col: str, value: Any) -> Optional[Row]:
        column = self._column(key_col)
        stmt = select(self.table).where(column == coerce_value(column, value)).limit(1)
        result = await self.execute(stmt)
        found = result.mappings().first()
        return dict(found) if found is not None else None

    async def insert_row(self, values: Mapping[str, Any]) -> Row:
        stmt = insert(self.table).values(**self.coerce(values))
        result = await self.execute(stmt)
        await self.commit()
        pk = self.table.primary_key.columns.values()[0]
        created = await self.get_row(pk.name, result.inserted_primary_key[0])
        assert created is not None
        return created

    async def update_row(self, values: Mapping[str, Any], key_col: str, value: Any) -> Optional[Row]:
        column = self._column(key_col)
        key_value = coerce_value(column, value)
        changes = self.coerce(values)
        if changes:
            stmt = update(self.table).where(column == key_value).values(**changes)
            await self.execute(stmt)
            await self.commit()
        return await self.get_row(key_col, key_value)

    async def delete_row(self, key_col: str, value: Any) -> None:
        column = self._column(key_col)
        stmt = delete(self.table).where(column == coerce_value(column, value))
        await self.execute(stmt)
        await self.commit()
