"""SQL data service against in-memory SQLite (aiosqlite)."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from bizadmin.db.base import Base
from bizadmin.db.seed import PROJECTS, seed_session
from bizadmin.db.session import build_session_maker
from bizadmin.services.data_service import DataServiceError, SqlDataService
from bizadmin.services.details import fetch_job_details, fetch_project_details
from bizadmin.services.entities import JOB_EDITOR
from bizadmin.services.list_editor import ListEditor
from bizadmin.services.viewport import ViewportObserver


async def _service():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine, SqlDataService(build_session_maker(engine))


@pytest.mark.asyncio
async def test_insert_assigns_code_and_lists_in_key_order():
    engine, service = await _service()
    try:
        first = await service.insert("job", {"job_category_id": 1, "name": "Electrician", "description": "wiring"})
        second = await service.insert("job", {"job_category_id": 2, "name": "Plumber", "description": ""})

        assert first["code"] != second["code"]
        rows = await service.select_all("job")
        assert [r["code"] for r in rows] == sorted([first["code"], second["code"]])
        assert rows[0] == {"code": first["code"], "job_category_id": 1, "name": "Electrician", "description": "wiring"}
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_raw_form_strings_are_coerced_to_column_types():
    engine, service = await _service()
    try:
        row = await service.insert(
            "purchase_order",
            {
                "job_id": "3",
                "by_id": "",
                "project_id": 2,
                "cost": "19.90",
                "ref": "PO-1",
                "contact": "Dana",
                "due_at": "2024-05-01T09:30:00+00:00",
            },
        )
        assert row["job_id"] == 3
        assert row["by_id"] is None
        assert row["cost"] == Decimal("19.90")
        assert row["due_at"].replace(tzinfo=timezone.utc) == datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_update_replaces_payload_columns_of_one_row():
    engine, service = await _service()
    try:
        a = await service.insert("job", {"job_category_id": 1, "name": "A", "description": "x"})
        b = await service.insert("job", {"job_category_id": 1, "name": "B", "description": "y"})

        updated = await service.update(
            "job", {"job_category_id": "2", "name": "A2", "description": "x"}, "code", a["code"]
        )

        assert updated == {"code": a["code"], "job_category_id": 2, "name": "A2", "description": "x"}
        assert await service.select_by_key("job", "code", b["code"]) == b
        assert await service.update("job", {"name": "C"}, "code", 999) is None
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_delete_and_select_by_key():
    engine, service = await _service()
    try:
        row = await service.insert("categ", {"name": "Painter"})
        await service.delete("categ", "code", row["code"])
        assert await service.select_by_key("categ", "code", row["code"]) is None
        assert await service.select_all("categ") == []
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_failures_surface_as_data_service_error():
    engine, service = await _service()
    try:
        with pytest.raises(DataServiceError) as excinfo:
            await service.select_all("no_such_table")
        assert excinfo.value.table == "no_such_table"

        with pytest.raises(DataServiceError):
            await service.insert("job", {"name": "A", "colour": "red"})

        with pytest.raises(DataServiceError):
            await service.insert("purchase_order", {"cost": "twelve"})

        # NOT NULL name
        with pytest.raises(DataServiceError) as excinfo:
            await service.insert("job", {"description": "nameless"})
        assert excinfo.value.operation == "insert"

        # the service stays usable after a failed write
        assert await service.select_all("job") == []
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_detail_lookups():
    engine, service = await _service()
    try:
        job = await service.insert("job", {"job_category_id": 1, "name": "Electrician", "description": None})

        found = await fetch_job_details(service, job["code"])
        assert found is not None and found.name == "Electrician"
        assert await fetch_job_details(service, job["code"] + 1) is None
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_seed_is_idempotent():
    engine, service = await _service()
    try:
        maker = build_session_maker(engine)
        async with maker() as session:
            await seed_session(session)
        async with maker() as session:
            await seed_session(session)

        projects = await service.select_all("project")
        assert [p["project_name"] for p in projects] == [p["project_name"] for p in PROJECTS]
        assert [p["code"] for p in projects] == [1, 2, 3, 4, 5]
        project = await fetch_project_details(service, 3)
        assert project is not None and project.project_name == "Mile 3"
        assert len(await service.select_all("categ")) == 4
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_editor_never_sends_the_key():
    engine, service = await _service()
    try:
        editor = ListEditor(JOB_EDITOR, service, ViewportObserver(1280))
        await editor.load()

        editor.open_create()
        editor.change_field("name", "Electrician")
        editor.change_field("code", 777)
        assert await editor.submit() is True
        created = editor.entities[0]
        assert created["code"] != 777

        editor.open_edit(created)
        editor.change_field("code", 888)
        editor.form_data["code"] = 888
        assert await editor.submit() is True
        assert [r["code"] for r in editor.entities] == [created["code"]]
    finally:
        await engine.dispose()
