"""
Database seeding utilities for lookup reference data.

Seeds:
- Job categories (trades)
- The five projects offered by the purchase order project dropdown (keys 1-5 on an empty table)
- A sample contractor

Usage:
  python -m bizadmin.db.run_migrations upgrade head
  python -m bizadmin.db.seed
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizadmin.db.base import Base
from bizadmin.db.models import Category, Contractor, Project
from bizadmin.db.session import get_async_session

logger = logging.getLogger(__name__)

CATEGORIES: List[Dict[str, Any]] = [
    {"name": "Electrician"},
    {"name": "Plumber"},
    {"name": "Carpenter"},
    {"name": "Painter"},
]

PROJECTS: List[Dict[str, Any]] = [
    {"project_name": "Project1", "status": "active"},
    {"project_name": "Project2", "status": "active"},
    {"project_name": "Mile 3", "status": "active"},
    {"project_name": "Mile 4", "status": "active"},
    {"project_name": "Mile 5", "status": "active"},
]

CONTRACTORS: List[Dict[str, Any]] = [
    {
        "company_name": "Sparks & Co",
        "contact_person": "Dana Reid",
        "phone_number": "0400 000 000",
        "email": "accounts@sparks.example",
    },
]


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """
    Seed the lookup tables when they are empty.

    Tables that already hold rows are left untouched so the seed can run on
    every startup.
    """
    async for session in get_async_session():
        await seed_session(session)


# PUBLIC_INTERFACE
async def seed_session(session: AsyncSession) -> None:
    """Seed lookup tables using an existing session and commit."""
    await _seed_table(session, Category, CATEGORIES)
    await _seed_table(session, Project, PROJECTS)
    await _seed_table(session, Contractor, CONTRACTORS)
    await session.commit()


async def _seed_table(session: AsyncSession, model: Type[Base], rows: List[Dict[str, Any]]) -> None:
    count = (await session.execute(select(func.count()).select_from(model))).scalar_one()
    if count:
        logger.info("Skipping seed for %s; %d rows present", model.__tablename__, count)
        return
    session.add_all([model(**row) for row in rows])
    await session.flush()
    logger.info("Seeded %d rows into %s", len(rows), model.__tablename__)


if __name__ == "__main__":
    asyncio.run(seed_all())
