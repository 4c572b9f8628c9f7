"""
Single-record look-ups by key for jobs, projects and contractors.

Each helper returns the typed record, or None when no row carries the key.
Backend failures propagate as DataServiceError.
"""
from __future__ import annotations

from typing import Optional

from bizadmin.schemas.catalog import ContractorRead, ProjectRead
from bizadmin.schemas.jobs import JobRead
from .data_service import KEY_COLUMN, DataService


# PUBLIC_INTERFACE
async def fetch_job_details(service: DataService, code: int) -> Optional[JobRead]:
    row = await service.select_by_key("job", KEY_COLUMN, code)
    return JobRead.model_validate(row) if row else None


# PUBLIC_INTERFACE
async def fetch_project_details(service: DataService, code: int) -> Optional[ProjectRead]:
    row = await service.select_by_key("project", KEY_COLUMN, code)
    return ProjectRead.model_validate(row) if row else None


# PUBLIC_INTERFACE
async def fetch_contractor_details(service: DataService, code: int) -> Optional[ContractorRead]:
    row = await service.select_by_key("contractor", KEY_COLUMN, code)
    return ContractorRead.model_validate(row) if row else None
