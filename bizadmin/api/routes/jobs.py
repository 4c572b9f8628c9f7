from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from bizadmin.core.deps import get_data_service
from bizadmin.schemas.common import MessageResponse
from bizadmin.schemas.jobs import JobCreate, JobRead
from bizadmin.services.data_service import KEY_COLUMN, DataService
from bizadmin.services.details import fetch_job_details
from bizadmin.services.entities import JOB_EDITOR
from bizadmin.services.search import filter_rows

router = APIRouter(prefix="/jobs", tags=["Jobs"])


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[JobRead],
    summary="List jobs",
    description="Return all jobs in key order, optionally filtered by a case-insensitive substring of name or description.",
)
async def list_jobs(
    service: DataService = Depends(get_data_service),
    search: Optional[str] = Query(None, description="Substring to match in name or description"),
) -> List[JobRead]:
    rows = await service.select_all(JOB_EDITOR.table)
    rows = filter_rows(rows, JOB_EDITOR.searchable, (search or "").lower())
    return [JobRead.model_validate(r) for r in rows]


# PUBLIC_INTERFACE
@router.get(
    "/{code}",
    response_model=JobRead,
    summary="Get job",
    description="Return a single job by code.",
)
async def get_job(
    code: int = Path(..., description="Job code"),
    service: DataService = Depends(get_data_service),
) -> JobRead:
    job = await fetch_job_details(service, code)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=JobRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create job",
    description="Insert a job; the code is assigned by the backend.",
)
async def create_job(
    payload: JobCreate,
    service: DataService = Depends(get_data_service),
) -> JobRead:
    created = await service.insert(JOB_EDITOR.table, payload.model_dump())
    return JobRead.model_validate(created)


# PUBLIC_INTERFACE
@router.put(
    "/{code}",
    response_model=JobRead,
    summary="Replace job",
    description="Write every field of the payload to the job with the given code.",
)
async def replace_job(
    payload: JobCreate,
    code: int = Path(..., description="Job code"),
    service: DataService = Depends(get_data_service),
) -> JobRead:
    updated = await service.update(JOB_EDITOR.table, payload.model_dump(), KEY_COLUMN, code)
    if updated is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobRead.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{code}",
    response_model=MessageResponse,
    summary="Delete job",
    description="Delete the job with the given code. Deleting a missing code is not an error.",
)
async def delete_job(
    code: int = Path(..., description="Job code"),
    service: DataService = Depends(get_data_service),
) -> MessageResponse:
    await service.delete(JOB_EDITOR.table, KEY_COLUMN, code)
    return MessageResponse(message="Job deleted", details={"code": code})
