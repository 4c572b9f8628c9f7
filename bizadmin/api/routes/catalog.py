from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from bizadmin.core.deps import get_data_service
from bizadmin.schemas.catalog import (
    CategoryCreate,
    CategoryRead,
    ContractorCreate,
    ContractorRead,
    ProjectCreate,
    ProjectRead,
)
from bizadmin.services.data_service import KEY_COLUMN, DataService
from bizadmin.services.details import fetch_contractor_details, fetch_project_details

router = APIRouter(tags=["Catalog"])


# PUBLIC_INTERFACE
@router.get(
    "/categories",
    response_model=List[CategoryRead],
    summary="List job categories",
    description="Categories back the job category dropdown and label resolution.",
)
async def list_categories(service: DataService = Depends(get_data_service)) -> List[CategoryRead]:
    rows = await service.select_all("categ")
    return [CategoryRead.model_validate(r) for r in rows]


# PUBLIC_INTERFACE
@router.get("/categories/{code}", response_model=CategoryRead, summary="Get job category")
async def get_category(
    code: int = Path(..., description="Category code"),
    service: DataService = Depends(get_data_service),
) -> CategoryRead:
    row = await service.select_by_key("categ", KEY_COLUMN, code)
    if not row:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryRead.model_validate(row)


# PUBLIC_INTERFACE
@router.post(
    "/categories",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create job category",
)
async def create_category(
    payload: CategoryCreate,
    service: DataService = Depends(get_data_service),
) -> CategoryRead:
    created = await service.insert("categ", payload.model_dump())
    return CategoryRead.model_validate(created)


# PUBLIC_INTERFACE
@router.get("/projects", response_model=List[ProjectRead], summary="List projects")
async def list_projects(service: DataService = Depends(get_data_service)) -> List[ProjectRead]:
    rows = await service.select_all("project")
    return [ProjectRead.model_validate(r) for r in rows]


# PUBLIC_INTERFACE
@router.get("/projects/{code}", response_model=ProjectRead, summary="Get project")
async def get_project(
    code: int = Path(..., description="Project code"),
    service: DataService = Depends(get_data_service),
) -> ProjectRead:
    project = await fetch_project_details(service, code)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


# PUBLIC_INTERFACE
@router.post(
    "/projects",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
async def create_project(
    payload: ProjectCreate,
    service: DataService = Depends(get_data_service),
) -> ProjectRead:
    created = await service.insert("project", payload.model_dump())
    return ProjectRead.model_validate(created)


# PUBLIC_INTERFACE
@router.get("/contractors", response_model=List[ContractorRead], summary="List contractors")
async def list_contractors(service: DataService = Depends(get_data_service)) -> List[ContractorRead]:
    rows = await service.select_all("contractor")
    return [ContractorRead.model_validate(r) for r in rows]


# PUBLIC_INTERFACE
@router.get("/contractors/{code}", response_model=ContractorRead, summary="Get contractor")
async def get_contractor(
    code: int = Path(..., description="Contractor code"),
    service: DataService = Depends(get_data_service),
) -> ContractorRead:
    contractor = await fetch_contractor_details(service, code)
    if contractor is None:
        raise HTTPException(status_code=404, detail="Contractor not found")
    return contractor


# PUBLIC_INTERFACE
@router.post(
    "/contractors",
    response_model=ContractorRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create contractor",
)
async def create_contractor(
    payload: ContractorCreate,
    service: DataService = Depends(get_data_service),
) -> ContractorRead:
    created = await service.insert("contractor", payload.model_dump())
    return ContractorRead.model_validate(created)
