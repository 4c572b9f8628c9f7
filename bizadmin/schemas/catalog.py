from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Create category payload."""
    name: str = Field(..., description="Category name")


class CategoryRead(CategoryCreate):
    """Category read model."""
    code: int = Field(..., description="Category code")


class ProjectCreate(BaseModel):
    """Create project payload."""
    project_name: str = Field(..., description="Project name")
    description: Optional[str] = Field(None)
    manager: Optional[str] = Field(None)
    status: Optional[str] = Field(None)


class ProjectRead(ProjectCreate):
    """Project read model."""
    code: int = Field(..., description="Project code")


class ContractorCreate(BaseModel):
    """Create contractor payload."""
    company_name: str = Field(..., description="Company name")
    contact_person: Optional[str] = Field(None)
    phone_number: Optional[str] = Field(None)
    email: Optional[str] = Field(None)
    bsb: Optional[str] = Field(None)
    account_no: Optional[str] = Field(None)
    account_name: Optional[str] = Field(None)
    address: Optional[str] = Field(None)


class ContractorRead(ContractorCreate):
    """Contractor read model."""
    code: int = Field(..., description="Contractor code")
