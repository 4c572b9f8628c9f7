from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class JobCreate(BaseModel):
    """Create/replace job payload. The key is assigned by the backend."""
    job_category_id: Optional[int] = Field(None, description="Category code (categ.code)")
    name: str = Field(..., description="Job name")
    description: Optional[str] = Field(None)


class JobRead(JobCreate):
    """Job read model."""
    code: int = Field(..., description="Job code")
