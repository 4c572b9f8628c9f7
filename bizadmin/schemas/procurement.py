from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class PurchaseOrderCreate(BaseModel):
    """Create/replace purchase order payload. The key is assigned by the backend."""
    job_id: Optional[int] = Field(None, description="Job code")
    by_id: Optional[int] = Field(None, description="Contractor code")
    project_id: Optional[int] = Field(None, description="Project code")
    cost: Optional[Decimal] = Field(None, description="Order cost")
    ref: Optional[str] = Field(None, description="Reference")
    contact: Optional[str] = Field(None, description="Contact person")
    create_at: Optional[datetime] = Field(None)
    updated_at: Optional[datetime] = Field(None)
    due_at: Optional[datetime] = Field(None)


class PurchaseOrderRead(PurchaseOrderCreate):
    """Purchase order read model."""
    code: int = Field(..., description="Purchase order code")
