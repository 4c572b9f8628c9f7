from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizadmin.db.base import Base, CodePkMixin


class PurchaseOrder(CodePkMixin, Base):
    """Purchase order header raised against a job, contractor and project."""
    __tablename__ = "purchase_order"

    # References job.code, contractor.code and project.code; not enforced.
    job_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    by_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    project_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 2), nullable=True)
    ref: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contact: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    create_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    due_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
