from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizadmin.db.base import Base, CodePkMixin


class Job(CodePkMixin, Base):
    """Job (trade/work type) that purchase orders are raised for."""
    __tablename__ = "job"

    # categ.code; not enforced as a constraint
    job_category_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
