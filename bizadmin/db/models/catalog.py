from __future__ import annotations

from typing import Optional

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from bizadmin.db.base import Base, CodePkMixin


class Category(CodePkMixin, Base):
    """Job category (trade) used to label jobs."""
    __tablename__ = "categ"

    name: Mapped[str] = mapped_column(Text, nullable=False)


class Project(CodePkMixin, Base):
    """Project a purchase order is booked against."""
    __tablename__ = "project"

    project_name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    manager: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Contractor(CodePkMixin, Base):
    """Contractor/supplier master with payment details."""
    __tablename__ = "contractor"

    company_name: Mapped[str] = mapped_column(Text, nullable=False)
    contact_person: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bsb: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    account_no: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    account_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
