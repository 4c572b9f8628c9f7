"""
ORM models for the tables served by the data service: jobs, purchase orders
and the lookup tables they reference (categories, projects, contractors).

Importing this package ensures model classes are registered with the Base
metadata for Alembic and runtime usage.
"""

from .catalog import (  # noqa: F401
    Category,
    Contractor,
    Project,
)
from .jobs import Job  # noqa: F401
from .procurement import PurchaseOrder  # noqa: F401
