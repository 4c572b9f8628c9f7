"""
Public Pydantic schemas used by FastAPI routes, services, and tests.

Schemas are grouped by domain (jobs, procurement, catalog), the editor
session view/message models, and common reusable models such as standard
responses.
"""

from .common import MessageResponse  # noqa: F401
