"""
API route modules.

This package contains subrouters for:
- Jobs: job CRUD with search
- Procurement: purchase order CRUD with search
- Catalog: job categories, projects and contractors

Routers are included from bizadmin.api.main (under the /api/v1 prefix).
"""
