"""
Repository layer for data access.

Repositories encapsulate SQLAlchemy statements. `TableRepository` offers the
generic keyed CRUD used by the SQL-backed data service.
"""
