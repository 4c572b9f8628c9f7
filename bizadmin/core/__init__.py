"""
Core application utilities for settings, logging and FastAPI dependencies.

This package provides:
- Application-level settings (separate from DB settings)
- Structured logging with request/editor context
- The shared data service dependency
"""
