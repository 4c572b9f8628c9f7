from __future__ import annotations

import logging
from typing import Optional

from bizadmin.core.settings import get_app_settings
from bizadmin.services.data_service import DataService, build_data_service

logger = logging.getLogger(__name__)

_DATA_SERVICE: Optional[DataService] = None


# PUBLIC_INTERFACE
def get_data_service() -> DataService:
    """
    Return the process-wide data service, building it on first use.

    The backend is chosen by DATA_BACKEND (see AppSettings). Route handlers and
    editor sessions receive it through FastAPI dependency injection, so tests
    can substitute it with `app.dependency_overrides`.
    """
    global _DATA_SERVICE
    if _DATA_SERVICE is None:
        _DATA_SERVICE = build_data_service(get_app_settings())
    return _DATA_SERVICE


# PUBLIC_INTERFACE
async def close_data_service() -> None:
    """Release the data service, if one was built."""
    global _DATA_SERVICE
    if _DATA_SERVICE is not None:
        await _DATA_SERVICE.aclose()
        _DATA_SERVICE = None
        logger.info("Data service closed.")
