"""
Request Dependencies.

Provides the shared ``JsonFileDatabase`` and validated path ids to API endpoints.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from storefront_api.core.logging_config import get_logger
from storefront_api.core.storage import JsonFileDatabase
from storefront_api.server.core.config import settings
from storefront_api.server.validators import valid_id, valid_user_id

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_database() -> JsonFileDatabase:
    """Return the process-wide database bound to the configured data directory."""
    logger.info(f"Using JSON data directory: {settings.data_dir}")
    return JsonFileDatabase(settings.data_dir)


DatabaseDep = Annotated[JsonFileDatabase, Depends(get_database)]
ItemIdDep = Annotated[int, Depends(valid_id)]
UserIdDep = Annotated[int, Depends(valid_user_id)]
