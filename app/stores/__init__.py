from functools import lru_cache

from app.core.config import settings
from app.core.local_storage import LocalStorage
from app.core.logging_config import logger
from app.stores.base import ComplianceStore, StoreBackend
from app.stores.database import DatabaseBackend, SqlComplianceStore
from app.stores.local import LocalBackend, LocalComplianceStore


@lru_cache(maxsize=1)
def get_backend() -> StoreBackend:
    """
    Pick the persistence backend once per process.

    DATABASE_URL set -> relational database, otherwise the local JSON file.
    """
    if settings.database_configured:
        from app.database import SessionLocal
        backend = DatabaseBackend(SessionLocal)
    else:
        backend = LocalBackend(LocalStorage(settings.LOCAL_STORAGE_PATH))
    logger.info(f"Using {backend.name} store backend")
    return backend


__all__ = [
    "ComplianceStore",
    "StoreBackend",
    "DatabaseBackend",
    "SqlComplianceStore",
    "LocalBackend",
    "LocalComplianceStore",
    "get_backend",
]
