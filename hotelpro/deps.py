from fastapi import Depends
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .storage import DatabaseStorage, Storage, get_memory_storage


def get_storage(db: Session = Depends(get_db)) -> Storage:
    """Request-scoped storage for the configured backend."""
    if settings.STORAGE_BACKEND == "memory":
        return get_memory_storage()
    return DatabaseStorage(db)
