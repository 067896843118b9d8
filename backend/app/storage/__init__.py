# backend/app/storage/__init__.py
from fastapi import Depends
from sqlalchemy.orm import Session

from .base import RecordNotFoundError, Storage
from .memory import MemStorage
from .sql import SQLStorage
from ..database import get_db


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return SQLStorage(db)


__all__ = ["Storage", "RecordNotFoundError", "MemStorage", "SQLStorage", "get_storage"]
