# backend/app/api/__init__.py
from .projects import router as projects_router
from .documents import router as documents_router

__all__ = ["projects_router", "documents_router"]
