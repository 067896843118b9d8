# backend/app/models/__init__.py
from ..database import Base
from .project import Project
from .document import Document, DocumentType, UnsupportedDocumentTypeError
from .user import User
from .collaborator import Collaborator, CollaboratorRole

__all__ = [
    "Base",
    "Project",
    "Document",
    "DocumentType",
    "UnsupportedDocumentTypeError",
    "User",
    "Collaborator",
    "CollaboratorRole"
]
