# backend/app/schemas/__init__.py
from .project import Project, ProjectCreate, ProjectUpdate, ProjectDetail, ProjectNeeds
from .document import Document, DocumentCreate, DocumentUpdate, GenerateDocumentRequest
from .user import User, UserCreate, Collaborator, CollaboratorCreate

__all__ = [
    "Project", "ProjectCreate", "ProjectUpdate", "ProjectDetail", "ProjectNeeds",
    "Document", "DocumentCreate", "DocumentUpdate", "GenerateDocumentRequest",
    "User", "UserCreate", "Collaborator", "CollaboratorCreate"
]
