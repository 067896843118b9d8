# backend/app/storage/memory.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .base import RecordNotFoundError, Storage
from ..models.document import DocumentType
from ..schemas.document import Document
from ..schemas.project import Project, ProjectCreate
from ..schemas.user import Collaborator, CollaboratorCreate, User, UserCreate
from ..utils.logging import db_logger


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _plain(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: value.model_dump() if isinstance(value, BaseModel) else value
        for key, value in fields.items()
    }


class MemStorage(Storage):
    """Dictionary-backed storage with auto-incrementing ids"""

    def __init__(self):
        self.projects: Dict[int, Project] = {}
        self.documents: Dict[int, Document] = {}
        self.users: Dict[int, User] = {}
        self.collaborators: Dict[int, Collaborator] = {}

        self._project_id = 1
        self._document_id = 1
        self._user_id = 1
        self._collaborator_id = 1

    # Projects

    def list_projects(self) -> List[Project]:
        return list(self.projects.values())

    def get_project(self, project_id: int) -> Optional[Project]:
        return self.projects.get(project_id)

    def create_project(self, data: ProjectCreate) -> Project:
        now = _now()
        project = Project(
            **data.model_dump(),
            id=self._project_id,
            created_at=now,
            updated_at=now
        )
        self.projects[project.id] = project
        self._project_id += 1
        db_logger.debug("Stored project in memory", extra={"project_id": project.id})
        return project

    def update_project(self, project_id: int, fields: Dict[str, Any]) -> Project:
        project = self.projects.get(project_id)
        if project is None:
            raise RecordNotFoundError("Project", project_id)

        updated = Project.model_validate({
            **project.model_dump(),
            **_plain(fields),
            "id": project_id,
            "updated_at": _now()
        })
        self.projects[project_id] = updated
        return updated

    def delete_project(self, project_id: int) -> bool:
        if self.projects.pop(project_id, None) is None:
            return False

        for document_id in [d.id for d in self.documents.values() if d.project_id == project_id]:
            del self.documents[document_id]

        for collaborator_id in [c.id for c in self.collaborators.values() if c.project_id == project_id]:
            del self.collaborators[collaborator_id]

        return True

    # Documents

    def get_document(self, document_id: int) -> Optional[Document]:
        return self.documents.get(document_id)

    def get_documents_by_project(self, project_id: int) -> List[Document]:
        return [d for d in self.documents.values() if d.project_id == project_id]

    def create_document(self, project_id: int, name: str, type: DocumentType, content: str) -> Document:
        if project_id not in self.projects:
            raise RecordNotFoundError("Project", project_id)

        now = _now()
        document = Document(
            id=self._document_id,
            project_id=project_id,
            name=name,
            type=type,
            content=content,
            created_at=now,
            updated_at=now
        )
        self.documents[document.id] = document
        self._document_id += 1
        return document

    def update_document(self, document_id: int, fields: Dict[str, Any]) -> Document:
        document = self.documents.get(document_id)
        if document is None:
            raise RecordNotFoundError("Document", document_id)

        updated = Document.model_validate({
            **document.model_dump(),
            **_plain(fields),
            "id": document_id,
            "project_id": document.project_id,
            "updated_at": _now()
        })
        self.documents[document_id] = updated
        return updated

    def delete_document(self, document_id: int) -> bool:
        return self.documents.pop(document_id, None) is not None

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, data: UserCreate) -> User:
        user = User(**data.model_dump(), id=self._user_id)
        self.users[user.id] = user
        self._user_id += 1
        return user

    # Collaborators

    def get_project_collaborators(self, project_id: int) -> List[Collaborator]:
        return [c for c in self.collaborators.values() if c.project_id == project_id]

    def add_collaborator(self, data: CollaboratorCreate) -> Collaborator:
        collaborator = Collaborator(**data.model_dump(), id=self._collaborator_id)
        self.collaborators[collaborator.id] = collaborator
        self._collaborator_id += 1
        return collaborator

    def remove_collaborator(self, project_id: int, user_id: int) -> bool:
        for collaborator_id, collaborator in self.collaborators.items():
            if collaborator.project_id == project_id and collaborator.user_id == user_id:
                del self.collaborators[collaborator_id]
                return True
        return False
