# backend/app/storage/base.py
import abc
from typing import Any, Dict, List, Optional

from ..models.document import DocumentType
from ..schemas.document import Document
from ..schemas.project import Project, ProjectCreate
from ..schemas.user import Collaborator, CollaboratorCreate, User, UserCreate


class RecordNotFoundError(LookupError):
    """Raised when an update targets a record that does not exist"""

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} with ID {record_id} not found")


class Storage(abc.ABC):
    """Persistence interface used by the routes and the document generator.

    Every method returns pydantic schema objects so callers never see
    backend-specific records. ``get_*`` return ``None`` for unknown ids,
    ``update_*`` raise :class:`RecordNotFoundError`, ``delete_*`` report
    whether anything was removed.
    """

    # Projects

    @abc.abstractmethod
    def list_projects(self) -> List[Project]:
        pass

    @abc.abstractmethod
    def get_project(self, project_id: int) -> Optional[Project]:
        pass

    @abc.abstractmethod
    def create_project(self, data: ProjectCreate) -> Project:
        pass

    @abc.abstractmethod
    def update_project(self, project_id: int, fields: Dict[str, Any]) -> Project:
        pass

    @abc.abstractmethod
    def delete_project(self, project_id: int) -> bool:
        """Delete a project together with its documents and collaborators"""
        pass

    # Documents

    @abc.abstractmethod
    def get_document(self, document_id: int) -> Optional[Document]:
        pass

    @abc.abstractmethod
    def get_documents_by_project(self, project_id: int) -> List[Document]:
        pass

    @abc.abstractmethod
    def create_document(self, project_id: int, name: str, type: DocumentType, content: str) -> Document:
        """Store a new document; the project must exist"""
        pass

    @abc.abstractmethod
    def update_document(self, document_id: int, fields: Dict[str, Any]) -> Document:
        pass

    @abc.abstractmethod
    def delete_document(self, document_id: int) -> bool:
        pass

    # Users

    @abc.abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        pass

    @abc.abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abc.abstractmethod
    def create_user(self, data: UserCreate) -> User:
        pass

    # Collaborators

    @abc.abstractmethod
    def get_project_collaborators(self, project_id: int) -> List[Collaborator]:
        pass

    @abc.abstractmethod
    def add_collaborator(self, data: CollaboratorCreate) -> Collaborator:
        pass

    @abc.abstractmethod
    def remove_collaborator(self, project_id: int, user_id: int) -> bool:
        pass

    def count_documents(self, project_id: int) -> int:
        return len(self.get_documents_by_project(project_id))
