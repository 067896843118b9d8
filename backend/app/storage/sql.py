# backend/app/storage/sql.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from .base import RecordNotFoundError, Storage
from ..models import Collaborator, Document, DocumentType, Project, User
from ..schemas.document import Document as DocumentSchema
from ..schemas.project import Project as ProjectSchema, ProjectCreate
from ..schemas.user import (
    Collaborator as CollaboratorSchema,
    CollaboratorCreate,
    User as UserSchema,
    UserCreate,
)
from ..utils.logging import db_logger


class SQLStorage(Storage):
    """Storage backed by a SQLAlchemy session; commits once per operation"""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, operation: str, **context):
        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            db_logger.error(f"Failed to {operation}", extra={**context, "error": str(e)})
            raise

    @staticmethod
    def _apply(record, fields: Dict[str, Any]) -> None:
        for field, value in fields.items():
            if isinstance(value, BaseModel):
                value = value.model_dump()
            setattr(record, field, value)

    # Projects

    def list_projects(self) -> List[ProjectSchema]:
        projects = self.db.query(Project).order_by(Project.id).all()
        return [ProjectSchema.model_validate(p) for p in projects]

    def get_project(self, project_id: int) -> Optional[ProjectSchema]:
        project = self.db.query(Project).filter(Project.id == project_id).first()
        return ProjectSchema.model_validate(project) if project else None

    def create_project(self, data: ProjectCreate) -> ProjectSchema:
        db_project = Project(**data.model_dump())
        self.db.add(db_project)
        self._commit("create project", project_name=data.name)
        self.db.refresh(db_project)
        return ProjectSchema.model_validate(db_project)

    def update_project(self, project_id: int, fields: Dict[str, Any]) -> ProjectSchema:
        db_project = self.db.query(Project).filter(Project.id == project_id).first()
        if not db_project:
            raise RecordNotFoundError("Project", project_id)

        self._apply(db_project, fields)
        self._commit("update project", project_id=project_id)
        self.db.refresh(db_project)
        return ProjectSchema.model_validate(db_project)

    def delete_project(self, project_id: int) -> bool:
        db_project = self.db.query(Project).filter(Project.id == project_id).first()
        if not db_project:
            return False

        # Relationship cascade removes documents and collaborators
        self.db.delete(db_project)
        self._commit("delete project", project_id=project_id)
        return True

    # Documents

    def get_document(self, document_id: int) -> Optional[DocumentSchema]:
        document = self.db.query(Document).filter(Document.id == document_id).first()
        return DocumentSchema.model_validate(document) if document else None

    def get_documents_by_project(self, project_id: int) -> List[DocumentSchema]:
        documents = self.db.query(Document) \
            .filter(Document.project_id == project_id) \
            .order_by(Document.id) \
            .all()
        return [DocumentSchema.model_validate(d) for d in documents]

    def count_documents(self, project_id: int) -> int:
        return self.db.query(Document).filter(Document.project_id == project_id).count()

    def create_document(self, project_id: int, name: str, type: DocumentType, content: str) -> DocumentSchema:
        if not self.db.query(Project.id).filter(Project.id == project_id).first():
            raise RecordNotFoundError("Project", project_id)

        db_document = Document(
            project_id=project_id,
            name=name,
            type=DocumentType.parse(type).value,
            content=content
        )
        self.db.add(db_document)
        self._commit("create document", project_id=project_id, document_name=name)
        self.db.refresh(db_document)
        return DocumentSchema.model_validate(db_document)

    def update_document(self, document_id: int, fields: Dict[str, Any]) -> DocumentSchema:
        db_document = self.db.query(Document).filter(Document.id == document_id).first()
        if not db_document:
            raise RecordNotFoundError("Document", document_id)

        if "type" in fields:
            fields = {**fields, "type": DocumentType.parse(fields["type"]).value}

        self._apply(db_document, fields)
        self._commit("update document", document_id=document_id)
        self.db.refresh(db_document)
        return DocumentSchema.model_validate(db_document)

    def delete_document(self, document_id: int) -> bool:
        db_document = self.db.query(Document).filter(Document.id == document_id).first()
        if not db_document:
            return False

        self.db.delete(db_document)
        self._commit("delete document", document_id=document_id)
        return True

    # Users

    def get_user(self, user_id: int) -> Optional[UserSchema]:
        user = self.db.query(User).filter(User.id == user_id).first()
        return UserSchema.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserSchema]:
        user = self.db.query(User).filter(User.username == username).first()
        return UserSchema.model_validate(user) if user else None

    def create_user(self, data: UserCreate) -> UserSchema:
        db_user = User(**data.model_dump())
        self.db.add(db_user)
        self._commit("create user", username=data.username)
        self.db.refresh(db_user)
        return UserSchema.model_validate(db_user)

    # Collaborators

    def get_project_collaborators(self, project_id: int) -> List[CollaboratorSchema]:
        collaborators = self.db.query(Collaborator) \
            .filter(Collaborator.project_id == project_id) \
            .order_by(Collaborator.id) \
            .all()
        return [CollaboratorSchema.model_validate(c) for c in collaborators]

    def add_collaborator(self, data: CollaboratorCreate) -> CollaboratorSchema:
        db_collaborator = Collaborator(
            project_id=data.project_id,
            user_id=data.user_id,
            role=data.role.value
        )
        self.db.add(db_collaborator)
        self._commit("add collaborator", project_id=data.project_id, user_id=data.user_id)
        self.db.refresh(db_collaborator)
        return CollaboratorSchema.model_validate(db_collaborator)

    def remove_collaborator(self, project_id: int, user_id: int) -> bool:
        db_collaborator = self.db.query(Collaborator) \
            .filter(Collaborator.project_id == project_id, Collaborator.user_id == user_id) \
            .first()
        if not db_collaborator:
            return False

        self.db.delete(db_collaborator)
        self._commit("remove collaborator", project_id=project_id, user_id=user_id)
        return True
