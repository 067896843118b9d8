# backend/app/models/document.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class UnsupportedDocumentTypeError(ValueError):
    """Raised when a string does not name one of the four document kinds"""

    def __init__(self, value):
        self.value = value
        supported = ", ".join(t.value for t in DocumentType)
        super().__init__(f"Unsupported document type: {value!r} (expected one of {supported})")


class DocumentType(str, enum.Enum):
    ROADMAP = "roadmap"
    MVP = "mvp"
    ARCHITECTURE = "architecture"
    PLAN = "plan"

    @property
    def display_name(self) -> str:
        """Suffix used when naming a generated document"""
        return DOCUMENT_TITLES[self]

    @classmethod
    def parse(cls, value) -> "DocumentType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedDocumentTypeError(value) from None


DOCUMENT_TITLES = {
    DocumentType.ROADMAP: "Product Roadmap",
    DocumentType.MVP: "MVP Blueprint",
    DocumentType.ARCHITECTURE: "Architecture Design",
    DocumentType.PLAN: "Project Plan",
}


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    project = relationship("Project", back_populates="documents")
