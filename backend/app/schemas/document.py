# backend/app/schemas/document.py
from typing import Optional
from pydantic import Field, field_validator
from .base import BaseSchema, TimestampMixin
from ..models.document import DocumentType

class DocumentBase(BaseSchema):
    name: str = Field(min_length=1, max_length=255)
    type: DocumentType
    content: str

class DocumentCreate(DocumentBase):
    pass

class DocumentUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None

    @field_validator("name", "content")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

class Document(DocumentBase, TimestampMixin):
    id: int
    project_id: int

class GenerateDocumentRequest(BaseSchema):
    # Left as a plain string so unsupported values reach the generator
    type: str
    use_ai: bool = True
