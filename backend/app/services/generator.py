# backend/app/services/generator.py
from typing import Optional

from .ai import AIGenerator
from .templates import render_template
from ..config import Settings, settings
from ..models.document import DocumentType
from ..schemas.document import Document
from ..storage.base import Storage
from ..utils.logging import service_logger


def document_name(project, document_type: DocumentType) -> str:
    return f"{project.name} - {document_type.display_name}"


class DocumentGenerator:
    """Chooses between AI and template generation and persists the result.

    AI generation is available only when an ``AIGenerator`` is supplied, which
    ``from_settings`` does when an OpenAI key is configured. Any AI failure
    falls back to the template renderer.
    """

    def __init__(self, ai_generator: Optional[AIGenerator] = None):
        self.ai_generator = ai_generator

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "DocumentGenerator":
        ai_generator = AIGenerator.from_settings(config) if config.has_openai_key else None
        return cls(ai_generator=ai_generator)

    @property
    def ai_enabled(self) -> bool:
        return self.ai_generator is not None

    async def render(self, project, document_type, use_ai: bool = True) -> str:
        """Produce content for a document type without persisting it"""
        document_type = DocumentType.parse(document_type)

        if use_ai and self.ai_enabled:
            service_logger.info(f"Generating {document_type.value} using AI", extra={
                "project_name": project.name
            })
            try:
                return await self.ai_generator.generate(project, document_type)
            except Exception as e:
                service_logger.error("AI generation failed, falling back to template", extra={
                    "project_name": project.name,
                    "document_type": document_type.value,
                    "error_type": type(e).__name__,
                    "error": str(e)
                })

        service_logger.info(f"Generating {document_type.value} using templates", extra={
            "project_name": project.name
        })
        return render_template(project, document_type)

    async def generate_document(
            self,
            project,
            document_type,
            storage: Storage,
            use_ai: bool = True
    ) -> Document:
        """Generate one document for the project and store it.

        Raises UnsupportedDocumentTypeError before anything is stored when the
        type is not one of the four document kinds.
        """
        document_type = DocumentType.parse(document_type)
        name = document_name(project, document_type)
        log_fields = {"project_id": project.id, "document_type": document_type.value}

        with service_logger.timed("Document generated", extra=log_fields) as fields:
            content = await self.render(project, document_type, use_ai=use_ai)
            document = storage.create_document(project.id, name, document_type, content)
            fields["document_id"] = document.id
        return document


document_generator = DocumentGenerator.from_settings()


def get_document_generator() -> DocumentGenerator:
    return document_generator
