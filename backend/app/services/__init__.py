# backend/app/services/__init__.py
from .ai import AIGenerator, AIGenerationError
from .export import export_service
from .generator import DocumentGenerator, document_generator, get_document_generator
from .templates import render_template

__all__ = [
    "AIGenerator",
    "AIGenerationError",
    "DocumentGenerator",
    "document_generator",
    "get_document_generator",
    "export_service",
    "render_template"
]
