# backend/app/api/documents.py
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..schemas.document import DocumentUpdate, Document as DocumentSchema
from ..services.ai import AIGenerationError
from ..services.export import export_service
from ..services.generator import DocumentGenerator, get_document_generator
from ..storage import Storage, get_storage
from ..utils.logging import api_logger

router = APIRouter(prefix="/api", tags=["documents"])


def _require_document(document_id: int, storage: Storage) -> DocumentSchema:
    document = storage.get_document(document_id)
    if not document:
        api_logger.warning("Document not found", extra={"document_id": document_id})
        raise HTTPException(status_code=404, detail="Document not found")
    return document


@router.get("/documents/{document_id}", response_model=DocumentSchema)
async def get_document(document_id: int, storage: Storage = Depends(get_storage)):
    api_logger.info("Retrieving document details", extra={"document_id": document_id})

    with api_logger.timed("Successfully retrieved document", extra={"document_id": document_id}):
        document = _require_document(document_id, storage)
    return document


@router.patch("/documents/{document_id}", response_model=DocumentSchema)
async def update_document(document_id: int, document: DocumentUpdate, storage: Storage = Depends(get_storage)):
    fields = document.model_dump(exclude_unset=True)
    api_logger.info("Updating document", extra={
        "document_id": document_id,
        "update_fields": list(fields.keys())
    })

    _require_document(document_id, storage)

    try:
        with api_logger.timed("Successfully updated document", extra={"document_id": document_id}):
            updated = storage.update_document(document_id, fields)
        return updated
    except Exception as e:
        api_logger.error("Error updating document", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail="Failed to update document")


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: int, storage: Storage = Depends(get_storage)):
    api_logger.info("Deleting document", extra={"document_id": document_id})

    _require_document(document_id, storage)

    try:
        storage.delete_document(document_id)
        api_logger.info(f"Successfully deleted document {document_id}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        api_logger.error(f"Failed to delete document: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete document")


@router.get("/documents/{document_id}/export")
async def export_document(
        document_id: int,
        format: Literal["pdf", "docx"] = "pdf",
        storage: Storage = Depends(get_storage)
):
    api_logger.info("Starting document export", extra={
        "document_id": document_id,
        "format": format
    })

    document = _require_document(document_id, storage)

    try:
        result = export_service.export(document.name, document.content, format)
    except Exception as e:
        api_logger.error("Export failed", extra={
            "document_id": document_id,
            "format": format,
            "error": str(e)
        }, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Export failed: {str(e)}")

    api_logger.info("Export successful", extra={
        "document_id": document_id,
        "format": format,
        "size_bytes": len(result.content)
    })
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": result.content_disposition}
    )


@router.post("/documents/{document_id}/regenerate-with-ai", response_model=DocumentSchema)
async def regenerate_document_with_ai(
        document_id: int,
        storage: Storage = Depends(get_storage),
        generator: DocumentGenerator = Depends(get_document_generator)
):
    """Replace a document's content with freshly generated AI output"""
    api_logger.info("Regenerating document with AI", extra={"document_id": document_id})

    document = _require_document(document_id, storage)

    project = storage.get_project(document.project_id)
    if not project:
        api_logger.warning("Project not found", extra={"project_id": document.project_id})
        raise HTTPException(status_code=404, detail="Project not found")

    if not generator.ai_enabled:
        api_logger.warning("AI regeneration requested without an OpenAI key", extra={
            "document_id": document_id
        })
        raise HTTPException(
            status_code=400,
            detail="OpenAI API key is required. Set OPENAI_API_KEY to use AI-powered generation."
        )

    try:
        content = await generator.ai_generator.generate(project, document.type)
    except AIGenerationError as e:
        api_logger.error("AI regeneration failed", extra={
            "document_id": document_id,
            "error": str(e)
        })
        raise HTTPException(status_code=502, detail="Failed to regenerate document using AI")

    updated = storage.update_document(document_id, {"content": content})
    api_logger.info("Document regenerated with AI", extra={
        "document_id": document_id,
        "content_length": len(content)
    })
    return updated


@router.get("/check-openai-key")
async def check_openai_key(generator: DocumentGenerator = Depends(get_document_generator)):
    """Report whether AI generation is available"""
    return {"has_key": generator.ai_enabled}
