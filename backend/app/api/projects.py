# backend/app/api/projects.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.document import DocumentType, UnsupportedDocumentTypeError
from ..schemas.document import Document as DocumentSchema, DocumentCreate, GenerateDocumentRequest
from ..schemas.project import ProjectCreate, ProjectUpdate, Project as ProjectSchema, ProjectDetail
from ..services.generator import DocumentGenerator, get_document_generator
from ..storage import Storage, get_storage
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/projects", tags=["projects"])

# needs flag -> document generated for it at creation time
NEEDS_DOCUMENTS = [
    ("roadmap", DocumentType.ROADMAP),
    ("mvp", DocumentType.MVP),
    ("architecture", DocumentType.ARCHITECTURE),
    ("project_plan", DocumentType.PLAN),
]


def _require_project(project_id: int, storage: Storage) -> ProjectSchema:
    project = storage.get_project(project_id)
    if not project:
        api_logger.warning("Project not found", extra={"project_id": project_id})
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("", response_model=List[ProjectDetail])
async def list_projects(storage: Storage = Depends(get_storage)):
    """List all projects with their document counts"""
    api_logger.info("Starting projects list operation", extra={
        "endpoint": "/api/projects",
        "method": "GET"
    })

    try:
        result = [
            ProjectDetail(**project.model_dump(), document_count=storage.count_documents(project.id))
            for project in storage.list_projects()
        ]
        api_logger.info(f"Found {len(result)} projects")
        return result
    except Exception as e:
        api_logger.error("Failed to list projects", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Failed to fetch projects")


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(project_id: int, storage: Storage = Depends(get_storage)):
    api_logger.info("Fetching project", extra={"project_id": project_id})

    project = _require_project(project_id, storage)
    doc_count = storage.count_documents(project_id)

    api_logger.info("Project retrieved successfully", extra={
        "project_id": project_id,
        "document_count": doc_count
    })
    return ProjectDetail(**project.model_dump(), document_count=doc_count)


@router.post("", response_model=ProjectSchema, status_code=status.HTTP_201_CREATED)
async def create_project(
        project: ProjectCreate,
        storage: Storage = Depends(get_storage),
        generator: DocumentGenerator = Depends(get_document_generator)
):
    """Create a project and generate the documents selected in its needs"""
    api_logger.info("Creating new project", extra={
        "project_name": project.name,
        "needs": project.needs.model_dump()
    })

    db_project = None
    try:
        db_project = storage.create_project(project)

        for flag, document_type in NEEDS_DOCUMENTS:
            if getattr(project.needs, flag):
                await generator.generate_document(db_project, document_type, storage)

        api_logger.info("Project created successfully", extra={
            "project_id": db_project.id,
            "project_name": db_project.name
        })
        return db_project
    except Exception as e:
        api_logger.error("Failed to create project", extra={
            "project_name": project.name,
            "error": str(e)
        }, exc_info=True)
        if db_project is not None:
            # Documents already generated for it go with the project
            storage.delete_project(db_project.id)
            api_logger.info("Removed partially created project", extra={"project_id": db_project.id})
        raise HTTPException(status_code=500, detail="Failed to create project")


@router.patch("/{project_id}", response_model=ProjectSchema)
async def update_project(project_id: int, project: ProjectUpdate, storage: Storage = Depends(get_storage)):
    fields = project.model_dump(exclude_unset=True)
    api_logger.info("Updating project", extra={
        "project_id": project_id,
        "update_fields": list(fields.keys())
    })

    _require_project(project_id, storage)

    try:
        updated = storage.update_project(project_id, fields)
        api_logger.info("Project updated successfully", extra={"project_id": project_id})
        return updated
    except Exception as e:
        api_logger.error("Failed to update project", extra={
            "project_id": project_id,
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail="Failed to update project")


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: int, storage: Storage = Depends(get_storage)):
    api_logger.info("Deleting project", extra={"project_id": project_id})

    _require_project(project_id, storage)

    try:
        storage.delete_project(project_id)
        api_logger.info(f"Successfully deleted project {project_id}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        api_logger.error(f"Failed to delete project: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete project")


@router.get("/{project_id}/documents", response_model=List[DocumentSchema])
async def list_project_documents(project_id: int, storage: Storage = Depends(get_storage)):
    api_logger.info("Listing documents for project", extra={
        "project_id": project_id,
        "operation": "list_project_documents"
    })

    _require_project(project_id, storage)
    documents = storage.get_documents_by_project(project_id)

    api_logger.info("Successfully listed project documents", extra={
        "project_id": project_id,
        "document_count": len(documents)
    })
    return documents


@router.post("/{project_id}/documents", response_model=DocumentSchema, status_code=status.HTTP_201_CREATED)
async def create_project_document(
        project_id: int,
        document: DocumentCreate,
        storage: Storage = Depends(get_storage)
):
    api_logger.info("Creating new document", extra={
        "project_id": project_id,
        "document_name": document.name
    })

    _require_project(project_id, storage)

    try:
        db_document = storage.create_document(project_id, document.name, document.type, document.content)
        api_logger.info("Successfully created document", extra={
            "document_id": db_document.id,
            "project_id": project_id
        })
        return db_document
    except Exception as e:
        api_logger.error("Error creating document", extra={
            "project_id": project_id,
            "document_name": document.name,
            "error": str(e)
        })
        raise HTTPException(status_code=500, detail="Failed to create document")


@router.post("/{project_id}/documents/generate", response_model=DocumentSchema, status_code=status.HTTP_201_CREATED)
async def generate_project_document(
        project_id: int,
        request: GenerateDocumentRequest,
        storage: Storage = Depends(get_storage),
        generator: DocumentGenerator = Depends(get_document_generator)
):
    """Generate a new document of the requested type for a project"""
    api_logger.info("Generating document", extra={
        "project_id": project_id,
        "document_type": request.type,
        "use_ai": request.use_ai
    })

    project = _require_project(project_id, storage)

    try:
        return await generator.generate_document(project, request.type, storage, use_ai=request.use_ai)
    except UnsupportedDocumentTypeError as e:
        api_logger.warning("Unsupported document type requested", extra={
            "project_id": project_id,
            "document_type": request.type
        })
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        api_logger.error("Failed to generate document", extra={
            "project_id": project_id,
            "document_type": request.type,
            "error": str(e)
        }, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate document")
