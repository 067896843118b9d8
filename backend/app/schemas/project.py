# backend/app/schemas/project.py
from typing import Optional
from pydantic import Field, field_validator
from .base import BaseSchema, TimestampMixin

class ProjectNeeds(BaseSchema):
    """Which documents to generate when the project is created"""
    roadmap: bool = False
    mvp: bool = False
    architecture: bool = False
    project_plan: bool = False

class ProjectBase(BaseSchema):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    type: str = Field(min_length=1, max_length=50)
    industry: Optional[str] = None
    status: str = "Planning"

class ProjectCreate(ProjectBase):
    needs: ProjectNeeds = Field(default_factory=ProjectNeeds)

class ProjectUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    industry: Optional[str] = None
    status: Optional[str] = None
    needs: Optional[ProjectNeeds] = None

    @field_validator("name", "type", "status", "needs")
    @classmethod
    def reject_null(cls, value):
        # Omit a field to leave it unchanged; null would clear a required column
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

class Project(ProjectBase, TimestampMixin):
    id: int
    needs: ProjectNeeds = Field(default_factory=ProjectNeeds)

class ProjectDetail(Project):
    document_count: int = 0
