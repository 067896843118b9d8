# backend/app/models/project.py
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


def default_needs() -> dict:
    return {
        "roadmap": False,
        "mvp": False,
        "architecture": False,
        "project_plan": False,
    }


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False)
    industry = Column(String(50), nullable=True)
    status = Column(String(50), nullable=False, default="Planning", server_default="Planning")
    needs = Column(JSON, nullable=False, default=default_needs)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    documents = relationship("Document", back_populates="project", cascade="all, delete-orphan")
    collaborators = relationship("Collaborator", back_populates="project", cascade="all, delete-orphan")
