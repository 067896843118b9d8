# backend/app/schemas/user.py
from typing import Optional
from .base import BaseSchema
from ..models.collaborator import CollaboratorRole

class UserBase(BaseSchema):
    username: str
    email: str
    name: Optional[str] = None
    avatar: Optional[str] = None

class UserCreate(UserBase):
    password: str

class User(UserBase):
    id: int
    password: str

class CollaboratorCreate(BaseSchema):
    project_id: int
    user_id: int
    role: CollaboratorRole = CollaboratorRole.VIEWER

class Collaborator(CollaboratorCreate):
    id: int
