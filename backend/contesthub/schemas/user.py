from __future__ import annotations
from pydantic import EmailStr, Field
from uuid import UUID
from datetime import datetime
from contesthub.schemas.common import ApiModel, Role

class UserCreate(ApiModel):
    email: EmailStr
    name: str | None = Field(default=None, max_length=120)
    photo_url: str | None = Field(default=None, alias="photoURL")
    bio: str | None = None
    role_preference: Role | None = None

class UserPublic(ApiModel):
    id: UUID
    email: str
    name: str | None = None
    photo_url: str | None = Field(default=None, alias="photoURL")
    bio: str | None = None
    role: Role
    role_preference: Role | None = None
    created_at: datetime

class RegisterResult(ApiModel):
    inserted_id: UUID | None = None
    message: str | None = None

class RoleResponse(ApiModel):
    role: Role

class RoleUpdate(ApiModel):
    role: Role

class ProfileUpdate(ApiModel):
    # unset fields are left untouched; bio may be cleared explicitly
    name: str | None = Field(default=None, max_length=120)
    photo_url: str | None = Field(default=None, alias="photoURL")
    bio: str | None = None

class UserStats(ApiModel):
    participated: int
    wins: int
