from __future__ import annotations
from pydantic import BaseModel, EmailStr
from contesthub.schemas.common import ApiModel

class TokenRequest(ApiModel):
    email: EmailStr

class TokenResponse(ApiModel):
    token: str

class Claims(BaseModel):
    email: str
    iat: int
    exp: int
