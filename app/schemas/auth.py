from uuid import UUID

from pydantic import BaseModel, EmailStr

from app.core.permissions import Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthUser(BaseModel):
    id: UUID
    email: EmailStr
    role: Role
    tenant_id: UUID
    permissions: list[str] = []


class TokenResponse(BaseModel):
    ok: bool = True
    access_token: str
    token_type: str = "bearer"
    user: AuthUser


class MeResponse(BaseModel):
    ok: bool = True
    user: AuthUser
