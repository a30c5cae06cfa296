from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

RoleName = Literal["admin", "user"]


class UsuarioRegister(BaseModel):
    nome: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    senha: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    senha: str = Field(..., min_length=1)


class UsuarioAdminCreate(UsuarioRegister):
    role: RoleName = "user"


class UsuarioAdminUpdate(BaseModel):
    nome: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    senha: str | None = None  # blank or missing keeps the current password
    role: RoleName = "user"

    @field_validator("senha")
    @classmethod
    def blank_or_long_enough(cls, value: str | None) -> str | None:
        if value and value.strip() and len(value) < 6:
            raise ValueError("password must have at least 6 characters")
        return value


class UsuarioResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    nome: str
    email: str
    role: str
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    usuario: UsuarioResponse
    token: str
