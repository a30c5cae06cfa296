from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ClienteCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    nome: str = Field(..., min_length=2, max_length=255)
    telefone: str = Field(..., min_length=10, max_length=20)
    cpf: str = Field(..., min_length=11, max_length=14)
    email: EmailStr


class ClienteUpdate(ClienteCreate):
    """Full replacement of a client's fields (PUT)."""


class ClienteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    nome: str
    telefone: str
    cpf: str
    email: str
    created_at: datetime
    updated_at: datetime


class ClienteListItem(ClienteResponse):
    total_calculos: int = 0
