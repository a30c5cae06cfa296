from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from calculadora.domain.calculo import DEFAULT_TAXA_POUPANCA
from calculadora.schemas.cliente import ClienteCreate, ClienteResponse


class CalculoCreate(BaseModel):
    """Inputs of a calculation. Derived values are never accepted from callers."""

    model_config = ConfigDict(extra="ignore")

    valor_locacao: float = Field(..., gt=0, allow_inf_nan=False)
    valor_taxas: float = Field(..., gt=0, allow_inf_nan=False)
    cliente: ClienteCreate
    taxa_poupanca: float = Field(DEFAULT_TAXA_POUPANCA, allow_inf_nan=False)


class CalculoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    valor_locacao: float
    valor_taxas: float
    valor_inicial: float
    valor_original: float
    valor_com_desconto: float
    valor_corrigido: float
    taxa_poupanca: float
    cliente_id: UUID
    usuario_id: UUID | None = None
    created_at: datetime
    updated_at: datetime


class CalculoDetalhe(CalculoResponse):
    """Calculation with its client expanded."""

    cliente: ClienteResponse


class ClienteDetalhe(ClienteResponse):
    """Client with its calculations, newest first."""

    calculos: list[CalculoResponse] = []
