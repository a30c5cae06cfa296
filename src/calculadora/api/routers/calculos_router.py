"""Calculation endpoints. Every route requires an authenticated user."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from calculadora.application.authorization import AuthenticatedUser
from calculadora.application.services import CalculoService
from calculadora.schemas import MAX_PAGE, CalculoCreate, CalculoDetalhe, Envelope, Pagination
from calculadora.web.deps import get_calculo_service, get_current_user

calculos_router = APIRouter(prefix="/calculos", tags=["Cálculos"])


@calculos_router.post(
    "",
    response_model=Envelope[CalculoDetalhe],
    status_code=status.HTTP_201_CREATED,
)
def create_calculo(
    dados: CalculoCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: CalculoService = Depends(get_calculo_service),
):
    calculo = service.create(
        valor_locacao=dados.valor_locacao,
        valor_taxas=dados.valor_taxas,
        cliente=dados.cliente,
        acting_user=user,
        taxa_poupanca=dados.taxa_poupanca,
    )
    return Envelope(
        data=CalculoDetalhe.model_validate(calculo),
        message="calculation created",
    )


@calculos_router.get("", response_model=Envelope[list[CalculoDetalhe]])
def list_calculos(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(50, ge=1, le=100),
    cliente_id: UUID | None = Query(None, alias="clienteId"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: CalculoService = Depends(get_calculo_service),
):
    """Admins see all calculations; other users only their own."""
    calculos, total = service.list(user, page=page, limit=limit, cliente_id=cliente_id)
    return Envelope(
        data=[CalculoDetalhe.model_validate(c) for c in calculos],
        pagination=Pagination.build(page, limit, total),
    )


@calculos_router.get("/{calculo_id}", response_model=Envelope[CalculoDetalhe])
def get_calculo(
    calculo_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: CalculoService = Depends(get_calculo_service),
):
    calculo = service.get_by_id(calculo_id, user)
    return Envelope(data=CalculoDetalhe.model_validate(calculo))


@calculos_router.delete("/{calculo_id}", response_model=Envelope[None])
def delete_calculo(
    calculo_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: CalculoService = Depends(get_calculo_service),
):
    service.delete(calculo_id, user)
    return Envelope(message="calculation deleted")
