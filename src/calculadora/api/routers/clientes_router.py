from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from calculadora.application.services import ClienteService
from calculadora.schemas import (
    MAX_PAGE,
    CalculoResponse,
    ClienteCreate,
    ClienteDetalhe,
    ClienteListItem,
    ClienteResponse,
    ClienteUpdate,
    Envelope,
    Pagination,
)
from calculadora.web.deps import get_cliente_service, get_current_user

clientes_router = APIRouter(
    prefix="/clientes",
    tags=["Clientes"],
    dependencies=[Depends(get_current_user)],
)


@clientes_router.get("", response_model=Envelope[list[ClienteListItem]])
def list_clientes(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(50, ge=1, le=100),
    search: str | None = Query(None, max_length=255),
    service: ClienteService = Depends(get_cliente_service),
):
    rows, total = service.list(page=page, limit=limit, search=search)
    data = [
        ClienteListItem(
            **ClienteResponse.model_validate(cliente).model_dump(),
            total_calculos=count,
        )
        for cliente, count in rows
    ]
    return Envelope(data=data, pagination=Pagination.build(page, limit, total))


@clientes_router.get("/{cliente_id}", response_model=Envelope[ClienteDetalhe])
def get_cliente(
    cliente_id: UUID,
    service: ClienteService = Depends(get_cliente_service),
):
    cliente, calculos = service.get_by_id(cliente_id)
    data = ClienteDetalhe(
        **ClienteResponse.model_validate(cliente).model_dump(),
        calculos=[CalculoResponse.model_validate(c) for c in calculos],
    )
    return Envelope(data=data)


@clientes_router.post(
    "",
    response_model=Envelope[ClienteResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_cliente(
    dados: ClienteCreate,
    service: ClienteService = Depends(get_cliente_service),
):
    cliente = service.create(dados)
    return Envelope(data=ClienteResponse.model_validate(cliente), message="client created")


@clientes_router.put("/{cliente_id}", response_model=Envelope[ClienteResponse])
def update_cliente(
    cliente_id: UUID,
    dados: ClienteUpdate,
    service: ClienteService = Depends(get_cliente_service),
):
    cliente = service.update(cliente_id, dados)
    return Envelope(data=ClienteResponse.model_validate(cliente), message="client updated")


@clientes_router.delete("/{cliente_id}", response_model=Envelope[None])
def delete_cliente(
    cliente_id: UUID,
    service: ClienteService = Depends(get_cliente_service),
):
    service.delete(cliente_id)
    return Envelope(message="client deleted")
