from __future__ import annotations

import logging
from typing import Protocol
from uuid import UUID

from sqlalchemy.orm import Session

from calculadora.application.services.base import BaseService
from calculadora.core.exceptions import ConflictError, NotFoundError
from calculadora.models import Calculo, Cliente
from calculadora.persistence import CalculoRepository, ClienteRepository

logger = logging.getLogger(__name__)


class DadosCliente(Protocol):
    nome: str
    telefone: str
    cpf: str
    email: str


class ClienteService(BaseService):
    """Client CRUD with search and the delete-with-calculations guard."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.clientes = ClienteRepository(db)
        self.calculos = CalculoRepository(db)

    def list(
        self,
        page: int = 1,
        limit: int = 50,
        search: str | None = None,
    ) -> tuple[list[tuple[Cliente, int]], int]:
        """Returns ([(cliente, total_calculos), ...], total)."""
        search = search.strip() if search else None
        return self.clientes.list(page=page, limit=limit, search=search or None)

    def get_by_id(self, cliente_id: UUID) -> tuple[Cliente, list[Calculo]]:
        """Client plus its calculations, newest first."""
        cliente = self._get_or_404(cliente_id)
        return cliente, self.calculos.list_by_cliente(cliente.id)

    def create(self, dados: DadosCliente) -> Cliente:
        if self.clientes.get_by_cpf(dados.cpf) is not None:
            raise ConflictError("cpf already registered")

        with self.transaction(conflict_message="cpf already registered"):
            cliente = self.clientes.create(
                nome=dados.nome,
                telefone=dados.telefone,
                cpf=dados.cpf,
                email=dados.email,
            )

        logger.info("Client created", extra={"cliente_id": cliente.id})
        return cliente

    def update(self, cliente_id: UUID, dados: DadosCliente) -> Cliente:
        cliente = self._get_or_404(cliente_id)

        if dados.cpf != cliente.cpf:
            other = self.clientes.get_by_cpf(dados.cpf)
            if other is not None and other.id != cliente.id:
                raise ConflictError("cpf in use by another client")

        with self.transaction(conflict_message="cpf in use by another client"):
            self.clientes.update(
                cliente,
                nome=dados.nome,
                telefone=dados.telefone,
                cpf=dados.cpf,
                email=dados.email,
            )

        logger.info("Client updated", extra={"cliente_id": cliente_id})
        return cliente

    def delete(self, cliente_id: UUID) -> None:
        """
        Delete a client with no calculations.

        The guard runs here, before the store is touched, so the database
        cascade never removes calculations through this path.
        """
        cliente = self._get_or_404(cliente_id)

        total = self.clientes.count_calculos(cliente.id)
        if total > 0:
            raise ConflictError(
                "client has calculations",
                details={"total_calculos": total},
            )

        with self.transaction():
            self.clientes.delete(cliente)

        logger.info("Client deleted", extra={"cliente_id": cliente_id})

    def _get_or_404(self, cliente_id: UUID) -> Cliente:
        cliente = self.clientes.get_by_id(cliente_id)
        if cliente is None:
            raise NotFoundError("client not found")
        return cliente
