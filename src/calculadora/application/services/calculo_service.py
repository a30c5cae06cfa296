"""
Calculation Service

Creates calculations (client upsert by CPF + engine + insert, committed as
one transaction) and enforces who can see them:

- admins see every calculation
- everyone else only sees calculations they created, in listings and by id
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from calculadora.application.authorization import AuthenticatedUser
from calculadora.application.services.base import BaseService
from calculadora.application.services.cliente_service import DadosCliente
from calculadora.core.exceptions import NotFoundError
from calculadora.domain.calculo import DEFAULT_TAXA_POUPANCA, calcular
from calculadora.models import Calculo
from calculadora.persistence import CalculoRepository, ClienteRepository

logger = logging.getLogger(__name__)


class CalculoService(BaseService):
    """Service for calculation lifecycle."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.calculos = CalculoRepository(db)
        self.clientes = ClienteRepository(db)

    def create(
        self,
        valor_locacao: float,
        valor_taxas: float,
        cliente: DadosCliente,
        acting_user: AuthenticatedUser,
        taxa_poupanca: float | None = None,
    ) -> Calculo:
        """
        Create a calculation for the client identified by `cliente.cpf`.

        The client is created if the CPF is new, otherwise its contact details
        are overwritten with the ones given. Nothing is persisted if any step
        fails.
        """
        if taxa_poupanca is None:
            taxa_poupanca = DEFAULT_TAXA_POUPANCA

        with self.transaction(conflict_message="cpf already registered"):
            registro, created = self.clientes.upsert_by_cpf(
                nome=cliente.nome,
                telefone=cliente.telefone,
                cpf=cliente.cpf,
                email=cliente.email,
            )

            resultado = calcular(valor_locacao, valor_taxas, taxa_poupanca)

            calculo = self.calculos.create(
                cliente_id=registro.id,
                usuario_id=acting_user.id,
                **resultado.to_dict(),
            )

        logger.info(
            "Calculation created",
            extra={
                "calculo_id": calculo.id,
                "cliente_id": registro.id,
                "cliente_created": created,
                "usuario_id": acting_user.id,
            },
        )
        return calculo

    def list(
        self,
        acting_user: AuthenticatedUser,
        page: int = 1,
        limit: int = 50,
        cliente_id: UUID | None = None,
    ) -> tuple[list[Calculo], int]:
        """List calculations; non-admins are always restricted to their own."""
        usuario_id = None if acting_user.is_admin else acting_user.id
        return self.calculos.list(
            page=page,
            limit=limit,
            usuario_id=usuario_id,
            cliente_id=cliente_id,
        )

    def get_by_id(self, calculo_id: UUID, acting_user: AuthenticatedUser) -> Calculo:
        calculo = self.calculos.get_by_id(calculo_id)
        if calculo is None or not self._can_access(calculo, acting_user):
            raise NotFoundError("calculation not found")
        return calculo

    def delete(self, calculo_id: UUID, acting_user: AuthenticatedUser) -> None:
        calculo = self.get_by_id(calculo_id, acting_user)

        with self.transaction():
            self.calculos.delete(calculo)

        logger.info(
            "Calculation deleted",
            extra={"calculo_id": calculo_id, "usuario_id": acting_user.id},
        )

    @staticmethod
    def _can_access(calculo: Calculo, acting_user: AuthenticatedUser) -> bool:
        # Others' calculations look absent rather than forbidden
        return acting_user.is_admin or calculo.usuario_id == acting_user.id
