"""
Repository helpers for the calculadora tables.

Simple CRUD operations plus the queries the services need:
- paginated listings (newest first, ties broken by id)
- client upsert keyed on CPF
- dependent-calculation counts for the client delete guard
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from calculadora.models import Calculo, Cliente, Usuario

logger = logging.getLogger(__name__)


def _window(page: int, limit: int) -> tuple[int, int]:
    """(offset, limit) for a 1-based page."""
    return (page - 1) * limit, limit


class UsuarioRepository:
    """Identity store."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, usuario_id: UUID) -> Usuario | None:
        return self.db.get(Usuario, usuario_id)

    def get_by_email(self, email: str) -> Usuario | None:
        return self.db.query(Usuario).filter(Usuario.email == email).first()

    def get_role(self, usuario_id: UUID) -> str | None:
        """Read the role straight from the table, bypassing the identity map."""
        return self.db.execute(
            select(Usuario.role).where(Usuario.id == usuario_id)
        ).scalar_one_or_none()

    def list_all(self) -> list[Usuario]:
        return (
            self.db.query(Usuario)
            .order_by(Usuario.created_at.desc(), Usuario.id)
            .all()
        )

    def create(self, nome: str, email: str, password_hash: str, role: str) -> Usuario:
        usuario = Usuario(nome=nome, email=email, password_hash=password_hash, role=role)
        self.db.add(usuario)
        self.db.flush()
        return usuario

    def update(self, usuario: Usuario, **fields: Any) -> Usuario:
        for key, value in fields.items():
            setattr(usuario, key, value)
        self.db.flush()
        return usuario

    def delete(self, usuario: Usuario) -> None:
        self.db.delete(usuario)
        self.db.flush()


class ClienteRepository:
    """Client store (unique CPF)."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, cliente_id: UUID) -> Cliente | None:
        return self.db.get(Cliente, cliente_id)

    def get_by_cpf(self, cpf: str) -> Cliente | None:
        return self.db.query(Cliente).filter(Cliente.cpf == cpf).first()

    def list(
        self,
        page: int = 1,
        limit: int = 50,
        search: str | None = None,
    ) -> tuple[list[tuple[Cliente, int]], int]:
        """
        List clients with their calculation counts.

        `search` matches nome/email case-insensitively as a substring, or cpf
        exactly.

        Returns:
            ([(cliente, total_calculos), ...], total matching clients)
        """
        total_calculos = (
            select(func.count(Calculo.id))
            .where(Calculo.cliente_id == Cliente.id)
            .correlate(Cliente)
            .scalar_subquery()
        )

        query = self.db.query(Cliente, total_calculos)
        count_query = self.db.query(func.count(Cliente.id))

        if search:
            condition = or_(
                Cliente.nome.icontains(search, autoescape=True),
                Cliente.email.icontains(search, autoescape=True),
                Cliente.cpf == search,
            )
            query = query.filter(condition)
            count_query = count_query.filter(condition)

        offset, limit = _window(page, limit)
        rows = (
            query.order_by(Cliente.created_at.desc(), Cliente.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [(cliente, int(count or 0)) for cliente, count in rows], count_query.scalar() or 0

    def count_calculos(self, cliente_id: UUID) -> int:
        return (
            self.db.query(func.count(Calculo.id))
            .filter(Calculo.cliente_id == cliente_id)
            .scalar()
        ) or 0

    def create(self, nome: str, telefone: str, cpf: str, email: str) -> Cliente:
        cliente = Cliente(nome=nome, telefone=telefone, cpf=cpf, email=email)
        self.db.add(cliente)
        self.db.flush()
        return cliente

    def update(self, cliente: Cliente, **fields: Any) -> Cliente:
        changed = False
        for key, value in fields.items():
            if getattr(cliente, key) != value:
                setattr(cliente, key, value)
                changed = True
        if changed:
            self.db.flush()
        return cliente

    def upsert_by_cpf(self, nome: str, telefone: str, cpf: str, email: str) -> tuple[Cliente, bool]:
        """
        Create or update a client keyed on CPF.

        The insert runs inside a savepoint. If a concurrent request inserted
        the same CPF first, the unique constraint rejects ours, only the
        savepoint is rolled back and the existing row is updated instead.

        Returns:
            (cliente, created)
        """
        existing = self.get_by_cpf(cpf)

        if existing is None:
            try:
                with self.db.begin_nested():
                    cliente = Cliente(nome=nome, telefone=telefone, cpf=cpf, email=email)
                    self.db.add(cliente)
                return cliente, True
            except IntegrityError:
                logger.info(
                    "Concurrent client insert detected, updating existing record",
                    extra={"cpf_suffix": cpf[-4:]},
                )
                existing = self.get_by_cpf(cpf)
                if existing is None:
                    raise

        self.update(existing, nome=nome, telefone=telefone, email=email)
        return existing, False

    def delete(self, cliente: Cliente) -> None:
        self.db.delete(cliente)
        self.db.flush()


class CalculoRepository:
    """Calculation store."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, calculo_id: UUID) -> Calculo | None:
        return (
            self.db.query(Calculo)
            .options(joinedload(Calculo.cliente))
            .filter(Calculo.id == calculo_id)
            .first()
        )

    def list(
        self,
        page: int = 1,
        limit: int = 50,
        usuario_id: UUID | None = None,
        cliente_id: UUID | None = None,
    ) -> tuple[list[Calculo], int]:
        """
        List calculations, newest first, ties broken by id.

        Returns:
            (calculations on the requested page, total matching)
        """
        filters = []
        if usuario_id is not None:
            filters.append(Calculo.usuario_id == usuario_id)
        if cliente_id is not None:
            filters.append(Calculo.cliente_id == cliente_id)

        offset, limit = _window(page, limit)
        rows = (
            self.db.query(Calculo)
            .options(joinedload(Calculo.cliente))
            .filter(*filters)
            .order_by(Calculo.created_at.desc(), Calculo.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        total = self.db.query(func.count(Calculo.id)).filter(*filters).scalar() or 0
        return rows, total

    def list_by_cliente(self, cliente_id: UUID) -> list[Calculo]:
        return (
            self.db.query(Calculo)
            .filter(Calculo.cliente_id == cliente_id)
            .order_by(Calculo.created_at.desc(), Calculo.id)
            .all()
        )

    def create(self, cliente_id: UUID, usuario_id: UUID | None, **valores: float) -> Calculo:
        calculo = Calculo(cliente_id=cliente_id, usuario_id=usuario_id, **valores)
        self.db.add(calculo)
        self.db.flush()
        return calculo

    def delete(self, calculo: Calculo) -> None:
        self.db.delete(calculo)
        self.db.flush()
