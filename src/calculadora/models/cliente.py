from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from calculadora.core.database import Base
from calculadora.models.base import BaseModelMixin


class Cliente(Base, BaseModelMixin):
    """Client of a calculation, identified by CPF."""

    __tablename__ = "clientes"

    nome = Column(String(255), nullable=False)
    telefone = Column(String(20), nullable=False)
    cpf = Column(String(14), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=False)

    calculos = relationship(
        "Calculo",
        back_populates="cliente",
        cascade="all, delete",
        passive_deletes=True,
    )
