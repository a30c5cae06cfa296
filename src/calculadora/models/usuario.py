from enum import Enum

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from calculadora.core.database import Base
from calculadora.models.base import BaseModelMixin


class Role(str, Enum):
    """Access roles."""

    ADMIN = "admin"
    USER = "user"

    def __str__(self) -> str:
        return self.value


class Usuario(Base, BaseModelMixin):
    """Application user. `password_hash` never leaves the service layer."""

    __tablename__ = "usuarios"

    nome = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value)

    # Creator back-reference only; the FK nulls it when the user is deleted
    calculos = relationship("Calculo", back_populates="usuario", passive_deletes=True)
