"""
Store boundary.

Repository classes wrap a SQLAlchemy session. They flush but never commit;
the calling service owns the transaction.
"""

from calculadora.persistence.repo import (
    CalculoRepository,
    ClienteRepository,
    UsuarioRepository,
)

__all__ = ["CalculoRepository", "ClienteRepository", "UsuarioRepository"]
