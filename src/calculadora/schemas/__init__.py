"""Request/response schemas validated at the HTTP boundary."""

from calculadora.schemas.calculo import (
    CalculoCreate,
    CalculoDetalhe,
    CalculoResponse,
    ClienteDetalhe,
)
from calculadora.schemas.cliente import (
    ClienteCreate,
    ClienteListItem,
    ClienteResponse,
    ClienteUpdate,
)
from calculadora.schemas.common import MAX_PAGE, Envelope, Pagination
from calculadora.schemas.usuario import (
    AuthResponse,
    LoginRequest,
    UsuarioAdminCreate,
    UsuarioAdminUpdate,
    UsuarioRegister,
    UsuarioResponse,
)

__all__ = [
    "MAX_PAGE",
    "AuthResponse",
    "CalculoCreate",
    "CalculoDetalhe",
    "CalculoResponse",
    "ClienteCreate",
    "ClienteDetalhe",
    "ClienteListItem",
    "ClienteResponse",
    "ClienteUpdate",
    "Envelope",
    "LoginRequest",
    "Pagination",
    "UsuarioAdminCreate",
    "UsuarioAdminUpdate",
    "UsuarioRegister",
    "UsuarioResponse",
]
