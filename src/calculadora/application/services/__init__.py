"""Application services. Each receives the request's database session."""

from calculadora.application.services.calculo_service import CalculoService
from calculadora.application.services.cliente_service import ClienteService
from calculadora.application.services.usuario_service import UsuarioService

__all__ = ["CalculoService", "ClienteService", "UsuarioService"]
