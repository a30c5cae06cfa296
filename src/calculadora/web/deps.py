"""Request-scoped dependencies: database session, services, authentication."""

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from calculadora.application.authorization import AuthenticatedUser, AuthorizationGate
from calculadora.application.services import CalculoService, ClienteService, UsuarioService
from calculadora.core.database import get_db
from calculadora.core.security import get_password_hasher, get_token_provider


def get_authorization_gate(db: Session = Depends(get_db)) -> AuthorizationGate:
    return AuthorizationGate(db, get_token_provider())


def get_current_user(
    authorization: str | None = Header(default=None),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> AuthenticatedUser:
    """
    Require an authenticated user from the Authorization header.

    Raises UnauthorizedError ("token required" / "invalid token"), which the
    exception handlers turn into a 401 envelope.
    """
    return gate.authenticate(authorization)


def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> AuthenticatedUser:
    """Require a user whose stored role is currently admin."""
    return gate.require_admin(user)


def get_calculo_service(db: Session = Depends(get_db)) -> CalculoService:
    return CalculoService(db)


def get_cliente_service(db: Session = Depends(get_db)) -> ClienteService:
    return ClienteService(db)


def get_usuario_service(db: Session = Depends(get_db)) -> UsuarioService:
    return UsuarioService(db, get_password_hasher(), get_token_provider())
