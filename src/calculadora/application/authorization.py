"""
Authorization Gate

Resolves a bearer token to a user and gates admin-only operations:

    Unauthenticated -> TokenPresent -> TokenValid(user_id) -> UserResolved -> [RoleChecked]

Every failure after "token present" reports the same "invalid token" message
so callers cannot tell a bad signature from a deleted user. The admin check
re-reads the role from the database instead of trusting anything cached, so a
role downgrade takes effect on the very next request.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.orm import Session

from calculadora.core.exceptions import ForbiddenError, UnauthorizedError
from calculadora.core.security import TokenProvider
from calculadora.models import Role
from calculadora.persistence import UsuarioRepository

logger = logging.getLogger(__name__)

TOKEN_REQUIRED = "token required"
INVALID_TOKEN = "invalid token"


@dataclass
class AuthenticatedUser:
    """Identity of the caller, loaded from the database at authentication time."""

    id: UUID
    nome: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def extract_bearer_token(authorization: str | None) -> str:
    """
    Pull the token out of an Authorization header value.

    Raises:
        UnauthorizedError: header missing/empty ("token required") or not a
            Bearer credential ("invalid token")
    """
    if not authorization or not authorization.strip():
        raise UnauthorizedError(TOKEN_REQUIRED, code="token_required")

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        raise UnauthorizedError(INVALID_TOKEN, code="invalid_token")

    token = token.strip()
    if not token:
        raise UnauthorizedError(TOKEN_REQUIRED, code="token_required")
    return token


class AuthorizationGate:
    def __init__(self, db: Session, tokens: TokenProvider):
        self.repo = UsuarioRepository(db)
        self.tokens = tokens

    def authenticate(self, authorization: str | None) -> AuthenticatedUser:
        """Resolve an Authorization header to the current user."""
        token = extract_bearer_token(authorization)

        claims = self.tokens.verify(token)
        if claims is None:
            logger.warning("Rejected token: invalid signature or expired")
            raise UnauthorizedError(INVALID_TOKEN, code="invalid_token")

        try:
            usuario_id = UUID(str(claims.get("sub")))
        except ValueError:
            logger.warning("Rejected token: malformed subject")
            raise UnauthorizedError(INVALID_TOKEN, code="invalid_token")

        usuario = self.repo.get_by_id(usuario_id)
        if usuario is None:
            logger.warning("Rejected token: user no longer exists", extra={"usuario_id": usuario_id})
            raise UnauthorizedError(INVALID_TOKEN, code="invalid_token")

        return AuthenticatedUser(
            id=usuario.id,
            nome=usuario.nome,
            email=usuario.email,
            role=usuario.role,
        )

    def require_admin(self, user: AuthenticatedUser) -> AuthenticatedUser:
        """Fail with ForbiddenError unless the user is currently an admin."""
        role = self.repo.get_role(user.id)
        if role != Role.ADMIN.value:
            logger.warning("Admin access denied", extra={"usuario_id": user.id, "role": role})
            raise ForbiddenError("admin access required")

        user.role = role
        return user
