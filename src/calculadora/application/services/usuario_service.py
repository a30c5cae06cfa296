"""
Identity Service

Registration, login and admin user management. Registration logs the new
user in (a token is returned); users created by an admin must log in
themselves.
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from calculadora.application.authorization import AuthenticatedUser
from calculadora.application.services.base import BaseService
from calculadora.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from calculadora.core.security import PasswordHasher, TokenProvider
from calculadora.models import Role, Usuario
from calculadora.persistence import UsuarioRepository

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "email in use"
INVALID_CREDENTIALS = "invalid credentials"


class UsuarioService(BaseService):
    def __init__(self, db: Session, hasher: PasswordHasher, tokens: TokenProvider):
        super().__init__(db)
        self.usuarios = UsuarioRepository(db)
        self.hasher = hasher
        self.tokens = tokens

    def issue_token(self, usuario: Usuario) -> str:
        return self.tokens.issue({"sub": str(usuario.id), "email": usuario.email})

    def register(self, nome: str, email: str, senha: str) -> tuple[Usuario, str]:
        """Self-registration. Always creates a regular user and logs them in."""
        usuario = self._create(nome, email, senha, Role.USER.value)
        logger.info("User registered", extra={"usuario_id": usuario.id})
        return usuario, self.issue_token(usuario)

    def login(self, email: str, senha: str) -> tuple[Usuario, str]:
        usuario = self.usuarios.get_by_email(email)

        # Same answer for unknown email and wrong password
        if usuario is None or not self.hasher.verify(senha, usuario.password_hash):
            logger.warning("Login failed")
            raise UnauthorizedError(INVALID_CREDENTIALS, code="invalid_credentials")

        return usuario, self.issue_token(usuario)

    def list_users(self) -> list[Usuario]:
        return self.usuarios.list_all()

    def create_user(self, nome: str, email: str, senha: str, role: str = Role.USER.value) -> Usuario:
        """Admin-created account. No token is issued."""
        usuario = self._create(nome, email, senha, role)
        logger.info("User created by admin", extra={"usuario_id": usuario.id, "role": role})
        return usuario

    def update_user(
        self,
        usuario_id: UUID,
        nome: str,
        email: str,
        role: str,
        senha: str | None = None,
    ) -> Usuario:
        """Update an account. A missing or blank password keeps the current one."""
        usuario = self._get_or_404(usuario_id)

        if email != usuario.email and self.usuarios.get_by_email(email) is not None:
            raise ConflictError(EMAIL_IN_USE)

        fields = {"nome": nome, "email": email, "role": role}
        if senha and senha.strip():
            fields["password_hash"] = self.hasher.hash(senha)

        with self.transaction(conflict_message=EMAIL_IN_USE):
            self.usuarios.update(usuario, **fields)

        logger.info("User updated", extra={"usuario_id": usuario_id, "role": role})
        return usuario

    def delete_user(self, usuario_id: UUID, acting_user: AuthenticatedUser) -> None:
        """
        Delete an account other than the caller's own.

        Calculations the user created are kept with a NULL creator.
        """
        usuario = self._get_or_404(usuario_id)

        if usuario.id == acting_user.id:
            raise ConflictError("cannot delete self")

        with self.transaction():
            self.usuarios.delete(usuario)

        logger.info(
            "User deleted",
            extra={"usuario_id": usuario_id, "deleted_by": acting_user.id},
        )

    def _create(self, nome: str, email: str, senha: str, role: str) -> Usuario:
        if self.usuarios.get_by_email(email) is not None:
            raise ConflictError(EMAIL_IN_USE)

        with self.transaction(conflict_message=EMAIL_IN_USE):
            usuario = self.usuarios.create(
                nome=nome,
                email=email,
                password_hash=self.hasher.hash(senha),
                role=role,
            )
        return usuario

    def _get_or_404(self, usuario_id: UUID) -> Usuario:
        usuario = self.usuarios.get_by_id(usuario_id)
        if usuario is None:
            raise NotFoundError("user not found")
        return usuario
