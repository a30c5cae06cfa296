"""
Pytest fixtures for the Calculadora API tests.

Every test gets a fresh in-memory SQLite database (single shared connection
via StaticPool, foreign keys on).
"""

import os

# Set environment variables for tests before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_FORMAT"] = "text"

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from calculadora.application.authorization import AuthenticatedUser
from calculadora.application.services import CalculoService, ClienteService, UsuarioService
from calculadora.core.config import get_settings
from calculadora.core.database import create_db_engine, init_db
from calculadora.core.security import (
    PasswordHasher,
    TokenProvider,
    get_password_hasher,
    get_token_provider,
)
from calculadora.schemas import ClienteCreate

get_settings.cache_clear()
get_password_hasher.cache_clear()
get_token_provider.cache_clear()


def identity(usuario) -> AuthenticatedUser:
    """AuthenticatedUser for a Usuario row."""
    return AuthenticatedUser(id=usuario.id, nome=usuario.nome, email=usuario.email, role=usuario.role)


def dados_cliente(cpf: str = "12345678901", **overrides) -> ClienteCreate:
    fields = {
        "nome": "Maria Souza",
        "telefone": "11999999999",
        "cpf": cpf,
        "email": "maria@example.com",
    }
    fields.update(overrides)
    return ClienteCreate(**fields)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenProvider("test-secret-key")


@pytest.fixture
def usuario_service(db, hasher, tokens):
    return UsuarioService(db, hasher, tokens)


@pytest.fixture
def calculo_service(db):
    return CalculoService(db)


@pytest.fixture
def cliente_service(db):
    return ClienteService(db)


@pytest.fixture
def admin(usuario_service):
    usuario = usuario_service.create_user("Admin", "admin@example.com", "admin123", "admin")
    return identity(usuario)


@pytest.fixture
def user(usuario_service):
    usuario = usuario_service.create_user("Ana", "ana@example.com", "ana12345", "user")
    return identity(usuario)


@pytest.fixture
def other_user(usuario_service):
    usuario = usuario_service.create_user("Bruno", "bruno@example.com", "bruno123", "user")
    return identity(usuario)
