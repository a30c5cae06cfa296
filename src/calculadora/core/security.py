import functools
from datetime import datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from calculadora.core.config import get_settings


class PasswordHasher:
    """bcrypt credential provider: hash(secret) -> digest, verify(secret, digest)."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Generate a bcrypt hash for a password."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, plain_password: str, hashed_password: str | bytes) -> bool:
        """Verify a password against a bcrypt hash."""
        if isinstance(hashed_password, str):
            hashed_password = hashed_password.encode("utf-8")

        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password)
        except ValueError:
            # Stored value is not a bcrypt hash
            return False


class TokenProvider:
    """JWT token provider: issue(claims, ttl) -> token, verify(token) -> claims | None."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", default_ttl: timedelta | None = None):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.default_ttl = default_ttl or timedelta(days=7)

    def issue(self, claims: dict[str, Any], ttl: timedelta | None = None) -> str:
        to_encode = claims.copy()
        now = datetime.utcnow()
        to_encode.update({"iat": now, "exp": now + (ttl or self.default_ttl)})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any] | None:
        """Decode and validate a token. Returns None if invalid or expired."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None


@functools.lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


@functools.lru_cache()
def get_token_provider() -> TokenProvider:
    settings = get_settings()
    return TokenProvider(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        default_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
