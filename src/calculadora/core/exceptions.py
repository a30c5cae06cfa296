"""
Typed exceptions for the Calculadora API.

Every error carries a machine-readable `code` and optional structured
`details`. The HTTP layer maps each class to a status code and an envelope;
services only raise them.

    CalculadoraError
    +-- ValidationError
    |   +-- InvalidInputError
    +-- NotFoundError
    +-- ConflictError
    +-- UnauthorizedError
    +-- ForbiddenError
    +-- StoreUnavailableError
"""

from typing import Any


class CalculadoraError(Exception):
    """Base error for the Calculadora API."""

    code = "error"
    status_code = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}


class ValidationError(CalculadoraError):
    """Malformed or out-of-range input."""

    code = "validation_error"
    status_code = 400

    def __init__(
        self,
        message: str = "invalid data",
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class InvalidInputError(ValidationError):
    """Calculation engine rejected its inputs."""

    code = "invalid_input"


class NotFoundError(CalculadoraError):
    code = "not_found"
    status_code = 404


class ConflictError(CalculadoraError):
    """Uniqueness or business-rule violation."""

    code = "conflict"
    status_code = 409


class UnauthorizedError(CalculadoraError):
    """Missing or invalid credential."""

    code = "unauthorized"
    status_code = 401


class ForbiddenError(CalculadoraError):
    """Valid credential, insufficient role."""

    code = "forbidden"
    status_code = 403


class StoreUnavailableError(CalculadoraError):
    """Database failure. The message shown to clients is always generic."""

    code = "store_unavailable"
    status_code = 503

    def __init__(self, message: str = "service temporarily unavailable", **kwargs: Any):
        super().__init__(message, **kwargs)
