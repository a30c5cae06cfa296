"""ORM models. Importing this package registers every table on Base."""

from calculadora.models.calculo import Calculo
from calculadora.models.cliente import Cliente
from calculadora.models.usuario import Role, Usuario

__all__ = ["Calculo", "Cliente", "Role", "Usuario"]
