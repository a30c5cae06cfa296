"""Deposit calculation rules (pure, no I/O)."""

from calculadora.domain.calculo.engine import (
    DEFAULT_TAXA_POUPANCA,
    ResultadoCalculo,
    calcular,
)

__all__ = ["DEFAULT_TAXA_POUPANCA", "ResultadoCalculo", "calcular"]
