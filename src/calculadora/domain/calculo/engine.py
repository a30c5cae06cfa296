"""
Calculation Engine

Maps (rental value, fees, savings rate) to the derived deposit values:

    valor_inicial      = valor_locacao + valor_taxas
    valor_original     = valor_inicial * 4
    valor_com_desconto = valor_original * 0.75
    valor_corrigido    = valor_com_desconto * (1 + taxa_poupanca)

Operations run in exactly this order on plain floats and nothing is rounded;
currency formatting belongs to the presentation layer.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any

from calculadora.core.exceptions import InvalidInputError

DEFAULT_TAXA_POUPANCA = 0.005  # 0.5%
MESES_CAUCAO = 4
FATOR_DESCONTO = 0.75


@dataclass(frozen=True)
class ResultadoCalculo:
    """Echoed inputs plus derived values."""

    valor_locacao: float
    valor_taxas: float
    taxa_poupanca: float
    valor_inicial: float
    valor_original: float
    valor_com_desconto: float
    valor_corrigido: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _require_positive(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(
            f"{name} must be a number",
            errors=[{"field": name, "message": "must be a number"}],
        )
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(
            f"{name} must be positive",
            errors=[{"field": name, "message": "must be positive"}],
        )


def calcular(
    valor_locacao: float,
    valor_taxas: float,
    taxa_poupanca: float = DEFAULT_TAXA_POUPANCA,
) -> ResultadoCalculo:
    """
    Compute the derived values for a calculation.

    Raises:
        InvalidInputError: a monetary input is not strictly positive, or the
            savings rate is not a finite number
    """
    _require_positive("valor_locacao", valor_locacao)
    _require_positive("valor_taxas", valor_taxas)
    if isinstance(taxa_poupanca, bool) or not isinstance(taxa_poupanca, (int, float)) or not math.isfinite(taxa_poupanca):
        raise InvalidInputError(
            "taxa_poupanca must be a finite number",
            errors=[{"field": "taxa_poupanca", "message": "must be a finite number"}],
        )

    valor_locacao = float(valor_locacao)
    valor_taxas = float(valor_taxas)
    taxa_poupanca = float(taxa_poupanca)

    valor_inicial = valor_locacao + valor_taxas
    valor_original = valor_inicial * MESES_CAUCAO
    valor_com_desconto = valor_original * FATOR_DESCONTO
    valor_corrigido = valor_com_desconto * (1 + taxa_poupanca)

    return ResultadoCalculo(
        valor_locacao=valor_locacao,
        valor_taxas=valor_taxas,
        taxa_poupanca=taxa_poupanca,
        valor_inicial=valor_inicial,
        valor_original=valor_original,
        valor_com_desconto=valor_com_desconto,
        valor_corrigido=valor_corrigido,
    )
