"""
Tests for the calculation engine.
"""

import math

import pytest

from calculadora.core.exceptions import InvalidInputError, ValidationError
from calculadora.domain.calculo import DEFAULT_TAXA_POUPANCA, calcular


class TestCalcular:
    """Tests for the derived-value formulas."""

    def test_reference_example(self):
        """Test 1000 + 200 at 0.5%."""
        resultado = calcular(1000, 200, 0.005)

        assert resultado.valor_inicial == 1200
        assert resultado.valor_original == 4800
        assert resultado.valor_com_desconto == 3600
        assert resultado.valor_corrigido == pytest.approx(3618.0)

    def test_default_savings_rate(self):
        """Test the default rate is 0.5%."""
        resultado = calcular(1000, 200)
        assert resultado.taxa_poupanca == DEFAULT_TAXA_POUPANCA == 0.005
        assert resultado.valor_corrigido == calcular(1000, 200, 0.005).valor_corrigido

    @pytest.mark.parametrize(
        "valor_locacao,valor_taxas,taxa",
        [
            (1000, 200, 0.005),
            (1234.56, 78.9, 0.0),
            (0.01, 0.01, 0.005),
            (2500.5, 333.33, 0.0125),
            (1e9, 3.14159, 0.1),
        ],
    )
    def test_operation_order(self, valor_locacao, valor_taxas, taxa):
        """Test each step matches the formula evaluated in the documented order."""
        resultado = calcular(valor_locacao, valor_taxas, taxa)

        inicial = valor_locacao + valor_taxas
        original = inicial * 4
        desconto = original * 0.75
        corrigido = desconto * (1 + taxa)

        assert resultado.valor_inicial == inicial
        assert resultado.valor_original == original
        assert resultado.valor_com_desconto == desconto
        assert resultado.valor_corrigido == corrigido

    def test_zero_rate_leaves_discounted_value(self):
        """Test a zero rate makes the adjusted value equal the discounted one."""
        resultado = calcular(800, 150, 0)
        assert resultado.valor_corrigido == resultado.valor_com_desconto == 2850

    def test_no_rounding(self):
        """Test results are not rounded to cents."""
        resultado = calcular(100.333, 0.001, 0.005)
        assert resultado.valor_inicial == 100.333 + 0.001
        assert round(resultado.valor_corrigido, 2) != resultado.valor_corrigido

    def test_inputs_are_echoed(self):
        """Test inputs are returned alongside the derived values."""
        data = calcular(1000, 200, 0.01).to_dict()
        assert data["valor_locacao"] == 1000
        assert data["valor_taxas"] == 200
        assert data["taxa_poupanca"] == 0.01
        assert set(data) == {
            "valor_locacao",
            "valor_taxas",
            "taxa_poupanca",
            "valor_inicial",
            "valor_original",
            "valor_com_desconto",
            "valor_corrigido",
        }

    def test_deterministic(self):
        """Test same inputs give identical outputs."""
        assert calcular(1999.99, 450.01, 0.007) == calcular(1999.99, 450.01, 0.007)


class TestCalcularValidation:
    """Tests for input rejection."""

    @pytest.mark.parametrize("valor", [0, -1, -0.01, math.nan, math.inf])
    def test_rejects_non_positive_rental_value(self, valor):
        with pytest.raises(InvalidInputError) as exc_info:
            calcular(valor, 200)
        assert exc_info.value.errors[0]["field"] == "valor_locacao"

    @pytest.mark.parametrize("valor", [0, -5, math.nan, -math.inf])
    def test_rejects_non_positive_fees(self, valor):
        with pytest.raises(InvalidInputError) as exc_info:
            calcular(1000, valor)
        assert exc_info.value.errors[0]["field"] == "valor_taxas"

    @pytest.mark.parametrize("valor", ["1000", None, True])
    def test_rejects_non_numbers(self, valor):
        with pytest.raises(InvalidInputError):
            calcular(valor, 200)

    @pytest.mark.parametrize("taxa", [math.nan, math.inf, "0.005"])
    def test_rejects_invalid_rate(self, taxa):
        with pytest.raises(InvalidInputError) as exc_info:
            calcular(1000, 200, taxa)
        assert exc_info.value.errors[0]["field"] == "taxa_poupanca"

    def test_invalid_input_is_a_validation_error(self):
        """Test the engine error belongs to the validation family."""
        with pytest.raises(ValidationError):
            calcular(-1, -1)
