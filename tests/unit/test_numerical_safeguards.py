"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Знако-корректную дробную степень для отрицательного основания
2. Округление half-away-from-zero
3. Точное суммирование, не зависящее от порядка
4. Валидацию параметров
"""

import math

import pytest

from xirr_engine.core.math.numerical_safeguards import (
    DAYS_IN_YEAR,
    ROUNDING_MAGNITUDE_LIMIT,
    exact_sum,
    is_valid_float,
    round_half_away,
    signed_fractional_power,
    validate_positive,
)

# =============================================================================
# ТЕСТЫ ДРОБНОЙ СТЕПЕНИ
# =============================================================================


class TestSignedFractionalPower:
    """Тесты для signed_fractional_power"""

    def test_positive_base(self) -> None:
        """Положительное основание: обычная степень"""
        assert signed_fractional_power(4.0, 365, 730.0) == 2.0
        assert signed_fractional_power(1.1, 365, DAYS_IN_YEAR) == pytest.approx(1.1)

    def test_negative_base_odd_numerator(self) -> None:
        """Отрицательное основание, нечётный числитель → отрицательный результат"""
        assert signed_fractional_power(-4.0, 365, 730.0) == -2.0

    def test_negative_base_even_numerator(self) -> None:
        """Отрицательное основание, чётный числитель → положительный результат"""
        assert signed_fractional_power(-4.0, 730, 730.0) == 4.0

    def test_negative_numerator(self) -> None:
        """Отрицательный числитель (производная NPV)"""
        assert signed_fractional_power(2.0, -365, 365.0) == 0.5
        assert signed_fractional_power(-2.0, -365, 365.0) == -0.5

    def test_result_is_real(self) -> None:
        """Результат всегда float, никогда complex"""
        result = signed_fractional_power(-0.5, 17, DAYS_IN_YEAR)
        assert isinstance(result, float)
        assert result < 0

    def test_zero_exponent(self) -> None:
        """Нулевое смещение → 1.0 для любого основания"""
        assert signed_fractional_power(-3.0, 0, DAYS_IN_YEAR) == 1.0
        assert signed_fractional_power(3.0, 0, DAYS_IN_YEAR) == 1.0

    def test_overflow_raises(self) -> None:
        """Переполнение float → OverflowError"""
        with pytest.raises(OverflowError):
            signed_fractional_power(10.0, 400 * 365, DAYS_IN_YEAR)

    def test_zero_base_negative_exponent_raises(self) -> None:
        """0 ** (отрицательная степень) → ValueError"""
        with pytest.raises(ValueError):
            signed_fractional_power(0.0, -365, DAYS_IN_YEAR)


# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ
# =============================================================================


class TestRoundHalfAway:
    """Тесты для round_half_away"""

    def test_half_rounds_away_from_zero(self) -> None:
        """Половина округляется от нуля (в отличие от round())"""
        assert round_half_away(2.675, 2) == 2.68
        assert round_half_away(-2.5, 0) == -3.0
        assert round_half_away(0.5, 0) == 1.0

    def test_six_decimals(self) -> None:
        assert round_half_away(0.0345925, 6) == 0.034593
        assert round_half_away(-0.0345924, 6) == -0.034592

    def test_non_finite_passthrough(self) -> None:
        """NaN/Inf возвращаются без изменений"""
        assert round_half_away(math.inf, 6) == math.inf
        assert math.isnan(round_half_away(math.nan, 6))

    def test_large_magnitude_passthrough(self) -> None:
        """Значения выше ROUNDING_MAGNITUDE_LIMIT не округляются"""
        value = ROUNDING_MAGNITUDE_LIMIT * 3.5
        assert round_half_away(value, 6) == value


# =============================================================================
# ТЕСТЫ СУММИРОВАНИЯ
# =============================================================================


class TestExactSum:
    """Тесты для exact_sum"""

    def test_exact_decimal_sum(self) -> None:
        assert exact_sum([0.1] * 10) == 1.0

    def test_order_independent(self) -> None:
        """Сумма не зависит от порядка слагаемых"""
        terms = [1e16, 1.0, -1e16, 3.5, -0.25]
        assert exact_sum(terms) == exact_sum(reversed(terms)) == 4.25

    def test_empty(self) -> None:
        assert exact_sum([]) == 0.0


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты для is_valid_float / validate_positive"""

    def test_is_valid_float(self) -> None:
        assert is_valid_float(1.0)
        assert not is_valid_float(math.nan)
        assert not is_valid_float(-math.inf)

    def test_validate_positive(self) -> None:
        validate_positive(1e-3, "eps")

        with pytest.raises(ValueError, match="must be positive"):
            validate_positive(0.0, "eps")

        with pytest.raises(ValueError, match="NaN/Inf"):
            validate_positive(math.nan, "eps")
