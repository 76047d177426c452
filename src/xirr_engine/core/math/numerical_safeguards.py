"""
Numerical Safeguards — Safe Math Primitives для XIRR

Модуль обеспечивает численную устойчивость операций дисконтирования:
- Знако-корректная дробная степень для отрицательного основания
- Округление half-away-from-zero до фиксированного числа знаков
- Проверка float на NaN/Inf
- Точное (order-independent) суммирование слагаемых

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Отрицательное основание никогда не даёт complex результат
2. Сумма не зависит от порядка слагаемых (math.fsum)
3. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Final, Iterable

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество дней в году для day-fraction
DAYS_IN_YEAR: Final[float] = 365.0

# Порог, выше которого округление до знаков после запятой не выполняется
ROUNDING_MAGNITUDE_LIMIT: Final[float] = 1e15


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что параметр строго положительный и finite.

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


# =============================================================================
# ДРОБНАЯ СТЕПЕНЬ
# =============================================================================


def signed_fractional_power(base: float, numerator: int, denominator: float) -> float:
    """
    Возведение в дробную степень numerator/denominator с учётом знака.

    Для base < 0 результат равен |base|^(n/d) * (-1)^n: знак определяется
    чётностью числителя day-fraction, а не float-экспонентой.
    Это позволяет Newton-итерациям проходить через область rate < -1.

    Args:
        base: Основание (обычно 1 + rate)
        numerator: Числитель экспоненты (смещение в днях, может быть < 0)
        denominator: Знаменатель экспоненты (дней в году)

    Returns:
        Вещественная степень

    Raises:
        OverflowError: Если результат не помещается в float
        ValueError: Если base == 0 и экспонента отрицательна (math domain error)

    Examples:
        >>> signed_fractional_power(4.0, 365, 730.0)
        2.0
        >>> signed_fractional_power(-4.0, 365, 730.0)
        -2.0
        >>> signed_fractional_power(-4.0, 730, 730.0)
        4.0
    """
    exponent = numerator / denominator

    if base < 0:
        parity_sign = -1.0 if numerator % 2 else 1.0
        return math.pow(-base, exponent) * parity_sign

    return math.pow(base, exponent)


# =============================================================================
# ОКРУГЛЕНИЕ И СУММИРОВАНИЕ
# =============================================================================


def round_half_away(value: float, decimals: int) -> float:
    """
    Округление до decimals знаков (round half away from zero).

    Встроенный round() использует banker's rounding, поэтому
    округление выполняется через Decimal от кратчайшего repr.

    Examples:
        >>> round_half_away(0.0345925, 6)
        0.034593
        >>> round_half_away(-2.5, 0)
        -3.0
    """
    # Выше 1e15 ulp float >= 0.125, дробные знаки уже не представимы
    if not is_valid_float(value) or abs(value) >= ROUNDING_MAGNITUDE_LIMIT:
        return value

    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def exact_sum(terms: Iterable[float]) -> float:
    """Точная сумма (math.fsum), не зависит от порядка слагаемых."""
    return math.fsum(terms)
