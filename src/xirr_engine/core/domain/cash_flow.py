"""
CashFlow — Модели денежных потоков

Immutable модели:
- CashFlow: чистая сумма потока на одно смещение DayFraction
- CompactedSeries: результат компакции, упорядоченный по смещению

Даты принимаются как datetime.date / datetime.datetime или
(year, month, day) кортеж пролептического григорианского календаря.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from pydantic import BaseModel, Field

from xirr_engine.core.math.fraction import DayFraction

DateLike = Union[date, datetime, tuple[int, int, int]]


# =============================================================================
# DATE CONVERSION
# =============================================================================


def to_date(value: DateLike) -> date:
    """
    Конверсия входной даты во внутреннее представление (datetime.date).

    Args:
        value: date, datetime или (year, month, day)

    Returns:
        datetime.date (время отбрасывается)

    Raises:
        TypeError: Если тип даты не поддерживается
        ValueError: Если кортеж не является валидной датой

    Examples:
        >>> to_date((2015, 6, 1))
        datetime.date(2015, 6, 1)
    """
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, tuple) and len(value) == 3:
        year, month, day = value
        return date(year, month, day)

    raise TypeError(f"Unsupported date value: {value!r}")


# =============================================================================
# MODELS
# =============================================================================


class CashFlow(BaseModel):
    """Чистая сумма денежного потока на одно смещение."""

    fraction: DayFraction = Field(..., description="Смещение от минимальной даты")
    amount: float = Field(..., description="Чистая сумма за день (может быть 0)")

    model_config = {"frozen": True}

    @property
    def years(self) -> float:
        return self.fraction.to_float()


@dataclass(frozen=True)
class CompactedSeries:
    """Компактная серия cash flows.

    Views:
    - fractions: все различные DayFraction, по возрастанию смещения
    - amounts: накопленные суммы в том же порядке (нули включены)
    - non_zero: пары с ненулевой суммой (для суммирования в солверах)

    Первый элемент fractions всегда имеет num == 0 (минимальная дата).
    """

    fractions: tuple[DayFraction, ...]
    amounts: tuple[float, ...]
    non_zero: tuple[CashFlow, ...]

    def __len__(self) -> int:
        return len(self.fractions)

    def has_both_signs(self) -> bool:
        """True если среди чистых сумм есть и положительная, и отрицательная."""
        return any(a > 0 for a in self.amounts) and any(a < 0 for a in self.amounts)

    def first_flow_sign(self) -> int:
        """Ориентация серии по первому ненулевому потоку.

        Returns:
            +1 если первый поток отрицательный (outflow-first),
            -1 если положительный, 0 если ненулевых потоков нет
        """
        if not self.non_zero:
            return 0

        first_amount = self.non_zero[0].amount
        if first_amount < 0:
            return 1
        elif first_amount > 0:
            return -1
        return 0
