"""
RateGuesser — эвристика начальной ставки

Формула:
    period   = 1 / (count - 1)
    multiple = 1 + |max / min|     (2.0 если min == 0 или границы нет)
    rate     = multiple ** period - 1

Округление зависит от солвера: 6 знаков для Newton, 3 для bisection.
Эвристика не обязана ограничивать корень, но результат всегда finite.
"""

from typing import Final, Optional, Sequence

from xirr_engine.core.math.numerical_safeguards import is_valid_float, round_half_away

# Множитель при вырожденном min (деление на ноль)
FALLBACK_MULTIPLE: Final[float] = 2.0

NEWTON_GUESS_DECIMALS: Final[int] = 6
BISECTION_GUESS_DECIMALS: Final[int] = 3


class RateGuesser:
    """Начальная ставка по экстремальным суммам потоков."""

    def __init__(self, decimals: int = NEWTON_GUESS_DECIMALS):
        self.decimals = decimals

    def guess(self, count: int, amounts: Sequence[Optional[float]]) -> float:
        """Начальная ставка для солвера.

        Args:
            count: количество различных дат серии (>= 2)
            amounts: суммы потоков; None игнорируется

        Returns:
            Начальная ставка, округлённая до self.decimals
        """
        present = [a for a in amounts if a is not None]
        min_value = min(present, default=None)
        max_value = max(present, default=None)

        if not min_value or max_value is None:
            multiple = FALLBACK_MULTIPLE
        else:
            multiple = 1 + abs(max_value / min_value)

        # Одна дата: period не определён, используем полный multiple
        period = 1 / (count - 1) if count > 1 else 1.0

        rate = multiple**period - 1
        if not is_valid_float(rate):
            rate = FALLBACK_MULTIPLE - 1

        return round_half_away(rate, self.decimals)
