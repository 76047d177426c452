"""
CashFlowCompactor — агрегация потоков одного дня

Группирует пары (date, amount) в чистые суммы по смещению DayFraction
относительно минимальной даты среди не-None записей.

Компактор единственный владелец проверок входа, фасад их не повторяет:
1. Размеры dates и amounts совпадают
2. Записи с amount=None отбрасываются (не считаются нулём)
3. После фильтрации осталась хотя бы одна запись
4. Даты оставшихся записей конвертируются в datetime.date
5. Суммы одинаковых смещений складываются (точно, math.fsum),
   никогда не перезаписываются; бакеты упорядочены по смещению
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from xirr_engine.core.domain.cash_flow import CashFlow, CompactedSeries, DateLike, to_date
from xirr_engine.core.domain.result import (
    REASON_NO_VALID_ENTRIES,
    REASON_SIZE_MISMATCH,
    XirrError,
)
from xirr_engine.core.math.fraction import DayFraction
from xirr_engine.core.math.numerical_safeguards import DAYS_IN_YEAR, exact_sum


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class CompactionResult:
    """Результат компакции."""

    ok: bool
    series: Optional[CompactedSeries]
    valid_entries: int  # Количество не-None записей
    error: Optional[XirrError]
    reason: str


# =============================================================================
# COMPACTOR
# =============================================================================


class CashFlowCompactor:
    """Компакция cash flows в бакеты DayFraction."""

    def __init__(self, days_in_year: float = DAYS_IN_YEAR):
        """
        Args:
            days_in_year: знаменатель DayFraction (default 365.0)
        """
        self.days_in_year = days_in_year

    def compact(
        self,
        dates: Sequence[DateLike],
        amounts: Sequence[Optional[float]],
    ) -> CompactionResult:
        """Компакция параллельных последовательностей дат и сумм.

        Args:
            dates: даты потоков (date, datetime или (y, m, d))
            amounts: суммы потоков, None означает отсутствующее значение

        Returns:
            CompactionResult с CompactedSeries или кодом ошибки

        Raises:
            TypeError: Если тип даты не поддерживается
            ValueError: Если кортеж не является календарной датой
        """
        if len(dates) != len(amounts):
            return self._rejected(XirrError.INPUT_SIZE_MISMATCH, REASON_SIZE_MISMATCH)

        pairs = [(to_date(d), a) for d, a in zip(dates, amounts) if a is not None]

        if not pairs:
            return self._rejected(XirrError.NO_VALID_ENTRIES, REASON_NO_VALID_ENTRIES)

        min_date = min(d for d, _ in pairs)

        buckets: dict[DayFraction, list[float]] = {}
        for flow_date, amount in pairs:
            fraction = DayFraction(num=(flow_date - min_date).days, den=self.days_in_year)
            buckets.setdefault(fraction, []).append(amount)

        ordered = sorted(
            ((fraction, exact_sum(parts)) for fraction, parts in buckets.items()),
            key=lambda item: item[0].num,
        )

        series = CompactedSeries(
            fractions=tuple(fraction for fraction, _ in ordered),
            amounts=tuple(amount for _, amount in ordered),
            non_zero=tuple(
                CashFlow(fraction=fraction, amount=amount)
                for fraction, amount in ordered
                if amount != 0
            ),
        )

        return CompactionResult(
            ok=True,
            series=series,
            valid_entries=len(pairs),
            error=None,
            reason="",
        )

    def _rejected(self, error: XirrError, reason: str) -> CompactionResult:
        return CompactionResult(
            ok=False, series=None, valid_entries=0, error=error, reason=reason
        )
