"""XirrFacade — валидация входа, выбор солвера и нормализация результатов.

Порядок обработки xirr():
1. Компакция (CashFlowCompactor): размеры, фильтрация None, пустой вход,
   конверсия дат. Эти проверки принадлежат компактору и здесь не повторяются
2. Проверка знаков: есть положительная и отрицательная чистая сумма
3. Выбор солвера: bisection для < 10 записей, иначе Newton
4. Маппинг terminal state солвера в XirrResult

Все отказы возвращаются как XirrResult(ok=False) с фиксированным кодом.
Exceptions математических примитивов (overflow) переводятся в
ARITHMETIC_FAULT на границе фасада.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

import structlog

from xirr_engine.cashflow.compactor import CashFlowCompactor
from xirr_engine.cashflow.rate_guess import (
    BISECTION_GUESS_DECIMALS,
    NEWTON_GUESS_DECIMALS,
    RateGuesser,
)
from xirr_engine.core.contracts.validators import parse_cashflow_series
from xirr_engine.core.domain.cash_flow import DateLike
from xirr_engine.core.domain.result import (
    REASON_ARITHMETIC_FAULT,
    REASON_BISECTION_EXHAUSTED,
    REASON_COULD_NOT_CONVERGE,
    REASON_INVALID_SIGN,
    REASON_NEWTON_GAVE_UP,
    REASON_ZERO_RATE,
    AbsoluteRateResult,
    XirrError,
    XirrMethod,
    XirrResult,
)
from xirr_engine.core.math.numerical_safeguards import (
    DAYS_IN_YEAR,
    round_half_away,
    validate_positive,
)
from xirr_engine.solvers.base import Solver, SolverConfig, SolverOutcome, SolverStatus
from xirr_engine.solvers.bisection import BisectionSolver
from xirr_engine.solvers.newton import NewtonSolver

logger = structlog.get_logger()


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class XirrConfig:
    """Конфигурация фасада."""

    days_in_year: float = DAYS_IN_YEAR
    bisection_threshold: int = 10  # < threshold валидных записей → bisection
    absolute_rate_decimals: int = 2
    solver: SolverConfig = field(default_factory=SolverConfig)

    def __post_init__(self):
        validate_positive(self.days_in_year, "days_in_year")
        if self.bisection_threshold < 0:
            raise ValueError(
                f"bisection_threshold must be non-negative, got {self.bisection_threshold}"
            )


# =============================================================================
# FACADE
# =============================================================================


class XirrFacade:
    """Точка входа для xirr() и absolute_rate()."""

    def __init__(self, config: Optional[XirrConfig] = None):
        self.config = config or XirrConfig()
        self.compactor = CashFlowCompactor(days_in_year=self.config.days_in_year)
        self._solvers: dict[XirrMethod, Solver] = {
            XirrMethod.NEWTON: NewtonSolver(self.config.solver),
            XirrMethod.BISECTION: BisectionSolver(self.config.solver),
        }
        self._guessers: dict[XirrMethod, RateGuesser] = {
            XirrMethod.NEWTON: RateGuesser(decimals=NEWTON_GUESS_DECIMALS),
            XirrMethod.BISECTION: RateGuesser(decimals=BISECTION_GUESS_DECIMALS),
        }

    def xirr(
        self,
        dates: Sequence[DateLike],
        amounts: Sequence[Optional[float]],
        method: XirrMethod = XirrMethod.AUTO,
    ) -> XirrResult:
        """XIRR для нерегулярной серии потоков.

        Args:
            dates: даты потоков (date, datetime или (y, m, d))
            amounts: суммы потоков; None отбрасывается вместе с датой
            method: AUTO (по размеру), NEWTON или BISECTION

        Returns:
            XirrResult со ставкой (6 знаков) или кодом ошибки

        Examples:
            >>> d = [(1985, 1, 1), (1990, 1, 1), (1995, 1, 1)]
            >>> XirrFacade().xirr(d, [1000, -600, -200]).rate
            -0.034592
        """
        # 1. Компакция (размеры, None, даты)
        compaction = self.compactor.compact(dates, amounts)
        if not compaction.ok:
            return self._rejected(compaction.error, compaction.reason)

        series = compaction.series

        # 2. Знаки
        if not series.has_both_signs():
            return self._rejected(XirrError.INVALID_CASH_FLOW_SIGN, REASON_INVALID_SIGN)

        # 3. Солвер
        selected = self._select_method(method, compaction.valid_entries)
        guess = self._guessers[selected].guess(len(series), series.amounts)

        try:
            outcome = self._solvers[selected].solve(series, guess)
        except (OverflowError, ZeroDivisionError, ValueError) as e:
            logger.error("xirr_arithmetic_fault", method=selected.value, error=str(e))
            return XirrResult.failure(
                XirrError.ARITHMETIC_FAULT,
                REASON_ARITHMETIC_FAULT,
                method=selected,
                details=f"{REASON_ARITHMETIC_FAULT}: {e}",
            )

        # 4. Маппинг результата
        return self._to_result(outcome, selected, guess)

    def absolute_rate(self, rate: float, days: int) -> AbsoluteRateResult:
        """Абсолютная (не годовая) доходность в процентах.

        days < 365: ((1 + rate) ** (days / 365) - 1) * 100
        иначе:      rate * 100
        Оба варианта округляются до 2 знаков.

        Examples:
            >>> XirrFacade().absolute_rate(-0.034592, 50).percent
            -0.48
        """
        if rate == 0:
            return AbsoluteRateResult(
                ok=False,
                percent=None,
                error=XirrError.ZERO_RATE,
                reason=REASON_ZERO_RATE,
                details=REASON_ZERO_RATE,
            )

        try:
            if days < self.config.days_in_year:
                percent = (math.pow(1 + rate, days / self.config.days_in_year) - 1) * 100
            else:
                percent = rate * 100
        except (OverflowError, ZeroDivisionError, ValueError) as e:
            logger.warning("absolute_rate_failed", rate=rate, days=days, error=str(e))
            return AbsoluteRateResult(
                ok=False,
                percent=None,
                error=XirrError.ARITHMETIC_FAULT,
                reason=REASON_ARITHMETIC_FAULT,
                details=f"{REASON_ARITHMETIC_FAULT}: {e}",
            )

        return AbsoluteRateResult(
            ok=True,
            percent=round_half_away(percent, self.config.absolute_rate_decimals),
            error=None,
            reason="",
            details=f"rate={rate}, days={days}",
        )

    def _select_method(self, method: XirrMethod, valid_entries: int) -> XirrMethod:
        if method != XirrMethod.AUTO:
            return method
        if valid_entries < self.config.bisection_threshold:
            return XirrMethod.BISECTION
        return XirrMethod.NEWTON

    def _to_result(self, outcome: SolverOutcome, method: XirrMethod, guess: float) -> XirrResult:
        if outcome.status == SolverStatus.CONVERGED:
            logger.debug(
                "xirr_solved",
                method=method.value,
                rate=outcome.rate,
                guess=guess,
                iterations=outcome.iterations,
            )
            return XirrResult.success(
                outcome.rate, method, outcome.iterations, details=outcome.details
            )

        if outcome.status == SolverStatus.DIVERGED:
            error, reason = XirrError.CONVERGENCE_FAILURE, REASON_COULD_NOT_CONVERGE
        elif method == XirrMethod.NEWTON:
            error, reason = XirrError.ITERATION_EXHAUSTED, REASON_NEWTON_GAVE_UP
        else:
            error, reason = XirrError.ITERATION_EXHAUSTED, REASON_BISECTION_EXHAUSTED

        logger.warning(
            "xirr_not_converged",
            method=method.value,
            error=error.value,
            guess=guess,
            iterations=outcome.iterations,
        )
        return XirrResult.failure(
            error, reason, method=method, iterations=outcome.iterations, details=outcome.details
        )

    def _rejected(self, error: XirrError, reason: str) -> XirrResult:
        logger.warning("xirr_rejected", error=error.value, reason=reason)
        return XirrResult.failure(error, reason)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

# Глобальный экземпляр с конфигурацией по умолчанию (без мутабельного состояния)
_DEFAULT_FACADE = XirrFacade()


def xirr(
    dates: Sequence[DateLike],
    amounts: Sequence[Optional[float]],
    method: XirrMethod = XirrMethod.AUTO,
    config: Optional[XirrConfig] = None,
) -> XirrResult:
    """XIRR с конфигурацией по умолчанию (или переданной config)."""
    facade = _DEFAULT_FACADE if config is None else XirrFacade(config)
    return facade.xirr(dates, amounts, method=method)


def absolute_rate(rate: float, days: int) -> AbsoluteRateResult:
    """Абсолютная доходность с конфигурацией по умолчанию."""
    return _DEFAULT_FACADE.absolute_rate(rate, days)


def xirr_from_payload(payload: Mapping[str, Any]) -> XirrResult:
    """XIRR для JSON документа cashflow_series.

    Raises:
        ValidationError: Если документ не соответствует схеме
    """
    dates, amounts, method = parse_cashflow_series(payload)
    return _DEFAULT_FACADE.xirr(dates, amounts, method=method)
