"""Solver base — общий интерфейс и состояние итеративных солверов.

Два взаимозаменяемых солвера (Newton-Raphson и bisection) реализуют один
интерфейс Solver.solve(series, guess) -> SolverOutcome.

Terminal states:
- CONVERGED: критерий сходимости выполнен
- DIVERGED: ставка достигла sentinel -1.0 (или стала non-finite)
- ITERATION_EXHAUSTED: достигнут лимит итераций (300)
"""

from abc import ABC, abstractmethod
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final, Iterable, Iterator, Optional, Sequence

from xirr_engine.core.domain.cash_flow import CashFlow, CompactedSeries
from xirr_engine.core.math.fraction import DayFraction
from xirr_engine.core.math.numerical_safeguards import (
    exact_sum,
    signed_fractional_power,
    validate_positive,
)

# Sentinel ставки, при котором 1 + rate == 0
DIVERGENCE_SENTINEL: Final[float] = -1.0

# Лимит итераций
MAX_ITERATIONS: Final[int] = 300


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SolverConfig:
    """Конфигурация солверов.

    Newton и bisection намеренно используют разные допуски и разную
    точность начальной ставки.
    """

    max_iterations: int = MAX_ITERATIONS
    newton_epsilon: float = 1.0e-3  # |new_rate - rate| для Newton
    bisection_epsilon: float = 1.0e-6  # |residual| для bisection
    newton_sum_decimals: int = 6
    bisection_sum_decimals: int = 4
    result_decimals: int = 6
    boundary_decimals: int = 2  # Детекция достижения upper bound
    bracket_width: float = 1.0  # Начальный upper и шаг расширения bracket
    workers: int = 1  # > 1: параллельный map по слагаемым

    def __post_init__(self):
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        validate_positive(self.newton_epsilon, "newton_epsilon")
        validate_positive(self.bisection_epsilon, "bisection_epsilon")
        validate_positive(self.bracket_width, "bracket_width")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")


# =============================================================================
# STATE & OUTCOME
# =============================================================================


class SolverStatus(str, Enum):
    """Terminal state солвера."""

    CONVERGED = "CONVERGED"
    DIVERGED = "DIVERGED"
    ITERATION_EXHAUSTED = "ITERATION_EXHAUSTED"


@dataclass
class SolverState:
    """Мутабельное состояние одного вызова solve().

    Создаётся на каждый вызов, изменяется каждую итерацию,
    отбрасывается при terminal state.
    """

    rate: float
    diff: Optional[float] = None  # Newton: |new - old|, 0.0 означает сходимость
    residual: Optional[float] = None  # Bisection: последний residual
    bottom: float = 0.0
    upper: float = 0.0
    iteration: int = 0


@dataclass(frozen=True)
class SolverOutcome:
    """Результат солвера."""

    status: SolverStatus
    rate: Optional[float]  # Rounded, только для CONVERGED
    iterations: int
    details: str

    @property
    def converged(self) -> bool:
        return self.status == SolverStatus.CONVERGED


# =============================================================================
# SOLVER INTERFACE
# =============================================================================


class Solver(ABC):
    """Стратегия поиска корня NPV(rate) = 0."""

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()

    @abstractmethod
    def solve(self, series: CompactedSeries, guess: float) -> SolverOutcome:
        """Итеративный поиск ставки начиная с guess."""

    @contextmanager
    def _term_pool(self, flows: Sequence[CashFlow]) -> Iterator[Optional[Executor]]:
        """Один ThreadPoolExecutor на вызов solve() при workers > 1.

        Каждое слагаемое: чистая функция одного CashFlow и текущей ставки,
        поэтому блокировки не нужны. При workers == 1 возвращает None.
        """
        if self.config.workers > 1 and len(flows) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                yield pool
        else:
            yield None


# =============================================================================
# DISCOUNTING
# =============================================================================


def discount_factor(rate: float, fraction: DayFraction) -> float:
    """(1 + rate) ** (num / den) с учётом знака основания."""
    return signed_fractional_power(1.0 + rate, fraction.num, fraction.den)


def discounted_value(rate: float, flow: CashFlow) -> float:
    """amount / (1 + rate) ** t."""
    return flow.amount / discount_factor(rate, flow.fraction)


def discounted_derivative(rate: float, flow: CashFlow) -> float:
    """d/d(rate) от amount / (1 + rate) ** t = -amount * t * (1+rate)**(-t) / (1+rate)."""
    return (
        -flow.amount
        * flow.years
        * discount_factor(rate, flow.fraction.negative())
        / (1.0 + rate)
    )


def _map_terms(
    term: Callable[[CashFlow], float],
    flows: Sequence[CashFlow],
    pool: Optional[Executor],
) -> Iterable[float]:
    if pool is None:
        return map(term, flows)
    return pool.map(term, flows)


def net_present_value(
    rate: float, flows: Sequence[CashFlow], pool: Optional[Executor] = None
) -> float:
    """NPV(rate) по компактной серии (точное суммирование)."""
    return exact_sum(_map_terms(lambda flow: discounted_value(rate, flow), flows, pool))


def net_present_value_derivative(
    rate: float, flows: Sequence[CashFlow], pool: Optional[Executor] = None
) -> float:
    """dNPV/d(rate) по компактной серии."""
    return exact_sum(
        _map_terms(lambda flow: discounted_derivative(rate, flow), flows, pool)
    )
