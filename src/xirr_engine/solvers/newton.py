"""NewtonSolver — Newton-Raphson по NPV(rate) и её производной.

Итерация:
    NPV(r)  = Σ a_i / (1+r)^t_i
    dNPV(r) = Σ -a_i * t_i * (1+r)^(-t_i) / (1+r)
    r'      = r - NPV / dNPV       (если dNPV < 0)
    r'      = r                    (если dNPV >= 0, плоская/вырожденная область)

Суммы округляются до 6 знаков и ориентируются по знаку первого потока,
чтобы серии outflow-first и inflow-first шли одинаковыми шагами.
Если |r' - r| < 1e-3, diff фиксируется в 0.0 и следующая итерация
возвращает r' как CONVERGED.
"""

from concurrent.futures import Executor
from typing import Optional

import structlog

from xirr_engine.core.domain.cash_flow import CashFlow, CompactedSeries
from xirr_engine.core.math.numerical_safeguards import is_valid_float, round_half_away
from xirr_engine.solvers.base import (
    DIVERGENCE_SENTINEL,
    Solver,
    SolverOutcome,
    SolverState,
    SolverStatus,
    net_present_value,
    net_present_value_derivative,
)

logger = structlog.get_logger()


class NewtonSolver(Solver):
    """Newton-Raphson солвер (основной путь)."""

    def solve(self, series: CompactedSeries, guess: float) -> SolverOutcome:
        """Поиск ставки методом Newton-Raphson.

        Args:
            series: компактная серия (знаки уже проверены фасадом)
            guess: начальная ставка (RateGuesser, 6 знаков)

        Returns:
            SolverOutcome: CONVERGED / DIVERGED / ITERATION_EXHAUSTED
        """
        flows = series.non_zero
        orientation = series.first_flow_sign() or 1
        state = SolverState(rate=guess)

        with self._term_pool(flows) as pool:
            while True:
                # 1. Сходимость зафиксирована на предыдущей итерации
                if state.diff == 0.0:
                    rate = round_half_away(state.rate, self.config.result_decimals)
                    logger.debug(
                        "newton_converged", rate=rate, iterations=state.iteration
                    )
                    return SolverOutcome(
                        status=SolverStatus.CONVERGED,
                        rate=rate,
                        iterations=state.iteration,
                        details=f"Newton converged after {state.iteration} iterations",
                    )

                # 2. Divergence sentinel
                if state.rate == DIVERGENCE_SENTINEL or not is_valid_float(state.rate):
                    logger.warning(
                        "solver_diverged",
                        solver="newton",
                        rate=state.rate,
                        iterations=state.iteration,
                    )
                    return SolverOutcome(
                        status=SolverStatus.DIVERGED,
                        rate=None,
                        iterations=state.iteration,
                        details=f"Newton diverged at rate={state.rate}",
                    )

                # 3. Лимит итераций
                if state.iteration >= self.config.max_iterations:
                    logger.warning(
                        "solver_iteration_cap",
                        solver="newton",
                        rate=state.rate,
                        iterations=state.iteration,
                    )
                    return SolverOutcome(
                        status=SolverStatus.ITERATION_EXHAUSTED,
                        rate=None,
                        iterations=state.iteration,
                        details=(
                            f"Newton reached {state.iteration} iterations, "
                            f"last rate={state.rate}"
                        ),
                    )

                self._step(state, flows, orientation, pool)

    def _step(
        self,
        state: SolverState,
        flows: tuple[CashFlow, ...],
        orientation: int,
        pool: Optional[Executor],
    ) -> None:
        """Одна итерация Newton: обновляет rate, diff, iteration."""
        rate = state.rate
        decimals = self.config.newton_sum_decimals

        npv = round_half_away(net_present_value(rate, flows, pool), decimals) * orientation
        dnpv = (
            round_half_away(net_present_value_derivative(rate, flows, pool), decimals)
            * orientation
        )

        if dnpv >= 0.0:
            new_rate = rate
        else:
            new_rate = rate - npv / dnpv

        diff = abs(new_rate - rate)
        state.diff = 0.0 if diff < self.config.newton_epsilon else diff
        state.rate = new_rate
        state.iteration += 1
