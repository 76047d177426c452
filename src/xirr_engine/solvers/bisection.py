"""BisectionSolver — bracketing поиск корня NPV(rate).

Legacy/альтернативный путь, используется для малых серий (< 10 записей).

Состояние: (rate, bottom, upper). Старт: rate = guess, bottom = -1.0,
upper = +1.0. Нижняя граница совпадает с sentinel, поэтому серия,
у которой residual всегда < 0, схлопывается в -1.0 и даёт DIVERGED.
Residual = round(NPV(rate), 4) * sign, где sign = +1 для серии,
начинающейся с outflow, и -1 для серии, начинающейся с inflow.

Переходы:
- |residual| < 1e-6          → CONVERGED(round(rate, 6))
- residual < 0               → rate = (bottom + rate) / 2, upper = rate_old
- residual > 0, rate ≈ upper → rate = (rate + upper) / 2, bottom = rate_old, upper += 1
- residual > 0               → rate = (rate + upper) / 2, bottom = rate_old
"""

import structlog

from xirr_engine.core.domain.cash_flow import CompactedSeries
from xirr_engine.core.math.numerical_safeguards import round_half_away
from xirr_engine.solvers.base import (
    DIVERGENCE_SENTINEL,
    Solver,
    SolverOutcome,
    SolverState,
    SolverStatus,
    net_present_value,
)

logger = structlog.get_logger()


class BisectionSolver(Solver):
    """Bisection солвер с расширяемой верхней границей."""

    def solve(self, series: CompactedSeries, guess: float) -> SolverOutcome:
        flows = series.non_zero
        sign = series.first_flow_sign()
        state = SolverState(
            rate=guess,
            bottom=DIVERGENCE_SENTINEL,
            upper=self.config.bracket_width,
        )

        with self._term_pool(flows) as pool:
            while True:
                if state.rate == DIVERGENCE_SENTINEL:
                    logger.warning(
                        "solver_diverged", solver="bisection", iterations=state.iteration
                    )
                    return SolverOutcome(
                        status=SolverStatus.DIVERGED,
                        rate=None,
                        iterations=state.iteration,
                        details=f"Bisection collapsed to {DIVERGENCE_SENTINEL}",
                    )

                if state.iteration >= self.config.max_iterations:
                    logger.warning(
                        "solver_iteration_cap",
                        solver="bisection",
                        rate=state.rate,
                        upper=state.upper,
                        iterations=state.iteration,
                    )
                    return SolverOutcome(
                        status=SolverStatus.ITERATION_EXHAUSTED,
                        rate=None,
                        iterations=state.iteration,
                        details=(
                            f"Bisection reached {state.iteration} iterations, "
                            f"bracket=[{state.bottom}, {state.upper}]"
                        ),
                    )

                npv = net_present_value(state.rate, flows, pool)
                state.residual = round_half_away(npv, self.config.bisection_sum_decimals) * sign

                if abs(state.residual) < self.config.bisection_epsilon:
                    result = round_half_away(state.rate, self.config.result_decimals)
                    logger.debug("bisection_converged", rate=result, iterations=state.iteration)
                    return SolverOutcome(
                        status=SolverStatus.CONVERGED,
                        rate=result,
                        iterations=state.iteration,
                        details=f"Bisection converged after {state.iteration} iterations",
                    )

                self._narrow(state)
                state.iteration += 1

    def _narrow(self, state: SolverState) -> None:
        """Сужение (или расширение вверх) bracket по знаку residual."""
        rate = state.rate

        if state.residual < 0:
            state.rate = (state.bottom + rate) / 2
            state.upper = rate
        elif self._reached_boundary(rate, state.upper):
            state.rate = (rate + state.upper) / 2
            state.bottom = rate
            state.upper = state.upper + self.config.bracket_width
        else:
            state.rate = (rate + state.upper) / 2
            state.bottom = rate

    def _reached_boundary(self, rate: float, upper: float) -> bool:
        return round_half_away(rate - upper, self.config.boundary_decimals) == 0.0
