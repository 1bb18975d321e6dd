from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable

from kredit_sim.domain.rates import PricingPolicy, resolve_rates
from kredit_sim.domain.simulation import (
    MAX_DOWN_PAYMENT_PERCENT,
    MIN_DOWN_PAYMENT_PERCENT,
    CalculationResult,
    InvalidSimulationInput,
    SimulationInput,
    TargetKind,
)
from kredit_sim.ports.rate_table_repository import RateTableRepository
from kredit_sim.use_cases.calculate_credit_simulation import (
    apply_default_insurance_label,
    calculate,
    log_interest_fallback,
)

logger = logging.getLogger(__name__)

SOLVER_ITERATIONS = 50


def solve_for_target(
    evaluate: Callable[[Decimal], CalculationResult],
    target_kind: TargetKind,
    target_value: Decimal,
) -> CalculationResult:
    """
    Bisect the down-payment percentage over [0, 99] towards a target metric.

    Always runs SOLVER_ITERATIONS trials (no tolerance, no early exit) and
    returns the trial closest to the target, which is not necessarily the last
    one. The first trial wins on ties.

    Assumes total first payment is non-decreasing and monthly installment is
    non-increasing in the down-payment percentage.
    """
    low = MIN_DOWN_PAYMENT_PERCENT
    high = MAX_DOWN_PAYMENT_PERCENT
    trials: list[CalculationResult] = []

    for _ in range(SOLVER_ITERATIONS):
        mid = (low + high) / 2
        trial = evaluate(mid)
        trials.append(trial)
        current = trial.metric(target_kind)

        if target_kind is TargetKind.TOTAL_FIRST_PAYMENT:
            if current < target_value:
                low = mid
            else:
                high = mid
        else:
            if current > target_value:
                low = mid
            else:
                high = mid

    # min() keeps the earliest of equally close trials
    return min(trials, key=lambda trial: abs(trial.metric(target_kind) - target_value))


@dataclass(frozen=True, slots=True)
class SolveBudgetRequest:
    input: SimulationInput  # down_payment_percent is ignored
    target_kind: TargetKind
    target_value: Decimal

    def validate(self) -> None:
        if isinstance(self.target_value, float):
            raise InvalidSimulationInput("target_value must be Decimal (no floats past the boundary)")
        if self.target_value <= 0:
            raise InvalidSimulationInput("target_value must be > 0")
        # The percentage is chosen by the solver; validate everything else.
        self.input.with_down_payment_percent(MIN_DOWN_PAYMENT_PERCENT).validate()


@dataclass(frozen=True, slots=True)
class SolveBudget:
    """
    Find the down-payment percentage that best meets a budget.

    The rate tables are loaded once and the same snapshot serves every trial.
    The insurance label is also fixed once up front, since the candidate set
    does not depend on the down payment.
    """

    rate_table_repository: RateTableRepository
    policy: PricingPolicy = field(default_factory=PricingPolicy)

    def execute(self, request: SolveBudgetRequest) -> CalculationResult:
        request.validate()

        tables = self.rate_table_repository.load()
        base_input = apply_default_insurance_label(tables, request.input)

        def evaluate(down_payment_percent: Decimal) -> CalculationResult:
            sim_input = base_input.with_down_payment_percent(down_payment_percent)
            return calculate(sim_input, resolve_rates(tables, sim_input, self.policy), self.policy)

        best = solve_for_target(evaluate, request.target_kind, request.target_value)

        log_interest_fallback(best, self.policy)
        logger.info(
            "Budget solved",
            extra={
                "target_kind": request.target_kind.value,
                "target_value": str(request.target_value),
                "down_payment_percent": str(best.down_payment_percent),
                "achieved_value": str(best.metric(request.target_kind)),
            },
        )
        return best
