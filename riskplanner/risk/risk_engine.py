"""Liquidation, position sizing and full trade risk analysis."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from typing import List

from riskplanner.models import RiskAnalysis, RiskCalculations, SimulationResult, TradingParameters
from riskplanner.risk.classification import classify_risk_level, generate_recommendations
from riskplanner.utils.formatting import format_currency

logger = logging.getLogger(__name__)

MAINTENANCE_MARGIN_RATE = 0.005

# Liquidation is simulated as a flat loss of the account, independent of leverage.
LIQUIDATION_LOSS_FRACTION = 0.9
LIQUIDATION_REMAINING_FRACTION = 0.1
LIQUIDATION_PNL_PERCENTAGE = -90.0

STOP_LOSS_HIT = "stopLossHit"
TAKE_PROFIT_HIT = "takeProfitHit"
LIQUIDATION = "liquidation"


def _require_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise OverflowError(f"{name} is not a finite number: {value!r}")
    return value


@dataclass(frozen=True)
class RiskEngine:
    """Stateless risk engine shared by the API, the plan layer and the CLI.

    The liquidation model is an approximation: isolated margin, a single flat
    maintenance margin rate, no fees and no funding payments.
    """

    @property
    def liquidation_threshold(self) -> float:
        return 1 - MAINTENANCE_MARGIN_RATE

    def calculate_liquidation_price(
        self,
        entry_price: float,
        leverage: float,
        is_long: bool = True,
    ) -> float:
        """Price at which the isolated position is force-closed.

        LONG:  entry * (1 - (1 / leverage) * threshold)
        SHORT: entry * (1 + (1 / leverage) * threshold)
        """
        if leverage == 0:
            raise ZeroDivisionError("Leverage must be non-zero to compute a liquidation price")

        offset = (1 / leverage) * self.liquidation_threshold
        price = entry_price * (1 - offset) if is_long else entry_price * (1 + offset)
        return _require_finite("liquidation_price", price)

    @staticmethod
    def calculate_risk_amount(balance: float, risk_percentage: float) -> float:
        return balance * (risk_percentage / 100)

    def calculate_position_size(
        self,
        balance: float,
        risk_percentage: float,
        entry_price: float,
        stop_loss: float,
    ) -> float:
        """Units to trade so that hitting the stop loses exactly the risk amount.

        Leverage plays no part here; it only affects margin and liquidation.
        """
        stop_loss_distance = abs(entry_price - stop_loss)
        if stop_loss_distance == 0:
            raise ZeroDivisionError("Stop loss distance is zero: entry price equals stop loss")

        size = self.calculate_risk_amount(balance, risk_percentage) / stop_loss_distance
        return _require_finite("position_size", size)

    def analyze(self, params: TradingParameters) -> RiskAnalysis:
        """Compute calculations, simulations, risk level and recommendations.

        Callers must validate ``params`` first. Degenerate inputs that slip
        through raise ``ZeroDivisionError``, and values that overflow raise
        ``OverflowError``, instead of producing NaN/inf.
        """
        if params.leverage == 0:
            raise ZeroDivisionError("Leverage must be non-zero to compute margin")
        if params.account_balance == 0:
            raise ZeroDivisionError("Account balance must be non-zero to compute loss percentage")

        entry_price = params.entry_price
        liquidation_price = self.calculate_liquidation_price(
            entry_price, params.leverage, params.is_long
        )
        position_size = self.calculate_position_size(
            params.account_balance, params.risk_percentage, entry_price, params.stop_loss
        )

        position_value = position_size * entry_price
        margin_required = position_value / params.leverage
        order_value = margin_required * params.leverage

        take_profit_distance = abs(params.take_profit - entry_price)
        potential_profit = position_size * take_profit_distance
        potential_loss = position_size * abs(entry_price - params.stop_loss)

        risk_reward_ratio = potential_profit / potential_loss
        max_loss_percentage = (potential_loss / params.account_balance) * 100
        distance_to_liquidation = abs(entry_price - liquidation_price)

        calculations = RiskCalculations(
            liquidation_price=liquidation_price,
            position_size=position_size,
            recommended_position_size=position_size,
            margin_required=margin_required,
            order_value=order_value,
            potential_profit=potential_profit,
            potential_loss=potential_loss,
            risk_reward_ratio=risk_reward_ratio,
            max_loss_percentage=max_loss_percentage,
            distance_to_liquidation=distance_to_liquidation,
        )
        for item in fields(calculations):
            _require_finite(item.name, getattr(calculations, item.name))

        risk_level = classify_risk_level(max_loss_percentage, risk_reward_ratio)
        recommendations = generate_recommendations(
            risk_level, max_loss_percentage, risk_reward_ratio
        )

        logger.debug(
            "Analyzed %s entry=%s size=%.8f rr=%.4f max_loss=%.4f%% level=%s",
            params.position_type.value,
            entry_price,
            position_size,
            risk_reward_ratio,
            max_loss_percentage,
            risk_level.value,
        )

        return RiskAnalysis(
            parameters=params,
            calculations=calculations,
            simulations=self.run_simulations(params, calculations),
            risk_level=risk_level,
            recommendations=recommendations,
        )

    @staticmethod
    def run_simulations(
        params: TradingParameters,
        calculations: RiskCalculations,
    ) -> List[SimulationResult]:
        """Return the stop-loss, take-profit and liquidation outcomes, in that order."""
        balance = params.account_balance
        potential_loss = calculations.potential_loss
        potential_profit = calculations.potential_profit
        liquidation_loss = balance * LIQUIDATION_LOSS_FRACTION

        simulations = [
            SimulationResult(
                scenario=STOP_LOSS_HIT,
                result_balance=balance - potential_loss,
                pnl=-potential_loss,
                pnl_percentage=-(potential_loss / balance) * 100,
                description=f"Stop loss hit at {format_currency(params.stop_loss)}",
            ),
            SimulationResult(
                scenario=TAKE_PROFIT_HIT,
                result_balance=balance + potential_profit,
                pnl=potential_profit,
                pnl_percentage=(potential_profit / balance) * 100,
                description=f"Take profit hit at {format_currency(params.take_profit)}",
            ),
            SimulationResult(
                scenario=LIQUIDATION,
                result_balance=balance * LIQUIDATION_REMAINING_FRACTION,
                pnl=-liquidation_loss,
                pnl_percentage=LIQUIDATION_PNL_PERCENTAGE,
                description=(
                    "Position liquidated - catastrophic loss of "
                    f"{format_currency(liquidation_loss)}"
                ),
            ),
        ]
        for result in simulations:
            _require_finite(f"{result.scenario}.result_balance", result.result_balance)
            _require_finite(f"{result.scenario}.pnl", result.pnl)
        return simulations
