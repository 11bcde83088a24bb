"""Domain types shared by the validator, the risk engine and the plan layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List


class PositionType(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"

    @classmethod
    def parse(cls, value: Any) -> "PositionType":
        """Accept an enum member or a case-insensitive string such as ``"long"``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ValueError(f"Unsupported position type: {value!r}") from exc

    @property
    def is_long(self) -> bool:
        return self is PositionType.LONG


class RiskLevel(str, Enum):
    """Categorical trade risk, ordered LOW < MEDIUM < HIGH < EXTREME."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    EXTREME = "EXTREME"

    @property
    def severity(self) -> int:
        return _RISK_SEVERITY[self]


_RISK_SEVERITY = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.EXTREME: 3,
}


@dataclass(frozen=True)
class TradingParameters:
    """Inputs for a single risk analysis."""

    entry_price: float
    stop_loss: float
    take_profit: float
    account_balance: float
    leverage: float
    risk_percentage: float
    position_type: PositionType

    @property
    def is_long(self) -> bool:
        return self.position_type.is_long


@dataclass(frozen=True)
class RiskCalculations:
    liquidation_price: float
    position_size: float
    recommended_position_size: float
    margin_required: float
    order_value: float
    potential_profit: float
    potential_loss: float
    risk_reward_ratio: float
    max_loss_percentage: float
    distance_to_liquidation: float


@dataclass(frozen=True)
class SimulationResult:
    """Account outcome for one scenario: stopLossHit, takeProfitHit or liquidation."""

    scenario: str
    result_balance: float
    pnl: float
    pnl_percentage: float
    description: str


@dataclass(frozen=True)
class RiskAnalysis:
    parameters: TradingParameters
    calculations: RiskCalculations
    simulations: List[SimulationResult]
    risk_level: RiskLevel
    recommendations: List[str] = field(default_factory=list)

    def simulation(self, scenario: str) -> SimulationResult:
        for result in self.simulations:
            if result.scenario == scenario:
                return result
        raise KeyError(scenario)
