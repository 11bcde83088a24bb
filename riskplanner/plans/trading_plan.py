"""Trading plan entity: a named snapshot of a risk analysis and its lifecycle."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from riskplanner.models import PositionType, RiskAnalysis, RiskLevel


class PlanStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    EXECUTED = "EXECUTED"
    CANCELLED = "CANCELLED"


class PlanStateError(ValueError):
    """Raised for a status change the plan lifecycle does not allow."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TradingPlan:
    """Immutable plan record; every transition returns a new instance."""

    id: str
    user_id: str
    name: str
    description: Optional[str]
    status: PlanStatus
    entry_price: float
    stop_loss: float
    take_profit: float
    leverage: float
    position_type: PositionType
    risk_percentage: float
    account_balance: float
    liquidation_price: float
    position_size: float
    margin_required: float
    order_value: float
    potential_profit: float
    potential_loss: float
    risk_reward_ratio: float
    max_loss_percentage: float
    risk_level: RiskLevel
    recommendations: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    executed_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        plan_id: str,
        user_id: str,
        name: str,
        analysis: RiskAnalysis,
        description: Optional[str] = None,
    ) -> "TradingPlan":
        """Snapshot ``analysis`` into a new DRAFT plan."""
        params = analysis.parameters
        calc = analysis.calculations
        now = _utcnow()
        return cls(
            id=plan_id,
            user_id=user_id,
            name=name,
            description=description or None,
            status=PlanStatus.DRAFT,
            entry_price=params.entry_price,
            stop_loss=params.stop_loss,
            take_profit=params.take_profit,
            leverage=params.leverage,
            position_type=params.position_type,
            risk_percentage=params.risk_percentage,
            account_balance=params.account_balance,
            liquidation_price=calc.liquidation_price,
            position_size=calc.position_size,
            margin_required=calc.margin_required,
            order_value=calc.order_value,
            potential_profit=calc.potential_profit,
            potential_loss=calc.potential_loss,
            risk_reward_ratio=calc.risk_reward_ratio,
            max_loss_percentage=calc.max_loss_percentage,
            risk_level=analysis.risk_level,
            recommendations=list(analysis.recommendations),
            created_at=now,
            updated_at=now,
        )

    def activate(self) -> "TradingPlan":
        if self.status is not PlanStatus.DRAFT:
            raise PlanStateError("Only draft plans can be activated")
        return replace(self, status=PlanStatus.ACTIVE, updated_at=_utcnow(), executed_at=None)

    def execute(self) -> "TradingPlan":
        if self.status is not PlanStatus.ACTIVE:
            raise PlanStateError("Only active plans can be executed")
        now = _utcnow()
        return replace(self, status=PlanStatus.EXECUTED, updated_at=now, executed_at=now)

    def cancel(self) -> "TradingPlan":
        if self.status is PlanStatus.EXECUTED:
            raise PlanStateError("Cannot cancel executed plans")
        return replace(self, status=PlanStatus.CANCELLED, updated_at=_utcnow(), executed_at=None)

    def rename(self, name: str) -> "TradingPlan":
        if self.status is PlanStatus.EXECUTED:
            raise PlanStateError("Cannot update executed plans")
        return replace(self, name=name, updated_at=_utcnow())

    def transition_to(self, status: PlanStatus) -> "TradingPlan":
        """Apply the lifecycle step that leads to ``status``."""
        if status is PlanStatus.ACTIVE:
            return self.activate()
        if status is PlanStatus.EXECUTED:
            return self.execute()
        if status is PlanStatus.CANCELLED:
            return self.cancel()
        raise PlanStateError("Invalid status transition")
