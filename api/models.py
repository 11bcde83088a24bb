from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from riskplanner.models import PositionType, RiskLevel, TradingParameters
from riskplanner.plans.trading_plan import PlanStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


class _PositionTypeMixin(CamelModel):
    @field_validator("position_type", mode="before", check_fields=False)
    @classmethod
    def _parse_position_type(cls, value: Any) -> PositionType:
        return PositionType.parse(value)


class TradingParamsRequest(_PositionTypeMixin):
    entry_price: float
    stop_loss: float
    take_profit: float
    account_balance: float
    leverage: float
    risk_percentage: float
    position_type: PositionType

    def to_parameters(self) -> TradingParameters:
        return TradingParameters(
            entry_price=self.entry_price,
            stop_loss=self.stop_loss,
            take_profit=self.take_profit,
            account_balance=self.account_balance,
            leverage=self.leverage,
            risk_percentage=self.risk_percentage,
            position_type=self.position_type,
        )


class LiquidationRequest(_PositionTypeMixin):
    entry_price: float = Field(gt=0)
    leverage: float = Field(ge=1, le=125)
    position_type: PositionType = PositionType.LONG


class PositionSizeRequest(CamelModel):
    account_balance: float = Field(gt=0)
    risk_percentage: float = Field(gt=0, le=100)
    entry_price: float = Field(gt=0)
    stop_loss: float = Field(gt=0)


class CreatePlanRequest(TradingParamsRequest):
    user_id: str = Field(min_length=1)
    name: str
    description: Optional[str] = None


class UpdatePlanStatusRequest(CamelModel):
    status: PlanStatus


class ValidationIssueItem(CamelModel):
    field: str
    message: str
    value: Any = None


class RiskCalculationsItem(CamelModel):
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


class SimulationItem(CamelModel):
    scenario: str
    result_balance: float
    pnl: float
    pnl_percentage: float
    description: str


class TradingParamsItem(CamelModel):
    entry_price: float
    stop_loss: float
    take_profit: float
    account_balance: float
    leverage: float
    risk_percentage: float
    position_type: PositionType


class RiskAnalysisItem(CamelModel):
    parameters: TradingParamsItem
    calculations: RiskCalculationsItem
    simulations: List[SimulationItem]
    risk_level: RiskLevel
    recommendations: List[str]
    timestamp: datetime


class ValidationResult(CamelModel):
    valid: bool
    errors: List[ValidationIssueItem]


class LiquidationResult(CamelModel):
    liquidation_price: float
    entry_price: float
    leverage: float
    position_type: PositionType


class PositionSizeResult(CamelModel):
    position_size: float
    risk_amount: float


class GuidelineItem(CamelModel):
    title: str
    description: str


class GuidelinesResult(CamelModel):
    risk_management: List[GuidelineItem]


class TradingPlanItem(CamelModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
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
    recommendations: List[str]
    created_at: datetime
    updated_at: datetime
    executed_at: Optional[datetime] = None


class PlanStatusItem(CamelModel):
    id: str
    status: PlanStatus
    updated_at: datetime
    executed_at: Optional[datetime] = None


class HealthResponse(CamelModel):
    status: str
    timestamp: datetime
    uptime: float


class ReadyResponse(CamelModel):
    ready: bool
    timestamp: datetime


class ValidationResponse(CamelModel):
    success: bool = True
    data: ValidationResult


class AnalysisResponse(CamelModel):
    success: bool = True
    data: RiskAnalysisItem


class LiquidationResponse(CamelModel):
    success: bool = True
    data: LiquidationResult


class PositionSizeResponse(CamelModel):
    success: bool = True
    data: PositionSizeResult


class GuidelinesResponse(CamelModel):
    success: bool = True
    data: GuidelinesResult


class PlanResponse(CamelModel):
    success: bool = True
    data: TradingPlanItem


class PlanListResponse(CamelModel):
    success: bool = True
    data: List[TradingPlanItem]


class PlanStatusResponse(CamelModel):
    success: bool = True
    data: PlanStatusItem


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    errors: List[ValidationIssueItem] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> "ErrorResponse":
        return cls(error=message, errors=[ValidationIssueItem(**item) for item in errors or []])
