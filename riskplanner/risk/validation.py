"""Pre-condition checks for trading parameters and plan metadata.

Every rule is evaluated independently and all violations are returned
together so a caller can present a complete correction list.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional

from riskplanner.models import PositionType, TradingParameters

MIN_LEVERAGE = 1.0
MAX_LEVERAGE = 125.0
MAX_RISK_PERCENTAGE = 100.0
MAX_PLAN_NAME_LENGTH = 100
MAX_PLAN_DESCRIPTION_LENGTH = 500


@dataclass(frozen=True)
class ValidationIssue:
    """One violated input rule, tagged with the offending field."""

    field: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        return self.message


class InvalidTradingParametersError(ValueError):
    """Raised when a caller asks for an analysis of parameters that failed validation."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(issue.message for issue in self.issues))


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def validate_trading_parameters(params: TradingParameters) -> List[ValidationIssue]:
    """Return every rule ``params`` violates; an empty list means valid."""
    issues: List[ValidationIssue] = []

    for field_name, label in (
        ("entry_price", "Entry price"),
        ("stop_loss", "Stop loss"),
        ("take_profit", "Take profit"),
        ("account_balance", "Account balance"),
    ):
        value = getattr(params, field_name)
        if not _is_positive(value):
            issues.append(ValidationIssue(field_name, f"{label} must be greater than 0", value))

    risk = params.risk_percentage
    if not (math.isfinite(risk) and 0 < risk <= MAX_RISK_PERCENTAGE):
        issues.append(
            ValidationIssue(
                "risk_percentage",
                "Risk percentage must be between 0 and 100",
                params.risk_percentage,
            )
        )

    leverage = params.leverage
    if not (math.isfinite(leverage) and MIN_LEVERAGE <= leverage <= MAX_LEVERAGE):
        issues.append(
            ValidationIssue("leverage", "Leverage must be between 1 and 125", params.leverage)
        )

    if params.position_type is PositionType.LONG:
        if not params.stop_loss < params.entry_price:
            issues.append(
                ValidationIssue(
                    "stop_loss",
                    "For long positions, stop loss must be below entry price",
                    params.stop_loss,
                )
            )
        if not params.take_profit > params.entry_price:
            issues.append(
                ValidationIssue(
                    "take_profit",
                    "For long positions, take profit must be above entry price",
                    params.take_profit,
                )
            )
    else:
        if not params.stop_loss > params.entry_price:
            issues.append(
                ValidationIssue(
                    "stop_loss",
                    "For short positions, stop loss must be above entry price",
                    params.stop_loss,
                )
            )
        if not params.take_profit < params.entry_price:
            issues.append(
                ValidationIssue(
                    "take_profit",
                    "For short positions, take profit must be below entry price",
                    params.take_profit,
                )
            )

    return issues


def validate_plan_name(name: Optional[str]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if not name or not name.strip():
        issues.append(ValidationIssue("name", "Plan name is required", name))
    elif len(name) > MAX_PLAN_NAME_LENGTH:
        issues.append(
            ValidationIssue("name", "Plan name must be less than 100 characters", name)
        )
    return issues


def validate_plan_description(description: Optional[str]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if description and len(description) > MAX_PLAN_DESCRIPTION_LENGTH:
        issues.append(
            ValidationIssue(
                "description",
                "Description must be less than 500 characters",
                description,
            )
        )
    return issues
