from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from api.errors import ApiError
from api.models import (
    AnalysisResponse,
    GuidelineItem,
    GuidelinesResponse,
    GuidelinesResult,
    LiquidationRequest,
    LiquidationResponse,
    LiquidationResult,
    PositionSizeRequest,
    PositionSizeResponse,
    PositionSizeResult,
    RiskAnalysisItem,
    TradingParamsRequest,
    ValidationIssueItem,
    ValidationResponse,
    ValidationResult,
)
from api.services.risk_service import RiskService
from riskplanner.risk.classification import RISK_MANAGEMENT_GUIDELINES
from riskplanner.risk.validation import InvalidTradingParametersError

from .deps import get_risk_service

router = APIRouter(prefix="/risk", tags=["risk"])


@router.post("/validate", response_model=ValidationResponse)
def validate_parameters(
    payload: TradingParamsRequest,
    risk_service: RiskService = Depends(get_risk_service),
) -> ValidationResponse:
    issues = risk_service.validate(payload.to_parameters())
    return ValidationResponse(
        data=ValidationResult(
            valid=not issues,
            errors=[ValidationIssueItem(**asdict(issue)) for issue in issues],
        )
    )


@router.post("/analyze", response_model=AnalysisResponse)
def analyze_risk(
    payload: TradingParamsRequest,
    risk_service: RiskService = Depends(get_risk_service),
) -> AnalysisResponse:
    try:
        analysis = risk_service.evaluate(payload.to_parameters())
    except InvalidTradingParametersError as exc:
        raise ApiError.from_issues("Invalid trading parameters", exc.issues) from exc
    except ArithmeticError as exc:
        raise ApiError(status_code=400, message=f"Trade cannot be analyzed: {exc}") from exc

    return AnalysisResponse(
        data=RiskAnalysisItem(**asdict(analysis), timestamp=datetime.now(timezone.utc))
    )


@router.post("/liquidation", response_model=LiquidationResponse)
def liquidation_price(
    payload: LiquidationRequest,
    risk_service: RiskService = Depends(get_risk_service),
) -> LiquidationResponse:
    try:
        price = risk_service.liquidation_price(
            payload.entry_price,
            payload.leverage,
            payload.position_type.is_long,
        )
    except ArithmeticError as exc:
        raise ApiError(status_code=400, message=f"Liquidation price cannot be computed: {exc}") from exc

    return LiquidationResponse(
        data=LiquidationResult(
            liquidation_price=price,
            entry_price=payload.entry_price,
            leverage=payload.leverage,
            position_type=payload.position_type,
        )
    )


@router.post("/position-size", response_model=PositionSizeResponse)
def position_size(
    payload: PositionSizeRequest,
    risk_service: RiskService = Depends(get_risk_service),
) -> PositionSizeResponse:
    try:
        size, risk_amount = risk_service.position_size(
            payload.account_balance,
            payload.risk_percentage,
            payload.entry_price,
            payload.stop_loss,
        )
    except ZeroDivisionError as exc:
        raise ApiError(status_code=400, message="Entry price and stop loss must differ") from exc
    except ArithmeticError as exc:
        raise ApiError(status_code=400, message=f"Position size cannot be computed: {exc}") from exc

    return PositionSizeResponse(data=PositionSizeResult(position_size=size, risk_amount=risk_amount))


@router.get("/recommendations", response_model=GuidelinesResponse)
def recommendations() -> GuidelinesResponse:
    return GuidelinesResponse(
        data=GuidelinesResult(
            risk_management=[GuidelineItem(**item) for item in RISK_MANAGEMENT_GUIDELINES]
        )
    )
