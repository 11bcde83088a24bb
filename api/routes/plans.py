from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends

from api.errors import ApiError
from api.models import (
    CreatePlanRequest,
    MessageResponse,
    PlanListResponse,
    PlanResponse,
    PlanStatusItem,
    PlanStatusResponse,
    TradingPlanItem,
    UpdatePlanStatusRequest,
)
from api.services.plan_service import PlanService
from riskplanner.plans.repository import PlanNotFoundError
from riskplanner.plans.trading_plan import PlanStateError, PlanStatus, TradingPlan
from riskplanner.risk.validation import InvalidTradingParametersError

from .deps import get_plan_service

router = APIRouter(prefix="/plans", tags=["plans"])


def _to_items(plans: List[TradingPlan]) -> List[TradingPlanItem]:
    return [TradingPlanItem(**asdict(plan)) for plan in plans]


@router.post("", response_model=PlanResponse, status_code=201)
def create_plan(
    payload: CreatePlanRequest,
    plan_service: PlanService = Depends(get_plan_service),
) -> PlanResponse:
    try:
        plan = plan_service.create(
            user_id=payload.user_id,
            name=payload.name,
            params=payload.to_parameters(),
            description=payload.description,
        )
    except InvalidTradingParametersError as exc:
        raise ApiError.from_issues("Invalid trading plan", exc.issues) from exc
    except ArithmeticError as exc:
        raise ApiError(status_code=400, message=f"Trade cannot be analyzed: {exc}") from exc

    return PlanResponse(data=TradingPlanItem(**asdict(plan)))


@router.get("/user/{user_id}", response_model=PlanListResponse)
def list_user_plans(
    user_id: str,
    plan_service: PlanService = Depends(get_plan_service),
) -> PlanListResponse:
    return PlanListResponse(data=_to_items(plan_service.list_for_user(user_id)))


@router.get("/user/{user_id}/status/{status}", response_model=PlanListResponse)
def list_user_plans_by_status(
    user_id: str,
    status: str,
    plan_service: PlanService = Depends(get_plan_service),
) -> PlanListResponse:
    try:
        plan_status = PlanStatus(status.upper())
    except ValueError as exc:
        raise ApiError(status_code=400, message="Invalid status") from exc

    return PlanListResponse(data=_to_items(plan_service.list_for_user(user_id, plan_status)))


@router.get("/{plan_id}", response_model=PlanResponse)
def get_plan(
    plan_id: str,
    plan_service: PlanService = Depends(get_plan_service),
) -> PlanResponse:
    try:
        plan = plan_service.get(plan_id)
    except PlanNotFoundError as exc:
        raise ApiError(status_code=404, message=str(exc)) from exc

    return PlanResponse(data=TradingPlanItem(**asdict(plan)))


@router.patch("/{plan_id}", response_model=PlanStatusResponse)
def update_plan_status(
    plan_id: str,
    payload: UpdatePlanStatusRequest,
    plan_service: PlanService = Depends(get_plan_service),
) -> PlanStatusResponse:
    try:
        plan = plan_service.update_status(plan_id, payload.status)
    except PlanNotFoundError as exc:
        raise ApiError(status_code=404, message=str(exc)) from exc
    except PlanStateError as exc:
        raise ApiError(status_code=400, message=str(exc)) from exc

    return PlanStatusResponse(
        data=PlanStatusItem(
            id=plan.id,
            status=plan.status,
            updated_at=plan.updated_at,
            executed_at=plan.executed_at,
        )
    )


@router.delete("/{plan_id}", response_model=MessageResponse)
def delete_plan(
    plan_id: str,
    plan_service: PlanService = Depends(get_plan_service),
) -> MessageResponse:
    try:
        plan_service.delete(plan_id)
    except PlanNotFoundError as exc:
        raise ApiError(status_code=404, message=str(exc)) from exc

    return MessageResponse(message="Trading plan deleted successfully")
