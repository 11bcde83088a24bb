from __future__ import annotations

from fastapi import Depends, Request

from api.services.container import ServiceContainer
from api.services.plan_service import PlanService
from api.services.risk_service import RiskService


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_risk_service(container: ServiceContainer = Depends(get_container)) -> RiskService:
    return container.risk_service


def get_plan_service(container: ServiceContainer = Depends(get_container)) -> PlanService:
    return container.plan_service
