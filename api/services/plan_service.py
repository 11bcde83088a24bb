from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from riskplanner.models import TradingParameters
from riskplanner.plans.repository import InMemoryPlanRepository, PlanNotFoundError
from riskplanner.plans.trading_plan import PlanStatus, TradingPlan
from riskplanner.risk.validation import (
    InvalidTradingParametersError,
    validate_plan_description,
    validate_plan_name,
)

from .risk_service import RiskService

logger = logging.getLogger("api")


class PlanService:
    def __init__(self, risk_service: RiskService, repository: InMemoryPlanRepository) -> None:
        self.risk_service = risk_service
        self.repository = repository

    def create(
        self,
        user_id: str,
        name: str,
        params: TradingParameters,
        description: Optional[str] = None,
    ) -> TradingPlan:
        """Analyze ``params`` server-side and store the snapshot as a DRAFT plan."""
        issues = validate_plan_name(name) + validate_plan_description(description)
        issues += self.risk_service.validate(params)
        if issues:
            raise InvalidTradingParametersError(issues)

        analysis = self.risk_service.evaluate(params)
        plan = TradingPlan.create(
            plan_id=str(uuid.uuid4()),
            user_id=user_id,
            name=name.strip(),
            analysis=analysis,
            description=description,
        )
        self.repository.create(plan)
        logger.info("plan_created", extra={"event": "plan.created", "plan_id": plan.id, "user_id": user_id})
        return plan

    def get(self, plan_id: str) -> TradingPlan:
        plan = self.repository.find_by_id(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        return plan

    def list_for_user(self, user_id: str, status: Optional[PlanStatus] = None) -> List[TradingPlan]:
        if status is None:
            return self.repository.find_by_user_id(user_id)
        return self.repository.find_by_user_id_and_status(user_id, status)

    def update_status(self, plan_id: str, status: PlanStatus) -> TradingPlan:
        plan = self.repository.apply(plan_id, lambda current: current.transition_to(status))
        logger.info(
            "plan_status_changed",
            extra={"event": "plan.status_changed", "plan_id": plan_id},
        )
        return plan

    def delete(self, plan_id: str) -> None:
        self.repository.delete(plan_id)
        logger.info("plan_deleted", extra={"event": "plan.deleted", "plan_id": plan_id})
