from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from riskplanner.plans.repository import InMemoryPlanRepository
from riskplanner.risk.risk_engine import RiskEngine

from .plan_service import PlanService
from .risk_service import RiskService


@dataclass
class ServiceContainer:
    risk_service: RiskService
    plan_service: PlanService
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def uptime_seconds(self) -> float:
        return (datetime.now(timezone.utc) - self.started_at).total_seconds()


def build_container() -> ServiceContainer:
    risk_service = RiskService(engine=RiskEngine())
    plan_service = PlanService(risk_service=risk_service, repository=InMemoryPlanRepository())
    return ServiceContainer(risk_service=risk_service, plan_service=plan_service)
