"""Thread-safe in-memory storage for trading plans."""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional

from .trading_plan import PlanStatus, TradingPlan


class PlanNotFoundError(KeyError):
    """Raised when a plan id is unknown to the repository."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(plan_id)
        self.plan_id = plan_id

    def __str__(self) -> str:
        return "Trading plan not found"


class InMemoryPlanRepository:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._plans: Dict[str, TradingPlan] = {}

    def create(self, plan: TradingPlan) -> TradingPlan:
        with self._lock:
            if plan.id in self._plans:
                raise ValueError(f"Trading plan {plan.id} already exists")
            self._plans[plan.id] = plan
            return plan

    def find_by_id(self, plan_id: str) -> Optional[TradingPlan]:
        with self._lock:
            return self._plans.get(plan_id)

    def find_by_user_id(self, user_id: str) -> List[TradingPlan]:
        """Return the user's plans, newest first."""
        with self._lock:
            plans = [plan for plan in self._plans.values() if plan.user_id == user_id]
        return sorted(plans, key=lambda plan: plan.created_at, reverse=True)

    def find_by_user_id_and_status(self, user_id: str, status: PlanStatus) -> List[TradingPlan]:
        return [plan for plan in self.find_by_user_id(user_id) if plan.status is status]

    def update(self, plan: TradingPlan) -> TradingPlan:
        with self._lock:
            if plan.id not in self._plans:
                raise PlanNotFoundError(plan.id)
            self._plans[plan.id] = plan
            return plan

    def apply(self, plan_id: str, change: Callable[[TradingPlan], TradingPlan]) -> TradingPlan:
        """Replace a stored plan with ``change(plan)`` as one atomic step."""
        with self._lock:
            plan = self._plans.get(plan_id)
            if plan is None:
                raise PlanNotFoundError(plan_id)
            updated = change(plan)
            self._plans[plan_id] = updated
            return updated

    def delete(self, plan_id: str) -> None:
        with self._lock:
            if self._plans.pop(plan_id, None) is None:
                raise PlanNotFoundError(plan_id)
