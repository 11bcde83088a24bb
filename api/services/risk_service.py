from __future__ import annotations

import logging
from typing import List

from riskplanner.models import RiskAnalysis, TradingParameters
from riskplanner.risk.risk_engine import RiskEngine
from riskplanner.risk.validation import (
    InvalidTradingParametersError,
    ValidationIssue,
    validate_trading_parameters,
)

logger = logging.getLogger("api")


class RiskService:
    """Single entry point that enforces validate-before-analyze for every caller."""

    def __init__(self, engine: RiskEngine | None = None) -> None:
        self.engine = engine or RiskEngine()

    def validate(self, params: TradingParameters) -> List[ValidationIssue]:
        return validate_trading_parameters(params)

    def evaluate(self, params: TradingParameters) -> RiskAnalysis:
        issues = self.validate(params)
        if issues:
            logger.info(
                "risk_rejected",
                extra={"event": "risk.rejected", "issues": [issue.field for issue in issues]},
            )
            raise InvalidTradingParametersError(issues)

        analysis = self.engine.analyze(params)
        logger.info(
            "risk_analyzed",
            extra={"event": "risk.analyzed", "risk_level": analysis.risk_level.value},
        )
        return analysis

    def liquidation_price(self, entry_price: float, leverage: float, is_long: bool) -> float:
        return self.engine.calculate_liquidation_price(entry_price, leverage, is_long)

    def position_size(
        self,
        balance: float,
        risk_percentage: float,
        entry_price: float,
        stop_loss: float,
    ) -> tuple[float, float]:
        """Return ``(position_size, risk_amount)``."""
        size = self.engine.calculate_position_size(balance, risk_percentage, entry_price, stop_loss)
        return size, self.engine.calculate_risk_amount(balance, risk_percentage)
