"""Risk-level decision table and recommendation text."""

from __future__ import annotations

from typing import List

from riskplanner.models import RiskLevel

REDUCE_POSITION_SIZE = "Consider reducing position size significantly"
UNFAVORABLE_RATIO = "Your risk-reward ratio is unfavorable"
TIGHTER_STOP_LOSS = "Consider using a tighter stop loss"
REDUCE_LEVERAGE = "Reduce leverage to lower liquidation risk"
MINIMUM_RATIO = "Aim for at least 1.5:1 risk-reward ratio"
PROFESSIONAL_RISK = "Professional traders risk 1-2% per trade"
REASONABLE_PARAMETERS = "Your risk parameters look reasonable"
ALWAYS_USE_STOPS = "Always use stop losses to protect capital"

RISK_MANAGEMENT_GUIDELINES = (
    {
        "title": "Position Sizing",
        "description": "Never risk more than 1-2% of your account on a single trade",
    },
    {"title": "Stop Loss", "description": "Always use a stop loss to limit potential losses"},
    {"title": "Risk-Reward", "description": "Aim for at least 1.5:1 to 2:1 risk-reward ratio"},
    {"title": "Leverage", "description": "Lower leverage reduces liquidation risk"},
    {"title": "Diversification", "description": "Spread risk across multiple positions"},
    {
        "title": "Emotional Control",
        "description": "Stick to your trading plan regardless of emotions",
    },
)


def classify_risk_level(max_loss_percentage: float, risk_reward_ratio: float) -> RiskLevel:
    """Map loss exposure and reward ratio to a risk level.

    Rows are checked top-down and the first match wins. Percentage limits use
    strict ``>`` and ratio limits strict ``<``, so a ratio of exactly 0.5 is
    HIGH rather than EXTREME.
    """
    if max_loss_percentage > 10 or risk_reward_ratio < 0.5:
        return RiskLevel.EXTREME
    if max_loss_percentage > 5 or risk_reward_ratio < 1:
        return RiskLevel.HIGH
    if max_loss_percentage > 2 or risk_reward_ratio < 1.5:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def generate_recommendations(
    risk_level: RiskLevel,
    max_loss_percentage: float,
    risk_reward_ratio: float,
) -> List[str]:
    """Build the additive, ordered list of trade recommendations."""
    recommendations: List[str] = []

    # Independent checks, not an elif chain.
    if risk_level is RiskLevel.EXTREME:
        recommendations.append(REDUCE_POSITION_SIZE)
        recommendations.append(UNFAVORABLE_RATIO)
    if risk_level is RiskLevel.HIGH:
        recommendations.append(TIGHTER_STOP_LOSS)
        recommendations.append(REDUCE_LEVERAGE)
    if risk_reward_ratio < 1.5:
        recommendations.append(MINIMUM_RATIO)
    if max_loss_percentage > 2:
        recommendations.append(PROFESSIONAL_RISK)

    if not recommendations:
        recommendations.append(REASONABLE_PARAMETERS)
        recommendations.append(ALWAYS_USE_STOPS)

    return recommendations
