"""Command-line risk report for a single trade setup."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import List, Optional

from riskplanner.config_loader import load_config
from riskplanner.models import PositionType, RiskAnalysis, TradingParameters
from riskplanner.risk.risk_engine import RiskEngine
from riskplanner.risk.validation import validate_trading_parameters
from riskplanner.utils.formatting import format_currency, format_percentage
from riskplanner.utils.logger import setup_logger

EXIT_ANALYSIS_FAILED = 1
EXIT_INVALID_PARAMETERS = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Size a leveraged position and report its risk.")
    parser.add_argument("--entry", type=float, required=True, help="Entry price.")
    parser.add_argument("--stop-loss", type=float, required=True, help="Stop loss price.")
    parser.add_argument("--take-profit", type=float, required=True, help="Take profit price.")
    parser.add_argument("--balance", type=float, required=True, help="Account balance.")
    parser.add_argument("--leverage", type=float, default=1.0, help="Leverage multiplier (1-125).")
    parser.add_argument("--risk", type=float, default=1.0, help="Percentage of balance to risk.")
    parser.add_argument("--side", choices=["long", "short"], required=True, help="Position direction.")
    parser.add_argument("--config", default="config/settings.yaml", help="Path to YAML config.")
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Override the logging level from the config file.",
    )
    return parser


def render_report(analysis: RiskAnalysis) -> str:
    params = analysis.parameters
    calc = analysis.calculations
    lines = [
        f"{params.position_type.value} {params.leverage:g}x @ {format_currency(params.entry_price)}",
        f"Risk level:              {analysis.risk_level.value}",
        f"Liquidation price:       {format_currency(calc.liquidation_price)}",
        f"Distance to liquidation: {format_currency(calc.distance_to_liquidation)}",
        f"Position size:           {calc.position_size:.8f}",
        f"Margin required:         {format_currency(calc.margin_required)}",
        f"Order value:             {format_currency(calc.order_value)}",
        f"Potential profit:        {format_currency(calc.potential_profit)}",
        f"Potential loss:          {format_currency(calc.potential_loss)}",
        f"Risk-reward ratio:       {calc.risk_reward_ratio:.2f}",
        f"Max loss:                {format_percentage(calc.max_loss_percentage)}",
        "",
        "Scenarios:",
    ]
    for result in analysis.simulations:
        lines.append(
            f"  {result.scenario:<14} {format_currency(result.result_balance):>16} "
            f"({format_percentage(result.pnl_percentage)})  {result.description}"
        )
    lines.append("")
    lines.append("Recommendations:")
    lines.extend(f"  - {text}" for text in analysis.recommendations)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for a one-off risk analysis."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    logger = setup_logger(config.get("logging", {}), level_override=args.log_level)

    params = TradingParameters(
        entry_price=args.entry,
        stop_loss=args.stop_loss,
        take_profit=args.take_profit,
        account_balance=args.balance,
        leverage=args.leverage,
        risk_percentage=args.risk,
        position_type=PositionType.parse(args.side),
    )

    issues = validate_trading_parameters(params)
    if issues:
        for issue in issues:
            logger.error("%s: %s", issue.field, issue.message)
        return EXIT_INVALID_PARAMETERS

    try:
        analysis = RiskEngine().analyze(params)
    except ArithmeticError as exc:
        logger.error("Trade cannot be analyzed: %s", exc)
        return EXIT_ANALYSIS_FAILED
    logger.info("Risk level %s for %s setup", analysis.risk_level.value, params.position_type.value)

    if args.json:
        print(json.dumps(asdict(analysis), indent=2))
    else:
        print(render_report(analysis))
    return 0


if __name__ == "__main__":
    sys.exit(main())
