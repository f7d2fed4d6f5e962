#!/usr/bin/env python3
"""CLI entry point for the hosting cost tracker."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from hostcost.cost.calculator import CostCalculator, CostMode, CostSummary
from hostcost.cost.forecast import CostForecaster
from hostcost.cost.records import parse_iso_instant
from hostcost.input.loader import ServerListLoader
from hostcost.output.charts import create_forecast_chart, create_forecast_table
from hostcost.output.formatting import build_summary_strings
from hostcost.utils.helpers import get_project_root, load_config, load_config_or_default, setup_logging
from hostcost.utils.i18n import DisplayConfig, resolve_locale

logger = logging.getLogger("hostcost.cli")


def parse_reference(text: str):
    """Parse the --reference option; accepts a trailing Z on every Python version."""
    instant = parse_iso_instant(text)
    if instant is None:
        raise argparse.ArgumentTypeError(f"Invalid reference instant: {text}")
    return instant


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Hosting Cost Tracker - Project server subscription spend from prices and expiry dates"
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        help="Path to JSON/CSV/Excel server list (default: data.servers_path from config)"
    )

    parser.add_argument(
        "--horizon-days",
        type=int,
        help="Days ahead to sum prorated spend over (default: 365, clamped to 1-3660)"
    )

    parser.add_argument(
        "--months", "-m",
        type=int,
        help="Number of months to forecast (default: 12, clamped to 1-120)"
    )

    parser.add_argument(
        "--mode",
        choices=[m.value for m in CostMode],
        help="Accounting mode: prorated (default) or legacy flat monthly x 12"
    )

    parser.add_argument(
        "--reference",
        type=parse_reference,
        help="Reference instant in ISO format (default: now)"
    )

    parser.add_argument(
        "--locale",
        type=str,
        help="Locale tag for numbers and month labels (e.g. zh-CN, en-US)"
    )

    parser.add_argument(
        "--currency",
        type=str,
        help="Currency symbol prefix (default: ¥)"
    )

    parser.add_argument(
        "--chart",
        type=str,
        metavar="HTML_PATH",
        help="Write the forecast chart to an HTML file"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of a text summary"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--dashboard",
        action="store_true",
        help="Launch the Streamlit dashboard instead of printing a report"
    )

    return parser.parse_args(argv)


def resolve_input_path(args, config: Dict[str, Any]) -> Path:
    """Input path from the CLI, else config, relative to the project root."""
    path = Path(args.input or config["data"]["servers_path"])
    if not path.is_absolute() and not path.exists():
        path = get_project_root() / path
    return path


def print_summary(result, forecasts, display_config: DisplayConfig) -> None:
    """Print the summary block and forecast table."""
    strings = build_summary_strings(result, display_config)
    t = display_config.translate

    print("\n" + "=" * 60)
    print("HOSTING COST SUMMARY")
    print("=" * 60)
    if isinstance(result, CostSummary):
        print(f"Mode:                  prorated ({result.horizon_days:g} days)")
        print(f"{t('yearly_cost')}:".ljust(23) + f"{strings['yearly_total']}")
        print(f"{t('daily_avg_cost')}:".ljust(23) + f"{strings['daily_average']}")
        print(f"Active Servers:        {result.active_servers}")
    else:
        print("Mode:                  flat (monthly x 12, ignores expiry)")
        print(f"{t('yearly_cost')}:".ljust(23) + f"{strings['yearly_total']}")
        print(f"{t('daily_avg_cost')}:".ljust(23) + f"{strings['daily_average']}")
        print(f"Servers Charged:       {result.server_count}")
    print("-" * 60)
    print(t("monthly_forecast"))
    table = create_forecast_table(forecasts, display_config)
    for row in table.itertuples(index=False):
        print(f"  {row.month:<20} {row.cost}")
    print("=" * 60)


def run_report(args, config: Dict[str, Any]) -> None:
    """Load the server list, compute costs and print the report.

    Args:
        args: Command line arguments
        config: Configuration dictionary
    """
    input_path = resolve_input_path(args, config)

    try:
        servers = ServerListLoader(input_path).load()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load server data: {e}")
        sys.exit(1)

    costs_config = config["costs"]
    display_section = config["display"]

    display_config = DisplayConfig(
        locale=resolve_locale(args.locale, display_section.get("locale")),
        currency_symbol=args.currency or display_section.get("currency_symbol") or "¥",
    )

    calculator = CostCalculator(translate=display_config.translate)
    result = calculator.compute_costs(
        servers,
        reference=args.reference,
        horizon_days=costs_config["horizon_days"] if args.horizon_days is None else args.horizon_days,
        mode=CostMode(args.mode or costs_config["mode"]),
    )

    for warning in result.warnings:
        logger.warning(warning)

    forecasts = CostForecaster(display_config).forecast_monthly(
        servers,
        months_ahead=costs_config["forecast_months"] if args.months is None else args.months,
        reference=args.reference,
    )

    if args.json:
        print(json.dumps({
            "summary": result.to_dict(),
            "forecast": [f.to_dict() for f in forecasts],
        }, ensure_ascii=False, indent=2))
    else:
        print_summary(result, forecasts, display_config)

    if args.chart:
        create_forecast_chart(forecasts, display_config).write_html(args.chart)
        logger.info(f"Forecast chart saved to: {args.chart}")


def launch_dashboard():
    """Launch the Streamlit dashboard."""
    import subprocess
    dashboard_path = Path(__file__).parent / "dashboard" / "app.py"

    if not dashboard_path.exists():
        print(f"Dashboard not found: {dashboard_path}")
        sys.exit(1)

    subprocess.run(["streamlit", "run", str(dashboard_path)])


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_args(argv)

    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)
    else:
        config = load_config_or_default()

    level = "DEBUG" if args.verbose else config["logging"].get("level", "INFO")
    setup_logging(level)

    if args.dashboard:
        launch_dashboard()
    else:
        run_report(args, config)


if __name__ == "__main__":
    main()
