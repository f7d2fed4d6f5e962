"""Cost engine: amortization, flat legacy totals and monthly forecasts."""

from .calculator import (
    AVG_DAYS_PER_MONTH,
    CostCalculator,
    CostMode,
    CostSummary,
    FlatCostSummary,
    compute_costs,
)
from .exceptions import InvalidInputShape
from .forecast import CostForecaster, MonthlyForecast, forecast_monthly
from .records import ServerRecord, parse_expire

__all__ = [
    "AVG_DAYS_PER_MONTH",
    "CostCalculator",
    "CostForecaster",
    "CostMode",
    "CostSummary",
    "FlatCostSummary",
    "InvalidInputShape",
    "MonthlyForecast",
    "ServerRecord",
    "compute_costs",
    "forecast_monthly",
    "parse_expire",
]
