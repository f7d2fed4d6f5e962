"""Month-by-month spend forecast.

Each forecast month is charged the full ``monthly_cost`` of every server
still active on the first day of that month. This step function is
intentionally coarser than the day-prorated horizon total in
``calculator``; the two figures are not expected to agree.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..utils.i18n import DisplayConfig, format_month_label
from .calculator import clamp, is_list_shaped, resolve_reference
from .records import coerce_number, normalize_records

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_MONTHS = 12
MIN_FORECAST_MONTHS = 1
MAX_FORECAST_MONTHS = 120


@dataclass
class MonthlyForecast:
    """Forecast spend for one calendar month."""

    month_label: str
    month_start: datetime
    cost: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "month": self.month_label,
            "month_start": self.month_start.isoformat(),
            "cost": round(self.cost, 2),
        }


def month_start_after(reference: datetime, months: int) -> datetime:
    """Local midnight on the first day of the month ``months`` after ``reference``'s month."""
    local = reference.astimezone()
    index = local.year * 12 + (local.month - 1) + months
    return datetime(index // 12, index % 12 + 1, 1).astimezone()


class CostForecaster:
    """Forecast monthly spend from server expiries."""

    def __init__(self, display_config: Optional[DisplayConfig] = None):
        """Initialize the forecaster.

        Args:
            display_config: Locale used for month labels
        """
        self.display_config = display_config or DisplayConfig()

    def forecast_monthly(
        self,
        server_list: Sequence[Any],
        months_ahead: Any = DEFAULT_FORECAST_MONTHS,
        reference: Optional[datetime] = None
    ) -> List[MonthlyForecast]:
        """Forecast spend for the next ``months_ahead`` months.

        Args:
            server_list: Raw server records
            months_ahead: Number of months, clamped to [1, 120]
            reference: The "now" instant (default: current time)

        Returns:
            MonthlyForecast entries in chronological order
        """
        count = int(clamp(
            coerce_number(months_ahead, DEFAULT_FORECAST_MONTHS),
            MIN_FORECAST_MONTHS,
            MAX_FORECAST_MONTHS
        ))

        if is_list_shaped(server_list):
            records = [
                r for r in normalize_records(server_list)
                if r.monthly_cost > 0 and r.is_valid
            ]
        else:
            logger.error(f"Server data is not a list: {type(server_list).__name__}")
            records = []

        now = resolve_reference(reference)
        forecasts = []

        for i in range(1, count + 1):
            target = month_start_after(now, i)
            cost = sum(r.monthly_cost for r in records if r.expire > target)

            forecasts.append(MonthlyForecast(
                month_label=format_month_label(target.year, target.month, self.display_config.locale),
                month_start=target,
                cost=cost,
            ))

        return forecasts


def forecast_monthly(
    server_list: Sequence[Any],
    months_ahead: Any = DEFAULT_FORECAST_MONTHS,
    reference: Optional[datetime] = None,
    display_config: Optional[DisplayConfig] = None
) -> List[MonthlyForecast]:
    """Shortcut for ``CostForecaster(display_config).forecast_monthly(...)``."""
    return CostForecaster(display_config).forecast_monthly(server_list, months_ahead, reference)


def to_dataframe(forecasts: List[MonthlyForecast]) -> pd.DataFrame:
    """Tabulate forecasts for charts and tables."""
    return pd.DataFrame(
        [{"month": f.month_label, "month_start": f.month_start, "cost": f.cost} for f in forecasts],
        columns=["month", "month_start", "cost"],
    )
