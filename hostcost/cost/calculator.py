"""Amortize server subscriptions into horizon and daily spend figures.

Two accounting conventions are available through ``compute_costs``:

- ``CostMode.PRORATED``: each server is charged per day
  (``monthly_cost / AVG_DAYS_PER_MONTH``) only while it is active inside
  ``[reference, reference + horizon_days]``.
- ``CostMode.FLAT``: legacy ``monthly_cost * 12`` per server, ignoring
  expiry. Overstates spend for servers that expire soon; kept for callers
  that display it.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..utils.i18n import Translator, translate_for
from .records import ServerRecord, coerce_number, normalize_records, to_local_instant

logger = logging.getLogger(__name__)

# Mean Gregorian month length: 365.2425 / 12 = 30.436875 days
AVG_DAYS_PER_MONTH = 365.2425 / 12

DEFAULT_HORIZON_DAYS = 365
MIN_HORIZON_DAYS = 1
MAX_HORIZON_DAYS = 3660

FLAT_MONTHS_PER_YEAR = 12
FLAT_DAYS_PER_YEAR = 365


class CostMode(Enum):
    """Accounting convention for ``compute_costs``."""

    PRORATED = "prorated"
    FLAT = "flat"


@dataclass
class CostSummary:
    """Prorated spend over a horizon and the current daily burn rate."""

    total_cost_in_horizon: float
    total_daily_cost_now: float
    active_servers: int
    warnings: List[str] = field(default_factory=list)
    horizon_days: float = DEFAULT_HORIZON_DAYS
    mode: CostMode = CostMode.PRORATED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "mode": self.mode.value,
            "horizon_days": self.horizon_days,
            "total_cost_in_horizon": round(self.total_cost_in_horizon, 2),
            "total_daily_cost_now": round(self.total_daily_cost_now, 2),
            "active_servers": self.active_servers,
            "warnings": list(self.warnings),
        }


@dataclass
class FlatCostSummary:
    """Legacy flat yearly total (``monthly_cost * 12``) and its daily share."""

    yearly_total: float
    daily_average: float
    server_count: int
    warnings: List[str] = field(default_factory=list)
    mode: CostMode = CostMode.FLAT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "mode": self.mode.value,
            "yearly_total": round(self.yearly_total, 2),
            "daily_average": round(self.daily_average, 2),
            "server_count": self.server_count,
            "warnings": list(self.warnings),
        }


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return min(max(value, low), high)


def is_list_shaped(value: Any) -> bool:
    """Whether a server list argument can be iterated as records."""
    return isinstance(value, (list, tuple))


def resolve_reference(reference: Optional[datetime] = None) -> datetime:
    """Default to the current instant; naive datetimes are local time."""
    if reference is None:
        return datetime.now().astimezone()
    return to_local_instant(reference)


class CostCalculator:
    """Compute spend aggregates from a server list.

    The calculator holds no server data: every call receives the list and
    builds a fresh result, so concurrent calls need no coordination.
    """

    def __init__(self, translate: Optional[Translator] = None):
        """Initialize the calculator.

        Args:
            translate: Message lookup for warnings (default: English)
        """
        self.translate = translate or translate_for("en")

    def compute_costs(
        self,
        server_list: Sequence[Any],
        reference: Optional[datetime] = None,
        horizon_days: Any = DEFAULT_HORIZON_DAYS,
        mode: CostMode = CostMode.PRORATED
    ):
        """Compute spend aggregates in the selected accounting mode.

        Args:
            server_list: Raw server records (mappings or ServerRecord)
            reference: The "now" instant (default: current time)
            horizon_days: Forward window in days, clamped to [1, 3660]
            mode: CostMode.PRORATED or CostMode.FLAT

        Returns:
            CostSummary for prorated mode, FlatCostSummary for flat mode
        """
        if CostMode(mode) == CostMode.FLAT:
            return self.compute_flat(server_list)
        return self.compute_prorated(server_list, reference, horizon_days)

    def compute_prorated(
        self,
        server_list: Sequence[Any],
        reference: Optional[datetime] = None,
        horizon_days: Any = DEFAULT_HORIZON_DAYS
    ) -> CostSummary:
        """Prorated horizon total and current daily cost.

        Args:
            server_list: Raw server records
            reference: The "now" instant (default: current time)
            horizon_days: Forward window in days, clamped to [1, 3660]

        Returns:
            CostSummary
        """
        days = clamp(
            coerce_number(horizon_days, DEFAULT_HORIZON_DAYS),
            MIN_HORIZON_DAYS,
            MAX_HORIZON_DAYS
        )

        if not is_list_shaped(server_list):
            return CostSummary(0.0, 0.0, 0, [self._reject(server_list)], horizon_days=days)

        if not server_list:
            return CostSummary(0.0, 0.0, 0, [self.translate("no_data")], horizon_days=days)

        now = resolve_reference(reference)
        horizon_end = now + timedelta(days=days)

        total_cost_in_horizon = 0.0
        total_daily_cost_now = 0.0
        active_servers = 0
        warnings: List[str] = []

        for record in normalize_records(server_list):
            if record.monthly_cost <= 0:
                continue

            if not record.is_valid:
                warnings.append(self._unparsable(record))
                continue

            daily_rate = record.monthly_cost / AVG_DAYS_PER_MONTH

            if record.is_active_at(now):
                active_servers += 1
                total_daily_cost_now += daily_rate

            effective_end = min(record.expire, horizon_end)
            if effective_end <= now:
                continue

            remaining_days = (effective_end - now) / timedelta(days=1)
            total_cost_in_horizon += remaining_days * daily_rate

        logger.debug(
            f"Prorated costs over {days:g} days: {active_servers} active, "
            f"{len(warnings)} warnings"
        )

        return CostSummary(
            total_cost_in_horizon=total_cost_in_horizon,
            total_daily_cost_now=total_daily_cost_now,
            active_servers=active_servers,
            warnings=warnings,
            horizon_days=days,
        )

    def compute_flat(self, server_list: Sequence[Any]) -> FlatCostSummary:
        """Legacy flat yearly total, ignoring expiry.

        Args:
            server_list: Raw server records

        Returns:
            FlatCostSummary
        """
        if not is_list_shaped(server_list):
            return FlatCostSummary(0.0, 0.0, 0, [self._reject(server_list)])

        if not server_list:
            message = self.translate("no_data")
            logger.error(message)
            return FlatCostSummary(0.0, 0.0, 0, [message])

        charged = [r for r in normalize_records(server_list) if r.monthly_cost > 0]

        yearly_total = sum(r.monthly_cost * FLAT_MONTHS_PER_YEAR for r in charged)

        return FlatCostSummary(
            yearly_total=yearly_total,
            daily_average=yearly_total / FLAT_DAYS_PER_YEAR,
            server_count=len(charged),
        )

    def _reject(self, value: Any) -> str:
        message = self.translate("invalid_input", type=type(value).__name__)
        logger.error(message)
        return message

    def _unparsable(self, record: ServerRecord) -> str:
        return self.translate("unparsable_expire", name=record.label, value=record.expire_raw)


def compute_costs(
    server_list: Sequence[Any],
    reference: Optional[datetime] = None,
    horizon_days: Any = DEFAULT_HORIZON_DAYS,
    mode: CostMode = CostMode.PRORATED,
    translate: Optional[Translator] = None
):
    """Shortcut for ``CostCalculator(translate).compute_costs(...)``."""
    return CostCalculator(translate).compute_costs(server_list, reference, horizon_days, mode)
