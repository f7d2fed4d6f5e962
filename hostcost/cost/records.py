"""Server records and expiry normalization."""

import logging
import math
import numbers
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

logger = logging.getLogger(__name__)

# A time component anywhere in the string ("...T14:30...")
_TIME_COMPONENT = re.compile(r"T\d{2}:\d{2}")
_PLAIN_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_NON_NUMERIC = re.compile(r"[^0-9.+-]")

END_OF_DAY = time(23, 59, 59, 999000)


def coerce_number(value: Any, fallback: float = 0.0) -> float:
    """Convert a loosely typed value to a finite float.

    Strings are stripped of currency symbols and separators first, so
    ``"¥1,200"`` becomes ``1200.0``.

    Args:
        value: Raw value
        fallback: Returned for missing, unparsable or non-finite values

    Returns:
        Finite float
    """
    if value is None or isinstance(value, bool):
        return fallback

    if isinstance(value, numbers.Real):
        number = float(value)
    else:
        cleaned = _NON_NUMERIC.sub("", str(value))
        try:
            number = float(cleaned)
        except ValueError:
            return fallback

    return number if math.isfinite(number) else fallback


def to_local_instant(value: datetime) -> datetime:
    """Attach the local timezone to naive datetimes."""
    # Timestamp.astimezone rejects naive values
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if value.tzinfo is None:
        return value.astimezone()
    return value


def end_of_day(day: date) -> datetime:
    """Last millisecond of a calendar day in local time."""
    return datetime.combine(day, END_OF_DAY).astimezone()


def _parse_generic(value: Any) -> Optional[datetime]:
    try:
        parsed = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None

    # NaT and index results (list-like input) are not instants
    if not isinstance(parsed, pd.Timestamp):
        return None

    return to_local_instant(parsed.to_pydatetime())


def parse_iso_instant(text: str) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp; a trailing Z means UTC, no offset means local time."""
    candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return to_local_instant(datetime.fromisoformat(candidate))
    except ValueError:
        return _parse_generic(text)


def parse_expire(value: Any) -> Optional[datetime]:
    """Normalize an expiry value to an aware datetime.

    Accepted shapes:
        - string with a time component: parsed as an absolute instant,
          a missing offset means local time
        - ``YYYY-MM-DD`` string or ``date``: end of that day, local time
        - ``datetime``: naive values are local time
        - real numbers, numpy scalars included: epoch milliseconds
        - any other string: handed to ``pandas.to_datetime``

    Args:
        value: Raw expiry value

    Returns:
        Timezone-aware datetime, or None if the value cannot be parsed
    """
    if value is None or value is pd.NaT or isinstance(value, bool):
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _TIME_COMPONENT.search(text):
            return parse_iso_instant(text)
        if _PLAIN_DATE.match(text):
            try:
                return end_of_day(date.fromisoformat(text))
            except ValueError:
                return None
        return _parse_generic(text)

    if isinstance(value, datetime):
        return to_local_instant(value)

    if isinstance(value, date):
        return end_of_day(value)

    # numpy scalars too, so they are not read as nanoseconds by pandas
    if isinstance(value, numbers.Real):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    return _parse_generic(value)


@dataclass(frozen=True)
class ServerRecord:
    """A hosting server subscription, normalized at ingestion."""

    server_id: Optional[str]
    name: Optional[str]
    monthly_cost: float
    expire_raw: Any
    expire: Optional[datetime]

    # Accepted key variants for raw records
    KEY_MAPPINGS = {
        "server_id": ["id", "server_id", "serverid", "instance_id"],
        "name": ["name", "hostname", "server_name", "servername"],
        "monthly_cost": ["monthlycost", "monthly_cost", "price", "cost"],
        "expire": ["expire", "expires", "expire_at", "expiry", "expiration", "expire_date"],
    }

    @property
    def is_valid(self) -> bool:
        """Whether the expiry parsed to an instant."""
        return self.expire is not None

    @property
    def label(self) -> str:
        """Name used in diagnostics."""
        return self.name or self.server_id or "unknown"

    def is_active_at(self, instant: datetime) -> bool:
        """Whether the record is still running strictly after ``instant``."""
        return self.expire is not None and self.expire > instant

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ServerRecord":
        """Build a record from a raw mapping (e.g. one JSON object).

        Args:
            raw: Mapping with cost, expiry and identifier keys

        Returns:
            ServerRecord
        """
        lowered = {str(k).lower().strip(): v for k, v in raw.items()}
        values: Dict[str, Any] = {}

        for field_name, variants in cls.KEY_MAPPINGS.items():
            values[field_name] = next(
                (lowered[v] for v in variants if v in lowered), None
            )

        server_id = values["server_id"]
        name = values["name"]

        return cls(
            server_id=str(server_id) if server_id not in (None, "") else None,
            name=str(name) if name not in (None, "") else None,
            monthly_cost=coerce_number(values["monthly_cost"]),
            expire_raw=values["expire"],
            expire=parse_expire(values["expire"]),
        )


def normalize_records(items: Iterable[Any]) -> List[ServerRecord]:
    """Normalize raw server entries into records.

    Entries that are neither mappings nor records are skipped.

    Args:
        items: Raw server entries

    Returns:
        List of ServerRecord objects, in input order
    """
    records = []

    for index, item in enumerate(items):
        if isinstance(item, ServerRecord):
            records.append(item)
        elif isinstance(item, Mapping):
            records.append(ServerRecord.from_raw(item))
        else:
            logger.warning(f"Skipping server entry {index}: expected an object, got {type(item).__name__}")

    return records
