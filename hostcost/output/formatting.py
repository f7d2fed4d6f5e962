"""Currency and summary formatting for display."""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict, Optional, Union

from ..cost.calculator import CostSummary, FlatCostSummary
from ..cost.records import coerce_number
from ..utils.i18n import NUMBER_SEPARATORS, DisplayConfig, language_of, resolve_locale

DEFAULT_CURRENCY_SYMBOL = "¥"


def format_number(
    amount: Any,
    locale: Optional[str] = None,
    minimum_fraction_digits: int = 0,
    maximum_fraction_digits: int = 0
) -> str:
    """Format a number with the locale's grouping and decimal separators.

    Missing and non-finite amounts render as zero.

    Args:
        amount: Number to format
        locale: Locale tag (default: resolved from the platform)
        minimum_fraction_digits: Fraction digits always shown
        maximum_fraction_digits: Rounding precision (half-up)

    Returns:
        Formatted number
    """
    value = coerce_number(amount, 0.0)
    maximum = max(maximum_fraction_digits, minimum_fraction_digits)

    # Finite floats need up to 309 integer digits
    with localcontext() as ctx:
        ctx.prec = 400
        quantized = Decimal(repr(value)).quantize(Decimal(1).scaleb(-maximum), rounding=ROUND_HALF_UP)

    integer, _, fraction = f"{abs(quantized):,.{maximum}f}".partition(".")

    fraction = fraction.rstrip("0").ljust(minimum_fraction_digits, "0")

    group, decimal = NUMBER_SEPARATORS.get(language_of(locale or resolve_locale()), (",", "."))
    text = integer.replace(",", group)
    if fraction:
        text = f"{text}{decimal}{fraction}"

    return f"-{text}" if quantized < 0 else text


def format_currency(
    amount: Any,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    locale: Optional[str] = None,
    minimum_fraction_digits: int = 0,
    maximum_fraction_digits: int = 0
) -> str:
    """Format an amount as ``<symbol><number>``.

    Examples:
        >>> format_currency(1234.5, "$", "en-US", 2, 2)
        '$1,234.50'
        >>> format_currency(float("nan"), "¥", "zh-CN")
        '¥0'
    """
    number = format_number(amount, locale, minimum_fraction_digits, maximum_fraction_digits)
    return f"{currency_symbol}{number}"


def build_summary_strings(
    result: Union[CostSummary, FlatCostSummary],
    display_config: Optional[DisplayConfig] = None
) -> Dict[str, Any]:
    """Format a cost result for the two summary slots.

    The yearly figure is shown without decimals, the daily figure with two.

    Args:
        result: Prorated or flat cost result
        display_config: Locale and currency symbol

    Returns:
        Dictionary with yearly_total, daily_average and active_servers
    """
    config = display_config or DisplayConfig()

    if isinstance(result, FlatCostSummary):
        yearly, daily, count = result.yearly_total, result.daily_average, result.server_count
    else:
        yearly, daily, count = result.total_cost_in_horizon, result.total_daily_cost_now, result.active_servers

    return {
        "yearly_total": format_currency(yearly, config.currency_symbol, config.locale, 0, 0),
        "daily_average": format_currency(daily, config.currency_symbol, config.locale, 2, 2),
        "active_servers": count,
    }
