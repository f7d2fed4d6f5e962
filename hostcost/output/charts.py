"""Forecast charts and tables."""

from typing import List, Optional

import pandas as pd
import plotly.graph_objects as go

from ..cost.forecast import MonthlyForecast, to_dataframe
from ..utils.i18n import DisplayConfig
from .formatting import format_currency


def create_forecast_chart(
    forecasts: List[MonthlyForecast],
    display_config: Optional[DisplayConfig] = None
) -> go.Figure:
    """Create a bar chart of forecast monthly spend.

    Args:
        forecasts: Monthly forecast entries
        display_config: Locale, currency symbol and translations

    Returns:
        Plotly figure
    """
    if not forecasts:
        return go.Figure()

    config = display_config or DisplayConfig()
    df = to_dataframe(forecasts)

    fig = go.Figure(data=[go.Bar(
        x=df["month"],
        y=df["cost"],
        text=[format_currency(c, config.currency_symbol, config.locale) for c in df["cost"]],
        textposition="outside",
        marker_color="#FF9900"
    )])

    fig.update_layout(
        title=config.translate("monthly_forecast"),
        xaxis_title="",
        yaxis_title=f"{config.translate('monthly_forecast')} ({config.currency_symbol})",
        margin=dict(t=40, b=20, l=20, r=20)
    )

    return fig


def create_forecast_table(
    forecasts: List[MonthlyForecast],
    display_config: Optional[DisplayConfig] = None
) -> pd.DataFrame:
    """Tabulate forecasts with display-formatted costs.

    Args:
        forecasts: Monthly forecast entries
        display_config: Locale and currency symbol

    Returns:
        DataFrame with ``month`` and ``cost`` columns
    """
    config = display_config or DisplayConfig()
    df = to_dataframe(forecasts)[["month", "cost"]].copy()
    df["cost"] = [format_currency(c, config.currency_symbol, config.locale) for c in df["cost"]]
    return df
