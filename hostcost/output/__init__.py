"""Output modules: formatting, summary slots and forecast charts."""

from .charts import create_forecast_chart, create_forecast_table
from .display import DisplaySlot, SummaryPanel
from .formatting import build_summary_strings, format_currency, format_number

__all__ = [
    "DisplaySlot",
    "SummaryPanel",
    "build_summary_strings",
    "create_forecast_chart",
    "create_forecast_table",
    "format_currency",
    "format_number",
]
