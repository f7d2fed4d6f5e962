"""Streamlit dashboard main application."""

import sys
from pathlib import Path

import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hostcost.cost.calculator import CostCalculator, CostMode, CostSummary  # noqa: E402
from hostcost.cost.forecast import CostForecaster  # noqa: E402
from hostcost.input.loader import ServerListLoader  # noqa: E402
from hostcost.output.charts import create_forecast_chart, create_forecast_table  # noqa: E402
from hostcost.output.formatting import build_summary_strings  # noqa: E402
from hostcost.utils.helpers import get_project_root, load_config_or_default  # noqa: E402
from hostcost.utils.i18n import DisplayConfig, resolve_locale  # noqa: E402

st.set_page_config(
    page_title="Hosting Cost Tracker",
    page_icon="🖥️",
    layout="wide",
)

config = load_config_or_default()

with st.sidebar:
    st.header("Settings")
    data_path = st.text_input("Server data file", config["data"]["servers_path"])
    mode = st.radio("Accounting mode", [m.value for m in CostMode], index=0)
    horizon_days = st.slider("Horizon (days)", 1, 3660, int(config["costs"]["horizon_days"]))
    months = st.slider("Forecast months", 1, 120, int(config["costs"]["forecast_months"]))
    locale = st.text_input("Locale", resolve_locale(configured=config["display"]["locale"]))
    currency_symbol = st.text_input("Currency symbol", config["display"]["currency_symbol"])

path = Path(data_path)
if not path.is_absolute() and not path.exists():
    path = get_project_root() / path

try:
    servers = ServerListLoader(path).load()
except (FileNotFoundError, ValueError) as e:
    st.error(f"Failed to load server data: {e}")
    st.stop()

display_config = DisplayConfig(locale=locale, currency_symbol=currency_symbol)
t = display_config.translate

result = CostCalculator(translate=t).compute_costs(servers, horizon_days=horizon_days, mode=CostMode(mode))
forecasts = CostForecaster(display_config).forecast_monthly(servers, months_ahead=months)
strings = build_summary_strings(result, display_config)

st.title("Hosting Cost Tracker")

col1, col2 = st.columns(2)
if isinstance(result, CostSummary):
    col1.metric(f"{t('yearly_cost')} ({strings['active_servers']}{t('server_count')})", strings["yearly_total"])
else:
    col1.metric(f"{t('yearly_cost')} (monthly x 12)", strings["yearly_total"])
col2.metric(t("daily_avg_cost"), strings["daily_average"])

for warning in result.warnings:
    st.warning(warning)

st.subheader(t("monthly_forecast"))
st.plotly_chart(create_forecast_chart(forecasts, display_config), use_container_width=True)
st.dataframe(create_forecast_table(forecasts, display_config), hide_index=True)
