"""
Debt vs DCA Streamlit Dashboard
===============================

Pick an asset, choose a lookback window for its historical return, enter a debt,
APR and monthly payment, and compare the debt balance with a DCA stack funded
by the same payment.

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

import altair as alt
import pandas as pd
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import LOOKBACK_LABELS, DebtPolicy, ProjectionConfig, SourceConfig
from core.errors import InvalidInput, PaymentTooLowError, PriceSourceError
from core.logging_config import configure_logging

from market_data.base import DEFAULT_ASSETS, filter_assets
from market_data.coingecko import CoinGeckoPriceSource

from engine.runner import SimulationSession, refresh_return_stats, refresh_start_price, run_simulation

DEBT_COLOR = "#e74c3c"
STACK_COLOR = "#2ecc71"


# ---------------------------------------------------------------------------
# Cached resources
# ---------------------------------------------------------------------------
@st.cache_resource
def _price_source() -> CoinGeckoPriceSource:
    configure_logging(level="INFO")
    return CoinGeckoPriceSource(SourceConfig.from_env())


@st.cache_data(ttl=600, show_spinner="Loading top assets...")
def _top_assets():
    return _price_source().fetch_top_assets()


def _session() -> SimulationSession:
    if "sim_session" not in st.session_state:
        st.session_state["sim_session"] = SimulationSession()
    return st.session_state["sim_session"]


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _plot_debt_vs_stack(series: pd.DataFrame, symbol: str, height: int = 360) -> None:
    if len(series) == 0:
        st.info("No months to plot.")
        return
    d = series[["month", "debt", "asset_value", "profit_if_sold"]].rename(
        columns={"debt": "Debt Remaining", "asset_value": f"{symbol} Stack Value"}
    )
    long = d.melt(
        id_vars=["month", "profit_if_sold"],
        value_vars=["Debt Remaining", f"{symbol} Stack Value"],
        var_name="series",
        value_name="value",
    )
    chart = (
        alt.Chart(long).mark_line()
        .encode(
            x=alt.X("month:Q", title="Month"),
            y=alt.Y("value:Q", title="USD", axis=alt.Axis(format=",.0f")),
            color=alt.Color(
                "series:N",
                title="Series",
                scale=alt.Scale(range=[DEBT_COLOR, STACK_COLOR]),
            ),
            tooltip=[
                alt.Tooltip("month:Q", title="Month"),
                alt.Tooltip("series:N"),
                alt.Tooltip("value:Q", format=",.2f"),
                alt.Tooltip("profit_if_sold:Q", title="Profit if sold", format=",.2f"),
            ],
        )
        .properties(height=height)
        .interactive()
    )
    st.altair_chart(chart, use_container_width=True)


# ═══════════════════════════════════════════════════════════════════════════
# PAGE CONFIG
# ═══════════════════════════════════════════════════════════════════════════
st.set_page_config(page_title="Debt vs DCA", layout="wide")
st.title("Debt vs DCA Simulator")
st.caption("Pay down debt, or put the same monthly cash into an asset?")

session = _session()
source = _price_source()

# ═══════════════════════════════════════════════════════════════════════════
# SIDEBAR: asset and lookback
# ═══════════════════════════════════════════════════════════════════════════
with st.sidebar:
    st.header("Asset")

    assets = _top_assets() or list(DEFAULT_ASSETS)
    query = st.text_input("Search", value="")
    matches = filter_assets(assets, query)

    if not matches and len(query.strip()) >= 2:
        try:
            found = source.search_asset(query.strip())
        except PriceSourceError as exc:
            st.warning(f"Lookup failed: {exc}")
            found = None
        matches = [found] if found is not None else []

    if not matches:
        st.info("No matching assets.")
        st.stop()

    labels = [a.label for a in matches]
    picked = matches[labels.index(st.selectbox("Select asset", options=labels, index=0))]

    window = st.radio(
        "Historical return window",
        options=list(LOOKBACK_LABELS.keys()),
        format_func=lambda w: LOOKBACK_LABELS[w],
        index=1,
        horizontal=True,
    )

    st.header("Debt handling")
    policy = st.radio(
        "Monthly payment goes to",
        options=[DebtPolicy.IGNORE_PAYMENTS, DebtPolicy.AMORTIZING],
        format_func=lambda p: "DCA only (debt accrues)" if p is DebtPolicy.IGNORE_PAYMENTS else "Debt and DCA",
        index=0,
    )

# ═══════════════════════════════════════════════════════════════════════════
# RETURN STATS: refresh when asset or window changes
# ═══════════════════════════════════════════════════════════════════════════
if picked.id != session.asset_id:
    session.select_asset(picked.id, picked.symbol, market_cap=picked.market_cap)
    if refresh_start_price(session, source) is None:
        st.warning("Could not fetch current price; using the listed price.")
session.set_lookback_window(window)

if session.return_stats is None:
    with st.spinner("Fetching price history..."):
        refresh_return_stats(session, source)

stats = session.return_stats
c1, c2, c3 = st.columns(3)
c1.metric("Avg daily return", f"{stats.mean_daily_return:.4%}")
c2.metric("Projected annual", f"{stats.annualized_return:.2%}")
c3.metric("Daily volatility", f"{stats.daily_volatility:.2%}")
if stats.is_fallback:
    st.warning("Price history unavailable for this window; using a fallback return estimate.")

# ═══════════════════════════════════════════════════════════════════════════
# INPUTS
# ═══════════════════════════════════════════════════════════════════════════
with st.form("inputs"):
    i1, i2, i3, i4 = st.columns(4)
    debt = i1.number_input("Debt amount ($)", min_value=0.0, value=10000.0, step=100.0)
    apr = i2.number_input("APR (%)", min_value=0.0, value=20.0, step=0.5)
    payment = i3.number_input("Monthly payment ($)", min_value=0.0, value=200.0, step=10.0)
    start_price = i4.number_input(
        f"{session.display_symbol} start price ($)",
        min_value=0.0,
        value=float(session.start_price or picked.price or 100.0),
        format="%.6f",
    )
    submitted = st.form_submit_button("Run simulation", type="primary")

if submitted:
    try:
        run = run_simulation(
            session,
            {
                "debt_principal": debt,
                "annual_rate_percent": apr,
                "monthly_payment": payment,
                "start_price": start_price,
            },
            config=ProjectionConfig(debt_policy=policy),
        )
    except InvalidInput as exc:
        st.error(f"Fill all required fields: {', '.join(exc.fields) or exc}")
        st.stop()
    except PaymentTooLowError as exc:
        st.error(
            f"Monthly payment must be higher than interest to pay off debt "
            f"(interest-only payment is ${exc.minimum_payment:,.2f})."
        )
        st.stop()
    st.session_state["last_run"] = run

# ═══════════════════════════════════════════════════════════════════════════
# RESULTS
# ═══════════════════════════════════════════════════════════════════════════
run = st.session_state.get("last_run")
if run is None:
    st.info("Enter your numbers and click 'Run simulation'.")
    st.stop()

summary = run.summary
st.subheader("Results")

r1, r2, r3 = st.columns(3)
debt_label = "Unpaid debt balloons to" if summary.debt_policy is DebtPolicy.IGNORE_PAYMENTS else "Debt balance"
r1.metric(debt_label, f"${summary.final_debt:,.2f}", help=f"After {summary.months} months")
r2.metric(
    f"{summary.symbol} stack",
    f"${summary.final_asset_value:,.2f}",
    help=f"~{summary.total_units:,.4f} {summary.symbol}",
)
r3.metric(
    f"{summary.symbol} price",
    f"${summary.projected_final_price:,.2f}",
    delta=f"from ${summary.start_price:,.2f}",
    delta_color="off",
)
st.caption(
    f"Projection based on {summary.lookback_label} historical avg return of "
    f"{summary.mean_daily_return:.3%} daily ({summary.return_source})."
)

series = run.result.to_dataframe()
_plot_debt_vs_stack(series, summary.symbol)

st.markdown("#### Insights")
st.markdown("\n".join(f"- {line}" for line in summary.insights()))

with st.expander("Summary table", expanded=False):
    st.dataframe(summary.to_dataframe(), use_container_width=True, hide_index=True)

with st.expander("Monthly series", expanded=False):
    st.dataframe(series, use_container_width=True, hide_index=True)
    st.download_button(
        "Download CSV",
        data=series.to_csv(index=False).encode("utf-8"),
        file_name=f"debt_vs_dca_{summary.symbol.lower()}.csv",
        mime="text/csv",
    )
