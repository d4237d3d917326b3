import logging
import os

import streamlit as st

from models import TradeStatus
from config import APP_VERSION, STORE_PATH, LOG_LEVEL
from ingestion import TradeError
from storage import TradeStore
from mechanics import (
    compute_dashboard_stats,
    compute_portfolio_positions,
    find_data_warnings,
)
from tabs.tab0_dashboard import render_tab0
from tabs.tab1_trade_log import render_tab1
from tabs.tab2_portfolio import render_tab2
from tabs.tab3_ai_insights import render_tab3

# ==========================================
# WheelWise
# ==========================================
#
# Trade journal for the options wheel: log cash-secured puts and covered
# calls, mark them closed / expired / assigned / rolled, and see realized
# P/L, win rate, P/L by ticker and the stock positions your assignments
# created with their break-even cost basis.
#
# Run:  streamlit run wheelwise.py
# Data: WHEELWISE_STORE (default ./wheelwise_trades.json)
# ==========================================

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger('wheelwise')

st.set_page_config(page_title=f"WheelWise {APP_VERSION}", layout="wide")


def main():
    st.markdown("""
        <style>
        @import url('https://fonts.googleapis.com/css2?family=IBM+Plex+Mono:wght@400;600&family=IBM+Plex+Sans:wght@300;400;600&display=swap');

        .stApp { background-color: #0a0e17; color: #c9d1d9; font-family: 'IBM Plex Sans', sans-serif; }
        div[data-testid="stMetricValue"] { font-size: 1.4rem !important; color: #00cc96; font-family: 'IBM Plex Mono', monospace; font-weight: 600; }
        div[data-testid="stMetricLabel"] { color: #8b949e; font-size: 0.78rem !important; text-transform: uppercase; letter-spacing: 0.05em; }
        [data-testid="stExpander"] { background: #111827; border-radius: 10px;
            border: 1px solid #1f2937; margin-bottom: 8px; }
        </style>
    """, unsafe_allow_html=True)

    # ── Cached data loading ────────────────────────────────────────────────────────

    @st.cache_data(show_spinner='📂 Loading trades…')
    def load_trades(path: str, mtime: float):
        """
        Thin Streamlit cache wrapper around TradeStore.load().
        Keyed on the file's mtime, so any write through the store (add, status
        change) invalidates it and the next rerun reads the new file.
        """
        return TradeStore(path).load()

    # ── MAIN APP ───────────────────────────────────────────────────────────────────

    st.title(f'🛞 WheelWise {APP_VERSION}')

    with st.sidebar:
        st.header('⚙️ Data Control')
        store_path = st.text_input('Trade file', value=STORE_PATH,
            help='JSON file holding your trade log. Created on the first trade you log.')
        st.caption('All data stays in this file on your machine. Only the AI Insights '
                   'tab sends a trade summary to Gemini, and only when you ask it to.')

    store = TradeStore(store_path)
    mtime = os.path.getmtime(store_path) if os.path.exists(store_path) else 0.0
    try:
        trades = load_trades(store_path, mtime)
    except TradeError as e:
        st.error(f'❌ **{e}**')
        st.stop()
    except Exception as e:
        logger.exception('Unexpected error loading %s', store_path)
        st.error(
            f'❌ **Unexpected error while loading the trade file.**\n\n'
            f'Technical detail: `{type(e).__name__}: {e}`'
        )
        st.stop()

    # ── Data integrity warnings ────────────────────────────────────────────────────
    data_warnings = find_data_warnings(trades)
    if data_warnings:
        st.warning(
            '⚠️ **Some trades need attention:**\n\n' +
            '\n'.join(f'- **{w["ticker"]}** (`{w["id"][:8]}`): {w["issue"]}' for w in data_warnings)
        )

    stats     = compute_dashboard_stats(trades)
    positions = compute_portfolio_positions(trades)

    with st.sidebar:
        st.markdown('---')
        st.header('📊 At a Glance')
        st.metric('Trades Logged', len(trades))
        st.metric('Open', stats.active_positions)
        n_rolled = sum(1 for t in trades if t.status is TradeStatus.ROLLED)
        if n_rolled:
            st.caption(f'{n_rolled} rolled trade(s) are excluded from P/L and open counts.')

    # ── TABS ───────────────────────────────────────────────────────────────────────
    tab0, tab1, tab2, tab3 = st.tabs([
        '📊 Dashboard',
        '📋 Trade Log',
        '💼 Portfolio',
        '🤖 AI Insights',
    ])

    with tab0: render_tab0(trades, stats)
    with tab1: render_tab1(trades, store)
    with tab2: render_tab2(positions)
    with tab3: render_tab3(trades)

    st.markdown(
        f'<p style="color:#444d56;font-size:0.78rem;margin-top:1.5rem;text-align:center;">'
        f'WheelWise {APP_VERSION} · Not financial advice</p>',
        unsafe_allow_html=True,
    )


main()
