"""
tabs/tab1_trade_log.py — Tab1 Trade Log tab renderer.
"""

from datetime import date

import streamlit as st

from models import TradeType, TradeStatus
from ui_components import xe, fmt_dollar, color_pnl_cell, color_status_cell, status_badge
from ingestion import TradeError, new_trade, transition_trade
from mechanics import trades_frame


_LOG_COLUMNS = [
    'Ticker', 'Type', 'Strike', 'Premium', 'Contracts', 'Entry Date',
    'Expiry Date', 'Status', 'Closing Price', 'Gross Premium', 'Realized P/L', 'Notes',
]


def _render_add_form(store):
    with st.form('add_trade', clear_on_submit=True):
        c1, c2, c3 = st.columns(3)
        ticker     = c1.text_input('Ticker', placeholder='NVDA')
        trade_type = c2.selectbox('Type', [t.value for t in TradeType])
        contracts  = c3.number_input('Contracts', min_value=1, value=1, step=1)
        strike     = c1.number_input('Strike Price', min_value=0.0, value=0.0, step=0.5, format='%.2f')
        premium    = c2.number_input('Premium / share', value=0.0, step=0.05, format='%.2f',
                                     help='Net credit per share. Negative for a debit adjustment.')
        entry      = c3.date_input('Entry Date', value=date.today())
        expiry     = c1.date_input('Expiry Date', value=date.today())
        notes      = c2.text_input('Notes')
        submitted  = st.form_submit_button('➕ Log Trade')

    if not submitted:
        return
    try:
        trade = new_trade(ticker, trade_type, strike, premium, contracts, entry, expiry, notes)
        store.add(trade)
    except TradeError as e:
        st.error(f'❌ **{e}**')
        return
    st.success(f'Logged {trade.ticker} {trade.type.value} @ {fmt_dollar(trade.strike_price)}')
    st.rerun()


def _render_open_actions(trades, store):
    """Status actions for every Open trade: Expire / Assign / Roll / Close at a price."""
    open_trades = [t for t in trades if t.status is TradeStatus.OPEN]
    if not open_trades:
        return
    st.markdown('#### ⚡ Open Trades')
    for t in open_trades:
        info, expire, assign, roll, price, close = st.columns([4, 1, 1, 1, 1.4, 1])
        info.markdown(
            f'<div style="padding-top:6px;font-family:monospace;font-size:0.85rem;">'
            f'<b>{xe(t.ticker)}</b> · {xe(t.type.value)} · {t.contracts}× '
            f'{fmt_dollar(t.strike_price)} · exp {t.expiry_date:%d/%m/%y} '
            f'&nbsp;{status_badge(t.status.value)}</div>',
            unsafe_allow_html=True,
        )
        action = None
        if expire.button('Expire', key=f'exp_{t.id}'):
            action = (TradeStatus.EXPIRED, None)
        if assign.button('Assign', key=f'asg_{t.id}'):
            action = (TradeStatus.ASSIGNED, None)
        if roll.button('Roll', key=f'rol_{t.id}'):
            action = (TradeStatus.ROLLED, None)
        buy_back = price.number_input('Buy-back', min_value=0.0, value=0.0, step=0.05,
                                      format='%.2f', key=f'px_{t.id}',
                                      label_visibility='collapsed')
        if close.button('Close', key=f'cls_{t.id}'):
            action = (TradeStatus.CLOSED, buy_back)

        if action is None:
            continue
        try:
            store.replace(transition_trade(t, *action))
        except TradeError as e:
            st.error(f'❌ **{e}**')
            continue
        st.rerun()


def render_tab1(trades, store):
    """Tab 1 — Trade Log: add-trade form, status actions for open trades, full history table."""
    st.subheader('📋 Transaction History')
    with st.expander('➕ Log New Trade', expanded=not trades):
        _render_add_form(store)

    if not trades:
        st.info('No trades logged yet.')
        return

    _render_open_actions(trades, store)

    st.markdown('#### 📜 All Trades')
    df = trades_frame(trades)
    log = df[_LOG_COLUMNS].iloc[::-1].reset_index(drop=True)
    st.dataframe(
        log.style
           .map(color_pnl_cell, subset=['Realized P/L'])
           .map(color_status_cell, subset=['Status'])
           .format({
               'Strike': '${:,.2f}', 'Premium': '${:,.2f}',
               'Closing Price': '${:,.2f}',
               'Gross Premium': fmt_dollar, 'Realized P/L': fmt_dollar,
               'Entry Date': '{:%Y-%m-%d}', 'Expiry Date': '{:%Y-%m-%d}',
           }, na_rep=''),
        width='stretch', hide_index=True,
    )
    st.download_button(
        '⬇️ Download trade log (CSV)',
        data=df.to_csv(index=False).encode('utf-8'),
        file_name=f'wheelwise_trades_{date.today():%Y%m%d}.csv',
        mime='text/csv',
    )
