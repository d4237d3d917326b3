"""
tabs/tab2_portfolio.py — Tab2 Portfolio tab renderer.
"""

import streamlit as st

from ui_components import fmt_dollar, render_position_card


def render_tab2(positions):
    """Tab 2 — Portfolio: one card per stock holding synthesized from assignments."""
    st.subheader('💼 Assigned Positions')
    st.markdown(
        f'<div style="margin-bottom:20px;color:#6b7280;font-size:0.85rem;">'
        f'Tracking <b style="color:#8b949e">{len(positions)}</b> active stock holdings'
        f'</div>',
        unsafe_allow_html=True
    )
    if not positions:
        st.info('No stock positions. Shares appear here when a cash-secured put is '
                'assigned, and drop off once covered calls call them away.')
        return

    total_shares  = sum(p.shares for p in positions)
    total_capital = sum(p.average_price * p.shares for p in positions)
    m1, m2 = st.columns(2)
    m1.metric('Shares Held', f'{total_shares:,}')
    m2.metric('Capital at Assignment', fmt_dollar(total_capital))

    col_a, col_b = st.columns(2, gap='medium')
    for i, pos in enumerate(positions):
        card_html = render_position_card(pos)
        if i % 2 == 0:
            col_a.markdown(card_html, unsafe_allow_html=True)
        else:
            col_b.markdown(card_html, unsafe_allow_html=True)
    st.caption(
        'Break-even basis = (assignment cost − all premium ever collected on the ticker) ÷ shares. '
        'When calls take every share away the position and its cost reset to zero.'
    )
