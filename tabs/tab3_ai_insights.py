"""
tabs/tab3_ai_insights.py — Tab3 AI Insights tab renderer.
"""

import streamlit as st

from advisor import advise, ticker_insight, insight_lines
from ui_components import insight_html


def render_tab3(trades):
    """Tab 3 — AI Insights: Gemini commentary on the trade log plus a per-ticker lookup."""
    st.subheader('🤖 AI Strategy Insights')
    st.caption('Generated by Gemini from your logged trades. Commentary only — '
               'it does not feed any number shown elsewhere in the app.')

    if st.button('✨ Analyze my trades', disabled=not trades):
        with st.spinner('Analyzing your wheel…'):
            st.session_state['ai_analysis'] = advise(trades)
    if not trades:
        st.info('Add some trades to get AI analysis.')

    analysis = st.session_state.get('ai_analysis')
    if analysis:
        st.markdown(insight_html(insight_lines(analysis)), unsafe_allow_html=True)

    st.markdown('---')
    st.markdown('#### 🔎 Ticker Insight')
    col_in, col_btn = st.columns([3, 1])
    symbol = col_in.text_input('Ticker', placeholder='AAPL', label_visibility='collapsed')
    if col_btn.button('Get insight', disabled=not symbol.strip()):
        with st.spinner(f'Looking up {symbol.strip().upper()}…'):
            text = ticker_insight(symbol)
        st.markdown(insight_html(insight_lines(text)), unsafe_allow_html=True)
