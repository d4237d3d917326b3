"""
tabs/tab0_dashboard.py — Tab0 Dashboard tab renderer.
"""

import streamlit as st
import plotly.graph_objects as go

from config import COLOURS
from ui_components import fmt_dollar, chart_layout, stat_card
from mechanics import build_equity_curve, rank_ticker_performance


def render_tab0(trades, stats):
    """Tab 0 — Dashboard: headline stat cards, cumulative P/L curve, P/L by ticker."""
    c1, c2, c3, c4 = st.columns(4)
    pnl_col = COLOURS['green'] if stats.total_profit >= 0 else COLOURS['red']
    c1.markdown(stat_card('Total P/L', fmt_dollar(stats.total_profit), '💰', pnl_col),
                unsafe_allow_html=True)
    c2.markdown(stat_card('Total Premium', fmt_dollar(stats.total_premiums), '💎', COLOURS['blue']),
                unsafe_allow_html=True)
    c3.markdown(stat_card('Win Rate', f'{stats.win_rate:.1f}%', '📈', COLOURS['amber']),
                unsafe_allow_html=True)
    c4.markdown(stat_card('Active Trades', str(stats.active_positions), '⚡', COLOURS['text']),
                unsafe_allow_html=True)

    if not trades:
        st.info('No trades yet — log your first trade in the Trade Log tab.')
        return

    col_curve, col_rank = st.columns([3, 2], gap='medium')

    # ── Cumulative profit ─────────────────────────────────────────────────────
    curve = build_equity_curve(trades)
    final = curve['Cum P/L'].iloc[-1]
    eq_color = COLOURS['green'] if final >= 0 else COLOURS['red']
    eq_fill  = 'rgba(0,204,150,0.10)' if final >= 0 else 'rgba(239,85,59,0.10)'
    fig_eq = go.Figure(go.Scatter(
        x=list(range(len(curve))), y=curve['Cum P/L'],
        customdata=curve[['Label', 'Ticker']].to_numpy(),
        mode='lines+markers', line=dict(color=eq_color, width=2, shape='spline'),
        marker=dict(size=5), fill='tozeroy', fillcolor=eq_fill,
        hovertemplate='%{customdata[0]} · %{customdata[1]}<br><b>%{y:$,.2f}</b><extra></extra>',
    ))
    fig_eq.add_hline(y=0, line_color='rgba(255,255,255,0.15)', line_width=1)
    eq_lay = chart_layout('Cumulative Realized P/L', height=320)
    eq_lay['xaxis'].update(tickmode='array', tickvals=list(range(len(curve))),
                           ticktext=curve['Label'].tolist())
    eq_lay['yaxis']['tickprefix'] = '$'
    eq_lay['yaxis']['tickformat'] = ',.0f'
    eq_lay['showlegend'] = False
    fig_eq.update_layout(**eq_lay)
    col_curve.plotly_chart(fig_eq, width='stretch', config={'displayModeBar': False})
    col_curve.caption('One point per trade by entry date. Open, assigned and rolled '
                      'trades hold the line flat — only closes and expiries realize P/L.')

    # ── P/L by ticker ─────────────────────────────────────────────────────────
    ranked = rank_ticker_performance(trades)
    fig_bar = go.Figure(go.Bar(
        x=ranked['Ticker'], y=ranked['Profit'],
        marker_color=[COLOURS['green'] if p >= 0 else COLOURS['red'] for p in ranked['Profit']],
        text=[fmt_dollar(p, 0) for p in ranked['Profit']], textposition='outside',
        hovertemplate='%{x}<br><b>%{y:$,.2f}</b><extra></extra>',
    ))
    bar_lay = chart_layout('Realized P/L by Ticker', height=320)
    bar_lay['yaxis']['tickprefix'] = '$'
    bar_lay['yaxis']['tickformat'] = ',.0f'
    bar_lay['showlegend'] = False
    fig_bar.update_layout(**bar_lay)
    col_rank.plotly_chart(fig_bar, width='stretch', config={'displayModeBar': False})
