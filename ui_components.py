"""
WheelWise — UI Components
==========================
Pure visual helpers: HTML generators, chart layouts, DataFrame stylers.
No business logic or math lives here — these functions only produce
strings, dicts, and style values for rendering.

Dependencies: pandas (for isna), config (for the colour palette).
"""

import html as _html
import pandas as pd
from config import COLOURS, STATUS_COLOURS


# ── XSS safety ────────────────────────────────────────────────────────────────

def xe(s):
    """Escape a string for safe HTML interpolation. Prevents XSS from user-entered notes and tickers."""
    return _html.escape(str(s), quote=True)


# ── Number formatting ─────────────────────────────────────────────────────────

def fmt_dollar(val, decimals=2):
    """
    Format a dollar value with sign, commas, and configurable decimal places.
    Negative values render as '-$1,234.56' (not '$-1,234.56').
    Use decimals=0 for whole-dollar chart labels.

    Examples:
        fmt_dollar(1234.56)   → '$1,234.56'
        fmt_dollar(-99.5)     → '-$99.50'
        fmt_dollar(1500, 0)   → '$1,500'
    """
    fmt = f'{{:,.{decimals}f}}'
    if val >= 0:
        return f'${fmt.format(val)}'
    return f'-${fmt.format(abs(val))}'


# ── DataFrame stylers ─────────────────────────────────────────────────────────

def color_pnl_cell(val):
    """Green/red colouring for P/L columns in st.dataframe."""
    if not isinstance(val, (int, float)) or pd.isna(val): return ''
    return 'color: #00cc96' if val > 0 else 'color: #ef553b' if val < 0 else ''

def color_status_cell(val):
    """Status column colour, matching the status badges."""
    col = STATUS_COLOURS.get(str(val))
    return f'color: {col}; font-weight: 600' if col else ''


# ── Plotly chart layout ───────────────────────────────────────────────────────

def chart_layout(title='', height=300, margin_t=36, margin_b=20):
    """Consistent base layout dict for all Plotly charts."""
    return dict(
        template='plotly_dark',
        height=height,
        paper_bgcolor='rgba(10,14,23,0)',
        plot_bgcolor='rgba(10,14,23,0)',
        font=dict(family='IBM Plex Sans, sans-serif', size=12, color='#8b949e'),
        title=dict(
            text=title,
            font=dict(size=13, color='#c9d1d9', family='IBM Plex Sans'),
            x=0, xanchor='left', pad=dict(l=0, b=8),
        ) if title else None,
        margin=dict(l=8, r=8, t=margin_t if title else 16, b=margin_b),
        xaxis=dict(
            gridcolor='rgba(255,255,255,0.05)',
            linecolor='rgba(255,255,255,0.08)',
            tickfont=dict(size=11),
        ),
        yaxis=dict(
            gridcolor='rgba(255,255,255,0.05)',
            linecolor='rgba(255,255,255,0.08)',
            tickfont=dict(size=11),
        ),
        legend=dict(bgcolor='rgba(0,0,0,0)', borderwidth=0, font=dict(size=11)),
    )


# ── Inline HTML components ────────────────────────────────────────────────────

def status_badge(status):
    """Pill badge for a trade status ('Open', 'Closed', …)."""
    col = STATUS_COLOURS.get(status, COLOURS['text_muted'])
    return (
        f'<span style="font-size:0.72rem;font-weight:600;padding:3px 10px;'
        f'border-radius:20px;text-transform:uppercase;letter-spacing:0.06em;'
        f'white-space:nowrap;color:{col};border:1px solid {col}40;'
        f'background:{col}1a;">{xe(status)}</span>'
    )

def stat_card(title, value, icon='', colour=None):
    """Dashboard headline card — title above a large monospace value."""
    col = colour or COLOURS['green']
    return (
        f'<div style="background:{COLOURS["card"]};border:1px solid {COLOURS["border"]};'
        f'border-radius:12px;padding:16px 18px;margin-bottom:8px;">'
        f'<div style="display:flex;justify-content:space-between;align-items:center;">'
        f'<span style="color:#8b949e;font-size:0.72rem;text-transform:uppercase;'
        f'letter-spacing:0.05em;">{xe(title)}</span>'
        f'<span style="font-size:1.1rem;">{icon}</span></div>'
        f'<div style="font-family:\'IBM Plex Mono\',monospace;font-size:1.4rem;'
        f'font-weight:600;color:{col};margin-top:6px;">{xe(value)}</div>'
        f'</div>'
    )

def render_position_card(pos):
    """Build the full HTML card for one synthesized stock position."""
    CARD = (
        'background:linear-gradient(135deg,#111827 0%,#0f1520 100%);'
        'border:1px solid #1f2937;border-radius:12px;padding:18px 20px 14px 20px;'
        'margin-bottom:16px;box-shadow:0 2px 12px rgba(0,0,0,0.4);'
    )
    HDR = (
        'display:flex;align-items:center;justify-content:space-between;'
        'margin-bottom:12px;padding-bottom:10px;border-bottom:1px solid #1f2937;'
    )
    TICK = (
        'font-family:monospace;font-size:1.3rem;font-weight:600;'
        'color:#f0f6fc;letter-spacing:0.04em;'
    )
    ROW = (
        'display:flex;align-items:center;justify-content:space-between;'
        'padding:6px 0;border-bottom:1px solid rgba(255,255,255,0.05);'
    )
    LBL = 'color:#8b949e;font-size:0.72rem;text-transform:uppercase;letter-spacing:0.04em;'
    VAL = 'font-family:monospace;color:#e6edf3;font-size:0.88rem;'

    discount  = pos.average_price - pos.current_cost_basis
    basis_col = COLOURS['green'] if discount >= 0 else COLOURS['red']
    rows = [
        ('Avg Assignment Price', fmt_dollar(pos.average_price), VAL),
        ('Premium Collected',    fmt_dollar(pos.total_premium_collected), VAL),
        ('Break-even Basis',     fmt_dollar(pos.current_cost_basis),
         f'font-family:monospace;font-size:0.95rem;font-weight:600;color:{basis_col};'),
    ]
    rows_html = ''.join(
        f'<div style="{ROW}"><span style="{LBL}">{label}</span>'
        f'<span style="{style}">{xe(value)}</span></div>'
        for label, value, style in rows
    )
    return (
        f'<div style="{CARD}">'
        f'  <div style="{HDR}">'
        f'    <span style="{TICK}">{xe(pos.ticker)}</span>'
        f'    <span style="color:#ffa500;font-family:monospace;font-size:0.85rem;">'
        f'{pos.shares:,} shares</span>'
        f'  </div>'
        f'  {rows_html}'
        f'  <div style="color:#6b7280;font-size:0.72rem;margin-top:8px;">'
        f'Basis is {fmt_dollar(abs(discount))} {"below" if discount >= 0 else "above"} '
        f'the assignment price.</div>'
        f'</div>'
    )

def insight_html(lines):
    """Render advisor output from advisor.insight_lines(): '-' lines become list items."""
    parts = []
    for is_bullet, text in lines:
        if is_bullet:
            parts.append(f'<li style="margin-left:1rem;margin-bottom:4px;">{xe(text)}</li>')
        else:
            parts.append(f'<p style="margin-bottom:8px;">{xe(text)}</p>')
    return (
        '<div style="color:#c9d1d9;font-size:0.92rem;line-height:1.6;">'
        + ''.join(parts) +
        '</div>'
    )
