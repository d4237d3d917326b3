"""
WheelWise — Pure Math / Analytics Engine
=========================================
All computation that turns the trade collection into P/L figures, equity
curves, ticker rankings and synthesized stock positions. No Streamlit
dependency — fully importable and testable without a running server.

Every public function is a pure function of the trade list it is given:
nothing is mutated, nothing is cached here, and calling twice on the same
snapshot returns identical output. The UI simply recomputes on every rerun.

Public API
----------
  realized_pnl(trade)                   → float
  is_win(trade)                         → bool
  trades_frame(trades)                  → DataFrame (one row per trade)
  compute_dashboard_stats(trades)       → DashboardStats
  build_equity_curve(trades)            → DataFrame[Date, Label, Ticker, P/L, Cum P/L]
  rank_ticker_performance(trades)       → DataFrame[Ticker, Profit]
  compute_portfolio_positions(trades)   → list[PortfolioPosition]
  find_data_warnings(trades)            → list[dict]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from config import (
    CONTRACT_MULTIPLIER,
    FRAME_COLUMNS, EQUITY_CURVE_COLUMNS, TICKER_RANK_COLUMNS,
)
from models import (
    Trade, TradeType, TradeStatus,
    DashboardStats, PortfolioPosition,
)

logger = logging.getLogger(__name__)


# ── PER-TRADE RULES ───────────────────────────────────────────────────────────
def gross_premium(trade: Trade) -> float:
    """Dollar premium of the leg regardless of status: premium × contracts × 100."""
    return trade.premium * trade.contracts * CONTRACT_MULTIPLIER


def realized_pnl(trade: Trade) -> float:
    """
    Realized profit contributed by one trade.

      Closed   → (premium − closing_price) × contracts × 100
      Expired  → premium × contracts × 100   (worthless expiry, full premium kept)
      anything else → 0

    Assigned contributes nothing here: the premium is already in
    total_premiums and the stock side is carried by compute_portfolio_positions().
    Counting it in both places would double-count the same dollars.

    A Closed trade with no closing_price contributes 0. That is a data problem,
    not an engine error — find_data_warnings() reports it.

    Examples
    --------
    AAPL CSP, premium 2.15, closed at 0.10, 2 contracts:
        (2.15 − 0.10) × 2 × 100 = +410.00
    Expired, premium 8.40, 1 contract:
        8.40 × 1 × 100 = +840.00
    Closed at a loss, premium 1.00, bought back at 3.00, 1 contract:
        (1.00 − 3.00) × 1 × 100 = −200.00
    """
    if trade.status is TradeStatus.CLOSED:
        if trade.closing_price is None:
            return 0.0
        return (trade.premium - trade.closing_price) * trade.contracts * CONTRACT_MULTIPLIER
    if trade.status is TradeStatus.EXPIRED:
        return gross_premium(trade)
    return 0.0


def is_win(trade: Trade) -> bool:
    """Expired is always a win; Closed wins only when bought back strictly cheaper than sold."""
    if trade.status is TradeStatus.EXPIRED:
        return True
    if trade.status is TradeStatus.CLOSED and trade.closing_price is not None:
        return trade.premium > trade.closing_price
    return False


def _is_decided(trade: Trade) -> bool:
    # Win-rate denominator: trades whose outcome is known.
    return trade.status in (TradeStatus.CLOSED, TradeStatus.EXPIRED)


# ── TRADE FRAME ───────────────────────────────────────────────────────────────
def trades_frame(trades: Iterable[Trade]) -> pd.DataFrame:
    """
    Tabular view of the collection, one row per trade in input order.

    Derived columns (Gross Premium, Realized P/L, Win) come from the per-trade
    rules above so the table, the charts and the stat cards can never disagree.
    An empty collection yields an empty frame with the full column set.
    """
    rows = [
        (
            t.id, t.ticker, t.type.value, t.strike_price, t.premium, t.contracts,
            t.entry_date, t.expiry_date, t.status.value, t.closing_price, t.notes,
            gross_premium(t), realized_pnl(t), is_win(t),
        )
        for t in trades
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df['Entry Date']  = pd.to_datetime(df['Entry Date'])
    df['Expiry Date'] = pd.to_datetime(df['Expiry Date'])
    return df.astype({
        'Strike': float, 'Premium': float, 'Contracts': int,
        'Closing Price': float, 'Gross Premium': float,
        'Realized P/L': float, 'Win': bool,
    })


# ── DASHBOARD STATS ───────────────────────────────────────────────────────────
def compute_dashboard_stats(trades: list[Trade]) -> DashboardStats:
    """
    Headline numbers for the dashboard.

      total_profit      Sum of realized_pnl() over every trade
      total_premiums    Sum of gross premium over every trade, any status
      win_rate          wins / (Closed + Expired) × 100, 0 when nothing is decided
      active_positions  Count of Open trades. Rolled trades are not counted.
    """
    decided = [t for t in trades if _is_decided(t)]
    wins    = sum(1 for t in decided if is_win(t))
    return DashboardStats(
        total_profit=float(sum(realized_pnl(t) for t in trades)),
        win_rate=(wins / len(decided) * 100) if decided else 0.0,
        active_positions=sum(1 for t in trades if t.status is TradeStatus.OPEN),
        total_premiums=float(sum(gross_premium(t) for t in trades)),
    )


# ── EQUITY CURVE ──────────────────────────────────────────────────────────────
def _display_date(ts: pd.Timestamp) -> str:
    # 'Jan 5': no zero padding, and no %-d (not portable).
    return f'{ts:%b} {ts.day}'


def build_equity_curve(trades: list[Trade]) -> pd.DataFrame:
    """
    Cumulative realized P/L, one point per trade, ordered by entry date.

    The sort is stable — trades entered on the same day keep their input
    order. Trades that realize nothing (Open, Assigned, Rolled) still get a
    point; the running total simply stays flat across them, so the curve
    length always equals the trade count and the last point equals
    compute_dashboard_stats().total_profit.
    """
    df = trades_frame(trades)
    if df.empty:
        return pd.DataFrame(columns=EQUITY_CURVE_COLUMNS)

    curve = df.sort_values('Entry Date', kind='stable').reset_index(drop=True)
    out = pd.DataFrame({
        'Date':   curve['Entry Date'],
        'Label':  curve['Entry Date'].map(_display_date),
        'Ticker': curve['Ticker'],
        'P/L':    curve['Realized P/L'],
    })
    out['Cum P/L'] = out['P/L'].cumsum()
    return out


# ── TICKER RANKING ────────────────────────────────────────────────────────────
def rank_ticker_performance(trades: list[Trade]) -> pd.DataFrame:
    """
    Realized P/L per ticker, best first.

    Grouping keeps first-encountered ticker order (sort=False) and the final
    sort is stable, so tickers with equal profit stay in the order they first
    appear in the collection.
    """
    df = trades_frame(trades)
    if df.empty:
        return pd.DataFrame(columns=TICKER_RANK_COLUMNS)

    ranked = (
        df.groupby('Ticker', sort=False)['Realized P/L'].sum()
          .reset_index()
          .rename(columns={'Realized P/L': 'Profit'})
          .sort_values('Profit', ascending=False, kind='stable')
          .reset_index(drop=True)
    )
    return ranked[TICKER_RANK_COLUMNS]


# ── POSITIONS & COST BASIS ────────────────────────────────────────────────────
@dataclass
class _Holding:
    """Per-ticker running accumulator — lives only inside one compute call."""
    shares:     int   = 0
    total_cost: float = 0.0
    premiums:   float = 0.0


def compute_portfolio_positions(trades: list[Trade]) -> list[PortfolioPosition]:
    """
    Synthesize stock holdings from assignments, with break-even cost basis.

    Trades are walked in the order given — NOT re-sorted by date. The store
    hands them over in insertion order, and a ticker with several
    assignment events can come out differently if that order changes.

    Per trade:
      1. premium × contracts × 100 is always added to the ticker's premiums
         (every status, every type — lifetime premium for the symbol).
      2. Assigned CSP → +contracts × 100 shares at the strike.
      3. Assigned CC  → −contracts × 100 shares (called away). If the count
         reaches zero or below, shares AND total_cost reset to 0. This is a
         full reset, not a proportional reduction; premiums are untouched.

    Only tickers still holding shares are emitted, in first-encountered order.

    Examples
    --------
    1. NVDA CSP 850 strike, 15.50 premium, 1 contract, Assigned:

       premiums   = 1,550.00
       shares     = 100,  total_cost = 85,000.00
       average    = 85,000 / 100           = 850.00
       cost basis = (85,000 − 1,550) / 100 = 834.50

    2. Same, then NVDA CC 1 contract Assigned:

       shares 100 → 0  →  reset, NVDA omitted from the result.
    """
    holdings: dict[str, _Holding] = {}

    for t in trades:
        h = holdings.setdefault(t.ticker, _Holding())
        h.premiums += gross_premium(t)

        if t.status is not TradeStatus.ASSIGNED:
            continue

        qty = t.contracts * CONTRACT_MULTIPLIER
        if t.type is TradeType.CSP:
            h.shares     += qty
            h.total_cost += t.strike_price * qty
        elif t.type is TradeType.CC:
            h.shares -= qty
            if h.shares <= 0:
                h.shares     = 0
                h.total_cost = 0.0

    positions = []
    for ticker, h in holdings.items():
        if h.shares <= 0:
            continue
        positions.append(PortfolioPosition(
            ticker=ticker,
            shares=h.shares,
            average_price=h.total_cost / h.shares,
            total_premium_collected=h.premiums,
            current_cost_basis=(h.total_cost - h.premiums) / h.shares,
        ))
    return positions


# ── DATA INTEGRITY ────────────────────────────────────────────────────────────
def find_data_warnings(trades: list[Trade]) -> list[dict]:
    """
    Scan for records the engine tolerates but the user should fix.

    Returns [{id, ticker, issue}]:
      - Closed with no closing price (realizes 0 instead of its true P/L)
      - closing price on a trade that is not Closed (ignored by the engine)
      - entry date after expiry date
    """
    warnings = []
    for t in trades:
        issues = []
        if t.status is TradeStatus.CLOSED and t.closing_price is None:
            issues.append('Closed without a closing price — counted as $0 realized P/L')
        if t.status is not TradeStatus.CLOSED and t.closing_price is not None:
            issues.append(f'Closing price set on a {t.status.value} trade — ignored')
        if t.entry_date > t.expiry_date:
            issues.append('Entry date is after expiry date')
        for issue in issues:
            logger.debug('Trade %s (%s): %s', t.id, t.ticker, issue)
            warnings.append({'id': t.id, 'ticker': t.ticker, 'issue': issue})
    return warnings
