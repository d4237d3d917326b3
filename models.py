"""
WheelWise — Data Models
========================
Single source of truth for all enums and dataclasses used across the
application. No Streamlit dependency — fully importable from any module
including tests and ingestion.

Classes
-------
  TradeType          Kind of option leg (CSP, covered call, stock adjustment)
  TradeStatus        Lifecycle state of a trade
  Trade              One logged options transaction leg (immutable)
  TradeUpdate        Typed partial update merged onto a Trade
  DashboardStats     Headline statistics for the dashboard
  PortfolioPosition  A synthesized stock holding produced by assignments
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


# ── Enums ─────────────────────────────────────────────────────────────────────

class TradeType(str, Enum):
    CSP              = 'Cash Secured Put'
    CC               = 'Covered Call'
    STOCK_ADJUSTMENT = 'Stock Adjustment'


class TradeStatus(str, Enum):
    OPEN     = 'Open'
    CLOSED   = 'Closed'
    ASSIGNED = 'Assigned'
    EXPIRED  = 'Expired'
    ROLLED   = 'Rolled'


# ── Trade record ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Trade:
    """
    One options transaction leg.

    Frozen — a status change or edit produces a new record (see TradeUpdate
    and ingestion.transition_trade). Field validation happens in
    ingestion.new_trade(); the accounting engine assumes well-formed records.

    Fields
    ------
    id             Unique identifier, assigned at creation, never reused
    ticker         Uppercase underlying symbol, e.g. 'NVDA'
    type           TradeType
    strike_price   Contract strike, per share
    premium        Net premium collected per share (negative for debits)
    contracts      Number of contracts (100 shares each)
    entry_date     Date the position was opened
    expiry_date    Option expiration date
    status         TradeStatus — Open until the user closes it out
    closing_price  Per-share price paid to buy back, only when Closed
    notes          Free text, never interpreted
    """
    id:            str
    ticker:        str
    type:          TradeType
    strike_price:  float
    premium:       float
    contracts:     int
    entry_date:    date
    expiry_date:   date
    status:        TradeStatus = TradeStatus.OPEN
    closing_price: Optional[float] = None
    notes:         Optional[str] = None


@dataclass(frozen=True)
class TradeUpdate:
    """
    Partial update for a Trade. Only the non-None fields are applied;
    `id` is deliberately absent so an update can never re-key a record.
    """
    ticker:        Optional[str] = None
    type:          Optional[TradeType] = None
    strike_price:  Optional[float] = None
    premium:       Optional[float] = None
    contracts:     Optional[int] = None
    entry_date:    Optional[date] = None
    expiry_date:   Optional[date] = None
    status:        Optional[TradeStatus] = None
    closing_price: Optional[float] = None
    notes:         Optional[str] = None

    def changes(self) -> dict:
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if getattr(self, f.name) is not None
        }

    def apply_to(self, trade: Trade) -> Trade:
        """Return a new Trade with this update merged field-by-field."""
        return dataclasses.replace(trade, **self.changes())


# ── Computation output ────────────────────────────────────────────────────────

@dataclass
class DashboardStats:
    total_profit:     float
    win_rate:         float
    active_positions: int
    total_premiums:   float


@dataclass
class PortfolioPosition:
    """
    A stock holding synthesized from option assignments.

    Fields
    ------
    ticker                   Underlying symbol
    shares                   Shares held — always a positive multiple of 100
    average_price            total assignment cost / shares
    total_premium_collected  Lifetime premium for the ticker, including
                             premium collected before and after assignment
    current_cost_basis       Break-even per share: (cost − premium) / shares
    """
    ticker:                  str
    shares:                  int
    average_price:           float
    total_premium_collected: float
    current_cost_basis:      float
