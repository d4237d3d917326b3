"""
WheelWise — Trade Ingestion
============================
Boundary layer between user input / stored JSON and the Trade model.
Validation lives here, not in the accounting engine. No Streamlit
dependency — fully importable and testable without a running server.

Public API
----------
  new_trade(...)                          → Trade (validated, status Open)
  transition_trade(trade, status, price)  → Trade
  apply_update(trades, trade_id, update)  → list[Trade]
  trade_to_dict(trade)                    → dict (JSON-ready)
  trade_from_dict(data)                   → Trade
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd

from config import REQUIRED_TRADE_KEYS
from models import Trade, TradeStatus, TradeType, TradeUpdate

logger = logging.getLogger(__name__)


# ── Trade exceptions ──────────────────────────────────────────────────────────

class TradeError(Exception):
    """Base exception for all trade input and storage failures.
    Catch this in the UI layer to display a clean user-facing message.
    All subclasses carry a message safe to show directly to the user."""


class TradeValidationError(TradeError):
    """A field failed boundary validation — empty ticker, non-positive strike,
    fewer than one contract, or an unparseable number or date."""


class TradeTransitionError(TradeError):
    """A status change was requested on a trade that is no longer Open,
    or back to Open. Closed, Assigned, Expired and Rolled are terminal."""


class TradeNotFoundError(TradeError):
    """An update referenced an id that is not in the collection."""


class DuplicateTradeError(TradeError):
    """A trade was added whose id already exists in the collection."""


class TradeStoreError(TradeError):
    """The trade file exists but could not be read or decoded.
    Usually a hand-edited file with a JSON syntax error or missing keys."""


# ── Field helpers ─────────────────────────────────────────────────────────────

def _as_float(val: Any, field: str) -> float:
    try:
        out = float(val)
    except (TypeError, ValueError):
        raise TradeValidationError(f'{field} must be a number, got {val!r}.') from None
    if math.isnan(out) or math.isinf(out):
        raise TradeValidationError(f'{field} must be a finite number, got {val!r}.')
    return out


def _as_date(val: Any, field: str) -> date:
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    try:
        ts = pd.to_datetime(val)
    except (TypeError, ValueError, OverflowError):
        ts = None
    if ts is None or pd.isna(ts):
        raise TradeValidationError(f'{field} must be a date (YYYY-MM-DD), got {val!r}.')
    return ts.date()


def _optional_float(val: Any, field: str) -> Optional[float]:
    if val is None or (isinstance(val, str) and not val.strip()):
        return None
    return _as_float(val, field)


def _as_contracts(val: Any, field: str) -> int:
    qty = _as_float(val, field)
    if qty != int(qty) or qty < 1:
        raise TradeValidationError(f'{field} must be a whole number of at least 1, got {val!r}.')
    return int(qty)


def new_trade_id() -> str:
    """Fresh unique id — uuid4 hex, never reused."""
    return uuid.uuid4().hex


# ── Trade construction ────────────────────────────────────────────────────────

def new_trade(ticker: str, trade_type: TradeType | str, strike_price: Any,
              premium: Any, contracts: Any, entry_date: Any, expiry_date: Any,
              notes: Optional[str] = None) -> Trade:
    """
    Validate user input and build a new Open trade with a fresh id.

    Ticker is stripped and upper-cased. Premium may be negative (a debit
    adjustment). entry_date after expiry_date is accepted here and surfaced
    later as a data warning by mechanics.find_data_warnings().
    """
    symbol = str(ticker or '').strip().upper()
    if not symbol:
        raise TradeValidationError('Ticker is required.')

    try:
        ttype = TradeType(trade_type)
    except ValueError:
        raise TradeValidationError(f'Unknown trade type {trade_type!r}.') from None

    strike = _as_float(strike_price, 'Strike price')
    if strike <= 0:
        raise TradeValidationError('Strike price must be greater than zero.')

    prem = _as_float(premium, 'Premium')

    qty = _as_contracts(contracts, 'Contracts')

    note = (notes or '').strip() or None

    return Trade(
        id=new_trade_id(),
        ticker=symbol,
        type=ttype,
        strike_price=strike,
        premium=prem,
        contracts=qty,
        entry_date=_as_date(entry_date, 'Entry date'),
        expiry_date=_as_date(expiry_date, 'Expiry date'),
        status=TradeStatus.OPEN,
        notes=note,
    )


# ── Status transitions & partial updates ──────────────────────────────────────

def transition_trade(trade: Trade, status: TradeStatus | str,
                     closing_price: Any = None) -> Trade:
    """
    Move an Open trade to a terminal status and return the new record.

    Open → Closed | Assigned | Expired | Rolled. Closed requires the per-share
    buy-back price; every other target drops any closing price supplied.
    """
    try:
        target = TradeStatus(status)
    except ValueError:
        raise TradeTransitionError(f'Unknown trade status {status!r}.') from None
    if trade.status is not TradeStatus.OPEN:
        raise TradeTransitionError(
            f'{trade.ticker} trade is already {trade.status.value}. '
            f'Only Open trades can change status.'
        )
    if target is TradeStatus.OPEN:
        raise TradeTransitionError(f'{trade.ticker} trade is already Open.')

    price = None
    if target is TradeStatus.CLOSED:
        price = _optional_float(closing_price, 'Closing price')
        if price is None:
            raise TradeValidationError('A closing price is required to close a trade.')
        if price < 0:
            raise TradeValidationError('Closing price cannot be negative.')

    logger.info('Trade %s (%s) %s → %s', trade.id, trade.ticker,
                trade.status.value, target.value)
    return TradeUpdate(status=target, closing_price=price).apply_to(trade)


def apply_update(trades: list[Trade], trade_id: str, update: TradeUpdate) -> list[Trade]:
    """Return a new list with the trade matching trade_id replaced by the patched record."""
    if not any(t.id == trade_id for t in trades):
        raise TradeNotFoundError(f'No trade with id {trade_id!r}.')
    return [update.apply_to(t) if t.id == trade_id else t for t in trades]


# ── JSON codec ────────────────────────────────────────────────────────────────

def trade_to_dict(trade: Trade) -> dict:
    """JSON-ready dict with camelCase keys and ISO dates. Optional fields are omitted when absent."""
    out = {
        'id':          trade.id,
        'ticker':      trade.ticker,
        'type':        trade.type.value,
        'strikePrice': trade.strike_price,
        'premium':     trade.premium,
        'contracts':   trade.contracts,
        'entryDate':   trade.entry_date.isoformat(),
        'expiryDate':  trade.expiry_date.isoformat(),
        'status':      trade.status.value,
    }
    if trade.closing_price is not None:
        out['closingPrice'] = trade.closing_price
    if trade.notes is not None:
        out['notes'] = trade.notes
    return out


def trade_from_dict(data: dict) -> Trade:
    """
    Decode a stored trade. Stored records are trusted for price range checks
    (a stored debit or odd strike is the user's data) but must carry every
    required key with decodable values, and contracts must be a whole
    number of at least 1 (positions are built in 100-share lots).
    """
    if not isinstance(data, dict):
        raise TradeStoreError(f'Stored trade must be a JSON object, got {type(data).__name__}.')
    missing = REQUIRED_TRADE_KEYS - set(data)
    if missing:
        raise TradeStoreError(
            f'Stored trade is missing fields: {", ".join(sorted(missing))}.'
        )
    try:
        ttype  = TradeType(data['type'])
        status = TradeStatus(data['status'])
    except ValueError as e:
        raise TradeStoreError(f'Stored trade {data.get("id")!r} has an invalid value: {e}') from e

    try:
        return Trade(
            id=str(data['id']),
            ticker=str(data['ticker']).strip().upper(),
            type=ttype,
            strike_price=_as_float(data['strikePrice'], 'strikePrice'),
            premium=_as_float(data['premium'], 'premium'),
            contracts=_as_contracts(data['contracts'], 'contracts'),
            entry_date=_as_date(data['entryDate'], 'entryDate'),
            expiry_date=_as_date(data['expiryDate'], 'expiryDate'),
            status=status,
            closing_price=_optional_float(data.get('closingPrice'), 'closingPrice'),
            notes=data.get('notes') or None,
        )
    except TradeValidationError as e:
        raise TradeStoreError(f'Stored trade {data.get("id")!r} is corrupt: {e}') from e
