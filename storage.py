"""
WheelWise — Trade Store
========================
JSON-file persistence for the trade collection. The file holds a list of
trade dicts in insertion order; that order is what the accounting engine
receives (position tracking depends on it — see mechanics.compute_portfolio_positions).

Every change rewrites the whole file through a temporary file and
os.replace(), so a crash mid-write never leaves a half-written store.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile

from ingestion import (
    DuplicateTradeError, TradeNotFoundError, TradeStoreError,
    apply_update, trade_from_dict, trade_to_dict,
)
from models import Trade, TradeUpdate

logger = logging.getLogger(__name__)


class TradeStore:
    def __init__(self, path: str):
        self.path = path

    def load(self) -> list[Trade]:
        """Load all trades. A missing file is an empty collection."""
        if not os.path.exists(self.path):
            logger.info('No trade file at %s — starting empty', self.path)
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TradeStoreError(f'Could not read trade file {self.path}: {e}') from e
        if not isinstance(raw, list):
            raise TradeStoreError(f'Trade file {self.path} must contain a JSON list of trades.')
        trades = [trade_from_dict(item) for item in raw]
        seen = set()
        for t in trades:
            if t.id in seen:
                raise TradeStoreError(
                    f'Trade file {self.path} holds more than one trade with id {t.id!r}.'
                )
            seen.add(t.id)
        logger.debug('Loaded %d trades from %s', len(trades), self.path)
        return trades

    def save(self, trades: list[Trade]) -> None:
        folder = os.path.dirname(os.path.abspath(self.path))
        tmp = None
        try:
            os.makedirs(folder, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix='.wheelwise-', suffix='.json', dir=folder)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump([trade_to_dict(t) for t in trades], f, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp is not None and os.path.exists(tmp):
                os.remove(tmp)
            raise TradeStoreError(f'Could not write trade file {self.path}: {e}') from e
        logger.debug('Saved %d trades to %s', len(trades), self.path)

    def add(self, trade: Trade) -> list[Trade]:
        """Append a trade and persist. Returns the new collection."""
        trades = self.load()
        if any(t.id == trade.id for t in trades):
            raise DuplicateTradeError(f'A trade with id {trade.id!r} already exists.')
        trades.append(trade)
        self.save(trades)
        logger.info('Added %s %s trade %s', trade.ticker, trade.type.value, trade.id)
        return trades

    def update(self, trade_id: str, update: TradeUpdate) -> list[Trade]:
        """Merge a partial update onto one trade and persist. Returns the new collection."""
        trades = apply_update(self.load(), trade_id, update)
        self.save(trades)
        logger.info('Updated trade %s: %s', trade_id, sorted(update.changes()))
        return trades

    def replace(self, trade: Trade) -> list[Trade]:
        """Swap in a new version of an existing trade (e.g. after transition_trade)."""
        trades = self.load()
        if not any(t.id == trade.id for t in trades):
            raise TradeNotFoundError(f'No trade with id {trade.id!r}.')
        trades = [trade if t.id == trade.id else t for t in trades]
        self.save(trades)
        logger.info('Replaced trade %s (%s, %s)', trade.id, trade.ticker, trade.status.value)
        return trades
