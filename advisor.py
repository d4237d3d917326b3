"""
WheelWise — AI Advisor
=======================
Thin adapter around Google Gemini (google-genai) that turns the trade
collection into free-form coaching text. The accounting engine never reads
the result; the UI only splits it into lines for display.

Public API
----------
  advise(trades, client=None)           → str
  ticker_insight(ticker, client=None)   → str
  summarize_trades(trades)              → str   (the prompt body)
  insight_lines(text)                   → list[(is_bullet, line)]

`client` is anything exposing `models.generate_content(model=, contents=, config=)`
— a google.genai.Client in the app, a stub in tests. When omitted a client
is built from GEMINI_API_KEY / API_KEY.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from google import genai

from config import (
    ADVISOR_MODEL, ADVISOR_API_KEY,
    ANALYSIS_TEMPERATURE, TICKER_TEMPERATURE,
    MSG_NO_TRADES, MSG_NO_ANALYSIS, MSG_ADVISOR_ERROR,
    MSG_NO_TICKER_INSIGHT, MSG_TICKER_ERROR,
)
from models import Trade

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = (
    "Analyze the following options wheel strategy trades and provide 3-4 "
    "actionable insights or observations about the user's performance and "
    "strategy. Keep it professional and concise.\n\n{summary}"
)

TICKER_PROMPT = (
    "Provide a quick summary of the current market sentiment and key price "
    "levels for the stock ticker: {ticker}. Is it typically a good candidate "
    "for the Wheel Strategy (low/medium volatility)?"
)


def get_client(api_key: str = ADVISOR_API_KEY) -> Any:
    return genai.Client(api_key=api_key)


def _fmt_num(val: float) -> str:
    # 850.0 → '850', 15.5 → '15.5'
    return f'{val:g}'


def summarize_trades(trades: list[Trade]) -> str:
    """One line per trade: 'NVDA: Cash Secured Put @ $850, Premium: $15.5, Status: Assigned'."""
    return '\n'.join(
        f'{t.ticker}: {t.type.value} @ ${_fmt_num(t.strike_price)}, '
        f'Premium: ${_fmt_num(t.premium)}, Status: {t.status.value}'
        for t in trades
    )


def _generate(client: Any, contents: str, temperature: float) -> str:
    resp = client.models.generate_content(
        model=ADVISOR_MODEL,
        contents=contents,
        config={'temperature': temperature},
    )
    return getattr(resp, 'text', None) or ''


def advise(trades: list[Trade], client: Optional[Any] = None) -> str:
    """
    Ask the model for 3–4 insights on the user's wheel trades.

    Never raises: an empty collection short-circuits without a network call,
    an empty reply and any client failure map to fixed user-facing messages.
    """
    if not trades:
        return MSG_NO_TRADES
    prompt = ANALYSIS_PROMPT.format(summary=summarize_trades(trades))
    try:
        text = _generate(client or get_client(), prompt, ANALYSIS_TEMPERATURE)
    except Exception:  # noqa: BLE001  SDK, network and auth failures alike
        logger.exception('Gemini analysis error')
        return MSG_ADVISOR_ERROR
    return text or MSG_NO_ANALYSIS


def ticker_insight(ticker: str, client: Optional[Any] = None) -> str:
    """Market sentiment and wheel suitability summary for one symbol."""
    symbol = (ticker or '').strip().upper()
    try:
        text = _generate(client or get_client(), TICKER_PROMPT.format(ticker=symbol),
                         TICKER_TEMPERATURE)
    except Exception:  # noqa: BLE001
        logger.exception('Gemini ticker insight error for %s', symbol)
        return MSG_TICKER_ERROR
    return text or MSG_NO_TICKER_INSIGHT


def insight_lines(text: str) -> list[tuple[bool, str]]:
    """
    Split advice text for display. A line starting with '-' is a list item
    (returned without the dash); blank lines are dropped.
    """
    out = []
    for line in (text or '').splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith('-'):
            out.append((True, stripped[1:].strip()))
        else:
            out.append((False, stripped))
    return out
