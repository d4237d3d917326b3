"""
WheelWise — Configuration & Constants
======================================
All tuneable parameters and display strings live here.
Change a value once and it applies everywhere.
"""

import os

APP_VERSION = "v1.2"

# ── Contract arithmetic ───────────────────────────────────────────────────────
# One equity option contract controls 100 shares. Premium and strike are quoted
# per share, so every dollar figure is price × contracts × CONTRACT_MULTIPLIER.
CONTRACT_MULTIPLIER = 100

# ── Trade store ───────────────────────────────────────────────────────────────
STORE_PATH = os.environ.get('WHEELWISE_STORE', 'wheelwise_trades.json')

# Keys every stored trade must carry (camelCase, as written by TradeStore).
REQUIRED_TRADE_KEYS = {
    'id', 'ticker', 'type', 'strikePrice', 'premium', 'contracts',
    'entryDate', 'expiryDate', 'status',
}

# ── Trade frame columns ───────────────────────────────────────────────────────
FRAME_COLUMNS = [
    'ID', 'Ticker', 'Type', 'Strike', 'Premium', 'Contracts',
    'Entry Date', 'Expiry Date', 'Status', 'Closing Price', 'Notes',
    'Gross Premium', 'Realized P/L', 'Win',
]
EQUITY_CURVE_COLUMNS = ['Date', 'Label', 'Ticker', 'P/L', 'Cum P/L']
TICKER_RANK_COLUMNS  = ['Ticker', 'Profit']

# ── AI advisor ────────────────────────────────────────────────────────────────
ADVISOR_MODEL       = os.environ.get('WHEELWISE_MODEL', 'gemini-3-flash-preview')
ADVISOR_API_KEY     = os.environ.get('GEMINI_API_KEY') or os.environ.get('API_KEY', '')
ANALYSIS_TEMPERATURE = 0.7
TICKER_TEMPERATURE   = 0.5

MSG_NO_TRADES        = 'Add some trades to get AI analysis.'
MSG_NO_ANALYSIS      = 'Unable to generate analysis at this time.'
MSG_ADVISOR_ERROR    = 'Error connecting to AI advisor. Please check your API key configuration.'
MSG_NO_TICKER_INSIGHT = 'No insights available.'
MSG_TICKER_ERROR     = 'Failed to fetch ticker insights.'

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get('WHEELWISE_LOG_LEVEL', 'INFO').upper()

# ── Display palette ───────────────────────────────────────────────────────────
COLOURS = {
    'green':      '#00cc96',
    'red':        '#ef553b',
    'blue':       '#58a6ff',
    'amber':      '#ffa500',
    'text':       '#c9d1d9',
    'text_muted': '#8b949e',
    'border':     '#1f2937',
    'card':       '#111827',
}

STATUS_COLOURS = {
    'Open':     '#58a6ff',
    'Closed':   '#00cc96',
    'Expired':  '#8b949e',
    'Assigned': '#ffa500',
    'Rolled':   '#a78bfa',
}
