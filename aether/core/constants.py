"""
Core constants and limits.

Defines system-wide constants for the ledger, market data synchronization
and the workspace file format.
"""

# Ledger Limits
MAX_TRADES_PER_LEDGER = 100000  # Upper bound on stored trade records
MAX_SYMBOL_LENGTH = 20  # Ticker symbols longer than this are rejected
DEFAULT_EXCHANGE = "MANUAL"  # Venue label when none is supplied

# Market Data
QUOTE_ASSET = "USDT"  # Provider pairs every symbol against this asset
STABLE_SYMBOLS = frozenset({"USDT", "USDC"})  # Priced locally at 1.0
STABLE_PRICE = 1.0
SYNC_INTERVAL_SECONDS = 30.0  # Periodic refresh cadence
MIN_SYNC_INTERVAL_SECONDS = 1.0
MAX_SYNC_INTERVAL_SECONDS = 3600.0
PROVIDER_TIMEOUT_SECONDS = 10.0  # HTTP timeout for a quote batch
TICKER_CACHE_TTL_SECONDS = 5.0  # Overlapping syncs reuse one download
PRICE_STALE_AFTER_INTERVALS = 2  # Missed sync periods before prices count as stale

# Binance public API
BINANCE_TICKER_URL = "https://api.binance.com/api/v3/ticker/24hr"

# Workspace snapshot format
WORKSPACE_VERSION = "4.2.0"
WORKSPACE_FILENAME_PREFIX = "aether_prime_backup_"
DEFAULT_LEDGER_PATH = "data/trades.json"

# Percentages
HUNDRED = 100.0
