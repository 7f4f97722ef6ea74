"""Configuration constants for podfeed.

All constants are re-exported from config.py for convenience.
"""

# General defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TIMEOUT_SECONDS = 20
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/119.0 Safari/537.36"
)
DEFAULT_JSON_INDENT = 2

# Validation ranges
MIN_TIMEOUT_SECONDS = 1
MIN_JSON_INDENT = 0

# Feed normalization
CATEGORY_DELIMITER = ">"
# Bare "en" has no obvious region of its own
DEFAULT_ENGLISH_LOCALE = "en-us"
# The only (lowercased) itunes:explicit value that means explicit
EXPLICIT_VALUES = frozenset({"yes"})
