"""
Configuration constants and environment setup.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# LOCALE & PATTERNS
# =============================================================================

DEFAULT_LOCALE = os.environ.get("DATEPICKER_LOCALE", "en-US")

# Pattern used by the text inputs next to the calendar, e.g. "2025/11/07"
DEFAULT_INPUT_PATTERN = os.environ.get("DATEPICKER_INPUT_PATTERN", "yyyy/MM/dd")
DEFAULT_DISPLAY_PATTERN = "yyyy-MM-dd"
RANGE_SEPARATOR = " - "

# =============================================================================
# OUTPUT FORMAT
# =============================================================================

# "date" (native value), "iso" or "custom"
DEFAULT_OUTPUT_FORMAT = os.environ.get("DATEPICKER_OUTPUT_FORMAT", "date").lower()
DEFAULT_CUSTOM_PATTERN = os.environ.get("DATEPICKER_CUSTOM_PATTERN", "yyyy-MM-dd")

# =============================================================================
# INPUT FEEDBACK
# =============================================================================

# Time text this long that still does not parse is flagged as an error ("HH:MM")
TIME_INPUT_ERROR_MIN_LENGTH = 5

# Year dropdown covers current year +/- this many years
YEAR_OPTION_SPAN = 10

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
