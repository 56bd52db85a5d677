"""
smfreader configuration.

Settings are read from environment variables (a .env file in the working
directory is loaded first) with defaults suitable for command-line use.
"""

import os

from dotenv import load_dotenv

_ = load_dotenv()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("SMFREADER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = os.getenv(
    "SMFREADER_LOG_FORMAT",
    "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
)

# ---------------------------------------------------------------------------
# Hex dump display
# ---------------------------------------------------------------------------
HEX_BYTES_PER_LINE = int(os.getenv("SMFREADER_HEX_WIDTH", "16"))
HEX_MAX_LINES = int(os.getenv("SMFREADER_HEX_LINES", "32"))
