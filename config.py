"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Currency ──────────────────────────────────────────────
DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "USD")

# ── Scheduling ────────────────────────────────────────────
DEFAULT_PRIORITY: str = os.getenv("DEFAULT_PRIORITY", "medium")
AUTO_SCHEDULE_NOTE: str = os.getenv(
    "AUTO_SCHEDULE_NOTE", "Auto-scheduled from recurring expenses"
)
