"""Application configuration — environment variables and derived constants.

Loads ``BOT_TOKEN`` and the client/logging settings from the environment via
``python-dotenv``.  All values are resolved at import time so other modules
can ``from config import …`` without repeated lookups.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import logging
import os

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── core ─────────────────────────────────────────────────────────────────────
from core.logger import CairnLogger

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()


# ── Helper functions (private) ───────────────────────────────────────────────


def _parse_bool(raw: str | None, default: bool) -> bool:
    """Interpret ``1/true/yes/on`` (any case) as true and ``0/false/no/off`` as false."""
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def _parse_number(raw: str | None, default: float, invalid: list[str], name: str) -> float:
    """Parse a non-negative number, recording *name* in *invalid* on bad input."""
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        invalid.append(name)
        return default
    if value < 0:
        invalid.append(name)
        return default
    return value


def _parse_level(raw: str | None) -> int:
    level = logging.getLevelName((raw or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


# ── Public constants ─────────────────────────────────────────────────────────

_invalid: list[str] = []

BOT_TOKEN: str | None = os.environ.get("BOT_TOKEN")
API_URL: str = os.environ.get("API_URL", "https://api.telegram.org").rstrip("/")
REQUEST_TIMEOUT: float = _parse_number(os.environ.get("REQUEST_TIMEOUT"), 10.0, _invalid, "REQUEST_TIMEOUT")
POLL_TIMEOUT: int = int(_parse_number(os.environ.get("POLL_TIMEOUT"), 30, _invalid, "POLL_TIMEOUT"))
IDLE_SECONDS: float = _parse_number(os.environ.get("IDLE_SECONDS"), 5.0, _invalid, "IDLE_SECONDS")
LOG_ENABLED: bool = _parse_bool(os.environ.get("LOG_ENABLED"), True)
LOG_LEVEL: int = _parse_level(os.environ.get("LOG_LEVEL"))
LOG_DIR: str = os.environ.get("LOG_DIR", "logs")


# ── Startup diagnostics ─────────────────────────────────────────────────────

logger = CairnLogger.get_logger(LOG_LEVEL, LOG_DIR)

if BOT_TOKEN:
    logger.info("Config loaded — BOT_TOKEN is set", extra={"api_url": API_URL})
else:
    logger.warning("Config loaded — BOT_TOKEN is NOT set")

for _name in _invalid:
    logger.warning("Invalid value in environment, using default", extra={"setting": _name})
