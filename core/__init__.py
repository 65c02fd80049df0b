"""Framework-agnostic helpers shared by the SDK and the bot — currently logging.

This package must NEVER import from ``bot/`` or ``sdk/``.
"""

from core.logger import CairnLogger

__all__ = [
    "CairnLogger",
]
