"""Utility modules for scanstate.

Provides:
- logger: get_logger for logging
- runes: decode_rune for UTF-8 rune decoding
"""

from scanstate.utils.logger import get_logger
from scanstate.utils.runes import RUNE_ERROR, decode_rune

__all__ = [
    "RUNE_ERROR",
    "decode_rune",
    "get_logger",
]
