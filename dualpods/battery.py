"""
Battery nibble decoding.

Levels are reported in tenths: 0–10 maps to 0.0–1.0 and 15 means the
level is not available. 11–14 have been observed in the wild but are not
meaningful; they are clamped to full and logged.
"""

from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Battery nibble value indicating "not available"
BATTERY_UNAVAILABLE = 0xF

# Highest nibble value that maps to a real level (10 = 100%)
BATTERY_FULL = 10


def decode_battery(nibble: int, source: str = "pod") -> Optional[float]:
    """Convert a 4-bit battery nibble to a fraction in [0.0, 1.0].

    Args:
        nibble: Raw 4-bit value.
        source: Human-readable name of the reporting part, used in the
            diagnostic log line ("Left pod", "Case", ...).

    Returns:
        The level as a fraction, or None if the device reports it as
        unavailable.
    """
    if not 0 <= nibble <= 0xF:
        raise ValueError(f"not a nibble: {nibble}")
    if nibble == BATTERY_UNAVAILABLE:
        return None
    if nibble > BATTERY_FULL:
        logger.warning("%s: battery value above expected range: %d", source, nibble)
        return 1.0
    return nibble / 10
