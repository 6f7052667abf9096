"""
Stock split ratio handling.
"""
import logging
import math
from typing import Optional


logger = logging.getLogger(__name__)


def parse_split_ratio(ratio: Optional[str]) -> float:
    """
    Parse a split ratio string into a share multiplier.

    "2:1" gives 2.0 (forward split), "1:5" gives 0.2 (reverse split).
    Anything malformed, zero or non-finite (parts or quotient) gives 1.0, which the replay
    treats as a no-op.

    Args:
        ratio: Ratio in "N:M" form.

    Returns:
        The multiplier N / M.
    """
    if not ratio:
        return 1.0

    parts = str(ratio).split(":")
    if len(parts) != 2:
        logger.debug(f"Ignoring malformed split ratio: {ratio!r}")
        return 1.0

    try:
        numerator = float(parts[0].strip())
        denominator = float(parts[1].strip())
    except ValueError:
        logger.debug(f"Ignoring non-numeric split ratio: {ratio!r}")
        return 1.0

    if not all(math.isfinite(x) and x != 0 for x in (numerator, denominator)):
        return 1.0

    multiplier = numerator / denominator
    # Overflow or underflow in the quotient
    if not math.isfinite(multiplier) or multiplier == 0:
        logger.debug(f"Ignoring out-of-range split ratio: {ratio!r}")
        return 1.0

    return multiplier
