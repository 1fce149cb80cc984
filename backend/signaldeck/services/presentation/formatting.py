"""
Display Formatting

Pure functions turning raw numbers and timestamps into display strings.
Precision depends only on the value, never on the caller, so the same
number renders identically on every card, row and axis.

Rounding is half-up on the shortest decimal representation of the float
(42.12345 -> "42.1235"), not banker's rounding.
"""

import numbers
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

from signaldeck.services.base import InvalidInputError
from signaldeck.services.presentation.guards import require_real
from signaldeck.services.presentation.normalization import confidence_percent


MINUTE_MS = 60_000
HOUR_MS = 3_600_000
DAY_MS = 86_400_000
NANOS_PER_MS = 1_000_000


def _to_fixed(value: float, places: int) -> str:
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    with localcontext() as ctx:
        ctx.prec = 400
        quantized = Decimal(repr(value)).quantize(
            Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP
        )
    return f"{quantized:f}"


# =============================================================================
# NUMBERS
# =============================================================================


def format_fixed(value, places: int = 2) -> str:
    """Fixed-point string with exactly `places` fractional digits."""
    return _to_fixed(require_real(value, finite=True), places)


def format_signed(value, places: int = 2) -> str:
    """Like format_fixed, with a leading '+' for values >= 0."""
    value = require_real(value, finite=True)
    text = _to_fixed(value, places)
    return f"+{text}" if value >= 0 else text


def format_price(price) -> str:
    """
    Format a price with magnitude-dependent precision.

    > 1000  -> 2 decimals
    < 1     -> 6 decimals
    else    -> 4 decimals
    """
    price = require_real(price, "price", finite=True)
    if price > 1000:
        return _to_fixed(price, 2)
    if price < 1:
        return _to_fixed(price, 6)
    return _to_fixed(price, 4)


def format_currency(price) -> str:
    return f"${format_price(price)}"


def format_axis_tick(value) -> str:
    """Compact price-axis label: $1.2k above 1000, $12.34 otherwise."""
    value = require_real(value, finite=True)
    if value >= 1000:
        return f"${_to_fixed(value / 1000, 1)}k"
    return f"${_to_fixed(value, 2)}"


def format_percent(value) -> str:
    """Percentage with explicit sign, 2 decimals and a % suffix."""
    return f"{format_signed(require_real(value, 'percent', finite=True), 2)}%"


def format_confidence(confidence) -> str:
    """Confidence (0-1) as an integer percentage; out-of-range input is clamped."""
    return f"{confidence_percent(confidence)}%"


# =============================================================================
# TIME
# =============================================================================


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def format_relative_time(
    timestamp_ns: int,
    now: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """
    Format an epoch-nanosecond timestamp relative to `now` (epoch ms).

    Under a minute -> "just now", under an hour -> "{m}m ago", under a day
    -> "{h}h ago", otherwise an absolute "Mon D, HH:MM" in `tz` (UTC by
    default). Each boundary belongs to the coarser bucket.
    """
    if isinstance(timestamp_ns, bool) or not isinstance(timestamp_ns, numbers.Integral):
        raise InvalidInputError("timestamp", timestamp_ns)

    ms = int(timestamp_ns) // NANOS_PER_MS
    diff = (now_ms() if now is None else now) - ms

    if diff < MINUTE_MS:
        return "just now"
    if diff < HOUR_MS:
        return f"{diff // MINUTE_MS}m ago"
    if diff < DAY_MS:
        return f"{diff // HOUR_MS}h ago"

    try:
        moment = datetime.fromtimestamp(ms / 1000, tz or timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidInputError("timestamp", timestamp_ns) from e
    return f"{moment:%b} {moment.day}, {moment:%H:%M}"
