"""Numeric input guards shared by the presentation functions."""

import logging
import math
import numbers

from signaldeck.services.base import InvalidInputError

logger = logging.getLogger(__name__)


def require_real(value, name: str = "value", finite: bool = False) -> float:
    """
    Return `value` as a float or raise InvalidInputError.

    Rejects None, booleans, non-numeric values and NaN. With `finite=True`
    infinities are rejected as well.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(name, value)
    value = float(value)
    if math.isnan(value) or (finite and math.isinf(value)):
        raise InvalidInputError(name, value)
    return value


def clamp(value: float, low: float, high: float, name: str = "value") -> float:
    """Saturate `value` into [low, high], logging when it was out of range."""
    if value < low or value > high:
        logger.debug(f"{name}={value} outside [{low}, {high}], clamping")
    return max(low, min(high, value))
