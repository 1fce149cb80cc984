"""
Signal / Sentiment Normalization

Clamps and rescales scores into bounded display coordinates and derives
the tri-state polarity used for indicator dots. Out-of-range input
saturates (and is logged at DEBUG); it never fails.
"""

import math

from signaldeck.schemas.display import Polarity, SentimentScale, StatusLevel
from signaldeck.services.presentation.classification import classify_rsi
from signaldeck.services.presentation.guards import clamp, require_real


# =============================================================================
# SENTIMENT
# =============================================================================


def to_signed_sentiment(score, scale: SentimentScale = SentimentScale.SIGNED) -> float:
    """Convert a score to the -1..1 scale (0..1 scores map linearly)."""
    score = require_real(score, "sentiment")
    if scale == SentimentScale.UNIT:
        return score * 2 - 1
    return score


def clamp_sentiment(score) -> float:
    """Saturate a signed sentiment score into [-1, 1]. Idempotent."""
    return clamp(require_real(score, "sentiment"), -1.0, 1.0, "sentiment")


def sentiment_position(score) -> float:
    """Marker position on the sentiment bar, 0..100 (-1 -> 0, 0 -> 50, 1 -> 100)."""
    return (clamp_sentiment(score) + 1) / 2 * 100


def sentiment_fill(score) -> tuple[str, float]:
    """
    Fill drawn from the bar's center: ("right", width) for scores >= 0,
    ("left", width) otherwise. Width is a percentage of the bar, 0..50.
    """
    clamped = clamp_sentiment(score)
    side = "right" if clamped >= 0 else "left"
    return side, abs(clamped) / 2 * 100


# =============================================================================
# CONFIDENCE
# =============================================================================


def clamp_confidence(confidence) -> float:
    return clamp(require_real(confidence, "confidence"), 0.0, 1.0, "confidence")


def confidence_percent(confidence) -> int:
    """Clamped confidence as an integer 0..100, halves rounded up."""
    return int(math.floor(clamp_confidence(confidence) * 100 + 0.5))


# =============================================================================
# POLARITY
# =============================================================================


def zero_cross_polarity(value) -> Polarity:
    """For indicators with a natural zero line (MACD, momentum, score)."""
    if require_real(value) >= 0:
        return Polarity.POSITIVE
    return Polarity.NEGATIVE


def rsi_polarity(rsi) -> Polarity:
    """Oversold reads as a buying opportunity, overbought as a selling one."""
    status = classify_rsi(rsi)
    if status == StatusLevel.OVERSOLD:
        return Polarity.POSITIVE
    if status == StatusLevel.OVERBOUGHT:
        return Polarity.NEGATIVE
    return Polarity.INDETERMINATE


def label_polarity(label) -> Polarity:
    """Case-insensitive bullish/bearish; any other label has no direction."""
    if not isinstance(label, str):
        return Polarity.INDETERMINATE
    text = label.strip().lower()
    if text == "bullish":
        return Polarity.POSITIVE
    if text == "bearish":
        return Polarity.NEGATIVE
    return Polarity.INDETERMINATE


def price_polarity(price, reference) -> Polarity:
    """Price at or above a reference level (e.g. current price vs SMA)."""
    if require_real(price, "price") >= require_real(reference, "reference"):
        return Polarity.POSITIVE
    return Polarity.NEGATIVE


def status_polarity(status: StatusLevel) -> Polarity:
    if status in (StatusLevel.BULLISH, StatusLevel.OVERSOLD):
        return Polarity.POSITIVE
    if status in (StatusLevel.BEARISH, StatusLevel.OVERBOUGHT):
        return Polarity.NEGATIVE
    return Polarity.INDETERMINATE
