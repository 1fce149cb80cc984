"""
Indicator Classification

Maps raw indicator values to a StatusLevel. One function per indicator,
each a total-order threshold ladder evaluated top-down, so every real
input (negatives and infinities included) lands in exactly one band.
NaN is rejected with InvalidInputError.

    RSI          >70 OVERBOUGHT | >60 NEUTRAL | >=40 BULLISH | >=30 NEUTRAL | OVERSOLD
    MACD         >0.5 BULLISH   | >-0.5 NEUTRAL | BEARISH
    Volatility   >0.05 BEARISH  | >0.02 NEUTRAL | BULLISH
    Momentum     >0.5 BULLISH   | >-0.5 NEUTRAL | BEARISH
    Sentiment    >0.6 BULLISH   | >0.4 NEUTRAL  | BEARISH      (0..1 scale)
    EMA vs SMA   ema > sma*1.01 BULLISH | ema < sma*0.99 BEARISH | NEUTRAL
"""

from signaldeck.schemas.display import ConfidenceBand, StatusLevel
from signaldeck.services.presentation.guards import require_real


RSI_OVERBOUGHT = 70.0
RSI_UPPER_NEUTRAL = 60.0
RSI_BULLISH_FLOOR = 40.0
RSI_OVERSOLD = 30.0

MACD_STRONG = 0.5
MOMENTUM_STRONG = 0.5

VOLATILITY_HIGH = 0.05
VOLATILITY_MODERATE = 0.02

SENTIMENT_BULLISH = 0.6
SENTIMENT_BEARISH = 0.4

EMA_BAND = 0.01

CONFIDENCE_LOW_PCT = 40
CONFIDENCE_MODERATE_PCT = 65


def classify_rsi(rsi) -> StatusLevel:
    rsi = require_real(rsi, "rsi")
    if rsi > RSI_OVERBOUGHT:
        return StatusLevel.OVERBOUGHT
    if rsi > RSI_UPPER_NEUTRAL:
        return StatusLevel.NEUTRAL
    if rsi >= RSI_BULLISH_FLOOR:
        return StatusLevel.BULLISH
    if rsi >= RSI_OVERSOLD:
        return StatusLevel.NEUTRAL
    return StatusLevel.OVERSOLD


def _symmetric_ladder(value: float, strong: float) -> StatusLevel:
    # (0, strong] and (-strong, 0] are both NEUTRAL
    if value > strong:
        return StatusLevel.BULLISH
    if value > -strong:
        return StatusLevel.NEUTRAL
    return StatusLevel.BEARISH


def classify_macd(macd) -> StatusLevel:
    return _symmetric_ladder(require_real(macd, "macd"), MACD_STRONG)


def classify_momentum(momentum) -> StatusLevel:
    return _symmetric_ladder(require_real(momentum, "momentum"), MOMENTUM_STRONG)


def classify_volatility(volatility) -> StatusLevel:
    volatility = require_real(volatility, "volatility")
    if volatility > VOLATILITY_HIGH:
        return StatusLevel.BEARISH
    if volatility > VOLATILITY_MODERATE:
        return StatusLevel.NEUTRAL
    return StatusLevel.BULLISH


def classify_sentiment(sentiment) -> StatusLevel:
    """Sentiment on the 0..1 scale."""
    sentiment = require_real(sentiment, "sentiment")
    if sentiment > SENTIMENT_BULLISH:
        return StatusLevel.BULLISH
    if sentiment > SENTIMENT_BEARISH:
        return StatusLevel.NEUTRAL
    return StatusLevel.BEARISH


def classify_ema_vs_sma(ema, sma) -> StatusLevel:
    """EMA relative to SMA with a 1% dead band around the SMA."""
    ema = require_real(ema, "ema")
    sma = require_real(sma, "sma")
    if ema > sma * (1 + EMA_BAND):
        return StatusLevel.BULLISH
    if ema < sma * (1 - EMA_BAND):
        return StatusLevel.BEARISH
    return StatusLevel.NEUTRAL


def classify_ema_cross(ema, sma) -> StatusLevel:
    """Plain EMA/SMA crossover, no dead band."""
    ema = require_real(ema, "ema")
    sma = require_real(sma, "sma")
    if ema > sma:
        return StatusLevel.BULLISH
    if ema < sma:
        return StatusLevel.BEARISH
    return StatusLevel.NEUTRAL


def classify_signal(signal: str) -> StatusLevel:
    """
    Map the service's free-text signal to a status.

    Case-insensitive: anything mentioning "bull" or equal to "buy" is
    BULLISH, "bear"/"sell" is BEARISH, everything else NEUTRAL.
    """
    if not isinstance(signal, str):
        return StatusLevel.NEUTRAL
    text = signal.strip().lower()
    if "bull" in text or text == "buy":
        return StatusLevel.BULLISH
    if "bear" in text or text == "sell":
        return StatusLevel.BEARISH
    return StatusLevel.NEUTRAL


def classify_confidence(percent: int) -> ConfidenceBand:
    """Band for an already clamped 0..100 confidence percentage."""
    if percent < CONFIDENCE_LOW_PCT:
        return ConfidenceBand.LOW
    if percent < CONFIDENCE_MODERATE_PCT:
        return ConfidenceBand.MODERATE
    return ConfidenceBand.HIGH
