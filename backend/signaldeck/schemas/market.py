"""
CONTRACT 1: Prediction Service Payloads

Input: JSON returned by the remote prediction service
Output: validated, immutable models

The remote service speaks camelCase; every model accepts either the
camelCase alias or the snake_case field name. Non-numeric, NaN and
infinite values are rejected here, before they reach the presentation
pipeline.

All timestamps are epoch nanoseconds once validated (the client converts
from the service's unit, see TimestampUnit).
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class TimestampUnit(str, Enum):
    SECONDS = "s"
    MILLISECONDS = "ms"
    NANOSECONDS = "ns"

    @property
    def nanos(self) -> int:
        """Nanoseconds per tick of this unit."""
        return {
            TimestampUnit.SECONDS: 1_000_000_000,
            TimestampUnit.MILLISECONDS: 1_000_000,
            TimestampUnit.NANOSECONDS: 1,
        }[self]

    def to_nanoseconds(self, value: int) -> int:
        return int(value) * self.nanos


class ServicePayload(BaseModel):
    """Base for everything the remote service sends us."""

    class Config:
        frozen = True
        populate_by_name = True
        allow_inf_nan = False


# =============================================================================
# INPUT: AnalysisRequest
# =============================================================================


class AnalysisRequest(BaseModel):
    """
    Request for one analysis.
    Sent by: API
    Received by: Presentation Service
    """

    symbol: str = Field(..., min_length=1, max_length=32, description="e.g. 'BTC/USDT', 'AAPL'")
    timeframe: str = Field(..., min_length=1, max_length=8, description="e.g. '1h'")

    @field_validator("symbol", "timeframe")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("symbol")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


# =============================================================================
# PAYLOADS
# =============================================================================


class PricePoint(ServicePayload):
    """Single point of the price history, oldest first in a series."""

    timestamp: int = Field(..., ge=0, description="Epoch nanoseconds")
    price: float = Field(..., ge=0)
    volume: float = Field(default=0.0, ge=0)


class IndicatorSet(ServicePayload):
    """Technical indicators for one analysis request."""

    rsi: float
    macd: float
    sma: float
    ema: float
    volatility: float
    momentum: float
    sentiment: float = Field(..., description="Sentiment score on the 0..1 scale")


class Prediction(ServicePayload):
    """
    Directional prediction.

    score/signal/confidence/ema/sma/rsi are always present; the remaining
    fields are sent by richer service versions and are optional.
    """

    score: float = Field(..., alias="prediction")
    signal: str
    confidence: float = Field(..., description="0..1, clamped before display")
    ema: float
    sma: float
    rsi: float
    symbol: Optional[str] = None
    timeframe: Optional[str] = None
    current_price: Optional[float] = Field(default=None, alias="currentPrice")
    predicted_change_percent: Optional[float] = Field(
        default=None, alias="predictedChangePercent"
    )
    sentiment_label: Optional[str] = Field(default=None, alias="sentimentLabel")


class HistoryRecord(ServicePayload):
    """One entry of the service's prediction log."""

    id: int
    symbol: str
    timeframe: str
    signal: str
    predicted_change_percent: float = Field(..., alias="predictedChangePercent")
    confidence: float
    timestamp: int = Field(..., ge=0, description="Epoch nanoseconds")


class HealthStatus(ServicePayload):
    """Remote service health."""

    status: str
    total_predictions: int = Field(..., alias="totalPredictions", ge=0)
    version: str
