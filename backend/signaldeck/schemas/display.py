"""
CONTRACT 2: Display Views

Input: validated service payloads (see schemas.market)
Output: render-ready views

Everything here is derived per request and never stored. The rendering
layer only picks colors/icons from `status` and `polarity`; all numbers
arrive pre-formatted.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class StatusLevel(str, Enum):
    BULLISH = "BULLISH"
    NEUTRAL = "NEUTRAL"
    BEARISH = "BEARISH"
    OVERBOUGHT = "OVERBOUGHT"
    OVERSOLD = "OVERSOLD"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Polarity(str, Enum):
    """Direction of an indicator. INDETERMINATE means no opinion, not bearish."""

    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    INDETERMINATE = "INDETERMINATE"


class ConfidenceBand(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


class SentimentScale(str, Enum):
    UNIT = "UNIT"  # 0..1
    SIGNED = "SIGNED"  # -1..1


class View(BaseModel):
    class Config:
        frozen = True


# =============================================================================
# VIEWS
# =============================================================================


class DisplayRecord(View):
    """One indicator card."""

    label: str
    formatted_value: str
    unit: Optional[str] = None
    status: StatusLevel
    status_label: str
    description: Optional[str] = None
    polarity: Polarity = Polarity.INDETERMINATE


class SentimentGauge(View):
    """Sentiment bar: marker position and fill, both in percent of bar width."""

    score: float = Field(..., description="Signed score as received, after scale conversion")
    clamped: float = Field(..., ge=-1, le=1)
    formatted_score: str
    position: float = Field(..., ge=0, le=100)
    fill_side: str = Field(..., description="right (positive) / left (negative), from center")
    fill_width: float = Field(..., ge=0, le=50)
    polarity: Polarity
    label: Optional[str] = None


class SeriesStats(View):
    """Summary statistics of a non-empty price series."""

    count: int = Field(..., ge=1)
    first: float
    last: float
    min_price: float
    max_price: float
    padding: float = Field(..., ge=0)
    lower_bound: float
    upper_bound: float
    change_percent: float


class ChartPoint(View):
    label: str
    price: float
    index: int = Field(..., ge=0)


class ChartView(View):
    """Price history panel. `stats` is None when the history is empty."""

    symbol: Optional[str] = None
    is_empty: bool
    point_count: int
    stats: Optional[SeriesStats] = None
    points: list[ChartPoint] = Field(default_factory=list)
    formatted_low: Optional[str] = None
    formatted_high: Optional[str] = None
    formatted_last: Optional[str] = None
    formatted_change: Optional[str] = None
    trend: Polarity = Polarity.INDETERMINATE


class MiniStat(View):
    label: str
    value: str


class PredictionView(View):
    """Prediction card."""

    symbol: Optional[str] = None
    timeframe: Optional[str] = None
    signal: str
    status: StatusLevel
    formatted_score: str
    score_polarity: Polarity
    confidence_text: str
    confidence_percent: int = Field(..., ge=0, le=100)
    confidence_band: ConfidenceBand
    formatted_price: Optional[str] = None
    price_polarity: Polarity = Field(
        default=Polarity.INDETERMINATE, description="Current price vs SMA"
    )
    formatted_change: Optional[str] = None
    change_polarity: Polarity = Polarity.INDETERMINATE
    mini_stats: list[MiniStat] = Field(default_factory=list)


class HistoryRow(View):
    id: int
    symbol: str
    timeframe: str
    signal: str
    status: StatusLevel
    formatted_change: str
    change_polarity: Polarity
    formatted_confidence: str
    formatted_time: str
    timestamp: int


class HealthView(View):
    online: bool
    status: str
    version: Optional[str] = None
    total_predictions: Optional[int] = None


class AnalysisView(View):
    """Everything the analysis screen renders for one symbol/timeframe."""

    symbol: str
    timeframe: str
    prediction: PredictionView
    indicators: list[DisplayRecord]
    sentiment: SentimentGauge
    chart: ChartView
