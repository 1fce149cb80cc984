"""
SignalDeck Schema Contracts

This module defines the JSON contracts between the remote prediction
service, the presentation pipeline and the rendering layer.
"""

from signaldeck.schemas.market import (
    TimestampUnit,
    AnalysisRequest,
    PricePoint,
    IndicatorSet,
    Prediction,
    HistoryRecord,
    HealthStatus,
)
from signaldeck.schemas.display import (
    StatusLevel,
    Polarity,
    ConfidenceBand,
    SentimentScale,
    DisplayRecord,
    SentimentGauge,
    SeriesStats,
    ChartPoint,
    ChartView,
    MiniStat,
    PredictionView,
    HistoryRow,
    HealthView,
    AnalysisView,
)

__all__ = [
    # Service payloads
    "TimestampUnit",
    "AnalysisRequest",
    "PricePoint",
    "IndicatorSet",
    "Prediction",
    "HistoryRecord",
    "HealthStatus",
    # Display
    "StatusLevel",
    "Polarity",
    "ConfidenceBand",
    "SentimentScale",
    "DisplayRecord",
    "SentimentGauge",
    "SeriesStats",
    "ChartPoint",
    "ChartView",
    "MiniStat",
    "PredictionView",
    "HistoryRow",
    "HealthView",
    "AnalysisView",
]
