"""
Prediction Service Client

CONTRACT:
    Input:  symbol / timeframe
    Output: Prediction, IndicatorSet, PricePoint list, HistoryRecord list,
            HealthStatus

RESPONSIBILITIES:
    - Call the remote prediction service over HTTP
    - Validate payloads into schema objects
    - Normalize timestamps to epoch nanoseconds

NO RETRIES - a failed call surfaces as ExternalAPIError.
"""

from signaldeck.services.prediction_client.interface import PredictionServiceInterface
from signaldeck.services.prediction_client.client import (
    PredictionServiceClient,
    get_prediction_client,
    close_prediction_client,
    parse_health,
    parse_indicators,
    parse_prediction,
    parse_prediction_history,
    parse_price_history,
    parse_symbols,
)

__all__ = [
    "PredictionServiceInterface",
    "PredictionServiceClient",
    "get_prediction_client",
    "close_prediction_client",
    "parse_health",
    "parse_indicators",
    "parse_prediction",
    "parse_prediction_history",
    "parse_price_history",
    "parse_symbols",
]
