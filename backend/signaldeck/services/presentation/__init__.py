"""
Presentation Service

CONTRACT:
    Input:  AnalysisRequest (symbol, timeframe)
    Output: AnalysisView

RESPONSIBILITIES:
    - Classify indicators into status levels (RSI, MACD, EMA/SMA, ...)
    - Normalize sentiment and confidence into bounded display coordinates
    - Reduce price history to axis bounds and percent change
    - Format prices, percentages and timestamps for display

PURE PYTHON - No prediction logic.
Everything below the service is synchronous and deterministic.
"""

from signaldeck.services.presentation.interface import PresentationServiceInterface
from signaldeck.services.presentation.service import PresentationService

__all__ = [
    "PresentationServiceInterface",
    "PresentationService",
]
