"""
Analysis API Endpoints

Runs a prediction for a symbol/timeframe and returns the assembled,
display-ready analysis.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError as PydanticValidationError

from signaldeck.api.deps import get_presentation_service
from signaldeck.core.config import Settings, get_settings
from signaldeck.schemas.market import AnalysisRequest
from signaldeck.schemas.display import AnalysisView, DisplayRecord
from signaldeck.services.base import ExternalAPIError, InvalidInputError, ValidationError
from signaldeck.services.presentation import PresentationService

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_request(
    symbol: Optional[str], timeframe: Optional[str], settings: Settings
) -> AnalysisRequest:
    try:
        return AnalysisRequest(
            symbol=symbol or settings.default_symbol,
            timeframe=timeframe or settings.default_timeframe,
        )
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


@router.get("", response_model=AnalysisView)
async def get_analysis(
    symbol: Optional[str] = Query(default=None, description="e.g. BTC/USDT; defaults from settings"),
    timeframe: Optional[str] = Query(default=None, description="e.g. 1h; defaults from settings"),
    settings: Settings = Depends(get_settings),
    service: PresentationService = Depends(get_presentation_service),
):
    """
    Run a prediction and return everything the analysis screen renders.

    Returns:
        - Prediction card (signal, score, confidence)
        - Indicator cards in fixed order (RSI, MACD, SMA, EMA, Volatility, Momentum, Sentiment)
        - Sentiment gauge
        - Price chart with padded axis bounds
    """
    request = _build_request(symbol, timeframe, settings)

    try:
        return await service.execute(request)
    except ExternalAPIError as e:
        logger.error(f"Analysis failed for {request.symbol}: {e}")
        raise HTTPException(status_code=502, detail=e.message)
    except (ValidationError, InvalidInputError) as e:
        logger.error(f"Unusable payload for {request.symbol}: {e}")
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/indicators", response_model=list[DisplayRecord])
async def get_indicator_cards(
    symbol: Optional[str] = Query(default=None),
    timeframe: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
    service: PresentationService = Depends(get_presentation_service),
):
    """Indicator cards only, without running a prediction."""
    request = _build_request(symbol, timeframe, settings)

    try:
        return await service.indicator_cards(request)
    except ExternalAPIError as e:
        logger.error(f"Indicator fetch failed for {request.symbol}: {e}")
        raise HTTPException(status_code=502, detail=e.message)
    except (ValidationError, InvalidInputError) as e:
        raise HTTPException(status_code=422, detail=str(e))
