"""
Service Status Endpoints

Remote service health and the analysis form's symbol/timeframe options.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from signaldeck.api.deps import get_presentation_service
from signaldeck.core.config import Settings, get_settings
from signaldeck.schemas.display import HealthView
from signaldeck.services.presentation import PresentationService

router = APIRouter()


class SymbolsResponse(BaseModel):
    """Options for the analysis form."""
    symbols: list[str]
    default_symbol: str
    default_timeframe: str
    timeframes: list[str]


@router.get("/service/health", response_model=HealthView)
async def get_service_health(service: PresentationService = Depends(get_presentation_service)):
    """Prediction service status; OFFLINE when it cannot be reached."""
    return await service.service_health()


@router.get("/symbols", response_model=SymbolsResponse)
async def get_symbols(
    settings: Settings = Depends(get_settings),
    service: PresentationService = Depends(get_presentation_service),
):
    return SymbolsResponse(
        symbols=await service.supported_symbols(),
        default_symbol=settings.default_symbol,
        default_timeframe=settings.default_timeframe,
        timeframes=list(settings.timeframes),
    )
