"""
Prediction History Endpoints
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from signaldeck.api.deps import get_presentation_service
from signaldeck.schemas.display import HistoryRow
from signaldeck.services.base import ExternalAPIError, InvalidInputError, ValidationError
from signaldeck.services.presentation import PresentationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[HistoryRow])
async def get_history(service: PresentationService = Depends(get_presentation_service)):
    """Most recent predictions, newest first."""
    try:
        return await service.history()
    except ExternalAPIError as e:
        logger.error(f"History fetch failed: {e}")
        raise HTTPException(status_code=502, detail=e.message)
    except (ValidationError, InvalidInputError) as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("")
async def clear_history(service: PresentationService = Depends(get_presentation_service)):
    """Clear the prediction log on the remote service."""
    try:
        await service.clear_history()
    except ExternalAPIError as e:
        logger.error(f"History clear failed: {e}")
        raise HTTPException(status_code=502, detail=e.message)
    return {"cleared": True}
