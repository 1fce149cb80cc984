"""
API Dependencies

Settings and services are injected per request so tests (and callers)
can swap them through `app.dependency_overrides`.
"""

from fastapi import Depends

from signaldeck.core.config import Settings, get_settings
from signaldeck.services.prediction_client import get_prediction_client
from signaldeck.services.presentation import PresentationService


def get_presentation_service(
    settings: Settings = Depends(get_settings),
) -> PresentationService:
    return PresentationService(get_prediction_client(settings), settings)
