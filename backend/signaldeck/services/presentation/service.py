"""
Presentation Service Implementation

Fetches raw payloads from the prediction service and turns them into
display views. All number crunching lives in the assembler; this class
only orchestrates the remote calls.
"""

import asyncio
import logging
from typing import Optional
from zoneinfo import ZoneInfo

from signaldeck.core.config import Settings
from signaldeck.schemas.market import AnalysisRequest
from signaldeck.schemas.display import AnalysisView, DisplayRecord, HealthView, HistoryRow
from signaldeck.services.base import ServiceError
from signaldeck.services.prediction_client import PredictionServiceInterface
from signaldeck.services.presentation.interface import PresentationServiceInterface
from signaldeck.services.presentation.assembler import (
    assemble_analysis,
    assemble_health,
    assemble_history,
    assemble_indicators,
)

logger = logging.getLogger(__name__)


class PresentationService(PresentationServiceInterface):
    """
    Presentation Service.

    Holds no state between requests besides its collaborators, so
    concurrent requests never interfere.
    """

    def __init__(self, client: PredictionServiceInterface, settings: Settings):
        self.client = client
        self.settings = settings
        self.display_tz = ZoneInfo(settings.display_timezone)

    @property
    def name(self) -> str:
        return "PresentationService"

    async def execute(self, input_data: AnalysisRequest) -> AnalysisView:
        """Run one analysis: the three remote calls go out concurrently."""
        symbol, timeframe = input_data.symbol, input_data.timeframe
        logger.info(f"Analyzing {symbol} ({timeframe})")

        prediction, indicators, prices = await asyncio.gather(
            self.client.predict(symbol, timeframe),
            self.client.get_indicators(symbol, timeframe),
            self.client.get_price_history(symbol, timeframe),
        )

        if not prices:
            logger.warning(f"No price history for {symbol} ({timeframe})")

        return assemble_analysis(symbol, timeframe, prediction, indicators, prices)

    async def indicator_cards(self, request: AnalysisRequest) -> list[DisplayRecord]:
        indicators = await self.client.get_indicators(request.symbol, request.timeframe)
        return assemble_indicators(indicators)

    async def history(self, now: Optional[int] = None) -> list[HistoryRow]:
        records = await self.client.get_prediction_history()
        return assemble_history(
            records,
            now=now,
            tz=self.display_tz,
            limit=self.settings.history_display_limit,
        )

    async def clear_history(self) -> None:
        await self.client.clear_history()
        logger.info("Prediction history cleared")

    async def service_health(self) -> HealthView:
        try:
            health = await self.client.get_health()
        except ServiceError as e:
            logger.warning(f"Prediction service unavailable: {e}")
            return assemble_health(None)
        return assemble_health(health)

    async def supported_symbols(self) -> list[str]:
        try:
            return await self.client.get_supported_symbols()
        except ServiceError as e:
            logger.warning(f"Could not load supported symbols, using defaults: {e}")
            return list(self.settings.quick_symbols)

    async def health_check(self) -> bool:
        return True
