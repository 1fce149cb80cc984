"""
Presentation Service Interface

Defines the contract for the presentation layer.
"""

from abc import abstractmethod
from typing import Optional

from signaldeck.services.base import BaseService
from signaldeck.schemas.market import AnalysisRequest
from signaldeck.schemas.display import AnalysisView, DisplayRecord, HealthView, HistoryRow


class PresentationServiceInterface(BaseService[AnalysisRequest, AnalysisView]):
    """
    Presentation Service Contract.

    INPUT: AnalysisRequest
        - symbol: asset symbol
        - timeframe: candle timeframe

    OUTPUT: AnalysisView
        - prediction card, indicator cards, sentiment gauge, price chart
    """

    @property
    def name(self) -> str:
        return "PresentationService"

    @abstractmethod
    async def execute(self, input_data: AnalysisRequest) -> AnalysisView:
        """Fetch prediction, indicators and prices and assemble the analysis."""
        pass

    @abstractmethod
    async def indicator_cards(self, request: AnalysisRequest) -> list[DisplayRecord]:
        pass

    @abstractmethod
    async def history(self, now: Optional[int] = None) -> list[HistoryRow]:
        """Recent predictions, newest first. `now` is epoch milliseconds."""
        pass

    @abstractmethod
    async def clear_history(self) -> None:
        pass

    @abstractmethod
    async def service_health(self) -> HealthView:
        """Remote service status; never raises, reports OFFLINE instead."""
        pass

    @abstractmethod
    async def supported_symbols(self) -> list[str]:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Presentation is pure computation and always healthy."""
        pass
