"""
Prediction Service Client Interface

Defines the contract of the remote prediction service as seen from
SignalDeck. The service's models and data fetching are opaque; only
these calls and their payload shapes are fixed.
"""

from abc import ABC, abstractmethod

from signaldeck.schemas.market import (
    HealthStatus,
    HistoryRecord,
    IndicatorSet,
    Prediction,
    PricePoint,
)


class PredictionServiceInterface(ABC):
    """
    Prediction Service Contract.

    Every call returns validated schema objects with timestamps in epoch
    nanoseconds, or raises:
        ExternalAPIError: transport failure or non-2xx status
        ValidationError:  payload does not match the schema
    """

    @property
    def name(self) -> str:
        return "PredictionService"

    @abstractmethod
    async def predict(self, symbol: str, timeframe: str) -> Prediction:
        """Run a prediction for symbol/timeframe (the service logs it to history)."""
        pass

    @abstractmethod
    async def get_indicators(self, symbol: str, timeframe: str) -> IndicatorSet:
        pass

    @abstractmethod
    async def get_price_history(self, symbol: str, timeframe: str) -> list[PricePoint]:
        """Price history, oldest first."""
        pass

    @abstractmethod
    async def get_health(self) -> HealthStatus:
        pass

    @abstractmethod
    async def get_prediction_history(self) -> list[HistoryRecord]:
        pass

    @abstractmethod
    async def clear_history(self) -> None:
        pass

    @abstractmethod
    async def get_supported_symbols(self) -> list[str]:
        pass

    async def close(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None
