"""
Prediction Service HTTP Client

aiohttp adapter for the remote prediction service. Payloads are validated
into schema objects here and every timestamp is converted to epoch
nanoseconds, so nothing past this module needs to know the service's
timestamp unit.
"""

import asyncio
import logging
from typing import Any, Optional, Type, TypeVar

import aiohttp
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from signaldeck.core.config import Settings, get_settings
from signaldeck.schemas.market import (
    HealthStatus,
    HistoryRecord,
    IndicatorSet,
    Prediction,
    PricePoint,
    TimestampUnit,
)
from signaldeck.services.base import ExternalAPIError, ValidationError
from signaldeck.services.prediction_client.interface import PredictionServiceInterface

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SERVICE_NAME = "PredictionService"


# =============================================================================
# PAYLOAD PARSING
# =============================================================================


def _parse(model: Type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        logger.error(f"Invalid {model.__name__} payload: {e}")
        raise ValidationError(
            SERVICE_NAME,
            f"Invalid {model.__name__} payload",
            {"errors": e.errors(include_url=False)},
        ) from e


def _parse_list(model: Type[ModelT], data: Any, unit: Optional[TimestampUnit] = None) -> list[ModelT]:
    if not isinstance(data, list):
        raise ValidationError(
            SERVICE_NAME,
            f"Expected a list of {model.__name__}, got {type(data).__name__}",
        )
    if unit is not None:
        data = [_with_nanoseconds(item, unit) for item in data]
    return [_parse(model, item) for item in data]


def _with_nanoseconds(item: Any, unit: TimestampUnit) -> Any:
    """Copy of a payload dict with its timestamp converted to nanoseconds."""
    if not isinstance(item, dict) or "timestamp" not in item:
        return item  # left for schema validation to reject
    timestamp = item["timestamp"]
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float, str)):
        return item
    try:
        converted = unit.to_nanoseconds(int(timestamp))
    except (ValueError, OverflowError):
        return item
    return {**item, "timestamp": converted}


def parse_prediction(data: Any) -> Prediction:
    return _parse(Prediction, data)


def parse_indicators(data: Any) -> IndicatorSet:
    return _parse(IndicatorSet, data)


def parse_health(data: Any) -> HealthStatus:
    return _parse(HealthStatus, data)


def parse_price_history(data: Any, unit: TimestampUnit) -> list[PricePoint]:
    return _parse_list(PricePoint, data, unit)


def parse_prediction_history(data: Any, unit: TimestampUnit) -> list[HistoryRecord]:
    return _parse_list(HistoryRecord, data, unit)


def parse_symbols(data: Any) -> list[str]:
    if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
        raise ValidationError(SERVICE_NAME, "Expected a list of symbol strings")
    return data


# =============================================================================
# CLIENT
# =============================================================================


class PredictionServiceClient(PredictionServiceInterface):
    """
    HTTP client for the remote prediction service.

    Endpoints:
        POST   /predict      {symbol, timeframe}
        GET    /indicators   ?symbol&timeframe
        GET    /prices       ?symbol&timeframe
        GET    /health
        GET    /history
        DELETE /history
        GET    /symbols
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        timestamp_unit: TimestampUnit = TimestampUnit.NANOSECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.timestamp_unit = timestamp_unit
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"Accept": "application/json"},
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        payload: Optional[dict] = None,
    ) -> Any:
        session = await self._ensure_session()
        url = f"{self.base_url}{path}"

        try:
            async with session.request(method, url, params=params, json=payload) as response:
                if response.status >= 400:
                    body = await response.text()
                    logger.warning(f"{method} {path} returned status {response.status}")
                    raise ExternalAPIError(
                        self.name,
                        f"{method} {path} returned status {response.status}",
                        {"status": response.status, "body": body[:500]},
                    )
                if response.status == 204:
                    return None
                return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ExternalAPIError(self.name, f"{method} {path} failed: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"{method} {path} timed out after {self.timeout}s")
            raise ExternalAPIError(self.name, f"{method} {path} timed out") from e

    async def predict(self, symbol: str, timeframe: str) -> Prediction:
        data = await self._request(
            "POST", "/predict", payload={"symbol": symbol, "timeframe": timeframe}
        )
        return parse_prediction(data)

    async def get_indicators(self, symbol: str, timeframe: str) -> IndicatorSet:
        data = await self._request(
            "GET", "/indicators", params={"symbol": symbol, "timeframe": timeframe}
        )
        return parse_indicators(data)

    async def get_price_history(self, symbol: str, timeframe: str) -> list[PricePoint]:
        data = await self._request(
            "GET", "/prices", params={"symbol": symbol, "timeframe": timeframe}
        )
        return parse_price_history(data, self.timestamp_unit)

    async def get_health(self) -> HealthStatus:
        return parse_health(await self._request("GET", "/health"))

    async def get_prediction_history(self) -> list[HistoryRecord]:
        data = await self._request("GET", "/history")
        return parse_prediction_history(data, self.timestamp_unit)

    async def clear_history(self) -> None:
        await self._request("DELETE", "/history")

    async def get_supported_symbols(self) -> list[str]:
        return parse_symbols(await self._request("GET", "/symbols"))


# Singleton instance
_client_instance: Optional[PredictionServiceClient] = None


def get_prediction_client(settings: Optional[Settings] = None) -> PredictionServiceClient:
    """Get or create the prediction service client."""
    global _client_instance
    if _client_instance is None:
        settings = settings or get_settings()
        _client_instance = PredictionServiceClient(
            base_url=settings.prediction_service_url,
            timeout=settings.prediction_service_timeout,
            timestamp_unit=TimestampUnit(settings.service_timestamp_unit),
        )
    return _client_instance


async def close_prediction_client() -> None:
    global _client_instance
    if _client_instance is not None:
        await _client_instance.close()
        _client_instance = None
