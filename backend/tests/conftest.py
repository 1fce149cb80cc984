from __future__ import annotations

from typing import Sequence

import pytest

from signaldeck.core.config import Settings
from signaldeck.schemas.market import (
    HealthStatus,
    HistoryRecord,
    IndicatorSet,
    Prediction,
    PricePoint,
)
from signaldeck.services.base import ExternalAPIError
from signaldeck.services.prediction_client import PredictionServiceInterface

NOW_MS = 1_700_000_000_000  # 2023-11-14 22:13:20 UTC


def ns_ago(ms: int) -> int:
    return (NOW_MS - ms) * 1_000_000


def make_points(prices: Sequence[float]) -> list[PricePoint]:
    base = NOW_MS * 1_000_000
    step = 60_000 * 1_000_000
    count = len(prices)
    return [
        PricePoint(timestamp=base - (count - 1 - i) * step, price=price, volume=10.0)
        for i, price in enumerate(prices)
    ]


def make_history(count: int) -> list[HistoryRecord]:
    # ids ascend with age so "newest first" reverses them
    return [
        HistoryRecord(
            id=i,
            symbol="BTC/USDT",
            timeframe="1h",
            signal="bullish" if i % 2 else "bearish",
            predicted_change_percent=2.5 if i % 2 else -1.25,
            confidence=0.9,
            timestamp=ns_ago(i * 90_000),
        )
        for i in range(count)
    ]


@pytest.fixture
def indicator_set() -> IndicatorSet:
    return IndicatorSet(
        rsi=72,
        macd=0.8,
        sma=100,
        ema=102,
        volatility=0.01,
        momentum=0.6,
        sentiment=0.75,
    )


@pytest.fixture
def prediction() -> Prediction:
    return Prediction(
        score=0.12344,
        signal="bullish",
        confidence=0.82,
        ema=102,
        sma=100,
        rsi=72,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, history_display_limit=3, display_timezone="UTC")


class FakePredictionClient(PredictionServiceInterface):
    """In-memory stand-in for the remote prediction service."""

    def __init__(self, fail: bool = False, history_size: int = 5):
        self.fail = fail
        self.calls: list[tuple] = []
        self.history = make_history(history_size)
        self.cleared = False

    def _check(self, call: tuple) -> None:
        self.calls.append(call)
        if self.fail:
            raise ExternalAPIError(self.name, f"{call[0]} unavailable")

    async def predict(self, symbol: str, timeframe: str) -> Prediction:
        self._check(("predict", symbol, timeframe))
        return Prediction(
            score=-0.25,
            signal="Bearish",
            confidence=0.35,
            ema=98,
            sma=100,
            rsi=28,
            symbol=symbol,
            timeframe=timeframe,
            current_price=99.5,
            predicted_change_percent=-1.2,
            sentiment_label="bearish",
        )

    async def get_indicators(self, symbol: str, timeframe: str) -> IndicatorSet:
        self._check(("get_indicators", symbol, timeframe))
        return IndicatorSet(
            rsi=72, macd=0.8, sma=100, ema=102, volatility=0.01, momentum=0.6, sentiment=0.75
        )

    async def get_price_history(self, symbol: str, timeframe: str) -> list[PricePoint]:
        self._check(("get_price_history", symbol, timeframe))
        return make_points([100, 110, 90, 105])

    async def get_health(self) -> HealthStatus:
        self._check(("get_health",))
        return HealthStatus(status="ok", total_predictions=42, version="2.0")

    async def get_prediction_history(self) -> list[HistoryRecord]:
        self._check(("get_prediction_history",))
        return list(self.history)

    async def clear_history(self) -> None:
        self._check(("clear_history",))
        self.cleared = True
        self.history = []

    async def get_supported_symbols(self) -> list[str]:
        self._check(("get_supported_symbols",))
        return ["BTC/USDT", "AAPL"]


@pytest.fixture
def fake_client() -> FakePredictionClient:
    return FakePredictionClient()
