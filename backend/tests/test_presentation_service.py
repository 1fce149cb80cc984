import asyncio

import pytest

from signaldeck.schemas.display import Polarity, StatusLevel
from signaldeck.schemas.market import AnalysisRequest
from signaldeck.services.base import ExternalAPIError
from signaldeck.services.presentation import PresentationService
from tests.conftest import NOW_MS, FakePredictionClient


def test_execute_assembles_full_analysis(fake_client, settings) -> None:
    service = PresentationService(fake_client, settings)
    request = AnalysisRequest(symbol="btc/usdt", timeframe="1h")

    view = asyncio.run(service.execute(request))

    assert view.symbol == "BTC/USDT"
    assert view.prediction.status == StatusLevel.BEARISH
    assert view.prediction.formatted_price == "$99.5000"
    assert view.prediction.formatted_change == "-1.20%"
    assert view.prediction.confidence_text == "35%"
    assert [r.label for r in view.indicators][0] == "RSI"
    assert view.sentiment.polarity == Polarity.NEGATIVE  # service label wins
    assert view.chart.formatted_change == "+5.00%"
    assert sorted(call[0] for call in fake_client.calls) == [
        "get_indicators",
        "get_price_history",
        "predict",
    ]


def test_execute_propagates_service_failure(settings) -> None:
    service = PresentationService(FakePredictionClient(fail=True), settings)

    with pytest.raises(ExternalAPIError):
        asyncio.run(service.execute(AnalysisRequest(symbol="AAPL", timeframe="1d")))


def test_indicator_cards(fake_client, settings) -> None:
    service = PresentationService(fake_client, settings)

    cards = asyncio.run(service.indicator_cards(AnalysisRequest(symbol="AAPL", timeframe="1d")))

    assert len(cards) == 7
    assert fake_client.calls == [("get_indicators", "AAPL", "1d")]


def test_history_limit_comes_from_settings(fake_client, settings) -> None:
    service = PresentationService(fake_client, settings)

    rows = asyncio.run(service.history(now=NOW_MS))

    assert [r.id for r in rows] == [0, 1, 2]
    assert rows[0].formatted_time == "just now"


def test_clear_history(fake_client, settings) -> None:
    service = PresentationService(fake_client, settings)

    asyncio.run(service.clear_history())

    assert fake_client.cleared
    assert asyncio.run(service.history(now=NOW_MS)) == []


def test_service_health_online(fake_client, settings) -> None:
    health = asyncio.run(PresentationService(fake_client, settings).service_health())

    assert health.online
    assert health.version == "v2.0"
    assert health.total_predictions == 42


def test_service_health_offline_when_unreachable(settings) -> None:
    service = PresentationService(FakePredictionClient(fail=True), settings)

    health = asyncio.run(service.service_health())

    assert not health.online
    assert health.status == "OFFLINE"


def test_supported_symbols_fall_back_to_settings(settings) -> None:
    online = PresentationService(FakePredictionClient(), settings)
    offline = PresentationService(FakePredictionClient(fail=True), settings)

    assert asyncio.run(online.supported_symbols()) == ["BTC/USDT", "AAPL"]
    assert asyncio.run(offline.supported_symbols()) == settings.quick_symbols


def test_health_check(fake_client, settings) -> None:
    service = PresentationService(fake_client, settings)

    assert service.name == "PresentationService"
    assert asyncio.run(service.health_check()) is True
