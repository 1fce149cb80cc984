import pytest
from pydantic import ValidationError as PydanticValidationError

from signaldeck.schemas.display import ConfidenceBand, Polarity, SentimentScale, StatusLevel
from signaldeck.schemas.market import HealthStatus, HistoryRecord, IndicatorSet, Prediction
from signaldeck.services.presentation.assembler import (
    INDICATOR_ORDER,
    assemble_analysis,
    assemble_chart,
    assemble_health,
    assemble_history,
    assemble_indicators,
    assemble_prediction,
    assemble_sentiment,
)
from tests.conftest import NOW_MS, make_history, make_points


def test_indicator_records_end_to_end(indicator_set: IndicatorSet) -> None:
    records = assemble_indicators(indicator_set)

    assert [r.label for r in records] == list(INDICATOR_ORDER)
    assert [r.status for r in records] == [
        StatusLevel.OVERBOUGHT,  # RSI 72
        StatusLevel.BULLISH,  # MACD 0.8
        StatusLevel.BULLISH,  # EMA 102 > SMA 100 * 1.01
        StatusLevel.BULLISH,  # EMA above SMA
        StatusLevel.BULLISH,  # volatility 1%
        StatusLevel.BULLISH,  # momentum 0.6
        StatusLevel.BULLISH,  # sentiment 0.75
    ]


def test_indicator_record_text(indicator_set: IndicatorSet) -> None:
    records = {r.label: r for r in assemble_indicators(indicator_set)}

    assert records["RSI"].formatted_value == "72.0"
    assert records["RSI"].description == "Overbought zone"
    assert records["RSI"].status_label == "Overbought"
    assert records["MACD"].formatted_value == "+0.8000"
    assert records["MACD"].description == "Bullish crossover"
    assert records["SMA"].formatted_value == "100.00"
    assert records["SMA"].description == "EMA above SMA"
    assert records["EMA"].formatted_value == "102.00"
    assert records["Volatility"].formatted_value == "1.00"
    assert records["Volatility"].unit == "%"
    assert records["Volatility"].description == "Low volatility"
    assert records["Momentum"].formatted_value == "+0.600"
    assert records["Sentiment"].formatted_value == "75"
    assert records["Sentiment"].unit == "%"
    assert records["Sentiment"].description == "Positive market mood"


def test_indicator_record_polarity(indicator_set: IndicatorSet) -> None:
    records = {r.label: r for r in assemble_indicators(indicator_set)}

    assert records["RSI"].polarity == Polarity.NEGATIVE
    assert records["MACD"].polarity == Polarity.POSITIVE
    assert records["Volatility"].polarity == Polarity.INDETERMINATE
    assert records["Sentiment"].polarity == Polarity.POSITIVE


def test_indicator_order_ignores_payload_key_order() -> None:
    payload = {
        "sentiment": 0.2,
        "momentum": -0.7,
        "volatility": 0.08,
        "ema": 95,
        "sma": 100,
        "macd": -0.9,
        "rsi": 20,
    }
    records = assemble_indicators(IndicatorSet.model_validate(payload))

    assert [r.label for r in records] == list(INDICATOR_ORDER)
    assert [r.status for r in records] == [
        StatusLevel.OVERSOLD,
        StatusLevel.BEARISH,
        StatusLevel.BEARISH,
        StatusLevel.BEARISH,
        StatusLevel.BEARISH,
        StatusLevel.BEARISH,
        StatusLevel.BEARISH,
    ]
    assert records[1].formatted_value == "-0.9000"
    assert records[5].formatted_value == "-0.700"
    assert records[6].description == "Negative market mood"


def test_assembly_is_deterministic(indicator_set: IndicatorSet) -> None:
    assert assemble_indicators(indicator_set) == assemble_indicators(indicator_set)


def test_prediction_view(prediction: Prediction) -> None:
    view = assemble_prediction(prediction)

    assert view.signal == "BULLISH"
    assert view.status == StatusLevel.BULLISH
    assert view.formatted_score == "+0.1234"
    assert view.score_polarity == Polarity.POSITIVE
    assert view.confidence_text == "82%"
    assert view.confidence_percent == 82
    assert view.confidence_band == ConfidenceBand.HIGH
    assert view.formatted_price is None
    assert view.formatted_change is None
    assert view.change_polarity == Polarity.INDETERMINATE
    assert [(s.label, s.value) for s in view.mini_stats] == [
        ("EMA", "102.00"),
        ("SMA", "100.00"),
        ("RSI", "72.0"),
    ]


def test_prediction_view_from_service_payload() -> None:
    prediction = Prediction.model_validate(
        {
            "prediction": -0.5,
            "signal": "Bearish",
            "confidence": 1.3,
            "ema": 1.0,
            "sma": 1.0,
            "rsi": 50,
            "currentPrice": 43250.5,
            "predictedChangePercent": -1.2,
            "sentimentLabel": "bearish",
        }
    )
    view = assemble_prediction(prediction)

    assert view.status == StatusLevel.BEARISH
    assert view.formatted_score == "-0.5000"
    assert view.confidence_text == "100%"
    assert view.confidence_percent == 100
    assert view.formatted_price == "$43250.50"
    assert view.formatted_change == "-1.20%"
    assert view.change_polarity == Polarity.NEGATIVE


def test_low_confidence_band(prediction: Prediction) -> None:
    view = assemble_prediction(prediction.model_copy(update={"confidence": 0.2}))
    assert view.confidence_band == ConfidenceBand.LOW


def test_sentiment_gauge_from_unit_scale() -> None:
    gauge = assemble_sentiment(0.75, SentimentScale.UNIT)

    assert gauge.score == pytest.approx(0.5)
    assert gauge.position == pytest.approx(75.0)
    assert gauge.fill_side == "right"
    assert gauge.fill_width == pytest.approx(25.0)
    assert gauge.formatted_score == "0.500"
    assert gauge.polarity == Polarity.POSITIVE
    assert gauge.label is None


def test_sentiment_gauge_clamps_out_of_range() -> None:
    gauge = assemble_sentiment(3.0)

    assert gauge.score == 3.0
    assert gauge.clamped == 1.0
    assert gauge.position == 100.0


def test_sentiment_gauge_label_drives_polarity() -> None:
    assert assemble_sentiment(0.9, label="neutral").polarity == Polarity.INDETERMINATE
    assert assemble_sentiment(-0.4, label="Bearish").polarity == Polarity.NEGATIVE
    assert assemble_sentiment(-0.4, label="Bearish").label == "BEARISH"
    assert assemble_sentiment(-0.4, label="Bearish").fill_side == "left"


def test_chart_view() -> None:
    chart = assemble_chart(make_points([100, 110, 90, 105]), symbol="AAPL")

    assert not chart.is_empty
    assert chart.point_count == 4
    assert chart.formatted_low == "$90.0000"
    assert chart.formatted_high == "$110.0000"
    assert chart.formatted_last == "$105.0000"
    assert chart.formatted_change == "+5.00%"
    assert chart.trend == Polarity.POSITIVE
    assert [p.label for p in chart.points] == ["T-3", "T-2", "T-1", "Now"]


def test_empty_chart_view() -> None:
    chart = assemble_chart([])

    assert chart.is_empty
    assert chart.stats is None
    assert chart.points == []
    assert chart.formatted_low is None


def test_single_point_chart_has_no_trend() -> None:
    assert assemble_chart(make_points([5.0])).trend == Polarity.INDETERMINATE


def test_history_rows_newest_first_and_limited() -> None:
    records = make_history(12)
    rows = assemble_history(list(reversed(records)), now=NOW_MS)

    assert len(rows) == 10
    assert [r.id for r in rows] == list(range(10))
    assert rows[0].formatted_time == "just now"
    assert rows[1].formatted_time == "1m ago"
    assert rows[1].signal == "BULLISH"
    assert rows[1].formatted_change == "+2.50%"
    assert rows[1].change_polarity == Polarity.POSITIVE
    assert rows[0].formatted_change == "-1.25%"
    assert rows[0].status == StatusLevel.BEARISH
    assert rows[0].formatted_confidence == "90%"


def test_history_limit() -> None:
    assert len(assemble_history(make_history(5), now=NOW_MS, limit=3)) == 3
    assert assemble_history(make_history(5), now=NOW_MS, limit=0) == []
    assert assemble_history([], now=NOW_MS) == []


def test_health_view() -> None:
    offline = assemble_health(None)
    assert not offline.online
    assert offline.status == "OFFLINE"

    online = assemble_health(HealthStatus(status="ok", total_predictions=12, version="2.0"))
    assert online.online
    assert online.status == "OK"
    assert online.version == "v2.0"
    assert online.total_predictions == 12


def test_analysis_view(indicator_set: IndicatorSet, prediction: Prediction) -> None:
    view = assemble_analysis(
        "BTC/USDT", "1h", prediction, indicator_set, make_points([1.0, 2.0])
    )

    assert view.symbol == "BTC/USDT"
    assert view.timeframe == "1h"
    assert len(view.indicators) == 7
    assert view.sentiment.position == pytest.approx(75.0)
    assert view.chart.symbol == "BTC/USDT"
    assert view.chart.formatted_change == "+100.00%"


def test_price_dot_compares_current_price_with_sma(prediction: Prediction) -> None:
    above = assemble_prediction(prediction.model_copy(update={"current_price": 101.0}))
    below = assemble_prediction(prediction.model_copy(update={"current_price": 99.0}))

    assert above.price_polarity == Polarity.POSITIVE
    assert below.price_polarity == Polarity.NEGATIVE
    assert assemble_prediction(prediction).price_polarity == Polarity.INDETERMINATE


def test_history_record_rejects_negative_timestamp() -> None:
    with pytest.raises(PydanticValidationError):
        HistoryRecord(
            id=1,
            symbol="AAPL",
            timeframe="1d",
            signal="bullish",
            predicted_change_percent=1.0,
            confidence=0.5,
            timestamp=-(10**30),
        )
