"""
Result Assembly

Composes classification, normalization and formatting into the views the
rendering layer consumes. Output depends only on the input payloads
(and `now` for history timestamps), so equal inputs give equal views.
"""

from datetime import tzinfo
from typing import Iterable, Optional, Sequence

from signaldeck.schemas.display import (
    AnalysisView,
    ChartView,
    DisplayRecord,
    HealthView,
    HistoryRow,
    MiniStat,
    Polarity,
    PredictionView,
    SentimentGauge,
    SentimentScale,
    StatusLevel,
)
from signaldeck.schemas.market import (
    HealthStatus,
    HistoryRecord,
    IndicatorSet,
    Prediction,
    PricePoint,
)
from signaldeck.services.presentation.classification import (
    classify_confidence,
    classify_ema_cross,
    classify_ema_vs_sma,
    classify_macd,
    classify_momentum,
    classify_rsi,
    classify_sentiment,
    classify_signal,
    classify_volatility,
    RSI_OVERBOUGHT,
    RSI_OVERSOLD,
    SENTIMENT_BEARISH,
    SENTIMENT_BULLISH,
    VOLATILITY_HIGH,
)
from signaldeck.services.presentation.formatting import (
    format_confidence,
    format_currency,
    format_fixed,
    format_percent,
    format_relative_time,
    format_signed,
)
from signaldeck.services.presentation.normalization import (
    clamp_sentiment,
    confidence_percent,
    label_polarity,
    price_polarity,
    rsi_polarity,
    sentiment_fill,
    sentiment_position,
    status_polarity,
    to_signed_sentiment,
    zero_cross_polarity,
)
from signaldeck.services.presentation.series import ChartSeries, reduce_series


INDICATOR_ORDER = ("RSI", "MACD", "SMA", "EMA", "Volatility", "Momentum", "Sentiment")
DEFAULT_HISTORY_LIMIT = 10


def _record(
    label: str,
    value: str,
    status: StatusLevel,
    description: Optional[str] = None,
    unit: Optional[str] = None,
    polarity: Optional[Polarity] = None,
) -> DisplayRecord:
    return DisplayRecord(
        label=label,
        formatted_value=value,
        unit=unit,
        status=status,
        status_label=status.label,
        description=description,
        polarity=polarity if polarity is not None else status_polarity(status),
    )


# =============================================================================
# INDICATOR CARDS
# =============================================================================


def assemble_indicators(indicators: IndicatorSet) -> list[DisplayRecord]:
    """One card per indicator, always in INDICATOR_ORDER."""
    rsi = indicators.rsi
    macd = indicators.macd
    sma = indicators.sma
    ema = indicators.ema
    volatility = indicators.volatility
    momentum = indicators.momentum
    sentiment = indicators.sentiment

    if rsi > RSI_OVERBOUGHT:
        rsi_text = "Overbought zone"
    elif rsi < RSI_OVERSOLD:
        rsi_text = "Oversold zone"
    else:
        rsi_text = "Neutral territory"

    if sentiment > SENTIMENT_BULLISH:
        sentiment_text = "Positive market mood"
    elif sentiment < SENTIMENT_BEARISH:
        sentiment_text = "Negative market mood"
    else:
        sentiment_text = "Mixed signals"

    return [
        _record(
            "RSI",
            format_fixed(rsi, 1),
            classify_rsi(rsi),
            rsi_text,
            polarity=rsi_polarity(rsi),
        ),
        _record(
            "MACD",
            format_signed(macd, 4),
            classify_macd(macd),
            "Bullish crossover" if macd > 0 else "Bearish crossover",
            polarity=zero_cross_polarity(macd),
        ),
        _record(
            "SMA",
            format_fixed(sma, 2),
            classify_ema_vs_sma(ema, sma),
            "EMA above SMA" if ema > sma else "EMA below SMA",
        ),
        _record(
            "EMA",
            format_fixed(ema, 2),
            classify_ema_cross(ema, sma),
            "Exponential moving avg",
        ),
        _record(
            "Volatility",
            format_fixed(volatility * 100, 2),
            classify_volatility(volatility),
            "High volatility" if volatility > VOLATILITY_HIGH else "Low volatility",
            unit="%",
            polarity=Polarity.INDETERMINATE,
        ),
        _record(
            "Momentum",
            format_signed(momentum, 3),
            classify_momentum(momentum),
            "Positive momentum" if momentum > 0 else "Negative momentum",
            polarity=zero_cross_polarity(momentum),
        ),
        _record(
            "Sentiment",
            format_fixed(sentiment * 100, 0),
            classify_sentiment(sentiment),
            sentiment_text,
            unit="%",
        ),
    ]


# =============================================================================
# PREDICTION CARD
# =============================================================================


def assemble_prediction(prediction: Prediction) -> PredictionView:
    percent = confidence_percent(prediction.confidence)

    formatted_change = None
    change_polarity = Polarity.INDETERMINATE
    if prediction.predicted_change_percent is not None:
        formatted_change = format_percent(prediction.predicted_change_percent)
        change_polarity = zero_cross_polarity(prediction.predicted_change_percent)

    formatted_price = None
    price_dot = Polarity.INDETERMINATE
    if prediction.current_price is not None:
        formatted_price = format_currency(prediction.current_price)
        price_dot = price_polarity(prediction.current_price, prediction.sma)

    return PredictionView(
        symbol=prediction.symbol,
        timeframe=prediction.timeframe,
        signal=prediction.signal.strip().upper(),
        status=classify_signal(prediction.signal),
        formatted_score=format_signed(prediction.score, 4),
        score_polarity=zero_cross_polarity(prediction.score),
        confidence_text=format_confidence(prediction.confidence),
        confidence_percent=percent,
        confidence_band=classify_confidence(percent),
        formatted_price=formatted_price,
        price_polarity=price_dot,
        formatted_change=formatted_change,
        change_polarity=change_polarity,
        mini_stats=[
            MiniStat(label="EMA", value=format_fixed(prediction.ema, 2)),
            MiniStat(label="SMA", value=format_fixed(prediction.sma, 2)),
            MiniStat(label="RSI", value=format_fixed(prediction.rsi, 1)),
        ],
    )


# =============================================================================
# SENTIMENT GAUGE
# =============================================================================


def assemble_sentiment(
    score: float,
    scale: SentimentScale = SentimentScale.SIGNED,
    label: Optional[str] = None,
) -> SentimentGauge:
    """
    Sentiment bar for a score on either scale.

    With a label from the service the marker color follows the label;
    without one it follows the 0..1 sentiment classification.
    """
    signed = to_signed_sentiment(score, scale)
    clamped = clamp_sentiment(signed)
    side, width = sentiment_fill(clamped)

    if label is not None:
        polarity = label_polarity(label)
    else:
        polarity = status_polarity(classify_sentiment((clamped + 1) / 2))

    return SentimentGauge(
        score=signed,
        clamped=clamped,
        formatted_score=format_fixed(clamped, 3),
        position=sentiment_position(clamped),
        fill_side=side,
        fill_width=width,
        polarity=polarity,
        label=label.strip().upper() if label else None,
    )


# =============================================================================
# PRICE CHART
# =============================================================================


def assemble_chart(points: Sequence[PricePoint], symbol: Optional[str] = None) -> ChartView:
    stats = reduce_series(points)
    if stats is None:
        return ChartView(symbol=symbol, is_empty=True, point_count=0)

    if stats.count < 2:
        trend = Polarity.INDETERMINATE
    else:
        trend = zero_cross_polarity(stats.change_percent)

    return ChartView(
        symbol=symbol,
        is_empty=False,
        point_count=stats.count,
        stats=stats,
        points=list(ChartSeries(points)),
        formatted_low=format_currency(stats.min_price),
        formatted_high=format_currency(stats.max_price),
        formatted_last=format_currency(stats.last),
        formatted_change=format_percent(stats.change_percent),
        trend=trend,
    )


# =============================================================================
# HISTORY & HEALTH
# =============================================================================


def assemble_history(
    records: Iterable[HistoryRecord],
    now: Optional[int] = None,
    tz: Optional[tzinfo] = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> list[HistoryRow]:
    """Newest first, at most `limit` rows. `now` is epoch milliseconds."""
    newest = sorted(records, key=lambda r: r.timestamp, reverse=True)[: max(limit, 0)]
    return [
        HistoryRow(
            id=record.id,
            symbol=record.symbol,
            timeframe=record.timeframe,
            signal=record.signal.strip().upper(),
            status=classify_signal(record.signal),
            formatted_change=format_percent(record.predicted_change_percent),
            change_polarity=zero_cross_polarity(record.predicted_change_percent),
            formatted_confidence=format_confidence(record.confidence),
            formatted_time=format_relative_time(record.timestamp, now=now, tz=tz),
            timestamp=record.timestamp,
        )
        for record in newest
    ]


def assemble_health(health: Optional[HealthStatus]) -> HealthView:
    if health is None:
        return HealthView(online=False, status="OFFLINE")
    return HealthView(
        online=True,
        status=health.status.upper(),
        version=f"v{health.version}",
        total_predictions=health.total_predictions,
    )


# =============================================================================
# FULL ANALYSIS
# =============================================================================


def assemble_analysis(
    symbol: str,
    timeframe: str,
    prediction: Prediction,
    indicators: IndicatorSet,
    prices: Sequence[PricePoint],
) -> AnalysisView:
    return AnalysisView(
        symbol=symbol,
        timeframe=timeframe,
        prediction=assemble_prediction(prediction),
        indicators=assemble_indicators(indicators),
        sentiment=assemble_sentiment(
            indicators.sentiment,
            SentimentScale.UNIT,
            prediction.sentiment_label,
        ),
        chart=assemble_chart(prices, symbol=symbol),
    )
