"""
Price Series Reduction

Summary statistics and chart points for an ordered price history
(chronological, oldest first). Uses NumPy for the reductions.

An empty history reduces to None rather than raising; callers render
their empty state from that.
"""

from typing import Iterator, Optional, Sequence

import numpy as np

from signaldeck.schemas.display import ChartPoint, SeriesStats
from signaldeck.schemas.market import PricePoint


AXIS_PADDING_RATIO = 0.12
# Zero-spread series still get a visible axis: 0.5% of the price level.
MIN_PADDING_RATIO = 0.005
ZERO_LEVEL_PADDING = 1.0

NOW_LABEL = "Now"


def _prices(points: Sequence[PricePoint]) -> np.ndarray:
    return np.array([p.price for p in points], dtype=float)


def axis_padding(min_price: float, max_price: float) -> float:
    """Padding added above and below the price range on the chart axis."""
    spread = max_price - min_price
    if spread > 0:
        return spread * AXIS_PADDING_RATIO
    level = max(abs(min_price), abs(max_price))
    if level == 0:
        return ZERO_LEVEL_PADDING
    return level * MIN_PADDING_RATIO


def percent_change(first: float, last: float, count: int) -> float:
    """(last - first) / first * 100; 0.0 for fewer than 2 points or a zero first price."""
    if count < 2 or first == 0:
        return 0.0
    return (last - first) / first * 100


def reduce_series(points: Sequence[PricePoint]) -> Optional[SeriesStats]:
    """Reduce a price history to its statistics, or None when it is empty."""
    if not points:
        return None

    prices = _prices(points)
    min_price = float(np.min(prices))
    max_price = float(np.max(prices))
    first = float(prices[0])
    last = float(prices[-1])
    padding = axis_padding(min_price, max_price)

    return SeriesStats(
        count=len(prices),
        first=first,
        last=last,
        min_price=min_price,
        max_price=max_price,
        padding=padding,
        lower_bound=min_price - padding,
        upper_bound=max_price + padding,
        change_percent=percent_change(first, last, len(prices)),
    )


def point_label(index: int, count: int) -> str:
    """'Now' for the most recent point, 'T-n' for n steps before it."""
    offset = count - 1 - index
    return NOW_LABEL if offset == 0 else f"T-{offset}"


class ChartSeries:
    """
    Lazy chart points for a price history.

    Iterating builds ChartPoints on demand; every iteration starts over
    from the oldest point.
    """

    def __init__(self, points: Sequence[PricePoint]):
        self._points = tuple(points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[ChartPoint]:
        count = len(self._points)
        for index, point in enumerate(self._points):
            yield ChartPoint(
                label=point_label(index, count),
                price=point.price,
                index=index,
            )
