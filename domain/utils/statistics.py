import statistics
from collections.abc import Iterable


def median(values: Iterable[float]) -> float:
    """Median of a non-empty sequence of prices.

    Odd-length input returns the middle element, even-length input the mean of
    the two middle elements.
    """
    prices = [float(v) for v in values]
    if not prices:
        raise ValueError("median() requires at least one value")
    return statistics.median(prices)
