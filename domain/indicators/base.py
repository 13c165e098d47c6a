"""Base types for technical indicators."""

from typing import Sequence

# None marks a warm-up entry: not enough history for a value yet.
# Renderers skip it; it is never a stand-in for 0.
IndicatorValue = float | None

Numbers = Sequence[float]


def undefined(n: int) -> list[IndicatorValue]:
    """All-undefined series of length n."""
    return [None] * n
