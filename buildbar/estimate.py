"""Throughput and time remaining estimation from progress samples."""

import math
from dataclasses import dataclass

__all__ = [
    "SMOOTHING_FACTOR",
    "STRATEGIES",
    "EMARate",
    "LinearRate",
    "ProgressEstimator",
    "RateEstimationStrategy",
    "RenderState",
]

# Weight of the newest sample in the exponential moving average (0 < a < 1)
SMOOTHING_FACTOR = 0.5


@dataclass
class RenderState:
    """Estimator memory carried from one progress sample to the next."""

    previous_percent: int = 0
    previous_elapsed: float = 0.0
    smoothed_rate: float = 0.0


class RateEstimationStrategy:
    """Computes a progress rate in percent per second."""

    name = ""

    def rate(self, state: RenderState, percent: int, elapsed: float) -> float:
        raise NotImplementedError


class LinearRate(RateEstimationStrategy):
    """Average rate since the start of the stream."""

    name = "linear"

    def rate(self, state: RenderState, percent: int, elapsed: float) -> float:
        if elapsed <= 0:
            return math.inf
        return percent / elapsed


class EMARate(RateEstimationStrategy):
    """Exponential moving average of the rate between consecutive samples.

    m_e = a * m_t + (1 - a) * m_e, where m_t is the rate since the previous
    sample. A sample that repeats the previous percentage leaves the average
    unchanged.
    """

    name = "ema"

    def __init__(self, smoothing: float = SMOOTHING_FACTOR):
        if not 0 < smoothing < 1:
            raise ValueError(f"Smoothing factor must be between 0 and 1, got {smoothing}")
        self.smoothing = smoothing

    def rate(self, state: RenderState, percent: int, elapsed: float) -> float:
        if percent == state.previous_percent:
            return state.smoothed_rate
        dt = elapsed - state.previous_elapsed
        if dt <= 0:
            return state.smoothed_rate
        instant = (percent - state.previous_percent) / dt
        a = self.smoothing
        state.smoothed_rate = a * instant + (1 - a) * state.smoothed_rate
        return state.smoothed_rate


STRATEGIES: dict[str, type[RateEstimationStrategy]] = {
    LinearRate.name: LinearRate,
    EMARate.name: EMARate,
}


class ProgressEstimator:
    """Turns (percent, elapsed) samples into a rate and time remaining.

    Owns the RenderState for a single stream. Every call to estimate() records
    the sample as the new previous one, whatever the outcome.
    """

    def __init__(self, strategy: RateEstimationStrategy | str | None = None):
        if strategy is None:
            strategy = LinearRate()
        elif isinstance(strategy, str):
            try:
                strategy = STRATEGIES[strategy]()
            except KeyError:
                raise ValueError(f"Unknown estimation strategy: {strategy}") from None
        self.strategy = strategy
        self.state = RenderState()

    def estimate(self, percent: int, elapsed: float) -> tuple[float, float | None]:
        """Return (rate, remaining seconds or None when no sensible estimate exists)."""
        rate = self.strategy.rate(self.state, percent, elapsed)
        remaining = None
        if math.isfinite(rate) and rate > 0:
            eta = 100 / rate - elapsed
            if eta > 0:
                remaining = eta
        self.state.previous_percent = percent
        self.state.previous_elapsed = elapsed
        return rate, remaining
