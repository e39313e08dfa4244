"""
Sample tick sources for demos and tests
"""
from typing import List, Optional

import numpy as np

from .data_normalizer import Tick


def demo_ticks() -> List[Tick]:
    """Eight-tick reference session spanning three 10-second windows."""
    return [
        Tick(1000, 100.0, 10),
        Tick(2000, 101.5, 5),
        Tick(8000, 99.5, 20),
        Tick(10000, 102.0, 15),
        Tick(11000, 102.5, 8),
        Tick(14000, 101.0, 30),
        Tick(19000, 103.0, 10),
        Tick(22000, 102.8, 40),
    ]


def generate_sample_ticks(
    n: int,
    start_timestamp: int = 0,
    start_price: float = 100.0,
    mean_gap_ms: float = 250.0,
    volatility: float = 0.001,
    mean_volume: float = 10.0,
    seed: Optional[int] = None,
) -> List[Tick]:
    """
    Generate a synthetic tick stream as a geometric random walk.

    Args:
        n: Number of ticks
        start_timestamp: Timestamp of the first tick (ms)
        start_price: Price of the first tick
        mean_gap_ms: Mean of the exponential inter-arrival time
        volatility: Per-tick standard deviation of log returns
        mean_volume: Mean of the Poisson trade size (shifted so every size >= 1)
        seed: Seed for reproducible output

    Returns:
        Chronologically ordered ticks with strictly increasing timestamps
    """
    if n <= 0:
        return []

    rng = np.random.default_rng(seed)

    gaps = np.floor(rng.exponential(mean_gap_ms, size=n - 1)).astype(np.int64) + 1
    timestamps = start_timestamp + np.concatenate(([0], np.cumsum(gaps)))

    returns = rng.normal(0.0, volatility, size=n - 1)
    prices = start_price * np.exp(np.concatenate(([0.0], np.cumsum(returns))))
    prices = np.round(prices, 2)

    volumes = rng.poisson(max(mean_volume - 1.0, 0.0), size=n) + 1

    return [
        Tick(timestamp=int(ts), price=float(price), volume=int(volume))
        for ts, price, volume in zip(timestamps, prices, volumes)
    ]
