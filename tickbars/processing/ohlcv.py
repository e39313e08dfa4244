"""
OHLCV bar data structure and the per-tick accumulation step
"""
from dataclasses import dataclass
from typing import Dict, Any, Optional

from ..ingestion.data_normalizer import Tick


@dataclass(frozen=True)
class OHLCVBar:
    """
    OHLCV (Open, High, Low, Close, Volume) bar representation.
    """
    open_timestamp: int  # Bucket start for time bars, first tick otherwise
    open: float
    high: float
    low: float
    close: float
    total_volume: int
    tick_count: int = 0
    vwap: float = 0.0  # Volume-weighted average price

    def to_dict(self) -> Dict[str, Any]:
        """Convert bar to dictionary for DataFrame creation."""
        return {
            "open_timestamp": self.open_timestamp,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "total_volume": self.total_volume,
            "tick_count": self.tick_count,
            "vwap": self.vwap,
        }


@dataclass
class BarBuilder:
    """
    Accumulates ticks and builds OHLCV bars.

    Every resample mode folds ticks through ``add_tick``; the modes differ
    only in when they call ``build`` and ``reset``.
    """
    bar_start: Optional[int] = None
    open: float = 0.0
    high: float = 0.0
    low: float = float("inf")
    close: float = 0.0
    volume: int = 0
    dollar_value: float = 0.0  # Sum of price * volume
    tick_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.tick_count == 0

    def add_tick(self, tick: Tick) -> None:
        """Add a tick to the current bar."""
        if self.tick_count == 0:
            self.bar_start = tick.timestamp
            self.open = tick.price
            self.high = tick.price
            self.low = tick.price

        self.high = max(self.high, tick.price)
        self.low = min(self.low, tick.price)
        self.close = tick.price
        self.volume += tick.volume
        self.dollar_value += tick.price * tick.volume
        self.tick_count += 1

    def build(self, bar_timestamp: Optional[int] = None) -> Optional[OHLCVBar]:
        """
        Build the OHLCV bar from accumulated ticks.

        Args:
            bar_timestamp: Bar open timestamp; defaults to the first tick's

        Returns:
            OHLCVBar or None if no ticks accumulated
        """
        if self.tick_count == 0:
            return None

        vwap = self.dollar_value / self.volume if self.volume > 0 else self.close

        return OHLCVBar(
            open_timestamp=self.bar_start if bar_timestamp is None else bar_timestamp,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            total_volume=self.volume,
            tick_count=self.tick_count,
            vwap=vwap,
        )

    def reset(self) -> None:
        """Reset the bar builder for a new bar."""
        self.bar_start = None
        self.open = 0.0
        self.high = 0.0
        self.low = float("inf")
        self.close = 0.0
        self.volume = 0
        self.dollar_value = 0.0
        self.tick_count = 0
