"""
Tick resampler for converting ticks to OHLCV bars
"""
import logging
import math
import numbers
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Union

import pandas as pd

from ..ingestion.data_normalizer import Tick
from .ohlcv import OHLCVBar, BarBuilder

logger = logging.getLogger(__name__)

BAR_COLUMNS = ["open", "high", "low", "close", "total_volume", "tick_count", "vwap"]


class InvalidConfiguration(ValueError):
    """Raised when a Resampler is constructed with an unusable mode or threshold."""


class ResampleMode(Enum):
    """Bar close policies."""
    TIME = "time"      # Fixed, epoch-aligned time window (ms)
    TICK = "tick"      # Fixed number of ticks
    VOLUME = "volume"  # Fixed cumulative volume
    DOLLAR = "dollar"  # Fixed cumulative price * volume


# Accumulated measure each threshold mode compares against its threshold
_BAR_MEASURES: Dict[ResampleMode, Callable[[BarBuilder], float]] = {
    ResampleMode.TICK: lambda builder: builder.tick_count,
    ResampleMode.VOLUME: lambda builder: builder.volume,
    ResampleMode.DOLLAR: lambda builder: builder.dollar_value,
}


class Resampler:
    """
    Resamples a chronological tick sequence into OHLCV bars.

    The configuration is fixed at construction and no state survives between
    ``resample`` calls, so one instance can be shared freely.

    Usage:
        resampler = Resampler(ResampleMode.VOLUME, 50)
        bars = resampler.resample(ticks)
    """

    def __init__(self, mode: Union[ResampleMode, str], threshold: float):
        """
        Initialize resampler.

        Args:
            mode: Close policy, or its string value ("time", "tick", ...)
            threshold: Positive bar size. Milliseconds for TIME, tick count
                for TICK, volume units for VOLUME, currency units for DOLLAR.

        Raises:
            InvalidConfiguration: If the mode is unknown or the threshold is
                not a positive finite number
        """
        try:
            mode = ResampleMode(mode)
        except ValueError:
            raise InvalidConfiguration(f"Unknown resample mode: {mode!r}") from None

        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
            raise InvalidConfiguration(f"Threshold must be a number, got {threshold!r}")
        if not math.isfinite(threshold) or threshold <= 0:
            raise InvalidConfiguration(f"Threshold must be positive, got {threshold!r}")

        self._mode = mode
        self._threshold = threshold

        logger.debug(f"Resampler initialized: mode={mode.value} threshold={threshold}")

    @property
    def mode(self) -> ResampleMode:
        return self._mode

    @property
    def threshold(self) -> float:
        return self._threshold

    def __repr__(self) -> str:
        return f"Resampler(mode={self._mode}, threshold={self._threshold!r})"

    def resample(self, ticks: Optional[Iterable[Tick]]) -> List[OHLCVBar]:
        """
        Resample ticks into bars.

        Args:
            ticks: Ticks sorted ascending by timestamp. None is treated as
                an empty sequence.

        Returns:
            Bars in chronological order. The last bar is flushed at end of
            input and may not have reached the threshold.
        """
        if ticks is None:
            return []

        if self._mode is ResampleMode.TIME:
            bars = self._resample_by_time(ticks)
        else:
            bars = self._resample_by_threshold(ticks, _BAR_MEASURES[self._mode])

        logger.debug(f"Resampled into {len(bars)} {self._mode.value} bars")
        return bars

    def _get_bucket_start(self, timestamp: int) -> float:
        """Floor a timestamp to its epoch-aligned window start."""
        return timestamp - timestamp % self._threshold

    @staticmethod
    def _bar_timestamp(bucket_start: float) -> int:
        # Float windows still stamp bars with integer milliseconds
        return math.floor(bucket_start)

    def _resample_by_time(self, ticks: Iterable[Tick]) -> List[OHLCVBar]:
        """
        Group ticks into tumbling windows of ``threshold`` milliseconds.

        A bar covers [bucket_start, bucket_start + threshold). Windows without
        ticks produce no bar.
        """
        bars = []
        builder = BarBuilder()
        bucket_start = None
        bucket_end = None

        for tick in ticks:
            if bucket_start is None or tick.timestamp >= bucket_end:
                if bucket_start is None and tick.timestamp < 0:
                    logger.warning(
                        f"Negative timestamp {tick.timestamp}: time buckets are floored "
                        f"towards negative infinity"
                    )
                if not builder.is_empty:
                    bars.append(builder.build(self._bar_timestamp(bucket_start)))
                    builder.reset()
                bucket_start = self._get_bucket_start(tick.timestamp)
                bucket_end = bucket_start + self._threshold

            builder.add_tick(tick)

        if not builder.is_empty:
            bars.append(builder.build(self._bar_timestamp(bucket_start)))
        return bars

    def _resample_by_threshold(
        self,
        ticks: Iterable[Tick],
        measure: Callable[[BarBuilder], float]
    ) -> List[OHLCVBar]:
        """
        Fold ticks until the measured quantity reaches the threshold.

        The tick that crosses the threshold belongs to the bar it closes.
        """
        bars = []
        builder = BarBuilder()

        for tick in ticks:
            builder.add_tick(tick)
            if measure(builder) >= self._threshold:
                bars.append(builder.build())
                builder.reset()

        # Flush the last incomplete bar
        if not builder.is_empty:
            bars.append(builder.build())
        return bars


def bars_to_dataframe(bars: List[OHLCVBar]) -> pd.DataFrame:
    """
    Convert bars to a pandas DataFrame indexed by open timestamp.

    Args:
        bars: Bars as returned by Resampler.resample

    Returns:
        DataFrame with OHLCV columns
    """
    if not bars:
        df = pd.DataFrame(columns=BAR_COLUMNS)
        df.index.name = "open_timestamp"
        return df

    data = [bar.to_dict() for bar in bars]
    df = pd.DataFrame(data)
    df.set_index("open_timestamp", inplace=True)
    return df


def resample_ticks_to_bars(
    ticks: Optional[Iterable[Tick]],
    mode: Union[ResampleMode, str],
    threshold: float
) -> pd.DataFrame:
    """
    Batch resample a list of ticks to OHLCV bars.

    Args:
        ticks: List of Tick objects
        mode: Close policy
        threshold: Bar size in the mode's unit

    Returns:
        DataFrame of bars
    """
    resampler = Resampler(mode, threshold)
    return bars_to_dataframe(resampler.resample(ticks))
