# Processing layer package
from .resampler import (
    InvalidConfiguration,
    ResampleMode,
    Resampler,
    bars_to_dataframe,
    resample_ticks_to_bars,
)
from .ohlcv import OHLCVBar, BarBuilder

__all__ = [
    "InvalidConfiguration",
    "ResampleMode",
    "Resampler",
    "bars_to_dataframe",
    "resample_ticks_to_bars",
    "OHLCVBar",
    "BarBuilder",
]
