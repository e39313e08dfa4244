"""
Tick-to-bar resampling: time, tick, volume and dollar bars
"""
from .ingestion import Tick, normalize_tick, ticks_from_dataframe, demo_ticks, generate_sample_ticks
from .processing import (
    InvalidConfiguration,
    ResampleMode,
    Resampler,
    OHLCVBar,
    bars_to_dataframe,
    resample_ticks_to_bars,
)

__version__ = "0.1.0"

__all__ = [
    "Tick",
    "normalize_tick",
    "ticks_from_dataframe",
    "demo_ticks",
    "generate_sample_ticks",
    "InvalidConfiguration",
    "ResampleMode",
    "Resampler",
    "OHLCVBar",
    "bars_to_dataframe",
    "resample_ticks_to_bars",
]
