# Ingestion layer package
from .data_normalizer import Tick, normalize_tick, ticks_from_dataframe
from .sample_data import demo_ticks, generate_sample_ticks

__all__ = [
    "Tick",
    "normalize_tick",
    "ticks_from_dataframe",
    "demo_ticks",
    "generate_sample_ticks",
]
