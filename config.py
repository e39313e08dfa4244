"""
Configuration constants for the tickbars dashboard
"""
import os
from typing import Dict

# =============================================================================
# RESAMPLING
# =============================================================================
RESAMPLE_MODES: Dict[str, str] = {
    "Time": "time",
    "Tick": "tick",
    "Volume": "volume",
    "Dollar": "dollar",
}

DEFAULT_MODE: str = "time"

# Threshold defaults, in each mode's unit
DEFAULT_THRESHOLDS: Dict[str, float] = {
    "time": 10000,     # 10 second bars (ms)
    "tick": 3,         # ticks per bar
    "volume": 50,      # volume per bar
    "dollar": 5000.0,  # price * volume per bar
}

THRESHOLD_LABELS: Dict[str, str] = {
    "time": "Window (ms)",
    "tick": "Ticks per bar",
    "volume": "Volume per bar",
    "dollar": "Dollar value per bar",
}

# =============================================================================
# SAMPLE DATA
# =============================================================================
SAMPLE_TICK_COUNT: int = 2000
MIN_SAMPLE_TICKS: int = 100
MAX_SAMPLE_TICKS: int = 50000
SAMPLE_START_PRICE: float = 100.0
SAMPLE_SEED: int = 42

# =============================================================================
# UI
# =============================================================================
CHART_HEIGHT: int = 480
MAX_TABLE_ROWS: int = 500

# Color scheme (dark theme)
COLORS: Dict[str, str] = {
    "background": "#0f172a",
    "surface": "#1e293b",
    "primary": "#0ea5e9",
    "success": "#22c55e",
    "error": "#ef4444",
    "text": "#e2e8f0",
    "text_muted": "#94a3b8",
}

# =============================================================================
# LOGGING
# =============================================================================
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
