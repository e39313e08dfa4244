"""
Data normalizer for raw trade records
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Any, List, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1)

TIMESTAMP_KEYS = ("timestamp", "ts", "T")
PRICE_KEYS = ("price", "p")
VOLUME_KEYS = ("volume", "size", "quantity", "q")

TICK_COLUMNS = ["timestamp", "price", "volume"]


@dataclass(frozen=True)
class Tick:
    """Normalized tick data structure"""
    timestamp: int  # Milliseconds since epoch
    price: float
    volume: int

    @property
    def as_datetime(self) -> datetime:
        """Naive UTC datetime of the trade."""
        return _EPOCH + timedelta(milliseconds=self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Convert tick to dictionary for DataFrame creation"""
        return {
            "timestamp": self.timestamp,
            "price": self.price,
            "volume": self.volume,
        }


def _first_present(record: Dict[str, Any], keys) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _parse_timestamp(value: Any) -> int:
    """Parse epoch milliseconds or an ISO-8601 string to epoch milliseconds."""
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        # Convert to naive UTC datetime for consistency
        if parsed.tzinfo is not None:
            parsed = (parsed - parsed.utcoffset()).replace(tzinfo=None)
        return (parsed - _EPOCH) // timedelta(milliseconds=1)
    return int(value)


def normalize_tick(record: Dict[str, Any]) -> Optional[Tick]:
    """
    Normalize a raw trade record to a Tick.

    Accepted layouts include the NDJSON collector format and Binance trade
    messages:
    {"ts": "2025-12-15T09:34:06.419Z", "price": 89795.4, "size": 3}
    {"T": 1672515782136, "p": "0.001", "q": "100"}

    Args:
        record: Parsed JSON record

    Returns:
        Normalized Tick object or None if invalid record
    """
    try:
        raw_timestamp = _first_present(record, TIMESTAMP_KEYS)
        raw_price = _first_present(record, PRICE_KEYS)
        if raw_timestamp is None or raw_price is None:
            logger.debug(f"Dropping record without timestamp or price: {record}")
            return None

        raw_volume = _first_present(record, VOLUME_KEYS)

        return Tick(
            timestamp=_parse_timestamp(raw_timestamp),
            price=float(raw_price),
            volume=int(float(raw_volume)) if raw_volume is not None else 0,
        )

    except (KeyError, ValueError, TypeError, AttributeError) as e:
        logger.debug(f"Dropping malformed record {record}: {e}")
        return None


def ticks_from_dataframe(df: pd.DataFrame) -> List[Tick]:
    """
    Convert a tick DataFrame to a list of Tick objects.

    Args:
        df: DataFrame with timestamp, price and volume columns. Numeric
            timestamps are epoch milliseconds; datetime64 and ISO-8601
            string columns are converted to epoch milliseconds.

    Returns:
        Ticks in row order

    Raises:
        ValueError: If a required column is missing or a timestamp string
            cannot be parsed
    """
    missing = [col for col in TICK_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Tick frame is missing columns: {missing}")

    timestamps = df["timestamp"]
    if not (pd.api.types.is_numeric_dtype(timestamps)
            or pd.api.types.is_datetime64_any_dtype(timestamps)):
        # object on pandas 2, str on pandas 3
        timestamps = pd.to_datetime(timestamps, utc=True, format="ISO8601")

    if pd.api.types.is_datetime64_any_dtype(timestamps):
        if timestamps.dt.tz is not None:
            timestamps = timestamps.dt.tz_convert("UTC").dt.tz_localize(None)
        millis = (timestamps - pd.Timestamp(_EPOCH)) // pd.Timedelta(milliseconds=1)
    else:
        millis = timestamps

    stamps = millis.to_numpy(dtype=np.int64)
    prices = df["price"].to_numpy(dtype=np.float64)
    volumes = df["volume"].to_numpy(dtype=np.int64)

    return [
        Tick(timestamp=int(ts), price=float(price), volume=int(volume))
        for ts, price, volume in zip(stamps, prices, volumes)
    ]
