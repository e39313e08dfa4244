"""Unit tests for tick normalization and sample data."""
import io
from datetime import datetime

import pandas as pd
import pytest

from tickbars.ingestion.data_normalizer import Tick, normalize_tick, ticks_from_dataframe
from tickbars.ingestion.sample_data import demo_ticks, generate_sample_ticks


# =============================================================================
# normalize_tick
# =============================================================================
def test_normalize_ndjson_record():
    """Collector records carry an ISO timestamp and a size."""
    tick = normalize_tick({"symbol": "BTCUSDT", "ts": "1970-01-01T00:00:01.500Z",
                           "price": 89795.4, "size": 3})

    assert tick == Tick(timestamp=1500, price=89795.4, volume=3)


def test_normalize_binance_trade():
    """Binance trade messages use single-letter keys and string numbers."""
    tick = normalize_tick({"e": "trade", "T": 1672515782136, "p": "0.001", "q": "100"})

    assert tick == Tick(timestamp=1672515782136, price=0.001, volume=100)


def test_normalize_plain_record():
    """Canonical field names and millisecond strings are accepted."""
    tick = normalize_tick({"timestamp": "2000", "price": "10.5", "volume": 4})

    assert tick == Tick(timestamp=2000, price=10.5, volume=4)


def test_normalize_timezone_offset():
    """Offsets are converted to UTC."""
    tick = normalize_tick({"ts": "1970-01-01T01:00:00+01:00", "price": 1.0, "volume": 1})

    assert tick.timestamp == 0


def test_normalize_missing_volume_defaults_to_zero():
    """Records without a size fold in as zero-volume ticks."""
    tick = normalize_tick({"timestamp": 1, "price": 2.0})

    assert tick.volume == 0


@pytest.mark.parametrize("record", [
    {"price": 1.0, "volume": 1},
    {"timestamp": 1, "volume": 1},
    {"timestamp": 1, "price": "abc", "volume": 1},
    {"timestamp": "yesterday", "price": 1.0, "volume": 1},
    {"timestamp": 1, "price": 1.0, "volume": "lots"},
    ["not", "a", "record"],
])
def test_normalize_invalid_records(record):
    """Unparsable records are dropped, not raised."""
    assert normalize_tick(record) is None


def test_tick_as_datetime():
    """Ticks expose their timestamp as a naive UTC datetime."""
    assert Tick(1500, 1.0, 1).as_datetime == datetime(1970, 1, 1, 0, 0, 1, 500000)


def test_tick_to_dict():
    assert Tick(1, 2.0, 3).to_dict() == {"timestamp": 1, "price": 2.0, "volume": 3}


# =============================================================================
# ticks_from_dataframe
# =============================================================================
def test_ticks_from_dataframe_millis():
    """Integer timestamps pass straight through."""
    df = pd.DataFrame({"timestamp": [1000, 2000], "price": [1.5, 2.5], "volume": [3, 4]})

    assert ticks_from_dataframe(df) == [Tick(1000, 1.5, 3), Tick(2000, 2.5, 4)]


def test_ticks_from_dataframe_datetimes():
    """Datetime columns are converted to epoch milliseconds."""
    df = pd.DataFrame({
        "timestamp": pd.to_datetime([1000, 2500], unit="ms"),
        "price": [1.0, 2.0],
        "volume": [1, 2],
    })

    assert [tick.timestamp for tick in ticks_from_dataframe(df)] == [1000, 2500]


def test_ticks_from_dataframe_tz_aware():
    """Timezone-aware datetimes are converted through UTC."""
    df = pd.DataFrame({
        "timestamp": pd.to_datetime(["1970-01-01T01:00:01+01:00"], utc=True),
        "price": [1.0],
        "volume": [1],
    })

    assert ticks_from_dataframe(df)[0].timestamp == 1000


def test_ticks_from_dataframe_iso_strings():
    """ISO-8601 string timestamps are parsed through UTC."""
    df = pd.DataFrame({
        "timestamp": ["1970-01-01T00:00:01Z", "1970-01-01T01:00:02.500+01:00"],
        "price": [1.0, 2.0],
        "volume": [1, 2],
    })

    assert [tick.timestamp for tick in ticks_from_dataframe(df)] == [1000, 2500]


def test_ticks_from_csv_with_iso_timestamps():
    """A CSV export with ISO timestamps loads without extra parsing."""
    csv = (
        "timestamp,price,volume\n"
        "2024-01-01T00:00:00Z,100.5,3\n"
        "2024-01-01T00:00:01.250Z,101.0,7\n"
    )
    df = pd.read_csv(io.StringIO(csv))

    ticks = ticks_from_dataframe(df)

    assert ticks == [
        Tick(1704067200000, 100.5, 3),
        Tick(1704067201250, 101.0, 7),
    ]


def test_ticks_from_csv_with_millis():
    """A CSV with epoch milliseconds keeps its integer timestamps."""
    df = pd.read_csv(io.StringIO("timestamp,price,volume\n1000,1.5,2\n2000,1.75,4\n"))

    assert ticks_from_dataframe(df) == [Tick(1000, 1.5, 2), Tick(2000, 1.75, 4)]


def test_ticks_from_dataframe_bad_timestamp_string():
    """Unparsable timestamp strings raise ValueError."""
    df = pd.DataFrame({"timestamp": ["yesterday"], "price": [1.0], "volume": [1]})

    with pytest.raises(ValueError):
        ticks_from_dataframe(df)


def test_ticks_from_dataframe_missing_column():
    """A frame without volume cannot become ticks."""
    df = pd.DataFrame({"timestamp": [1], "price": [1.0]})

    with pytest.raises(ValueError, match="volume"):
        ticks_from_dataframe(df)


def test_ticks_from_dataframe_round_trips_tick_dicts(sample_ticks):
    """Frames built from Tick.to_dict convert back to the same ticks."""
    df = pd.DataFrame([tick.to_dict() for tick in sample_ticks])

    assert ticks_from_dataframe(df) == sample_ticks


# =============================================================================
# sample data
# =============================================================================
def test_demo_ticks():
    ticks = demo_ticks()

    assert len(ticks) == 8
    assert ticks[0] == Tick(1000, 100.0, 10)
    assert ticks[-1] == Tick(22000, 102.8, 40)


def test_generate_sample_ticks_shape():
    """Synthetic ticks are ordered with positive prices and sizes."""
    ticks = generate_sample_ticks(500, start_timestamp=5000, start_price=250.0, seed=1)

    assert len(ticks) == 500
    assert ticks[0].timestamp == 5000
    assert ticks[0].price == 250.0
    assert all(b.timestamp < a.timestamp for b, a in zip(ticks, ticks[1:]))
    assert all(tick.price > 0 for tick in ticks)
    assert all(tick.volume >= 1 for tick in ticks)
    assert all(isinstance(tick.timestamp, int) and isinstance(tick.volume, int) for tick in ticks)


def test_generate_sample_ticks_seeded():
    """The same seed reproduces the same session."""
    assert generate_sample_ticks(100, seed=3) == generate_sample_ticks(100, seed=3)
    assert generate_sample_ticks(100, seed=3) != generate_sample_ticks(100, seed=4)


@pytest.mark.parametrize("n", [0, -5])
def test_generate_sample_ticks_empty(n):
    assert generate_sample_ticks(n) == []


def test_generate_single_tick():
    """A one-tick session is just the starting point."""
    ticks = generate_sample_ticks(1, start_timestamp=10, start_price=42.0, seed=0)

    assert len(ticks) == 1
    assert ticks[0].timestamp == 10
    assert ticks[0].price == 42.0
