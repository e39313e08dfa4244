"""Shared fixtures for the tickbars test suite."""
import pytest

from tickbars.ingestion.sample_data import demo_ticks, generate_sample_ticks


@pytest.fixture
def sample_ticks():
    """Eight ticks spanning three 10-second windows."""
    return demo_ticks()


@pytest.fixture
def random_ticks():
    """A reproducible synthetic session."""
    return generate_sample_ticks(1500, start_timestamp=1_700_000_000_000, seed=7)
