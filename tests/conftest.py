"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from footprints.config.app.models import AppConfig, AppInfo, AnalysisSettings, CacheSettings, StorageSettings
from footprints.config.symbols.models import SymbolConfig
from footprints.domain.models import MarketTick


@pytest.fixture(autouse=True, scope="session")
def _logs_to_tmp(tmp_path_factory):
    """Keep log files out of the project tree."""
    mp = pytest.MonkeyPatch()
    mp.setenv("LOGS_DIR", str(tmp_path_factory.mktemp("logs")))
    yield
    mp.undo()


@pytest.fixture
def bar_open():
    """A recent minute boundary, so stored ticks survive the 7 day age limit."""
    return datetime.now(timezone.utc).replace(second=0, microsecond=0) - timedelta(minutes=30)


@pytest.fixture
def make_ticks(bar_open):
    """Build live MarketTicks one second apart with bid == ask == price."""
    def _make(prices, start=None):
        start = start or bar_open
        return [
            MarketTick(time=start + timedelta(seconds=i), bid=p, ask=p)
            for i, p in enumerate(prices)
        ]
    return _make


@pytest.fixture
def scenario_prices():
    """Unknown, Buy, Buy (inherited), Sell, Sell."""
    return [10.0, 10.1, 10.1, 10.0, 9.9]


@pytest.fixture
def app_config():
    return AppConfig(
        app=AppInfo(name="footprints-test"),
        analysis=AnalysisSettings(number_of_bins=0),
        cache=CacheSettings(max_cache_size=50, max_bars_to_display=10, recalculate_bars=3, render_throttle_ms=250),
        storage=StorageSettings(save_interval_ticks=3),
    )


@pytest.fixture
def symbol_cfg():
    return SymbolConfig(name="EUR/USD", tick_size=0.1)


@pytest.fixture
def sample_candles(bar_open):
    """Five 1-minute candles between 9.5 and 10.5."""
    return [
        {"time": bar_open + timedelta(minutes=i), "open": 10.0, "high": 10.5, "low": 9.5, "close": 10.0}
        for i in range(5)
    ]
