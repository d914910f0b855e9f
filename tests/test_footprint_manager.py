"""Test FootprintManager: recalculation, throttling and persistence wiring."""

from dataclasses import replace
from datetime import timedelta

import pytest

from footprints.core.footprint_manager import FootprintManager
from footprints.domain.enums import TickClassification
from footprints.storage.kv_store import InMemoryKeyValueStore
from footprints.storage.tick_storage import FootprintTickStorage


class FakeClock:
    def __init__(self):
        self.t = 1000.0

    def __call__(self):
        return self.t


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rendered():
    return []


def blob_for_bar(bar_time):
    storage = FootprintTickStorage("EUR/USD")
    storage.add_tick(bar_time + timedelta(seconds=10), 10.0, TickClassification.UPTICK)
    storage.add_tick(bar_time + timedelta(seconds=11), 10.1, TickClassification.UPTICK)
    storage.add_tick(bar_time + timedelta(seconds=12), 10.0, TickClassification.DOWNTICK)
    return storage.serialize()


class TestInitialize:
    def test_rebuilds_recent_bars_from_stored_ticks(self, symbol_cfg, app_config, sample_candles, rendered, clock):
        store = InMemoryKeyValueStore({"Footprint EURUSD": blob_for_bar(sample_candles[2]["time"])})
        manager = FootprintManager(symbol_cfg, app_config, store=store, on_footprint=rendered.append, clock=clock)

        rebuilt = manager.initialize(sample_candles)

        assert rebuilt == 3
        assert manager.is_initialized
        assert [b.bar_time for b in rendered] == [sample_candles[2]["time"]]
        footprint = rendered[0]
        assert footprint.total_buy_volume == 2
        assert footprint.total_sell_volume == 1
        assert all(manager.cache.is_processed(c["time"]) for c in sample_candles[2:])

    def test_historical_bar_is_built_once(self, symbol_cfg, app_config, sample_candles, rendered, clock):
        store = InMemoryKeyValueStore({"Footprint EURUSD": blob_for_bar(sample_candles[1]["time"])})
        manager = FootprintManager(symbol_cfg, app_config, store=store, on_footprint=rendered.append, clock=clock)
        manager.initialize(sample_candles)

        first = manager.process_bar(sample_candles, 1)
        second = manager.process_bar(sample_candles, 1)

        assert first is not None
        assert second is None
        assert len(rendered) == 1

    def test_works_without_store(self, symbol_cfg, app_config, sample_candles, clock):
        manager = FootprintManager(symbol_cfg, app_config, clock=clock)
        assert manager.persistence is None
        assert manager.initialize(sample_candles) == 3
        manager.shutdown()


class TestVisibility:
    def test_bars_beyond_display_limit_are_skipped(self, symbol_cfg, app_config, clock):
        manager = FootprintManager(symbol_cfg, app_config, clock=clock)
        # max_bars_to_display=10, current index 14
        assert not manager.is_bar_visible(3, 15)
        assert manager.is_bar_visible(4, 15)
        assert manager.is_bar_visible(14, 15)


class TestCurrentBar:
    @pytest.fixture
    def live(self, sample_candles, make_ticks):
        # Unknown, Buy, Buy, Sell inside the last candle
        return make_ticks([10.0, 10.1, 10.2, 10.1], start=sample_candles[-1]["time"])

    def test_throttle(self, symbol_cfg, app_config, sample_candles, live, rendered, clock):
        manager = FootprintManager(
            symbol_cfg, app_config, tick_source=lambda: live, on_footprint=rendered.append, clock=clock
        )
        current = len(sample_candles) - 1

        assert manager.process_bar(sample_candles, current) is not None
        clock.t += 0.1
        assert manager.process_bar(sample_candles, current) is None
        clock.t += 0.2
        assert manager.process_bar(sample_candles, current) is not None
        assert manager.current_bar_time == sample_candles[-1]["time"]
        assert len(rendered) == 2

    def test_live_ticks_are_persisted_once(self, symbol_cfg, app_config, sample_candles, live, clock):
        store = InMemoryKeyValueStore()
        manager = FootprintManager(symbol_cfg, app_config, store=store, tick_source=lambda: live, clock=clock)
        current = len(sample_candles) - 1

        first = manager.process_bar(sample_candles, current)
        assert first.total_volume == 3
        assert manager.persistence.tick_storage.count == 3
        assert store.get_string("Footprint EURUSD").startswith("FP1|EUR/USD|")

        clock.t += 1.0
        second = manager.process_bar(sample_candles, current)

        assert second.total_volume == 3
        assert second.total_buy_volume == first.total_buy_volume
        assert manager.persistence.tick_storage.count == 3

    def test_shutdown_saves(self, symbol_cfg, app_config, sample_candles, live, clock):
        store = InMemoryKeyValueStore()
        config = replace(app_config, storage=replace(app_config.storage, save_interval_ticks=500))
        manager = FootprintManager(symbol_cfg, config, store=store, tick_source=lambda: live, clock=clock)

        manager.get_or_build(sample_candles, len(sample_candles) - 1)
        assert store.get_string("Footprint EURUSD") is None

        manager.shutdown()
        assert store.get_string("Footprint EURUSD") is not None


class TestCachePruning:
    def test_cache_is_bounded(self, symbol_cfg, app_config, sample_candles, clock):
        config = replace(app_config, cache=replace(app_config.cache, max_cache_size=2))
        manager = FootprintManager(symbol_cfg, config, clock=clock)

        for index in range(len(sample_candles)):
            manager.get_or_build(sample_candles, index)

        assert manager.cache.bar_times() == [c["time"] for c in sample_candles[-2:]]

    def test_tick_size_override(self, symbol_cfg, app_config, clock):
        config = replace(app_config, analysis=replace(app_config.analysis, tick_size_override=0.5))
        manager = FootprintManager(symbol_cfg, config, clock=clock)
        assert manager.tick_size == 0.5
        assert manager.builder.tick_size == 0.5
