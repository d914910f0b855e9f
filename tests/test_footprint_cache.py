"""Test the bar_time keyed footprint cache."""

from datetime import datetime, timedelta, timezone

import pytest

from footprints.core.footprint_cache import FootprintCache
from footprints.domain.models import FootprintBar

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def bar(minute, with_data=True):
    b = FootprintBar(bar_time=T0 + timedelta(minutes=minute))
    if with_data:
        b.add_tick_volume(1.0, 1, True)
    return b


class TestFootprintCache:
    def test_prunes_oldest_bar_time_first(self):
        cache = FootprintCache(max_size=3)
        for minute in [5, 1, 3, 2]:
            cache.add(bar(minute))

        assert cache.size() == 3
        assert cache.bar_times() == [T0 + timedelta(minutes=m) for m in (2, 3, 5)]

    def test_pruning_forgets_processed_flag(self):
        cache = FootprintCache(max_size=1)
        cache.add(bar(0))
        cache.mark_processed(T0)

        evicted = cache.add(bar(1))

        assert evicted == 1
        assert not cache.is_processed(T0)
        assert T0 not in cache

    def test_replaces_same_bar_time(self):
        cache = FootprintCache(max_size=5)
        first, second = bar(0), bar(0)
        cache.add(first)
        cache.add(second)
        assert cache.size() == 1
        assert cache.get(T0) is second

    def test_visible_bars_skips_empty_and_missing(self):
        cache = FootprintCache()
        cache.add(bar(0))
        cache.add(bar(1, with_data=False))
        times = [T0 + timedelta(minutes=m) for m in range(3)]

        assert [b.bar_time for b in cache.visible_bars(times)] == [T0]

    def test_rejects_non_datetime_bar_time(self):
        with pytest.raises(TypeError):
            FootprintCache().add(FootprintBar(bar_time=3))

    def test_rejects_bad_size(self):
        with pytest.raises(ValueError):
            FootprintCache(max_size=0)

    def test_clear(self):
        cache = FootprintCache()
        cache.add(bar(0))
        cache.mark_processed(T0)
        cache.clear()
        assert len(cache) == 0
        assert not cache.is_processed(T0)
