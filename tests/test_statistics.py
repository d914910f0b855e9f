"""Test POC, value area and imbalance detection."""

from datetime import datetime, timezone

import pytest

from footprints.domain.enums import ImbalanceType
from footprints.domain.models import FootprintBar, PriceLevel
from footprints.processing.statistics import detect_imbalance, expand_value_area, find_point_of_control


def make_bar(volumes):
    """volumes: {price: (buy, sell)}"""
    bar = FootprintBar(bar_time=datetime(2024, 1, 1, tzinfo=timezone.utc))
    for price, (buy, sell) in volumes.items():
        if buy:
            bar.add_tick_volume(price, buy, True)
        if sell:
            bar.add_tick_volume(price, sell, False)
    return bar


class TestPointOfControl:
    """POC selection over price levels."""

    def test_single_poc_is_global_maximum(self):
        bar = make_bar({1.0: (3, 1), 2.0: (10, 2), 3.0: (1, 0), 4.0: (2, 3)})
        bar.calculate_poc()

        flagged = [lvl for lvl in bar.price_levels.values() if lvl.is_point_of_control]
        assert len(flagged) == 1
        assert flagged[0] is bar.point_of_control
        assert bar.point_of_control.price == 2.0

    def test_tie_goes_to_lowest_price(self):
        bar = make_bar({3.0: (2, 2), 1.0: (4, 0), 2.0: (1, 1)})
        bar.calculate_poc()
        assert bar.point_of_control.price == 1.0

    def test_empty_bar_has_no_poc(self):
        bar = make_bar({})
        bar.calculate_poc()
        bar.calculate_value_area()
        assert bar.point_of_control is None
        assert bar.value_area_high == 0.0
        assert bar.value_area_low == 0.0

    def test_find_point_of_control_empty(self):
        assert find_point_of_control([]) is None

    def test_recalculation_clears_previous_flag(self):
        bar = make_bar({1.0: (5, 0), 2.0: (1, 0)})
        bar.calculate_poc()
        bar.add_tick_volume(2.0, 10, False)
        bar.calculate_poc()
        assert not bar.price_levels[1.0].is_point_of_control
        assert bar.price_levels[2.0].is_point_of_control


class TestValueArea:
    """Value area expansion from the POC."""

    def test_expands_to_larger_neighbour(self):
        # total 90, target 63: POC 40 -> +20 (above) -> +15 (below)
        bar = make_bar({1.0: (5, 0), 2.0: (15, 0), 3.0: (40, 0), 4.0: (20, 0), 5.0: (10, 0)})
        bar.calculate_poc()
        bar.calculate_value_area(70.0)

        assert bar.value_area_low == 2.0
        assert bar.value_area_high == 4.0
        in_va = sorted(p for p, lvl in bar.price_levels.items() if lvl.is_in_value_area)
        assert in_va == [2.0, 3.0, 4.0]

    def test_tie_prefers_upper_side(self):
        bar = make_bar({1.0: (10, 0), 2.0: (30, 0), 3.0: (10, 0)})
        bar.calculate_poc()
        bar.calculate_value_area(70.0)
        assert bar.value_area_low == 2.0
        assert bar.value_area_high == 3.0

    def test_continues_on_one_side_when_other_is_exhausted(self):
        bar = make_bar({1.0: (50, 0), 2.0: (20, 0), 3.0: (20, 0), 4.0: (10, 0)})
        bar.calculate_poc()
        bar.calculate_value_area(90.0)
        assert bar.value_area_low == 1.0
        assert bar.value_area_high == 3.0

    def test_range_never_shrinks_as_percentage_grows(self):
        volumes = {1.0: (3, 2), 2.0: (7, 1), 3.0: (12, 4), 4.0: (6, 6), 5.0: (2, 9), 6.0: (1, 1)}
        previous = None
        for pct in range(50, 91, 5):
            bar = make_bar(volumes)
            bar.calculate_poc()
            bar.calculate_value_area(pct)
            current = (bar.value_area_low, bar.value_area_high)
            if previous is not None:
                assert current[0] <= previous[0]
                assert current[1] >= previous[1]
            previous = current

    def test_expand_returns_inclusive_bounds(self):
        nodes = [PriceLevel(price=p, buy_volume=v) for p, v in [(1.0, 1), (2.0, 8), (3.0, 1)]]
        assert expand_value_area(nodes, 1, 70.0) == (1, 1)
        assert expand_value_area(nodes, 1, 100.0) == (0, 2)


class TestImbalance:
    """Imbalance detection at the threshold boundary."""

    def test_exact_ratio_is_flagged_at_threshold(self):
        level = PriceLevel(price=1.0, buy_volume=300, sell_volume=100)
        assert detect_imbalance(level, 300.0)
        assert level.has_imbalance
        assert level.imbalance_type == ImbalanceType.BUY

    def test_exact_ratio_is_not_flagged_above_threshold(self):
        level = PriceLevel(price=1.0, buy_volume=300, sell_volume=100)
        assert not detect_imbalance(level, 301.0)
        assert not level.has_imbalance
        assert level.imbalance_type == ImbalanceType.NONE

    def test_one_sided_volume_is_always_imbalanced(self):
        level = PriceLevel(price=1.0, buy_volume=0, sell_volume=1)
        assert detect_imbalance(level, 1000.0)
        assert level.imbalance_type == ImbalanceType.SELL

    def test_empty_level_is_not_imbalanced(self):
        assert not detect_imbalance(PriceLevel(price=1.0), 150.0)

    def test_bar_collects_imbalanced_levels(self):
        bar = make_bar({1.0: (9, 3), 2.0: (5, 4), 3.0: (0, 2)})
        bar.detect_imbalances(300.0)
        assert [lvl.price for lvl in bar.imbalance_levels] == [1.0, 3.0]


class TestPriceLevelRatios:
    def test_buy_sell_ratio(self):
        assert PriceLevel(price=1.0).buy_sell_ratio == 0.0
        assert PriceLevel(price=1.0, buy_volume=3).buy_sell_ratio == float("inf")
        assert PriceLevel(price=1.0, buy_volume=3, sell_volume=2).buy_sell_ratio == pytest.approx(1.5)

    def test_dominant_side(self):
        assert PriceLevel(price=1.0, buy_volume=3, sell_volume=2).dominant_side == "Buy"
        assert PriceLevel(price=1.0, buy_volume=1, sell_volume=2).dominant_side == "Sell"
        assert PriceLevel(price=1.0, buy_volume=2, sell_volume=2).dominant_side == "Neutral"
