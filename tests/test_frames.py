"""Test the pandas export used by renderers."""

from datetime import timedelta

from footprints.processing.bar_builder import FootprintBarBuilder
from footprints.processing.frames import BIN_COLUMNS, LEVEL_COLUMNS


def build(bar_open, make_ticks, scenario_prices, bins=0):
    ticks = make_ticks(scenario_prices)
    builder = FootprintBarBuilder(0.1, tick_source=lambda: ticks)
    return builder.build(bar_open, bar_open + timedelta(minutes=1), number_of_bins=bins, bar_high=10.1, bar_low=9.9)


class TestFrames:
    def test_levels_frame(self, bar_open, make_ticks, scenario_prices):
        df = build(bar_open, make_ticks, scenario_prices).to_dataframe()

        assert list(df.columns) == LEVEL_COLUMNS
        assert df["price"].tolist() == [9.9, 10.0, 10.1]
        assert df["total_volume"].sum() == 4
        assert df.loc[df["is_poc"], "price"].tolist() == [10.1]
        assert df["delta"].tolist() == [-1, -1, 2]
        assert df["imbalance"].tolist() == ["sell", "sell", "buy"]

    def test_bins_frame(self, bar_open, make_ticks, scenario_prices):
        df = build(bar_open, make_ticks, scenario_prices, bins=2).bins_to_dataframe()

        assert list(df.columns) == BIN_COLUMNS
        assert len(df) == 2
        assert df["total_volume"].sum() == 4

    def test_empty_bins_frame(self, bar_open, make_ticks, scenario_prices):
        df = build(bar_open, make_ticks, scenario_prices).bins_to_dataframe()
        assert df.empty
        assert list(df.columns) == BIN_COLUMNS
