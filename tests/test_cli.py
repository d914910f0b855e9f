"""Test the footprints-replay entry point."""

from datetime import timedelta
from pathlib import Path

import pytest

from footprints import cli
from footprints.domain.enums import TickClassification
from footprints.processing.bar_builder import FootprintBarBuilder
from footprints.storage.kv_store import DuckDBKeyValueStore
from footprints.storage.tick_storage import FootprintTickStorage

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@pytest.fixture
def stored_log(bar_open):
    storage = FootprintTickStorage("BTC-USD")
    for minute, prices in [(0, [100.0, 100.1, 100.2]), (1, [100.2, 100.1]), (16, [101.0])]:
        for i, price in enumerate(prices):
            classification = TickClassification.UPTICK if i % 2 == 0 else TickClassification.DOWNTICK
            storage.add_tick(bar_open + timedelta(minutes=minute, seconds=i), price, classification)
    return storage


class TestReplayBars:
    def test_groups_ticks_into_bar_windows(self, stored_log):
        bars = cli.replay_bars(stored_log, FootprintBarBuilder(0.1), timedelta(minutes=15))

        assert sum(b.total_volume for b in bars) == stored_log.count
        assert all(b.has_data for b in bars)
        assert [b.bar_time for b in bars] == sorted(b.bar_time for b in bars)

    def test_summary_columns(self, stored_log):
        bars = cli.replay_bars(stored_log, FootprintBarBuilder(0.1), timedelta(minutes=1))
        df = cli.summarize(bars)

        assert list(df.columns) == ["bar_time", "levels", "buy", "sell", "delta", "poc", "va_low", "va_high", "imbalances"]
        assert len(df) == 3
        assert df["delta"].tolist() == [b.delta for b in bars]


class TestMain:
    def test_prints_summary(self, tmp_path, stored_log, capsys, monkeypatch):
        monkeypatch.delenv("CONFIG_DIR", raising=False)
        db = str(tmp_path / "fp.duckdb")
        store = DuckDBKeyValueStore(db)
        store.set_string(FootprintTickStorage.generate_storage_key("BTC-USD"), stored_log.serialize())
        store.close()

        config_dir = str(CONFIG_DIR)
        code = cli.main(["--symbol", "BTC-USD", "--timeframe", "1", "--config-dir", config_dir, "--db", db])

        out = capsys.readouterr().out
        assert code == 0
        assert "bar_time" in out
        assert "poc" in out

    def test_unknown_symbol(self, tmp_path):
        code = cli.main(["--symbol", "NOPE", "--config-dir", str(CONFIG_DIR), "--db", str(tmp_path / "x.duckdb")])
        assert code == 1
