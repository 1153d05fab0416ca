"""
Tests for configuration, highest score storage and logging.
"""
import json
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.config import DEFAULT_CONFIG, load_config, merge_config
from utils.highscore import HighScoreStore
from utils.logger import GameLogger, MetricsTracker, json_default, summarize


class TestHighScoreStore:
    """Test highest score persistence."""

    def test_missing_file_reads_zero(self, tmp_path):
        """No file yet means no record."""
        store = HighScoreStore(tmp_path / "highest-score")
        assert store.load() == 0

    def test_save_and_load(self, tmp_path):
        """A saved score is read back."""
        store = HighScoreStore(tmp_path / "highest-score")
        store.save(4200)
        assert store.load() == 4200
        assert (tmp_path / "highest-score").read_text() == "4200"

    def test_save_overwrites(self, tmp_path):
        """Only the latest score is kept."""
        store = HighScoreStore(tmp_path / "highest-score")
        store.save(10)
        store.save(20)
        assert store.load() == 20

    def test_save_creates_directories(self, tmp_path):
        """Parent directories are created on save."""
        store = HighScoreStore(tmp_path / "res" / "nested" / "highest-score")
        store.save(7)
        assert store.load() == 7

    def test_garbage_reads_zero(self, tmp_path, capsys):
        """An unparsable file warns and falls back to zero."""
        path = tmp_path / "highest-score"
        path.write_text("not a number")
        assert HighScoreStore(path).load() == 0
        assert "Warning" in capsys.readouterr().out

    def test_surrounding_whitespace(self, tmp_path):
        """A trailing newline is tolerated."""
        path = tmp_path / "highest-score"
        path.write_text("  99\n")
        assert HighScoreStore(path).load() == 99


class TestConfig:
    """Test configuration loading."""

    def test_defaults(self):
        """No path returns a copy of the defaults."""
        config = load_config()
        assert config == DEFAULT_CONFIG
        config['board']['width'] = 3
        assert DEFAULT_CONFIG['board']['width'] == 10

    def test_missing_file(self, tmp_path, capsys):
        """A missing file falls back to the defaults."""
        config = load_config(str(tmp_path / "nope.yaml"))
        assert config == DEFAULT_CONFIG
        assert "not found" in capsys.readouterr().out

    def test_partial_override(self, tmp_path):
        """Keys in the file override only what they name."""
        path = tmp_path / "config.yaml"
        path.write_text("board:\n  width: 12\ngame:\n  seed: 5\n")
        config = load_config(str(path))

        assert config['board']['width'] == 12
        assert config['board']['height'] == 22
        assert config['game']['seed'] == 5
        assert config['game']['tick_interval_ms'] == 350

    def test_empty_file(self, tmp_path):
        """An empty file yields the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_non_mapping_rejected(self, tmp_path):
        """A top-level list is not a valid configuration."""
        path = tmp_path / "config.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_merge_does_not_mutate(self):
        """Merging returns a new dictionary."""
        base = {'a': {'b': 1, 'c': 2}}
        merged = merge_config(base, {'a': {'b': 5}, 'd': 3})
        assert merged == {'a': {'b': 5, 'c': 2}, 'd': 3}
        assert base == {'a': {'b': 1, 'c': 2}}

    def test_shipped_config_matches_defaults(self):
        """config/default.yaml describes the built-in defaults."""
        path = Path(__file__).parent.parent / "config" / "default.yaml"
        assert load_config(str(path)) == DEFAULT_CONFIG


class TestGameLogger:
    """Test the JSON lines game logger."""

    def test_log_writes_records(self, tmp_path):
        """Each call appends one JSON line."""
        logger = GameLogger(tmp_path, name="games")
        logger.log({'score': 100, 'new_record': True})
        logger.log({'score': 300, 'new_record': False})

        lines = logger.log_file.read_text().strip().split("\n")
        assert len(lines) == 2
        first = json.loads(lines[0])
        assert first['game'] == 1
        assert first['score'] == 100
        assert first['new_record'] is True
        assert 'elapsed' in first and 'timestamp' in first
        assert json.loads(lines[1])['game'] == 2

    def test_log_file_name(self, tmp_path):
        """Log files are named after the logger."""
        logger = GameLogger(tmp_path / "logs", name="benchmark")
        assert logger.log_file.parent == tmp_path / "logs"
        assert logger.log_file.name.startswith("benchmark_")
        assert logger.log_file.suffix == ".jsonl"

    def test_history_skips_flags(self, tmp_path):
        """Only numeric values are aggregated."""
        logger = GameLogger(tmp_path)
        logger.log({'score': 100, 'new_record': True, 'game_state': "stopped"})
        logger.log({'score': 300, 'new_record': np.bool_(False)})

        assert logger.recent('score') == [100.0, 300.0]
        assert logger.mean('score') == 200.0
        assert 'new_record' not in logger.history
        assert 'game_state' not in logger.history

    def test_numpy_values(self, tmp_path):
        """Numpy scalars and arrays are written as plain JSON."""
        logger = GameLogger(tmp_path)
        logger.log({'score': np.int64(5), 'grid': np.zeros((2, 2), dtype=np.int8)})
        record = json.loads(logger.log_file.read_text().strip())
        assert record['score'] == 5
        assert record['grid'] == [[0, 0], [0, 0]]

    def test_save_summary(self, tmp_path):
        """The summary aggregates every numeric metric."""
        logger = GameLogger(tmp_path, name="bench")
        for score in (10, 20, 30):
            logger.log({'score': score})
        summary_file = logger.save_summary()

        summary = json.loads(summary_file.read_text())
        assert summary_file.name == "bench_summary.json"
        assert summary['total_games'] == 3
        assert summary['metrics']['score']['mean'] == 20.0
        assert summary['metrics']['score']['max'] == 30.0
        assert summary['metrics']['score']['last'] == 30.0

    def test_json_default(self):
        """Nested numpy values are handled by the dump hook."""
        text = json.dumps({'a': (np.float32(1.5), [np.int8(2)])}, default=json_default)
        assert json.loads(text) == {'a': [1.5, [2]]}

    def test_json_default_rejects_unknown(self):
        """Objects that are not numpy values still fail."""
        with pytest.raises(TypeError):
            json.dumps({'a': object()}, default=json_default)


class TestMetricsTracker:
    """Test rolling metric statistics."""

    def test_window(self):
        """Only the last window_size values are kept."""
        tracker = MetricsTracker(window_size=3)
        for value in range(5):
            tracker.add('score', value)
        summary = tracker.get_summary('score')
        assert summary['mean'] == 3.0
        assert summary['std'] == pytest.approx(np.std([2, 3, 4]))
        assert summary['min'] == 2.0
        assert summary['max'] == 4.0
        assert summary['last'] == 4.0

    def test_unknown_metric(self):
        """Unknown metrics summarize as zero."""
        tracker = MetricsTracker()
        assert tracker.get_mean('missing') == 0.0
        assert tracker.get_last('missing') == 0.0
        assert summarize([]) == {'mean': 0.0, 'std': 0.0, 'min': 0.0, 'max': 0.0, 'last': 0.0}

    def test_reset(self):
        """Reset drops everything."""
        tracker = MetricsTracker()
        tracker.add('lines', 1)
        assert list(tracker.get_all_summaries()) == ['lines']
        tracker.reset()
        assert tracker.get_all_summaries() == {}
