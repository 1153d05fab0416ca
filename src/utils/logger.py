"""
Game record logging.

Finished games are appended to a JSON lines file, one object per game, and
their numeric fields are kept in memory so a run can be summarized.
"""
from collections import defaultdict, deque
from datetime import datetime
from pathlib import Path
from typing import Any, Deque, Dict, Iterable, List, Union
import json
import time

import numpy as np


def json_default(obj: Any) -> Any:
    """`json.dumps` hook for the numpy values found in game statistics."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def is_metric(value: Any) -> bool:
    """True for numbers worth aggregating. Flags and strings are not metrics."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, float, np.integer, np.floating))


def summarize(values: Iterable[float]) -> Dict[str, float]:
    """Mean, spread, range and last value of a series (zeros when empty)."""
    series = list(values)
    if not series:
        return {'mean': 0.0, 'std': 0.0, 'min': 0.0, 'max': 0.0, 'last': 0.0}
    arr = np.asarray(series, dtype=np.float64)
    return {
        'mean': float(arr.mean()),
        'std': float(arr.std()),
        'min': float(arr.min()),
        'max': float(arr.max()),
        'last': float(arr[-1]),
    }


class GameLogger:
    """
    Appends one JSON record per finished game to `<log_dir>/<name>_<timestamp>.jsonl`.

    Each record holds the game number, seconds since the logger was created,
    a wall clock timestamp and the fields passed to `log`.
    """

    def __init__(self, log_dir: Union[str, Path], name: str = "games"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.name = name
        self.start_time = time.time()
        self.games = 0

        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"{name}_{stamp}.jsonl"
        self.history: Dict[str, List[float]] = defaultdict(list)

    def log(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Record one finished game.

        Args:
            fields: Game statistics (numpy values are accepted)

        Returns:
            The record as written
        """
        self.games += 1
        record = {
            'game': self.games,
            'elapsed': round(time.time() - self.start_time, 3),
            'timestamp': datetime.now().isoformat(timespec="seconds"),
        }
        record.update(fields)

        for key, value in fields.items():
            if is_metric(value):
                self.history[key].append(float(value))

        with open(self.log_file, 'a') as f:
            f.write(json.dumps(record, default=json_default) + '\n')
        return record

    def recent(self, metric: str, n: int = 100) -> List[float]:
        """Last `n` values of a metric."""
        return self.history.get(metric, [])[-n:]

    def mean(self, metric: str, n: int = 100) -> float:
        return summarize(self.recent(metric, n))['mean']

    def save_summary(self) -> Path:
        """Write aggregate statistics of every metric and return the file path."""
        summary = {
            'name': self.name,
            'total_games': self.games,
            'total_time': time.time() - self.start_time,
            'metrics': {key: summarize(values) for key, values in self.history.items()},
        }
        summary_file = self.log_dir / f"{self.name}_summary.json"
        with open(summary_file, 'w') as f:
            json.dump(summary, f, indent=2)
        return summary_file


class MetricsTracker:
    """Rolling window of recent values per metric."""

    def __init__(self, window_size: int = 100):
        self.window_size = window_size
        self.metrics: Dict[str, Deque[float]] = {}

    def add(self, name: str, value: float) -> None:
        if name not in self.metrics:
            self.metrics[name] = deque(maxlen=self.window_size)
        self.metrics[name].append(float(value))

    def get_mean(self, name: str) -> float:
        return self.get_summary(name)['mean']

    def get_last(self, name: str) -> float:
        return self.get_summary(name)['last']

    def get_summary(self, name: str) -> Dict[str, float]:
        """Summary statistics of the current window."""
        return summarize(self.metrics.get(name, ()))

    def get_all_summaries(self) -> Dict[str, Dict[str, float]]:
        return {name: self.get_summary(name) for name in self.metrics}

    def reset(self) -> None:
        self.metrics.clear()
