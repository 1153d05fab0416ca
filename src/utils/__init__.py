"""Utility functions for the stacking game."""
from .config import load_config, merge_config, DEFAULT_CONFIG
from .highscore import HighScoreStore
from .logger import GameLogger, MetricsTracker

__all__ = [
    "load_config",
    "merge_config",
    "DEFAULT_CONFIG",
    "HighScoreStore",
    "GameLogger",
    "MetricsTracker",
]
