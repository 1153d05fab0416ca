"""
Highest score persistence.

The score is stored as a single decimal integer in a plain text file.
"""
from pathlib import Path
from typing import Union


class HighScoreStore:
    """
    File-backed store for the highest score ever reached.
    """

    DEFAULT_PATH = "res/highest-score"

    def __init__(self, path: Union[str, Path] = DEFAULT_PATH):
        """
        Initialize the store.

        Args:
            path: File holding the highest score
        """
        self.path = Path(path)

    def load(self) -> int:
        """
        Read the stored highest score.

        Returns:
            The stored score, or 0 if the file does not exist yet or is unreadable
        """
        if not self.path.exists():
            # Normal before the first game is finished
            return 0

        try:
            with open(self.path, 'r') as f:
                return max(0, int(f.readline().strip()))
        except (OSError, ValueError) as e:
            print(f"Warning: Could not read highest score from {self.path}: {e}")
            return 0

    def save(self, score: int) -> None:
        """Write the highest score, replacing any previous value."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w') as f:
                f.write(str(int(score)))
        except OSError as e:
            print(f"Warning: Could not write highest score to {self.path}: {e}")

    def __repr__(self) -> str:
        return f"HighScoreStore(path='{self.path}')"
