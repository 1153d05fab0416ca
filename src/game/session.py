"""
Game Session Driver.

This module sits between a front end (GUI timer and key events, terminal
scripts) and the Board:
- Serializes gravity ticks and player commands onto one board
- Restarts by discarding the board and building a new one
- Updates the persisted highest score when a game ends
- Produces read-only snapshots for renderers
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .board import Board, GameState
from .pieces import BlockType, Point


class Command(Enum):
    """Discrete player commands."""
    ROTATE_CLOCKWISE = "rotate_cw"
    ROTATE_COUNTER_CLOCKWISE = "rotate_ccw"
    HOLD = "hold"
    SOFT_DROP = "soft_drop"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    RESTART = "restart"


# Commands that only make sense while a piece is falling
MOVEMENT_COMMANDS = (
    Command.ROTATE_CLOCKWISE,
    Command.ROTATE_COUNTER_CLOCKWISE,
    Command.HOLD,
    Command.SOFT_DROP,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.HARD_DROP,
)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a board for rendering."""
    state: GameState
    width: int
    height: int
    grid: np.ndarray
    current_type: Optional[BlockType]
    current_cells: Tuple[Point, ...]
    shadow_cells: Tuple[Point, ...]
    held_type: Optional[BlockType]
    next_types: Tuple[BlockType, ...]
    score: int
    highest_score: int
    lines_cleared: int = 0

    def block_type_at(self, x: int, y: int) -> Optional[BlockType]:
        """Get the type of the locked block at (x, y), or None if empty."""
        value = int(self.grid[y, x])
        return BlockType(value) if value else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "state": self.state.value,
            "width": self.width,
            "height": self.height,
            "grid": self.grid.tolist(),
            "current_type": self.current_type.name if self.current_type else None,
            "current_cells": [list(c) for c in self.current_cells],
            "shadow_cells": [list(c) for c in self.shadow_cells],
            "held_type": self.held_type.name if self.held_type else None,
            "next_types": [t.name for t in self.next_types],
            "score": self.score,
            "highest_score": self.highest_score,
            "lines_cleared": self.lines_cleared,
        }


class GameSession:
    """
    Owns the live Board and funnels ticks and commands into it.

    Args:
        width: Board columns
        height: Board rows
        high_scores: Optional store for the persisted highest score
        logger: Optional JSONL logger that records every finished game
        seed: Random seed for the piece bags (shared across restarts)
        preview_count: Number of queued pieces exposed in snapshots
        tick_interval_ms: Milliseconds between gravity ticks for timer-driven front ends
    """

    TICK_INTERVAL_MS = 350
    PREVIEW_COUNT = 3

    def __init__(
        self,
        width: int = Board.DEFAULT_WIDTH,
        height: int = Board.DEFAULT_HEIGHT,
        high_scores=None,
        logger=None,
        seed: Optional[int] = None,
        preview_count: int = PREVIEW_COUNT,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ):
        if tick_interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {tick_interval_ms}")
        self.width = width
        self.height = height
        self.high_scores = high_scores
        self.logger = logger
        self.preview_count = preview_count
        self.tick_interval_ms = tick_interval_ms
        self.rng = np.random.default_rng(seed)

        self.highest_score = high_scores.load() if high_scores is not None else 0
        self.games_played = 0
        self._game_over_handled = False
        self.board = Board(width, height, seed=self.rng)
        self._check_game_over()

    @property
    def game_state(self) -> GameState:
        return self.board.game_state

    @property
    def score(self) -> int:
        return self.board.score

    def restart(self) -> None:
        """Discard the current board and start a new game."""
        self.board = Board(self.width, self.height, seed=self.rng)
        self._game_over_handled = False
        self._check_game_over()

    def tick(self) -> bool:
        """
        Apply one gravity step.

        Returns:
            True if the board advanced (i.e. the game is being played)
        """
        if self.board.game_state != GameState.PLAYING:
            return False
        self.board.move_down(False)
        self._check_game_over()
        return True

    def handle_command(self, command: Command) -> bool:
        """
        Apply a player command.

        Restart is always honoured, pause toggles between playing and paused,
        and every movement command is ignored unless the game is playing.

        Returns:
            True if the command was applied
        """
        if not isinstance(command, Command):
            raise ValueError(f"Unknown command: {command!r}")

        if command == Command.RESTART:
            self.restart()
            return True

        if command == Command.PAUSE:
            if self.board.is_game_over():
                return False
            self.board.pause()
            return True

        if self.board.game_state != GameState.PLAYING:
            return False

        board = self.board
        if command == Command.ROTATE_CLOCKWISE:
            board.rotate_clockwise()
        elif command == Command.ROTATE_COUNTER_CLOCKWISE:
            board.rotate_counter_clockwise()
        elif command == Command.HOLD:
            board.switch_with_held()
        elif command == Command.SOFT_DROP:
            board.move_down(True)
        elif command == Command.MOVE_LEFT:
            board.move_left()
        elif command == Command.MOVE_RIGHT:
            board.move_right()
        elif command == Command.HARD_DROP:
            board.hard_drop()

        self._check_game_over()
        return True

    def _check_game_over(self) -> None:
        """Record a finished game exactly once."""
        if not self.board.is_game_over() or self._game_over_handled:
            return
        self._game_over_handled = True
        self.games_played += 1

        score = self.board.score
        new_record = score > self.highest_score
        if new_record:
            self.highest_score = score
            if self.high_scores is not None:
                self.high_scores.save(score)

        if self.logger is not None:
            self.logger.log({
                **self.board.get_statistics(),
                'highest_score': self.highest_score,
                'new_record': new_record,
            })

    def get_snapshot(self) -> GameSnapshot:
        """Get a read-only view of the current game for rendering."""
        board = self.board
        piece = board.current_piece
        playing = piece is not None and not board.is_game_over()

        shadow_cells: Tuple[Point, ...] = ()
        if playing:
            shadow_cells = board.get_shadow().block_coordinates

        return GameSnapshot(
            state=board.game_state,
            width=board.width,
            height=board.height,
            grid=board.grid.copy(),
            current_type=piece.block_type if playing else None,
            current_cells=piece.block_coordinates if playing else (),
            shadow_cells=shadow_cells,
            held_type=board.held_piece,
            next_types=tuple(board.next_pieces(self.preview_count)),
            score=board.score,
            highest_score=max(self.highest_score, board.score),
            lines_cleared=board.lines_cleared,
        )


def play_random_game(
    seed: Optional[int] = None,
    max_steps: int = 10_000,
    width: int = Board.DEFAULT_WIDTH,
    height: int = Board.DEFAULT_HEIGHT,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Play a complete game with random commands for testing.

    Every step issues one random movement command followed by one gravity
    tick, until the game ends or `max_steps` is reached.

    Args:
        seed: Random seed
        max_steps: Upper bound on the number of steps
        width: Board columns
        height: Board rows
        verbose: Whether to print game progress

    Returns:
        Dictionary with game statistics
    """
    session = GameSession(width, height, seed=seed)
    rng = np.random.default_rng(seed)

    if verbose:
        print("Starting random game...")
        print(session.board)

    steps = 0
    while not session.board.is_game_over() and steps < max_steps:
        command = MOVEMENT_COMMANDS[rng.integers(len(MOVEMENT_COMMANDS))]
        session.handle_command(command)
        session.tick()
        steps += 1

    stats = session.board.get_statistics()
    stats['steps'] = steps

    if verbose:
        print("\n" + "=" * 40)
        print("GAME OVER!" if session.board.is_game_over() else "STEP LIMIT REACHED")
        print(session.board)
        print(f"\nFinal Statistics: {stats}")

    return stats


if __name__ == "__main__":
    stats = play_random_game(seed=42, verbose=True)
    print(f"\nFinal score: {stats['score']}")
