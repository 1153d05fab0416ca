"""
Stacking Game Board Module.

This module implements the game board with:
- Static block grid (numpy array of block type values)
- 7-bag piece randomizer
- Collision detection
- Movement, locking and hard drop
- Rotation with a two-trial wall kick
- Held piece swapping
- Row clearing and scoring
"""
from collections import deque
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .pieces import (
    ALL_BLOCK_TYPES, BLOCK_LETTERS, EMPTY,
    BlockType, Piece, Point, add_offsets_and_position,
)


class GameState(Enum):
    """Game state enumeration."""
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


SeedLike = Union[None, int, np.random.Generator]


class Board:
    """
    Represents the stacking game board and drives all gameplay transitions.

    The grid is a 2D numpy array indexed as grid[y, x] where:
    - 0 = empty cell
    - 1..7 = cell filled by a locked piece of that BlockType
    """

    DEFAULT_WIDTH = 10
    DEFAULT_HEIGHT = 22
    SPAWN_Y = 1
    BAG_REFILL_THRESHOLD = 5  # Refill the bag when fewer pieces than this remain
    ROW_CLEAR_BASE = 100
    ROW_CLEAR_BONUS = 50  # Multiplied by the number of rows cleared in the same pass

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        seed: SeedLike = None,
    ):
        """
        Initialize an empty board and spawn the first piece.

        Args:
            width: Number of columns
            height: Number of rows
            seed: Random seed or numpy Generator for the piece bag
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.rng = np.random.default_rng(seed)

        self.grid = np.zeros((height, width), dtype=np.int8)
        self.bag: Deque[BlockType] = deque()
        self.current_piece: Optional[Piece] = None
        self.held_piece: Optional[BlockType] = None
        self.held_piece_lock = False
        self.game_state = GameState.PLAYING
        self.score = 0

        # Statistics
        self.lines_cleared = 0
        self.pieces_locked = 0

        self.generate_new_piece()

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def _refill_bag(self) -> None:
        """Append one shuffled permutation of every tetromino type."""
        order = self.rng.permutation(len(ALL_BLOCK_TYPES))
        self.bag.extend(ALL_BLOCK_TYPES[i] for i in order)

    def generate_new_piece(self) -> None:
        """
        Replace the current piece with the next type from the bag.

        The bag always receives whole permutations, so every run of 7 spawns
        starting at a bag boundary contains each type exactly once.
        """
        if len(self.bag) < self.BAG_REFILL_THRESHOLD:
            self._refill_bag()

        self._initialize_with_type(self.bag.popleft())

    def _initialize_with_type(self, block_type: BlockType) -> None:
        """Place a fresh piece of the given type at the spawn anchor."""
        self.current_piece = Piece(block_type)

        x, y = self.width // 2, self.SPAWN_Y
        # A blocked spawn is the only way the game ends
        if not self.does_collide(self.current_piece.translate(x, y)):
            self.current_piece.set_position(x, y)
        else:
            self.game_state = GameState.STOPPED

    # ------------------------------------------------------------------
    # Collision
    # ------------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if coordinates are within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def does_collide(self, coordinates: Sequence[Point]) -> bool:
        """
        Check whether any coordinate is out of bounds or on an occupied cell.

        Args:
            coordinates: Absolute (x, y) block coordinates

        Returns:
            True if the coordinates cannot be occupied
        """
        for x, y in coordinates:
            if not self.in_bounds(x, y) or self.grid[y, x] != EMPTY:
                return True
        return False

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def move_piece(self, target: Piece, dx: int, dy: int, add_score: bool) -> bool:
        """
        Try to move a piece by (dx, dy).

        If the live piece fails to move down it is locked into the grid,
        full rows are cleared and the next piece is spawned. Horizontal
        collisions and collisions of any other piece (the shadow) never lock.

        Args:
            target: Piece to move (the current piece or a duplicate of it)
            dx: Horizontal delta
            dy: Vertical delta
            add_score: Award 1 point if the move succeeds

        Returns:
            True if the move collided with something
        """
        collided = self.does_collide(target.translate(dx, dy))

        if not collided:
            if add_score:
                self.score += 1
            x, y = target.position
            target.set_position(x + dx, y + dy)
        elif target is self.current_piece and dy > 0:
            self._lock_piece(target)

        return collided

    def _lock_piece(self, piece: Piece) -> None:
        """Write the piece into the grid and advance to the next piece."""
        for x, y in piece.block_coordinates:
            self.grid[y, x] = int(piece.block_type)
        self.pieces_locked += 1

        self.cleanup_rows()
        self.generate_new_piece()
        self.held_piece_lock = False

    def _drop(self, target: Piece, add_score: bool) -> None:
        """Keep moving the target down until it collides."""
        while not self.move_piece(target, 0, 1, add_score):
            pass

    def move_down(self, forced: bool = False) -> bool:
        """
        Move the current piece one row down.

        Args:
            forced: True for a player soft drop (scores 1 point), False for gravity

        Returns:
            True if the piece collided (and was therefore locked)
        """
        if not self._accepts_input():
            return False
        return self.move_piece(self.current_piece, 0, 1, forced)

    def move_left(self) -> bool:
        """Move the current piece one column left."""
        if not self._accepts_input():
            return False
        return self.move_piece(self.current_piece, -1, 0, False)

    def move_right(self) -> bool:
        """Move the current piece one column right."""
        if not self._accepts_input():
            return False
        return self.move_piece(self.current_piece, 1, 0, False)

    def hard_drop(self) -> None:
        """Drop the current piece until it locks, scoring 1 point per row."""
        if not self._accepts_input():
            return
        self._drop(self.current_piece, True)

    def get_shadow(self) -> Optional[Piece]:
        """
        Get the predicted landing place of the current piece.

        Returns:
            A dropped duplicate of the current piece, never written to the grid
        """
        if self.current_piece is None:
            return None
        shadow = self.current_piece.duplicate()
        self._drop(shadow, False)
        return shadow

    def _accepts_input(self) -> bool:
        return self.current_piece is not None and self.game_state == GameState.PLAYING

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    def rotate(self, clockwise: bool = True) -> bool:
        """
        Rotate the current piece, with a minimal wall kick.

        Trials, in order: the current anchor, the anchor shifted one column
        right, then the anchor shifted one column left. The first legal trial
        is committed; if none is legal the piece is left unchanged.

        Args:
            clockwise: Rotation direction

        Returns:
            True if the piece was rotated
        """
        if not self._accepts_input():
            return False
        piece = self.current_piece
        if piece.block_type == BlockType.SQUARE:
            return False

        new_offsets = piece.rotate(clockwise)
        x, y = piece.position

        for kick in (0, 1, -1):
            anchor = (x + kick, y)
            if not self.does_collide(add_offsets_and_position(new_offsets, anchor)):
                piece.set_offsets(new_offsets)
                piece.set_position(*anchor)
                return True

        return False

    def rotate_clockwise(self) -> bool:
        """Rotate the current piece clockwise."""
        return self.rotate(True)

    def rotate_counter_clockwise(self) -> bool:
        """Rotate the current piece counter-clockwise."""
        return self.rotate(False)

    # ------------------------------------------------------------------
    # Held piece
    # ------------------------------------------------------------------

    def switch_with_held(self) -> bool:
        """
        Swap the current piece with the held piece.

        Only one swap is allowed per locked piece. With nothing held yet, the
        current type is stored and a new piece comes from the bag.

        Returns:
            True if a swap happened
        """
        if not self._accepts_input() or self.held_piece_lock:
            return False
        self.held_piece_lock = True

        current_type = self.current_piece.block_type
        if self.held_piece is None:
            self.held_piece = current_type
            self.generate_new_piece()
            return True

        self._initialize_with_type(self.held_piece)
        self.held_piece = current_type
        return True

    # ------------------------------------------------------------------
    # Row clearing
    # ------------------------------------------------------------------

    def find_full_rows(self) -> List[int]:
        """
        Find all full rows, bottom to top.

        Row 0 is never considered.
        """
        return [
            row for row in range(self.height - 1, 0, -1)
            if np.all(self.grid[row] != EMPTY)
        ]

    def cleanup_rows(self) -> int:
        """
        Remove full rows and award points for them.

        Every cleared row is worth ROW_CLEAR_BASE + ROW_CLEAR_BONUS times the
        number of rows cleared in this pass, so N rows at once score
        N * (100 + 50 * N).

        Returns:
            Number of rows cleared
        """
        full_rows = self.find_full_rows()
        if not full_rows:
            return 0

        # Top-most row first, so lower indices stay valid while shifting
        full_rows.reverse()
        for full_row in full_rows:
            self.score += self.ROW_CLEAR_BASE + self.ROW_CLEAR_BONUS * len(full_rows)
            self.grid[1:full_row + 1] = self.grid[0:full_row].copy()
            self.grid[0] = EMPTY

        self.lines_cleared += len(full_rows)
        return len(full_rows)

    # ------------------------------------------------------------------
    # Game state
    # ------------------------------------------------------------------

    def pause(self) -> None:
        """Pause or unpause the game. Has no effect once the game is stopped."""
        if self.game_state == GameState.PLAYING:
            self.game_state = GameState.PAUSED
        elif self.game_state == GameState.PAUSED:
            self.game_state = GameState.PLAYING

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.game_state == GameState.STOPPED

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def block_type_at(self, x: int, y: int) -> Optional[BlockType]:
        """Get the type of the locked block at (x, y), or None if empty."""
        value = int(self.grid[y, x])
        return BlockType(value) if value != EMPTY else None

    def next_pieces(self, count: Optional[int] = None) -> List[BlockType]:
        """Get the queued piece types, optionally only the first `count`."""
        pending = list(self.bag)
        return pending if count is None else pending[:count]

    @property
    def total_blocks(self) -> int:
        """Return total number of filled cells on the grid."""
        return int(np.count_nonzero(self.grid))

    def get_statistics(self) -> Dict[str, Any]:
        """Get game statistics."""
        return {
            'score': self.score,
            'lines_cleared': self.lines_cleared,
            'pieces_locked': self.pieces_locked,
            'total_blocks': self.total_blocks,
            'game_state': self.game_state.value,
        }

    def __str__(self) -> str:
        """Create a string visualization of the grid and the current piece."""
        current: Tuple[Point, ...] = ()
        if self.current_piece is not None and not self.is_game_over():
            current = self.current_piece.block_coordinates

        lines = []
        for y in range(self.height):
            row_str = ""
            for x in range(self.width):
                block_type = self.block_type_at(x, y)
                if (x, y) in current:
                    row_str += "█"
                elif block_type is not None:
                    row_str += BLOCK_LETTERS[block_type]
                else:
                    row_str += "·"
            lines.append(row_str)
        lines.append(f"Score: {self.score}, State: {self.game_state.value}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (f"Board(width={self.width}, height={self.height}, "
                f"score={self.score}, state={self.game_state.value})")
