"""
Tetromino Piece Definitions.

This module defines the 7 tetromino types and the Piece model.
Each piece is represented as an anchor position on the grid plus 4 (x, y)
offsets relative to that anchor. Offsets share a pivot per type, so a
rotation is a plain 90 degree turn of every offset around (0, 0).
"""
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple


Point = Tuple[int, int]

BLOCKS_PER_PIECE = 4


class BlockType(IntEnum):
    """Tetromino types. The value is what a locked cell stores in the grid."""
    STRAIGHT = 1
    SQUARE = 2
    T_SHAPE = 3
    J_SHAPE = 4
    L_SHAPE = 5
    S_SKEW = 6
    Z_SKEW = 7


# Grid value for an unoccupied cell
EMPTY = 0

ALL_BLOCK_TYPES: List[BlockType] = list(BlockType)


# =============================================================================
# CANONICAL OFFSETS (y grows downward)
# =============================================================================

BLOCK_OFFSETS: Dict[BlockType, Tuple[Point, ...]] = {
    # □
    # ■
    # □
    # □
    BlockType.STRAIGHT: ((0, -1), (0, 0), (0, 1), (0, 2)),
    # ■□
    # □□
    BlockType.SQUARE: ((0, 0), (1, 0), (0, 1), (1, 1)),
    # □■□
    #  □
    BlockType.T_SHAPE: ((-1, 0), (0, 0), (1, 0), (0, 1)),
    # □□
    #  ■
    #  □
    BlockType.J_SHAPE: ((-1, -1), (0, -1), (0, 0), (0, 1)),
    # □□
    # ■
    # □
    BlockType.L_SHAPE: ((1, -1), (0, -1), (0, 0), (0, 1)),
    # □
    # ■□
    #  □
    BlockType.S_SKEW: ((0, -1), (0, 0), (1, 0), (1, 1)),
    #  □
    # □■
    # □
    BlockType.Z_SKEW: ((0, -1), (0, 0), (-1, 0), (-1, 1)),
}

BLOCK_LETTERS: Dict[BlockType, str] = {
    BlockType.STRAIGHT: "I",
    BlockType.SQUARE: "O",
    BlockType.T_SHAPE: "T",
    BlockType.J_SHAPE: "J",
    BlockType.L_SHAPE: "L",
    BlockType.S_SKEW: "S",
    BlockType.Z_SKEW: "Z",
}


def get_block_offsets(block_type: BlockType) -> Tuple[Point, ...]:
    """Get the spawn offsets of a tetromino type."""
    return BLOCK_OFFSETS[BlockType(block_type)]


def get_block_type_by_name(name: str) -> BlockType:
    """Get a block type by its enum name (e.g. "T_SHAPE") or letter (e.g. "T")."""
    key = name.upper()
    if key in BlockType.__members__:
        return BlockType[key]
    for block_type, letter in BLOCK_LETTERS.items():
        if letter == key:
            return block_type
    raise ValueError(
        f"Unknown block type: {name}. Valid types: {list(BlockType.__members__)}"
    )


def add_offsets_and_position(offsets: Sequence[Point], position: Point) -> Tuple[Point, ...]:
    """Add a position to every offset and return the absolute coordinates."""
    px, py = position
    return tuple((dx + px, dy + py) for dx, dy in offsets)


class Piece:
    """
    A live tetromino on the board.

    The type never changes. The anchor position and the offsets are
    replaced wholesale by the board once a move or rotation is known to be
    legal; every geometry helper here is pure and only returns coordinates.
    """

    def __init__(
        self,
        block_type: BlockType,
        position: Point = (0, 0),
        offsets: Optional[Sequence[Point]] = None,
    ):
        """
        Create a piece.

        Args:
            block_type: Tetromino type
            position: Anchor (x, y) in grid coordinates
            offsets: Block offsets, defaults to the type's spawn offsets
        """
        self._block_type = BlockType(block_type)
        self.position: Point = (0, 0)
        self.offsets: Tuple[Point, ...] = get_block_offsets(self._block_type)
        self.set_position(*position)
        if offsets is not None:
            self.set_offsets(offsets)

    @property
    def block_type(self) -> BlockType:
        """Return the tetromino type of this piece."""
        return self._block_type

    @property
    def block_coordinates(self) -> Tuple[Point, ...]:
        """Return the absolute coordinates of the 4 blocks."""
        return add_offsets_and_position(self.offsets, self.position)

    def translate(self, dx: int, dy: int) -> Tuple[Point, ...]:
        """Return the block coordinates the piece would have if moved by (dx, dy)."""
        x, y = self.position
        return add_offsets_and_position(self.offsets, (x + dx, y + dy))

    def rotate(self, clockwise: bool = True) -> Tuple[Point, ...]:
        """
        Compute the offsets after a 90 degree rotation around the pivot.

        Clockwise maps (x, y) to (-y, x), counter-clockwise maps (x, y) to
        (y, -x). The piece itself is left untouched.

        Args:
            clockwise: Rotation direction

        Returns:
            The 4 rotated offsets
        """
        x_direction, y_direction = (-1, 1) if clockwise else (1, -1)
        return tuple((y * x_direction, x * y_direction) for x, y in self.offsets)

    def set_offsets(self, offsets: Sequence[Point]) -> None:
        """Replace the block offsets."""
        new_offsets = tuple((int(dx), int(dy)) for dx, dy in offsets)
        if len(new_offsets) != BLOCKS_PER_PIECE:
            raise ValueError(
                f"A piece needs exactly {BLOCKS_PER_PIECE} offsets, got {len(new_offsets)}"
            )
        self.offsets = new_offsets

    def set_position(self, x: int, y: int) -> None:
        """Move the anchor to (x, y)."""
        self.position = (int(x), int(y))

    def duplicate(self) -> "Piece":
        """Create an independent copy with the same type, position and offsets."""
        return Piece(self._block_type, self.position, self.offsets)

    def __repr__(self) -> str:
        return f"Piece({self._block_type.name}, position={self.position})"


def visualize_piece(piece: Piece) -> str:
    """Create a string visualization of a piece's current orientation."""
    xs = [dx for dx, _ in piece.offsets]
    ys = [dy for _, dy in piece.offsets]
    min_x, min_y = min(xs), min(ys)
    width = max(xs) - min_x + 1
    height = max(ys) - min_y + 1

    cells = set((dx - min_x, dy - min_y) for dx, dy in piece.offsets)
    lines = []
    for row in range(height):
        line = "".join("□" if (col, row) in cells else " " for col in range(width))
        lines.append(line.rstrip())
    return "\n".join(lines)


if __name__ == "__main__":
    # Print all pieces for verification
    print(f"Total piece types: {len(ALL_BLOCK_TYPES)}")
    print("-" * 40)
    for block_type in ALL_BLOCK_TYPES:
        print(f"\n{block_type.name} ({BLOCK_LETTERS[block_type]}):")
        print(visualize_piece(Piece(block_type)))
