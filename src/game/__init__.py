"""Game engine module for the stacking game."""
from .pieces import Piece, BlockType, ALL_BLOCK_TYPES, BLOCK_OFFSETS, get_block_type_by_name
from .board import Board, GameState
from .session import GameSession, GameSnapshot, Command

__all__ = [
    "Piece",
    "BlockType",
    "ALL_BLOCK_TYPES",
    "BLOCK_OFFSETS",
    "get_block_type_by_name",
    "Board",
    "GameState",
    "GameSession",
    "GameSnapshot",
    "Command",
]
