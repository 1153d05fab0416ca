"""
Blocks: Stacking Game GUI Package.

Provides a native graphical interface for playing the game.
"""
from .app import StackingGameGUI

__all__ = ['StackingGameGUI']
