"""
Stacking Game Renderer.

Provides ASCII visualization of game snapshots.
"""
from typing import List, Optional

from .board import GameState
from .pieces import BLOCK_LETTERS, BlockType, Piece
from .session import GameSnapshot


class Renderer:
    """
    ASCII renderer for the stacking game.

    Only reads GameSnapshot values; never touches the board.
    """

    # ASCII characters for rendering
    EMPTY = "·"
    CURRENT = "█"
    SHADOW = "□"
    BORDER = "#"
    PIECE_PREVIEW = "□"

    def __init__(self, show_border: bool = True):
        """Initialize renderer."""
        self.show_border = show_border

    def render_board(self, snapshot: GameSnapshot) -> str:
        """
        Render the grid with the current piece and its shadow.

        Args:
            snapshot: Game snapshot to render

        Returns:
            String representation of the board
        """
        current = set(snapshot.current_cells)
        shadow = set(snapshot.shadow_cells)

        lines = []
        if self.show_border:
            lines.append(self.BORDER * (snapshot.width + 2))

        for y in range(snapshot.height):
            row_str = ""
            for x in range(snapshot.width):
                block_type = snapshot.block_type_at(x, y)
                if (x, y) in current:
                    row_str += self.CURRENT
                elif block_type is not None:
                    row_str += BLOCK_LETTERS[block_type]
                elif (x, y) in shadow:
                    row_str += self.SHADOW
                else:
                    row_str += self.EMPTY
            if self.show_border:
                row_str = self.BORDER + row_str + self.BORDER
            lines.append(row_str)

        if self.show_border:
            lines.append(self.BORDER * (snapshot.width + 2))

        return "\n".join(lines)

    def render_piece(self, block_type: Optional[BlockType]) -> List[str]:
        """
        Render a piece preview in its spawn orientation.

        Args:
            block_type: Piece type, or None for an empty slot

        Returns:
            Lines of the preview (4 columns wide)
        """
        if block_type is None:
            return ["    "]

        offsets = Piece(block_type).offsets
        min_x = min(dx for dx, _ in offsets)
        min_y = min(dy for _, dy in offsets)
        max_y = max(dy for _, dy in offsets)
        cells = set((dx - min_x, dy - min_y) for dx, dy in offsets)

        lines = []
        for row in range(max_y - min_y + 1):
            line = "".join(self.PIECE_PREVIEW if (col, row) in cells else " " for col in range(4))
            lines.append(line)
        return lines

    def render_side_panel(self, snapshot: GameSnapshot) -> List[str]:
        """Render score, held piece and the next queued pieces."""
        lines = [
            f"Score: {snapshot.score:,}",
            f"Best:  {snapshot.highest_score:,}",
            f"Lines: {snapshot.lines_cleared}",
            "",
            "Hold:",
        ]
        lines.extend(self.render_piece(snapshot.held_type))
        lines.append("")
        lines.append("Next:")
        for block_type in snapshot.next_types:
            lines.extend(self.render_piece(block_type))
            lines.append("")
        return lines

    def render_game_state(self, snapshot: GameSnapshot) -> str:
        """
        Render the complete game: board on the left, side panel on the right.

        Args:
            snapshot: Game snapshot to render

        Returns:
            Complete game state visualization
        """
        if snapshot.state == GameState.STOPPED:
            return self.render_interrupt(
                "GAME OVER",
                "Press Enter to Try Again.",
                [f"Highest Score: {snapshot.highest_score:,}", f"Score: {snapshot.score:,}"],
            )
        if snapshot.state == GameState.PAUSED:
            return self.render_interrupt("PAUSED", "Press Esc to Unpause.")

        board_lines = self.render_board(snapshot).split("\n")
        panel_lines = self.render_side_panel(snapshot)
        board_width = len(board_lines[0])

        lines = []
        for i in range(max(len(board_lines), len(panel_lines))):
            left = board_lines[i] if i < len(board_lines) else " " * board_width
            right = panel_lines[i] if i < len(panel_lines) else ""
            lines.append(f"{left}  {right}".rstrip())
        return "\n".join(lines)

    def render_interrupt(self, title: str, hint: str, extra: Optional[List[str]] = None) -> str:
        """Render a full-screen message such as the pause or game over page."""
        lines = ["=" * 40, title.center(40), hint.center(40)]
        for line in extra or []:
            lines.append(line.center(40))
        lines.append("=" * 40)
        return "\n".join(lines)


def clear_screen():
    """Clear the terminal screen."""
    import os
    os.system('cls' if os.name == 'nt' else 'clear')


if __name__ == "__main__":
    from .session import GameSession

    session = GameSession(seed=42)
    renderer = Renderer()
    print(renderer.render_game_state(session.get_snapshot()))
