"""
Blocks: Stacking Game - Native Tkinter GUI

Provides the menu page and the play page. The Tk main loop delivers both
the gravity timer and key presses, so the session is only ever touched from
one thread.
"""
import tkinter as tk
import sys
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

# Add project paths
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from game.board import GameState
from game.pieces import BlockType, Piece
from game.session import Command, GameSession, GameSnapshot
from utils.config import load_config
from utils.highscore import HighScoreStore
from utils.logger import GameLogger


# Keysym -> command while a game is shown
KEY_BINDINGS: Dict[str, Command] = {
    'Up': Command.ROTATE_CLOCKWISE,
    'z': Command.ROTATE_CLOCKWISE,
    'x': Command.ROTATE_COUNTER_CLOCKWISE,
    'c': Command.HOLD,
    'Down': Command.SOFT_DROP,
    'Right': Command.MOVE_RIGHT,
    'Left': Command.MOVE_LEFT,
    'space': Command.HARD_DROP,
    'Escape': Command.PAUSE,
    'F1': Command.PAUSE,
    'F4': Command.RESTART,
}


class StackingGameGUI:
    """Main GUI application for the stacking game."""

    # Color scheme
    COLORS = {
        'bg': '#1a1a2e',
        'panel': '#16213e',
        'accent': '#e94560',
        'text': '#ffffff',
        'text_dim': '#8892b0',
        'border': '#0f3460',
        'empty_cell': '#1b263b',
        'shadow': '#415a77',
        'piece_colors': {
            BlockType.STRAIGHT: '#1abc9c',
            BlockType.SQUARE: '#f1c40f',
            BlockType.T_SHAPE: '#9b59b6',
            BlockType.J_SHAPE: '#3498db',
            BlockType.L_SHAPE: '#f39c12',
            BlockType.S_SKEW: '#2ecc71',
            BlockType.Z_SKEW: '#e74c3c',
        },
    }

    PANEL_COLUMNS = 5

    def __init__(self, root: tk.Tk, config: Dict):
        self.root = root
        self.config = config
        self.root.title("Blocks: Stacking Game")
        self.root.configure(bg=self.COLORS['bg'])
        self.root.resizable(False, False)

        board_cfg = config['board']
        self.board_width = board_cfg['width']
        self.board_height = board_cfg['height']
        self.cell_size = config['gui']['cell_size']

        self.session: Optional[GameSession] = None
        self.tick_job = None

        self.canvas_width = (self.board_width + 2 + self.PANEL_COLUMNS) * self.cell_size
        self.canvas_height = (self.board_height + 2) * self.cell_size

        # Pages
        self.pages = {}
        self.current_page = None

        self._create_main_container()
        self._create_menu_page()
        self._create_play_page()
        self._show_page('menu')

        self.root.bind('<KeyPress>', self._on_key)

    def _create_main_container(self):
        """Create the main container for pages."""
        self.container = tk.Frame(self.root, bg=self.COLORS['bg'])
        self.container.pack(fill=tk.BOTH, expand=True)

    def _show_page(self, page_name: str):
        """Show a specific page."""
        if self.current_page:
            self.pages[self.current_page].pack_forget()

        self.pages[page_name].pack(fill=tk.BOTH, expand=True)
        self.current_page = page_name

    # ==================== MENU PAGE ====================

    def _create_menu_page(self):
        """Create the main menu page."""
        page = tk.Frame(
            self.container, bg=self.COLORS['bg'],
            width=self.canvas_width, height=self.canvas_height,
        )
        page.pack_propagate(False)
        self.pages['menu'] = page

        center_frame = tk.Frame(page, bg=self.COLORS['bg'])
        center_frame.place(relx=0.5, rely=0.5, anchor='center')

        title = tk.Label(
            center_frame,
            text="BLOCKS",
            font=('Segoe UI', 42, 'bold'),
            bg=self.COLORS['bg'],
            fg=self.COLORS['accent']
        )
        title.pack(pady=(0, 10))

        subtitle = tk.Label(
            center_frame,
            text="STACKING GAME",
            font=('Segoe UI', 16),
            bg=self.COLORS['bg'],
            fg=self.COLORS['text_dim']
        )
        subtitle.pack(pady=(0, 50))

        play_btn = tk.Button(
            center_frame,
            text="Play",
            font=('Segoe UI', 16, 'bold'),
            bg='#2ecc71',
            fg=self.COLORS['text'],
            activebackground='#27ae60',
            activeforeground=self.COLORS['text'],
            width=14,
            height=2,
            cursor='hand2',
            relief='flat',
            command=self._start_game
        )
        play_btn.pack(pady=10)

        hint = tk.Label(
            center_frame,
            text="Press ENTER to Start.",
            font=('Segoe UI', 11),
            bg=self.COLORS['bg'],
            fg=self.COLORS['text_dim']
        )
        hint.pack(pady=(20, 0))

    # ==================== PLAY PAGE ====================

    def _create_play_page(self):
        """Create the play page with the board canvas."""
        page = tk.Frame(self.container, bg=self.COLORS['bg'])
        self.pages['play'] = page

        self.canvas = tk.Canvas(
            page,
            width=self.canvas_width,
            height=self.canvas_height,
            bg=self.COLORS['bg'],
            highlightthickness=0,
        )
        self.canvas.pack()

    def _start_game(self):
        """Build a session and start the gravity timer."""
        paths = self.config['paths']
        logger = GameLogger(paths['log_dir']) if self.config['logging']['enabled'] else None
        self.session = GameSession(
            width=self.board_width,
            height=self.board_height,
            high_scores=HighScoreStore(paths['highest_score_file']),
            logger=logger,
            seed=self.config['game']['seed'],
            preview_count=self.config['game']['preview_count'],
            tick_interval_ms=self.config['game'].get('tick_interval_ms', GameSession.TICK_INTERVAL_MS),
        )
        self._show_page('play')
        self._schedule_tick()
        self._redraw()

    def _schedule_tick(self):
        if self.tick_job is not None:
            self.root.after_cancel(self.tick_job)
        self.tick_job = self.root.after(self.session.tick_interval_ms, self._tick)

    def _tick(self):
        """Gravity step."""
        self.tick_job = None
        if self.session.tick():
            self._redraw()
        self._schedule_tick()

    def _on_key(self, event):
        """Translate key presses into session commands."""
        if self.current_page == 'menu':
            if event.keysym == 'Return':
                self._start_game()
            return

        if self.session is None:
            return

        if event.keysym == 'Return' and self.session.game_state == GameState.STOPPED:
            self.session.restart()
            self._schedule_tick()
        else:
            command = KEY_BINDINGS.get(event.keysym)
            if command is None:
                return
            self.session.handle_command(command)
            if command == Command.RESTART:
                self._schedule_tick()

        self._redraw()

    # ==================== DRAWING ====================

    def _redraw(self):
        """Draw the current session state."""
        self.canvas.delete('all')
        snapshot = self.session.get_snapshot()

        if snapshot.state == GameState.STOPPED:
            self._draw_interrupt_page(
                "GAME OVER", "Press Enter to Try Again.",
                [f"Highest Score: {snapshot.highest_score:,}", f"Score: {snapshot.score:,}"],
            )
            return

        if snapshot.state == GameState.PAUSED:
            self._draw_interrupt_page("PAUSED", "Press Esc to Unpause.")
            return

        self._draw_border(snapshot)
        self._draw_grid(snapshot)
        self._draw_cells(snapshot.shadow_cells, self.COLORS['shadow'])
        if snapshot.current_type is not None:
            self._draw_cells(snapshot.current_cells, self.COLORS['piece_colors'][snapshot.current_type])
        self._draw_side_panel(snapshot)

    def _draw_border(self, snapshot: GameSnapshot):
        size = self.cell_size
        columns = snapshot.width + 2
        rows = snapshot.height + 2
        for col in range(columns):
            for row in range(rows):
                if row in (0, rows - 1) or col in (0, columns - 1):
                    self._draw_block(col * size, row * size, self.COLORS['border'])

    def _draw_grid(self, snapshot: GameSnapshot):
        size = self.cell_size
        for y in range(snapshot.height):
            for x in range(snapshot.width):
                x1 = (x + 1) * size
                y1 = (y + 1) * size
                block_type = snapshot.block_type_at(x, y)
                if block_type is None:
                    self.canvas.create_rectangle(
                        x1, y1, x1 + size - 1, y1 + size - 1,
                        fill=self.COLORS['empty_cell'],
                        outline='#2d3748',
                        width=1
                    )
                else:
                    self._draw_block(x1, y1, self.COLORS['piece_colors'][block_type])

    def _draw_cells(self, cells: Iterable[Tuple[int, int]], color: str, origin: Tuple[int, int] = (1, 1)):
        """Draw board cells; origin is the canvas cell of board (0, 0)."""
        size = self.cell_size
        ox, oy = origin
        for x, y in cells:
            self._draw_block((x + ox) * size, (y + oy) * size, color)

    def _draw_block(self, x1: int, y1: int, color: str):
        """Draw one block with a light top edge and a dark bottom edge."""
        size = self.cell_size
        x2, y2 = x1 + size - 1, y1 + size - 1
        self.canvas.create_rectangle(x1, y1, x2, y2, fill=color, outline='')
        self.canvas.create_line(x1, y1, x2, y1, fill=self._lighten_color(color, 0.35), width=3)
        self.canvas.create_line(x1, y2, x2, y2, fill=self._darken_color(color, 0.3), width=3)

    def _draw_side_panel(self, snapshot: GameSnapshot):
        """Draw score, held piece and next pieces to the right of the board."""
        size = self.cell_size
        panel_col = snapshot.width + 2
        text_x = (panel_col + 0.5) * size
        font = ('Segoe UI', max(8, size // 3), 'bold')

        def label(text: str, row: float):
            self.canvas.create_text(
                text_x, row * size, text=text, anchor='w',
                font=font, fill=self.COLORS['text']
            )

        label("Score", 1.5)
        label(f"{snapshot.score:,}", 2.2)
        label("Hold", 4)
        if snapshot.held_type is not None:
            self._draw_preview(snapshot.held_type, panel_col, 5)

        label("Next", 10)
        for index, block_type in enumerate(snapshot.next_types):
            self._draw_preview(block_type, panel_col, 11 + 4 * index)

    def _draw_preview(self, block_type: BlockType, column: int, row: int):
        """Draw a piece in spawn orientation with its top-left at (column, row)."""
        offsets = Piece(block_type).offsets
        min_x = min(dx for dx, _ in offsets)
        min_y = min(dy for _, dy in offsets)
        cells = [(dx - min_x, dy - min_y) for dx, dy in offsets]
        self._draw_cells(cells, self.COLORS['piece_colors'][block_type], origin=(column + 1, row))

    def _draw_interrupt_page(self, title: str, hint: str, extra: Optional[Iterable[str]] = None):
        """Draw the pause or game over page."""
        cx = self.canvas_width // 2
        cy = self.canvas_height // 2
        self.canvas.create_text(
            cx, cy - 40, text=title,
            font=('Segoe UI', 32, 'bold'), fill=self.COLORS['accent']
        )
        self.canvas.create_text(
            cx, cy + 10, text=hint,
            font=('Segoe UI', 12), fill=self.COLORS['text_dim']
        )
        for index, line in enumerate(extra or []):
            self.canvas.create_text(
                cx, cy + 45 + 25 * index, text=line,
                font=('Segoe UI', 12), fill=self.COLORS['text']
            )

    def _lighten_color(self, hex_color: str, amount: float = 0.2) -> str:
        """Lighten a hex color."""
        hex_color = hex_color.lstrip('#')
        rgb = tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
        new_rgb = tuple(min(255, int(c + (255 - c) * amount)) for c in rgb)
        return f'#{new_rgb[0]:02x}{new_rgb[1]:02x}{new_rgb[2]:02x}'

    def _darken_color(self, hex_color: str, amount: float = 0.3) -> str:
        """Darken a hex color."""
        hex_color = hex_color.lstrip('#')
        rgb = tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
        new_rgb = tuple(max(0, int(c * (1 - amount))) for c in rgb)
        return f'#{new_rgb[0]:02x}{new_rgb[1]:02x}{new_rgb[2]:02x}'


def main(config_path: Optional[str] = None):
    """Launch the GUI."""
    if config_path is None:
        config_path = str(project_root / "config" / "default.yaml")
    config = load_config(config_path)

    root = tk.Tk()
    StackingGameGUI(root, config)
    root.mainloop()


if __name__ == "__main__":
    main()
