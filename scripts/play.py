"""
Interactive play script for the stacking game.

Allows playing manually in the terminal or watching a random agent.
"""
import argparse
import sys
import time
from pathlib import Path
from typing import Dict, Optional
import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game.board import GameState
from game.renderer import Renderer, clear_screen
from game.session import Command, GameSession, MOVEMENT_COMMANDS, play_random_game
from utils.config import load_config
from utils.highscore import HighScoreStore
from utils.logger import GameLogger


# One character per command; a line may hold several
KEY_COMMANDS: Dict[str, Command] = {
    'a': Command.MOVE_LEFT,
    'd': Command.MOVE_RIGHT,
    's': Command.SOFT_DROP,
    'w': Command.ROTATE_CLOCKWISE,
    'e': Command.ROTATE_CLOCKWISE,
    'q': Command.ROTATE_COUNTER_CLOCKWISE,
    'c': Command.HOLD,
    ' ': Command.HARD_DROP,
    'p': Command.PAUSE,
    'r': Command.RESTART,
}


def create_session(config: Dict, seed: Optional[int] = None) -> GameSession:
    """Build a session wired to the configured high score file and log dir."""
    paths = config['paths']
    logger = GameLogger(paths['log_dir']) if config['logging']['enabled'] else None
    return GameSession(
        width=config['board']['width'],
        height=config['board']['height'],
        high_scores=HighScoreStore(paths['highest_score_file']),
        logger=logger,
        seed=seed if seed is not None else config['game']['seed'],
        preview_count=config['game']['preview_count'],
        tick_interval_ms=config['game']['tick_interval_ms'],
    )


def play_manual(config: Dict, seed: Optional[int] = None) -> None:
    """
    Play the stacking game manually in the terminal.

    Each entered line is applied key by key, then gravity moves the piece
    down by one row.

    Args:
        config: Loaded configuration
        seed: Random seed
    """
    session = create_session(config, seed)
    renderer = Renderer()

    print("\n" + "=" * 60)
    print("BLOCKS: STACKING GAME - Terminal Play")
    print("=" * 60)
    print("\nControls (type keys then Enter):")
    print("  a/d: left/right   s: soft drop   w/e: rotate cw   q: rotate ccw")
    print("  c: hold   <space>: hard drop   p: pause   r: restart   x: quit")
    print("=" * 60 + "\n")
    input("Press Enter to start...")

    while True:
        clear_screen()
        print(renderer.render_game_state(session.get_snapshot()))

        try:
            user_input = input("\n> ").lower()
        except EOFError:
            break

        if user_input.strip() == 'x':
            print("Thanks for playing!")
            break

        if session.game_state == GameState.STOPPED:
            # Enter alone starts a new game after game over
            if user_input.strip() in ('', 'r'):
                session.restart()
            continue

        for key in user_input:
            command = KEY_COMMANDS.get(key)
            if command is None:
                continue
            session.handle_command(command)

        session.tick()


def watch_random(config: Dict, num_games: int = 1, delay: float = 0.05, seed: int = 42) -> None:
    """
    Watch a random agent play.

    Args:
        config: Loaded configuration
        num_games: Number of games to play
        delay: Delay between steps (seconds)
        seed: Random seed
    """
    renderer = Renderer()
    rng = np.random.default_rng(seed)

    for game_num in range(num_games):
        session = create_session(config, seed + game_num)
        step = 0

        while session.game_state != GameState.STOPPED:
            clear_screen()
            print(f"Game {game_num + 1}/{num_games} | Step {step}")
            print(renderer.render_game_state(session.get_snapshot()))

            command = MOVEMENT_COMMANDS[rng.integers(len(MOVEMENT_COMMANDS))]
            session.handle_command(command)
            session.tick()
            step += 1
            time.sleep(delay)

        clear_screen()
        print(renderer.render_game_state(session.get_snapshot()))
        stats = session.board.get_statistics()
        print(f"\nSteps: {step}")
        print(f"Lines Cleared: {stats['lines_cleared']}")
        print(f"Pieces Locked: {stats['pieces_locked']}")

        if game_num < num_games - 1:
            input("Press Enter for next game...")


def play_random(num_games: int = 10, seed: int = 42) -> None:
    """
    Play random games and show statistics.

    Args:
        num_games: Number of games to play
        seed: Random seed
    """
    print(f"\nPlaying {num_games} random games...")

    scores = []
    lines = []
    pieces = []

    for i in range(num_games):
        stats = play_random_game(seed=seed + i)
        scores.append(stats['score'])
        lines.append(stats['lines_cleared'])
        pieces.append(stats['pieces_locked'])

        print(f"Game {i+1}: Score={stats['score']:,}, "
              f"Pieces={stats['pieces_locked']}, "
              f"Lines={stats['lines_cleared']}")

    print("\n" + "=" * 60)
    print("RANDOM AGENT STATISTICS")
    print("=" * 60)
    print(f"Games: {num_games}")
    print(f"Mean Score: {np.mean(scores):.1f} ± {np.std(scores):.1f}")
    print(f"Max Score: {max(scores)}")
    print(f"Mean Pieces: {np.mean(pieces):.1f}")
    print(f"Mean Lines: {np.mean(lines):.1f}")
    print("=" * 60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Play Blocks: Stacking Game in the terminal")
    parser.add_argument(
        "--mode",
        type=str,
        choices=["manual", "watch", "random"],
        default="manual",
        help="Play mode: play manually, watch a random agent, or run random games"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/default.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games to play"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.05,
        help="Delay between steps (seconds) for watch mode"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed"
    )

    args = parser.parse_args()
    config = load_config(args.config)

    if args.mode == "manual":
        play_manual(config, seed=args.seed)
    elif args.mode == "watch":
        watch_random(config, num_games=args.games, delay=args.delay,
                     seed=args.seed if args.seed is not None else 42)
    elif args.mode == "random":
        play_random(num_games=args.games, seed=args.seed if args.seed is not None else 42)


if __name__ == "__main__":
    main()
