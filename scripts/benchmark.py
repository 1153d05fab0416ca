"""
Performance benchmark script for the stacking game.

Plays random games to measure engine speed and score distribution.
"""
import argparse
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional
import numpy as np
from tqdm import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game.board import Board
from game.session import play_random_game
from utils.logger import GameLogger, MetricsTracker


def benchmark_engine(
    num_games: int = 200,
    seed: int = 42,
    width: int = Board.DEFAULT_WIDTH,
    height: int = Board.DEFAULT_HEIGHT,
    logger: Optional[GameLogger] = None,
) -> Dict[str, Any]:
    """
    Benchmark the game engine with random play.

    Args:
        num_games: Number of games to play
        seed: Random seed
        width: Board columns
        height: Board rows
        logger: Optional logger receiving one record per game

    Returns:
        Dictionary of benchmark results
    """
    tracker = MetricsTracker(window_size=num_games)
    scores = []
    total_steps = 0
    total_time = 0.0

    for i in tqdm(range(num_games), desc="Benchmarking"):
        start = time.perf_counter()
        stats = play_random_game(seed=seed + i, width=width, height=height)
        total_time += time.perf_counter() - start

        total_steps += stats['steps']
        scores.append(stats['score'])
        for key in ('score', 'lines_cleared', 'pieces_locked', 'steps'):
            tracker.add(key, stats[key])
        if logger is not None:
            logger.log(stats)

    return {
        'num_games': num_games,
        'total_steps': total_steps,
        'total_time': total_time,
        'steps_per_second': total_steps / total_time if total_time > 0 else 0.0,
        'games_per_second': num_games / total_time if total_time > 0 else 0.0,
        'summaries': tracker.get_all_summaries(),
        'scores': scores,
    }


def plot_scores(scores, output_path: str) -> None:
    """Save a histogram of final scores."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.hist(scores, bins=min(30, max(1, len(set(scores)))), color="#3498db", edgecolor="#0f3460")
    ax.axvline(np.mean(scores), color="#e94560", linestyle="--", label=f"mean {np.mean(scores):.0f}")
    ax.set_xlabel("Final score")
    ax.set_ylabel("Games")
    ax.set_title("Random agent score distribution")
    ax.legend()
    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)


def print_results(results: Dict[str, Any]) -> None:
    """Print benchmark results."""
    print("\n" + "=" * 60)
    print("ENGINE BENCHMARK")
    print("=" * 60)
    print(f"Games: {results['num_games']}")
    print(f"Total steps: {results['total_steps']:,}")
    print(f"Total time: {results['total_time']:.2f}s")
    print(f"Steps/second: {results['steps_per_second']:,.0f}")
    print(f"Games/second: {results['games_per_second']:.1f}")
    for name, summary in results['summaries'].items():
        print(f"  {name}: mean={summary['mean']:.1f} std={summary['std']:.1f} "
              f"min={summary['min']:.0f} max={summary['max']:.0f}")
    print("=" * 60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Benchmark the stacking game engine")
    parser.add_argument("--games", type=int, default=200, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--width", type=int, default=Board.DEFAULT_WIDTH, help="Board columns")
    parser.add_argument("--height", type=int, default=Board.DEFAULT_HEIGHT, help="Board rows")
    parser.add_argument("--log-dir", type=str, default=None,
                        help="Write one JSON record per game to this directory")
    parser.add_argument("--plot", type=str, default=None,
                        help="Save a score histogram to this image path")

    args = parser.parse_args()

    logger = GameLogger(args.log_dir, name="benchmark") if args.log_dir else None
    results = benchmark_engine(
        num_games=args.games,
        seed=args.seed,
        width=args.width,
        height=args.height,
        logger=logger,
    )
    print_results(results)

    if logger is not None:
        summary_file = logger.save_summary()
        print(f"Summary saved to {summary_file}")

    if args.plot:
        plot_scores(results['scores'], args.plot)
        print(f"Score histogram saved to {args.plot}")


if __name__ == "__main__":
    main()
