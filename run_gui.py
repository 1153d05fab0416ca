#!/usr/bin/env python3
"""
Blocks: Stacking Game - GUI Launcher

Checks that the GUI can be started, then opens the game window.
"""
import argparse
import importlib.util
import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

# import name -> how to get it
REQUIRED_MODULES = {
    "numpy": "pip install numpy",
    "yaml": "pip install pyyaml",
    "tkinter": "install the Tk bindings of your Python distribution (e.g. python3-tk)",
}


def check_dependencies() -> bool:
    """Print an install hint for every missing module and report success."""
    missing = {
        name: hint for name, hint in REQUIRED_MODULES.items()
        if importlib.util.find_spec(name) is None
    }
    for name, hint in missing.items():
        print(f"Missing dependency '{name}': {hint}")
    return not missing


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Play Blocks: Stacking Game")
    parser.add_argument(
        "--config",
        type=str,
        default=str(project_root / "config" / "default.yaml"),
        help="Path to configuration file"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only check dependencies and exit"
    )
    args = parser.parse_args()

    ok = check_dependencies()
    if args.check:
        print("All GUI dependencies found." if ok else "Some GUI dependencies are missing.")
        sys.exit(0 if ok else 1)
    if not ok:
        sys.exit(1)

    print("=" * 44)
    print("BLOCKS".center(44))
    print("Stacking Game".center(44))
    print("=" * 44)

    from gui.app import main as run_gui
    run_gui(args.config)


if __name__ == "__main__":
    main()
