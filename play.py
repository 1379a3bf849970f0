"""
play.py: Run the CP01 (Cube Paint) game locally.

Usage:
    python play.py                  # Play with default seed 0 in terminal mode
    python play.py --seed 42        # Play with a specific seed (jump pads)
    python play.py --agent          # Run the sample agent (random actions)
    python play.py --demo           # Scripted solution of the first two levels
    python play.py --check          # Validate the built-in levels

Controls (terminal / human play):
    ACTION1 = W / ↑      (Up)
    ACTION2 = S / ↓      (Down)
    ACTION3 = A / ←      (Left)
    ACTION4 = D / →      (Right)
    ACTION6 = click      (step towards the clicked tile)
"""

import argparse
import json
import logging
import os
import random
import sys

import arc_agi
from arcengine import GameAction

from cubepaint.constants import PAINTABLE_TILES
from cubepaint.levels import builtin_levels
from cubepaint.validation import unenterable_tiles, validate_levels

GAME_ID = "cp01-v1"
ENVIRONMENTS_DIR = "./environment_files"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def play_human(seed: int = 0) -> None:
    """Launch the game in terminal render mode for human play."""
    arc = arc_agi.Arcade(environments_dir=ENVIRONMENTS_DIR)
    env = arc.make(GAME_ID, seed=seed, render_mode="terminal")
    if env is None:
        logger.error(f"Could not create environment for {GAME_ID}")
        return

    print("=" * 60)
    print("  CP01: Cube Paint")
    print("  A 12-level cube-rolling painting puzzle")
    print("=" * 60)
    print()
    print("  Roll the cube over every floor tile exactly once.")
    print("  Plain tiles only accept the cube in their own colour;")
    print("  yellow changers and orange switches recolour it.")
    print("  Green pads teleport, dark holes drop you a floor.")
    print()
    print("  Controls: W/↑ = Up    S/↓ = Down    A/← = Left    D/→ = Right")
    print("            Click a tile to step towards it")
    print("=" * 60)

    try:
        input("\nPress Enter to view scorecard when done...\n")
    except (KeyboardInterrupt, EOFError):
        pass

    print(arc.get_scorecard())


def play_agent(seed: int = 0, max_steps: int = 500) -> None:
    """Run a sample random agent against the game."""
    arc = arc_agi.Arcade(environments_dir=ENVIRONMENTS_DIR)
    env = arc.make(GAME_ID, seed=seed, render_mode="terminal")

    rng = random.Random(seed)
    actions = [
        GameAction.ACTION1,
        GameAction.ACTION2,
        GameAction.ACTION3,
        GameAction.ACTION4,
    ]

    print(f"Running random agent for up to {max_steps} steps (seed={seed})...")
    print()

    for _ in range(max_steps):
        env.step(rng.choice(actions))

    print()
    print(f"Agent completed {max_steps} steps.")
    print(arc.get_scorecard())


def play_scripted_demo(seed: int = 0) -> None:
    """Solve the first two levels with a fixed action list."""
    arc = arc_agi.Arcade(environments_dir=ENVIRONMENTS_DIR)
    env = arc.make(GAME_ID, seed=seed, render_mode="terminal")

    print("Running scripted demo...")
    print()

    demo_actions = [
        # Level 1: straight line to the right
        (GameAction.ACTION4, None),
        (GameAction.ACTION4, None),
        (GameAction.ACTION4, None),

        # Level 2: along the bottom, over the bump, back down
        (GameAction.ACTION4, None),
        (GameAction.ACTION4, None),
        (GameAction.ACTION1, None),
        (GameAction.ACTION4, None),
        (GameAction.ACTION2, None),
        (GameAction.ACTION4, None),
        (GameAction.ACTION4, None),
    ]

    for action_id, data in demo_actions:
        if data is not None:
            env.step(action_id, data=data)
        else:
            env.step(action_id)

    print()
    print("Demo complete.")
    print(arc.get_scorecard())


def load_baselines() -> list:
    """Per-level move bounds from the game's metadata.json."""
    path = os.path.join(ENVIRONMENTS_DIR, "cp01", "v1", "metadata.json")
    with open(path) as f:
        return json.load(f).get("baseline_actions", [])


def check_levels() -> int:
    """Print a validation report for the built-in levels. Returns an exit code."""
    levels = builtin_levels()
    report = validate_levels(levels)
    baselines = load_baselines()

    print(f"{'#':>3}  {'name':<18} {'size':>7} {'layers':>6} {'tiles':>5} {'baseline':>8}  result")
    for idx, level in enumerate(levels):
        problems = report.get(idx, [])
        size = f"{level.width}x{level.height}"
        tiles = level.count_tiles(PAINTABLE_TILES)
        baseline = str(baselines[idx]) if idx < len(baselines) else "-"
        # A move bound means nothing for a level nobody can finish
        if unenterable_tiles(level):
            baseline = "n/a"
        result = "ok" if not problems else "; ".join(problems)
        print(f"{idx + 1:>3}  {level.name:<18} {size:>7} {level.layer_count:>6} {tiles:>5} "
              f"{baseline:>8}  {result}")

    print()
    print(f"{len(levels) - len(report)} of {len(levels)} levels pass validation.")
    return 1 if report else 0


def main():
    parser = argparse.ArgumentParser(
        description="Play CP01: Cube Paint (ARC-AGI-3 Game)"
    )
    parser.add_argument(
        "--seed", type=int, default=0,
        help="Random seed for jump pad targets (default: 0)"
    )
    parser.add_argument(
        "--agent", action="store_true",
        help="Run the sample random agent instead of human play"
    )
    parser.add_argument(
        "--demo", action="store_true",
        help="Run a short scripted demo"
    )
    parser.add_argument(
        "--check", action="store_true",
        help="Validate the built-in levels and exit"
    )
    parser.add_argument(
        "--steps", type=int, default=500,
        help="Max steps for agent mode (default: 500)"
    )

    args = parser.parse_args()

    if args.check:
        sys.exit(check_levels())
    elif args.agent:
        play_agent(seed=args.seed, max_steps=args.steps)
    elif args.demo:
        play_scripted_demo(seed=args.seed)
    else:
        play_human(seed=args.seed)


if __name__ == "__main__":
    main()
