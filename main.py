#!/usr/bin/env python3
"""
Minesweeper - terminal entry point.

Usage:
    python main.py play [--width W] [--height H] [--mines N] [--safe-first-click]
    python main.py demo [--games N] [--delay S]
"""
import argparse
import logging
import random
import time
from typing import Optional

import numpy as np

from minesweep import (
    BoardConfig,
    GameSession,
    MinesweeperEnv,
    render_status,
    render_text,
)


HELP_TEXT = (
    "Commands: s X Y (step), f X Y (flag), r X Y (resolve), "
    "n (new game), q (quit)"
)


def make_config(args: argparse.Namespace) -> Optional[BoardConfig]:
    """Build a board configuration from command line flags."""
    try:
        return BoardConfig(
            width=args.width,
            height=args.height,
            num_mines=args.mines,
            safe_first_click=getattr(args, "safe_first_click", False),
        )
    except ValueError as exc:
        print(f"Invalid board: {exc}")
        return None


def print_session(session: GameSession) -> None:
    print(render_text(session))
    print(render_status(session))


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    config = make_config(args)
    if config is None:
        return
    rng = random.Random(args.seed)
    session = GameSession(config, rng=rng)

    print(HELP_TEXT)
    while True:
        session.update()
        print_session(session)

        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        command, *rest = line.split()
        if command == "q":
            break
        if command == "n":
            session.close()
            session = GameSession(config, rng=rng)
            continue
        if command not in ("s", "f", "r") or len(rest) != 2:
            print(HELP_TEXT)
            continue

        try:
            x, y = int(rest[0]), int(rest[1])
            if command == "s":
                session.step(x, y)
            elif command == "f":
                session.toggle_flag(x, y)
            else:
                session.try_resolve_step(x, y)
        except ValueError:
            print("Coordinates must be integers")
        except IndexError as exc:
            print(exc)

    session.close()


def demo(args: argparse.Namespace) -> None:
    """Watch random legal moves play out."""
    config = make_config(args)
    if config is None:
        return
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)

    print(f"Board: {config.width}x{config.height} with {config.num_mines} mines")
    wins = 0

    for game in range(args.games):
        env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        step = 0

        while not done:
            valid_indices = np.where(env.get_action_mask())[0]
            if len(valid_indices) == 0:
                break
            action = int(rng.choice(valid_indices))
            command, x, y = env.decode_action(action)

            _, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            print(f"\n=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Last move: {'sfr'[command]} {x} {y} (reward {reward})")
            print(env.render())

            if done:
                if info["game_state"] == "WON":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")

            time.sleep(args.delay)

    env.close()
    print(f"\n=== Final: {wins}/{args.games} wins ===")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=10, help="Board columns")
    parser.add_argument("--height", type=int, default=10, help="Board rows")
    parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper in the terminal")
    parser.add_argument(
        "--verbose", action="store_true", help="Log game events"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play a game")
    add_board_arguments(play_parser)
    play_parser.add_argument(
        "--safe-first-click",
        action="store_true",
        help="Never lose on the first step",
    )

    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
