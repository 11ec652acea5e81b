"""
Memorama CLI - Command-line interface for the engine.

Usage:
    memorama serve [--host H] [--port P]     Run the REST/WebSocket API
    memorama play [--difficulty D] [--seed S] [--asset-kind K]
                                             Play in the terminal
    memorama difficulties                     Show the board sizes
"""

import argparse
from dataclasses import replace
import sys
import time

from .config import GameConfig, configure_logging
from .engine_core.state import Difficulty
from .games.memorama.rendering import AssetKind, format_elapsed
from .games.memorama.symbols import DIFFICULTIES, get_difficulty_info


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Memorama - memory matching game",
        prog="memorama",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--difficulty", "-d",
        choices=[d.value for d in Difficulty],
        help="Skip the selection screen",
    )
    play_parser.add_argument("--seed", type=int, help="Seed for a reproducible deal")
    play_parser.add_argument(
        "--asset-kind",
        choices=[k.value for k in AssetKind],
        default=AssetKind.GLYPH.value,
        help="Print glyphs or image URLs",
    )
    play_parser.add_argument("--verbose", "-v", action="store_true", help="Log game events")

    # Difficulties command
    subparsers.add_parser("difficulties", help="Show the board sizes")

    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "difficulties":
        cmd_difficulties(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    config = GameConfig.from_env()
    configure_logging(config)
    uvicorn.run(
        "memorama.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=config.log_level.lower(),
    )


def cmd_difficulties(args):
    """Print the difficulty table."""
    print(f"{'Difficulty':<10} {'Label':<12} {'Pairs':>5} {'Cards':>5}  Columns")
    for info in DIFFICULTIES.values():
        print(
            f"{info.difficulty.value:<10} {info.label:<12} {info.pair_count:>5} "
            f"{info.card_count:>5}  {info.compact_columns}/{info.wide_columns}"
        )


class WallClock:
    """Advances a ManualScheduler in step with real time."""

    def __init__(self, scheduler):
        self.scheduler = scheduler
        self._last = time.monotonic()

    def sync(self) -> None:
        now = time.monotonic()
        self.scheduler.advance(now - self._last)
        self._last = now


def cmd_play(args):
    """Play a game in the terminal."""
    from .session import ManualScheduler, TableManager

    config = GameConfig.from_env()
    configure_logging(config if args.verbose else replace(config, log_level="WARNING"))

    scheduler = ManualScheduler()
    manager = TableManager(scheduler, replace(config, asset_kind=AssetKind(args.asset_kind)))
    table = manager.create_table()
    loop = table.loop
    clock = WallClock(scheduler)

    difficulty = Difficulty(args.difficulty) if args.difficulty else _ask_difficulty()
    if difficulty is None:
        return
    loop.start_game(difficulty, seed=args.seed)

    try:
        while True:
            clock.sync()
            _print_board(table)

            session = loop.session
            if session.has_won:
                print(
                    f"\nCongratulations! {get_difficulty_info(session.difficulty).label} "
                    f"in {session.move_count} moves, {format_elapsed(session.elapsed_seconds)}"
                )
                choice = input("(r)estart, (m)enu, (q)uit: ").strip().lower()
            else:
                choice = input("Card number, (r)estart, (m)enu, (q)uit: ").strip().lower()
            clock.sync()

            if choice == "q":
                break
            if choice == "r":
                loop.restart()
                continue
            if choice == "m":
                loop.return_to_menu()
                difficulty = _ask_difficulty()
                if difficulty is None:
                    break
                loop.start_game(difficulty)
                continue

            try:
                card_id = int(choice)
            except ValueError:
                print(f"Not a card: {choice!r}")
                continue

            result = loop.flip_card(card_id)
            if result.resolution_pending:
                _print_board(table)
                print("No match.")
                time.sleep(loop.mismatch_delay)
    except (EOFError, KeyboardInterrupt):
        print()
    finally:
        manager.close_all()


def _ask_difficulty():
    options = list(DIFFICULTIES.values())
    print("\nSelect difficulty:")
    for i, info in enumerate(options, start=1):
        print(f"  {i}. {info.label} ({info.pair_count} pairs)")

    while True:
        try:
            raw = input("Choice (q to quit): ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            return None
        if raw == "q":
            return None
        if raw.isdigit() and 1 <= int(raw) <= len(options):
            return options[int(raw) - 1].difficulty
        try:
            return Difficulty(raw)
        except ValueError:
            print(f"Unknown difficulty: {raw!r}")


def _print_board(table):
    session = table.loop.session
    info = get_difficulty_info(session.difficulty)
    columns = info.wide_columns

    print(
        f"\n{info.label}  Moves: {session.move_count}  "
        f"Pairs: {session.matched_pair_count}/{session.total_pairs}  "
        f"Time: {format_elapsed(session.elapsed_seconds)}"
    )
    for start in range(0, len(session.deck), columns):
        row = session.deck[start:start + columns]
        cells = [f"{card.card_id:>2} {table.renderer.face_for(card).value}" for card in row]
        print("   ".join(cells))


if __name__ == "__main__":
    main()
