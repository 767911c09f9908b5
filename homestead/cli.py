"""
Stellar Homestead CLI - Command-line interface for the engine.

Usage:
    homestead play [--seed N] [--load]     Play in the terminal
    homestead show-config                  Print the effective configuration
    homestead serve [--host H] [--port P]  Run the HTTP API
"""

import argparse
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Stellar Homestead - A space colony management simulation",
        prog="homestead",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument("--config", "-c", help="Path to config file (default: config.txt)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a colony in the terminal")
    play_parser.add_argument("--seed", type=int, help="Seed for event rolls")
    play_parser.add_argument("--save", help="Save file path")
    play_parser.add_argument("--load", action="store_true", help="Resume from the save file")
    play_parser.add_argument("--delay", type=float, help="Seconds to pause between phases")
    play_parser.add_argument("--turns", type=int, help="Stop after this many turns")

    # Config command
    subparsers.add_parser("show-config", help="Print the effective configuration")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "show-config":
        return cmd_show_config(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def _load_config(args):
    from .config import load_config
    from .engine_core.errors import ConfigError

    try:
        return load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_play(args):
    """Play a colony interactively."""
    from .engine_core.errors import SaveFormatError
    from .operators import ConsoleOperator
    from .persistence import DEFAULT_SAVE_FILE, load_game
    from .scenario import create_game
    from .session import GameLoop

    config = _load_config(args)
    updates = {}
    if args.save:
        updates["save_file"] = args.save
    if args.delay is not None:
        updates["turn_delay"] = args.delay
    if updates:
        config = config.model_copy(update=updates)

    print("Welcome to Stellar Homestead!")
    print("A space colony management simulation.")
    print("Manage resources, build structures, and keep your colonists alive!")

    game = create_game(seed=args.seed)
    state, colony = game.state, game.colony
    if args.load:
        save_path = config.save_file or DEFAULT_SAVE_FILE
        try:
            saved = load_game(save_path)
        except (OSError, SaveFormatError) as e:
            print(f"Failed to load game: {e}")
            return 1
        state, colony = saved.state, saved.colony
        print("Game loaded successfully!")
    else:
        print("Stellar Homestead Colony Established!")
        print("Starting resources and colonists initialized.")

    loop = GameLoop(colony, state, game.resolver, operator=ConsoleOperator(), config=config)
    try:
        loop.run(max_turns=args.turns)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    return 0


def cmd_show_config(args):
    """Print the effective configuration."""
    config = _load_config(args)
    for key, value in config.model_dump().items():
        print(f"{key} {value}")
    return 0


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("homestead.api.app:app", host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
