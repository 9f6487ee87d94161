"""
Curve CLI - Command-line interface for the engine.

Usage:
    curve archetypes                   List archetypes
    curve preview <archetype>          Show an archetype's preview deck
    curve simulate [--seed N]          Play a bot vs bot game and print the log
    curve serve [--host H] [--port P]  Run the REST API with uvicorn
"""

import argparse
import random
import sys

from .config import config, configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Curve - Two-player lane battle engine",
        prog="curve",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: CURVE_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Archetypes command
    subparsers.add_parser("archetypes", help="List archetypes")

    # Preview command
    preview_parser = subparsers.add_parser("preview", help="Show an archetype's preview deck")
    preview_parser.add_argument("archetype", help="orc, undead, human or minotaur")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play a bot vs bot game")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--p1", default="orc", help="Player 1 archetype")
    simulate_parser.add_argument("--p2", default="minotaur", help="Player 2 archetype")
    simulate_parser.add_argument("--personality", default="balanced", help="balanced, aggressive, defensive, chaotic or random")
    simulate_parser.add_argument("--max-turns", type=int, default=200, help="Stop after this many turns")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default=config.HOST, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=config.PORT, help="Bind port")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "archetypes":
        cmd_archetypes(args)
    elif args.command == "preview":
        cmd_preview(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_archetypes(args):
    """List archetypes."""
    from .cards import ARCHETYPES

    for arch in ARCHETYPES.values():
        print(
            f"{arch.icon}  {arch.key:<9} {arch.name:<9} "
            f"atk x{arch.attack_coefficient:.1f}  hp x{arch.health_coefficient:.1f}  "
            f"{arch.description}"
        )


def cmd_preview(args):
    """Show an archetype's preview deck."""
    from .cards import generate_preview_deck
    from .errors import UnknownArchetypeError

    try:
        deck = generate_preview_deck(args.archetype)
    except UnknownArchetypeError as e:
        print(f"Error: {e}")
        sys.exit(1)

    for card in deck:
        print(f"{card.cost:>2} mana  {card.attack:>2}/{card.health:<2}  {card.name}")


def cmd_simulate(args):
    """Play a bot vs bot game."""
    from .bots import GreedyBot, resolve_personality
    from .engine_core.state import GameMode
    from .errors import CurveError
    from .session import SessionManager, GameLoop

    rng = random.Random(args.seed)
    bots = {}
    for player_index in (0, 1):
        bot_rng = random.Random(rng.random())
        personality = resolve_personality(args.personality, bot_rng)
        if personality is None:
            print(f"Error: Unknown personality: {args.personality}")
            sys.exit(1)
        bots[player_index] = GreedyBot(personality=personality, rng=bot_rng)

    try:
        session = SessionManager().create_session(
            args.p1, args.p2, game_mode=GameMode.ONE_VS_ONE, seed=args.seed, bots=bots,
        )
    except CurveError as e:
        print(f"Error: {e}")
        sys.exit(1)

    result = GameLoop(session, delay=0).play_to_completion(max_turns=args.max_turns)

    for entry in result.game_state.log:
        print(entry)

    print()
    if result.winner is None:
        print(f"No winner after {args.max_turns} turns")
        sys.exit(1)
    p1, p2 = result.game_state.players
    print(f"{result.game_state.message} (health {p1.health} - {p2.health}, turn {result.game_state.turn})")


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn

    uvicorn.run("curve.api.app:app", host=args.host, port=args.port, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
