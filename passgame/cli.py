"""
Passgame CLI - Command-line interface for the engine.

Usage:
    passgame play [--seed N]          Play in the terminal
    passgame check <text>             Show how a password fares
    passgame rules                    List every rule
    passgame serve [--host --port]    Run the API server
"""

import argparse
import logging
import os
import sys

from .engine_core.narration import GameView


def main(argv=None):
    """Main CLI entry point."""
    logging.basicConfig(
        level=os.getenv("PASSGAME_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Passgame - The Password Game",
        prog="passgame",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--seed", type=int, help="Seed for surprise rules")

    check_parser = subparsers.add_parser("check", help="Evaluate a password once")
    check_parser.add_argument("text", help="Password to check")

    subparsers.add_parser("rules", help="List every rule")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "rules":
        cmd_rules(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def render(view: GameView):
    """Print a view the way the page would show it."""
    print()
    for rule in view.rules:
        print(f"  {rule.icon} {rule.text}")
    print()
    print(f"Satisfied: {view.satisfied_count}/{view.total_count}  "
          f"Difficulty: {view.difficulty}  Strength: {view.progress:.0f}%")
    print(view.status_message)
    if view.easter_egg:
        print("🥚 You found the easter egg. Your dedication is concerning.")
    if view.submit_enabled:
        print("(type :submit to submit)")


def cmd_play(args):
    """Interactive terminal game."""
    from .session import SessionManager, GameLoop

    manager = SessionManager()
    loop = GameLoop(manager.create_session(seed=args.seed))

    print("The Password Game. Type a password; :submit, :restart, :quit.")
    render(loop.view())

    while True:
        try:
            line = input("\npassword> ")
        except EOFError:
            break

        if line == ":quit":
            break
        if line == ":restart":
            result = loop.restart()
        elif line == ":submit":
            result = loop.submit()
            if not result.success:
                print(f"Rejected: {result.error}")
            elif result.added_rule:
                print(f"New rule: {result.added_rule.text}")
        else:
            result = loop.update_text(line)

        render(result.view)
        if result.view.game_over:
            print("\nThanks for playing.")
            break

    manager.end_session(loop.session.session_id, reason="user_ended")


def cmd_check(args):
    """Evaluate one password and print the view."""
    from .session import SessionManager, GameLoop

    manager = SessionManager()
    loop = GameLoop(manager.create_session())
    render(loop.update_text(args.text).view)


def cmd_rules(args):
    """List the catalog and the surprise pool."""
    from .engine_core.narration import IMPOSSIBILITY_LEVELS
    from .games.password import create_password_catalog, create_surprise_pool

    for rule in create_password_catalog():
        print(f"[{IMPOSSIBILITY_LEVELS[rule.level]:>13}] {rule.rule_id}: {rule.text}")
    print("\nSurprise rules:")
    for rule in create_surprise_pool():
        print(f"[{IMPOSSIBILITY_LEVELS[rule.level]:>13}] {rule.rule_id}: {rule.text}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    uvicorn.run("passgame.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
