"""
Station Race CLI - Command-line interface for the engine.

Usage:
    station-race serve [--host HOST] [--port PORT]     Run the REST API
    station-race replay [--seed N] INPUT [INPUT ...]   Apply inputs, print final screen

Inputs use the compact form: GoLeft, Start, RegisterPlayer:0:Ann
"""

import argparse
import json
import sys

from .config import Settings, configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Station Race - secret station guessing game",
        prog="station-race",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Apply inputs and print the final screen")
    replay_parser.add_argument("inputs", nargs="+", help="Inputs, e.g. SetupNewGame RegisterPlayer:0:Ann")
    replay_parser.add_argument("--seed", type=int, default=None, help="Seed for the secret station")
    replay_parser.add_argument("--reveal", action="store_true", help="Also print the secret station")

    args = parser.parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if args.command == "serve":
        cmd_serve(args, settings)
    elif args.command == "replay":
        cmd_replay(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args, settings: Settings):
    """Run the API with uvicorn."""
    import uvicorn

    from .api import APIService, create_app

    app = create_app(APIService(settings=settings))
    uvicorn.run(app, host=args.host, port=args.port)


def cmd_replay(args, settings: Settings):
    """Apply inputs from Begin and print the resulting screen as JSON."""
    from .api import state_to_view
    from .engine_core import Action, begin, Reducer

    try:
        actions = [Action.parse(text) for text in args.inputs]
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    reducer = Reducer()
    state = begin(settings.configuration(seed=args.seed))
    for action in actions:
        result = reducer.apply(state, action)
        marker = "ok" if result.success else f"ignored ({result.error})"
        print(f"{action}: {marker}", file=sys.stderr)
        state = result.new_state

    output = state_to_view(state).model_dump(mode="json")
    if args.reveal and hasattr(state, "game"):
        output["secret_station"] = state.game.secret_station
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
