"""CLI entrypoint for the CI gate."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from pr_ci_gate import __version__
from pr_ci_gate.config import ADMINLIST_FILE_NAME, USERLIST_FILE_NAME, GateSettings
from pr_ci_gate.errors import ConfigurationError, GateError
from pr_ci_gate.logging import configure_logging
from pr_ci_gate.store import AuthorizationList

logger = logging.getLogger(__name__)

LIST_FILES = {"user": USERLIST_FILE_NAME, "admin": ADMINLIST_FILE_NAME}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pr-ci-gate",
        description="Gate pull request CI builds behind a comment-managed whitelist",
    )
    parser.add_argument("--version", action="version", version=f"pr-ci-gate {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the webhook receiver")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve.add_argument("--port", type=int, default=8080, help="Port to listen on")

    list_users = subparsers.add_parser("list", help="Print the members of a list")
    list_users.add_argument("tier", choices=sorted(LIST_FILES))

    add_user = subparsers.add_parser("add", help="Add a user to a list")
    add_user.add_argument("tier", choices=sorted(LIST_FILES))
    add_user.add_argument("username")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = GateSettings()
    except ValidationError as e:
        # Logging isn't configured yet; settings carry the level.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "serve":
            import uvicorn

            from pr_ci_gate.server.app import create_app

            uvicorn.run(create_app(settings), host=args.host, port=args.port, log_config=None)
            return 0

        store = AuthorizationList(settings.config_dir, LIST_FILES[args.tier])
        if args.command == "list":
            for username in store:
                print(username)
            return 0

        if args.command == "add":
            if store.add(args.username):
                print(f"Added {args.username} to the {args.tier} list")
            else:
                print(f"{args.username} is already on the {args.tier} list")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 2

    except (GateError, ValueError):
        logger.exception("Command failed", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
