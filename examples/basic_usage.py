#!/usr/bin/env python3
"""Programmatic dispatch example.

This demonstrates using the gate components directly:

* load settings from `.env`
* resolve commands and CI backends from a format configuration
* feed a pull request comment through the dispatcher

The authorization lists are written under `--config-dir`.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from pr_ci_gate.config import FormatConfig, GateSettings
from pr_ci_gate.dispatcher import WhitelistDispatcher
from pr_ci_gate.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dispatch a PR comment (programmatic example).")
    parser.add_argument("--config-dir", type=Path, default=Path("example_config"))
    parser.add_argument("--commenter", default="alice", help="Login of the comment author")
    parser.add_argument("--body", default="/approve", help="Comment text")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = GateSettings(config_dir=args.config_dir)
    configure_logging(settings.log_level)

    config = FormatConfig.model_validate(
        {
            "format": {
                "commands": {"whitelist-add": r"^/approve$", "retest": r"^/retest$"},
                "CI": ["log"],
            }
        }
    )
    dispatcher = WhitelistDispatcher.from_config(config, settings)

    event = {
        "action": "created",
        "issue": {"number": 1, "pull_request": {}, "user": {"login": "bob"}},
        "comment": {"body": args.body, "user": {"login": args.commenter}},
    }
    fired = dispatcher.process_pr_comment(event)

    print(f"Commands fired: {fired or 'none'}")
    eligible = dispatcher.is_user_eligible_to_run_ci(args.commenter)
    print(f"{args.commenter} eligible to run CI: {eligible}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
