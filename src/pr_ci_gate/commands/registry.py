"""Resolution of configured command keys to command implementations."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from pr_ci_gate.commands.base import Command
from pr_ci_gate.commands.builtin import (
    AddUserCommand,
    RetestCommand,
    RetestFailedCommand,
    WhitelistAddCommand,
)
from pr_ci_gate.errors import ConfigurationError

logger = logging.getLogger(__name__)

COMMANDS: dict[str, type[Command]] = {
    cls.key: cls
    for cls in (WhitelistAddCommand, AddUserCommand, RetestCommand, RetestFailedCommand)
}


def resolve_command(key: str) -> Command | None:
    """Return a fresh command for `key`, or None if the key is unknown."""
    command_cls = COMMANDS.get(key)
    if command_cls is None:
        return None
    return command_cls()


def load_commands(patterns: Mapping[str, str] | None) -> list[Command]:
    """Resolve and bind every configured command, preserving configuration order.

    Unknown keys are logged and skipped.

    Raises:
        ConfigurationError: If a configured pattern is not a valid regular expression.
    """
    commands: list[Command] = []
    if not patterns:
        return commands

    for key, pattern in patterns.items():
        command = resolve_command(key)
        if command is None:
            logger.warning(f'Command identified with "{key}" does not exist', extra={"key": key})
            continue
        try:
            command.set_command_regex(pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid pattern for command '{key}': {e}") from e
        commands.append(command)

    logger.info("Commands loaded", extra={"commands": [c.key for c in commands]})
    return commands
