"""Comment commands and their registry."""

from pr_ci_gate.commands.base import Command
from pr_ci_gate.commands.registry import COMMANDS, load_commands, resolve_command

__all__ = [
    "COMMANDS",
    "Command",
    "load_commands",
    "resolve_command",
]
