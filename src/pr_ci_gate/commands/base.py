"""Abstract base class for comment commands."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from pr_ci_gate.dispatcher import WhitelistDispatcher


class Command(ABC):
    """A comment-triggered command.

    Commands are resolved by `key` from a closed catalog, then bound to the
    pattern configured for that key. A command fires when the whole comment body
    matches its pattern.
    """

    key: ClassVar[str]

    def __init__(self) -> None:
        self._regex: re.Pattern[str] | None = None

    def get_command_regex(self) -> str:
        if self._regex is None:
            raise RuntimeError(f"Command '{self.key}' has no pattern assigned")
        return self._regex.pattern

    def set_command_regex(self, pattern: str) -> None:
        """Bind the match pattern.

        Raises:
            re.error: If `pattern` is not a valid regular expression.
        """
        self._regex = re.compile(pattern)

    def matches(self, body: str) -> bool:
        """Whether `body` matches the pattern in full (not merely contains it)."""
        if self._regex is None:
            return False
        return self._regex.fullmatch(body) is not None

    @abstractmethod
    def process(self, event: Mapping[str, Any], dispatcher: WhitelistDispatcher) -> None:
        """Perform the command's side effect for a matching comment event.

        Args:
            event: The raw `issue_comment` webhook payload.
            dispatcher: Access to event fields, the authorization lists and CI triggers.
        """
        pass
