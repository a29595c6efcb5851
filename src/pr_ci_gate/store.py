"""File-backed authorization lists.

Each list is a plain text file with one username per line. Writes are
append-only and synced before `add` returns, so a crash can at worst leave a
trailing partial line, never drop an earlier entry. Removing a member is a manual
edit of the file.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from pr_ci_gate.errors import PersistenceError

logger = logging.getLogger(__name__)


def _validate_username(username: str) -> None:
    if not username or "\n" in username or "\r" in username:
        raise ValueError(f"Invalid username: {username!r}")


@dataclass
class AuthorizationList:
    """A durable, deduplicated, insertion-ordered set of usernames."""

    directory: Path
    file_name: str
    _members: dict[str, None] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()
        self._load()

    @property
    def path(self) -> Path:
        return self.directory / self.file_name

    def _load(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                logger.info(
                    "Authorization list not found, starting empty",
                    extra={"path": str(self.path)},
                )
                return
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot load authorization list {self.path}: {e}") from e

        for line in text.split("\n"):
            line = line.rstrip("\r")
            if line:
                self._members.setdefault(line, None)
        logger.info(
            "Authorization list loaded",
            extra={"path": str(self.path), "members": len(self._members)},
        )

    def _append_unlocked(self, username: str) -> None:
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                # Terminate a partial trailing record left behind by an interrupted write.
                if f.tell() > 0 and not self._ends_with_newline():
                    f.write("\n")
                f.write(username + "\n")
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise PersistenceError(f"Cannot write authorization list {self.path}: {e}") from e

    def _ends_with_newline(self) -> bool:
        with open(self.path, "rb") as f:
            f.seek(-1, os.SEEK_END)
            return f.read(1) == b"\n"

    def contains(self, username: str) -> bool:
        return username in self._members

    def add(self, username: str) -> bool:
        """Add `username`, persisting it before returning.

        Returns:
            True if the user was added, False if already a member (nothing is written).

        Raises:
            ValueError: If the username is empty or contains a line break.
            PersistenceError: If the entry could not be written.
        """
        _validate_username(username)
        with self._lock:
            if username in self._members:
                return False
            self._append_unlocked(username)
            self._members[username] = None
        logger.info(
            "User added to authorization list",
            extra={"path": str(self.path), "user": username},
        )
        return True

    def members(self) -> list[str]:
        with self._lock:
            return list(self._members)

    def __contains__(self, username: object) -> bool:
        return username in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self.members())

    def __len__(self) -> int:
        return len(self._members)
