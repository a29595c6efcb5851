"""Error taxonomy for the CI gate.

Registry resolution problems are logged, not raised. Everything here bubbles to
the caller of the dispatcher entry points.
"""

from __future__ import annotations


class GateError(Exception):
    """Base class for all CI gate errors."""


class ConfigurationError(GateError):
    """The format configuration or settings could not be used."""


class CIInitError(GateError):
    """A CI backend failed its one-time initialization."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"CI backend '{key}' failed to initialize: {reason}")
        self.key = key


class CITriggerError(GateError):
    """One or more CI backends raised while being triggered."""

    def __init__(self, failures: list[tuple[str, BaseException]]) -> None:
        names = ", ".join(key for key, _ in failures)
        super().__init__(f"CI trigger failed for: {names}")
        self.failures = failures


class MalformedEventError(GateError, KeyError):
    """A required field is missing from (or wrong-shaped in) an event payload."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Event payload is missing required field '{path}'")
        self.path = path

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class PersistenceError(GateError):
    """An authorization list could not be read or written."""
