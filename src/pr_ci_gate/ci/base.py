"""Abstract base class for CI backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from pr_ci_gate.config import GateSettings


class ContinuousIntegration(ABC):
    """A CI system notified when a pull request should be built.

    `init` is called exactly once, before any trigger. Triggers are
    fire-and-forget: their outcome is the backend's own concern, but raising
    signals a failure to the dispatcher.
    """

    key: ClassVar[str]

    def __init__(self, settings: GateSettings) -> None:
        self.settings = settings

    @abstractmethod
    def init(self) -> None:
        """Prepare the backend.

        Raises:
            CIInitError: If the backend cannot be used.
        """
        pass

    @abstractmethod
    def trigger_build(self, event: Mapping[str, Any]) -> None:
        """Request a build for the pull request described by `event`."""
        pass

    @abstractmethod
    def trigger_failed_build(self, event: Mapping[str, Any]) -> None:
        """Request a re-run of the failed parts of a build."""
        pass
