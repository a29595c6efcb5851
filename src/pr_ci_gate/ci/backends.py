"""Built-in CI backends."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests

from pr_ci_gate.ci.base import ContinuousIntegration
from pr_ci_gate.config import GateSettings
from pr_ci_gate.errors import CIInitError

logger = logging.getLogger(__name__)


class LoggingCI(ContinuousIntegration):
    """Record triggers in the log and in memory. Useful for dry runs."""

    key = "log"

    def __init__(self, settings: GateSettings) -> None:
        super().__init__(settings)
        self.initialized = False
        self.triggered: list[tuple[str, Mapping[str, Any]]] = []

    def init(self) -> None:
        self.initialized = True

    def _record(self, trigger: str, event: Mapping[str, Any]) -> None:
        self.triggered.append((trigger, event))
        logger.info("CI trigger recorded", extra={"ci": self.key, "trigger": trigger})

    def trigger_build(self, event: Mapping[str, Any]) -> None:
        self._record("build", event)

    def trigger_failed_build(self, event: Mapping[str, Any]) -> None:
        self._record("failed-build", event)


class HttpHookCI(ContinuousIntegration):
    """POST the triggering event to a configured endpoint.

    Body: `{"trigger": "build" | "failed-build", "event": <webhook payload>}`.
    What the receiving system does with it is up to that system.
    """

    key = "http-hook"

    def __init__(self, settings: GateSettings) -> None:
        super().__init__(settings)
        self.url = settings.http_hook_url.strip()
        self.timeout = settings.http_hook_timeout_seconds
        self._session: requests.Session | None = None

    def init(self) -> None:
        if not self.url:
            raise CIInitError(self.key, "GATE_HTTP_HOOK_URL is not configured")
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def _post(self, trigger: str, event: Mapping[str, Any]) -> None:
        if self._session is None:
            raise RuntimeError(f"CI backend '{self.key}' used before init()")
        resp = self._session.post(
            self.url,
            json={"trigger": trigger, "event": dict(event)},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        logger.info(
            "CI hook notified",
            extra={"ci": self.key, "trigger": trigger, "status_code": resp.status_code},
        )

    def trigger_build(self, event: Mapping[str, Any]) -> None:
        self._post("build", event)

    def trigger_failed_build(self, event: Mapping[str, Any]) -> None:
        self._post("failed-build", event)
