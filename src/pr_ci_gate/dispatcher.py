"""Comment-driven command dispatch and CI fan-out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pr_ci_gate import events
from pr_ci_gate.ci import ContinuousIntegration, load_cis
from pr_ci_gate.commands import Command, load_commands
from pr_ci_gate.config import ADMINLIST_FILE_NAME, USERLIST_FILE_NAME, FormatConfig, GateSettings
from pr_ci_gate.errors import CITriggerError
from pr_ci_gate.store import AuthorizationList

logger = logging.getLogger(__name__)

CREATED = "created"


class WhitelistDispatcher:
    """Routes pull request comments to commands and build requests to CI backends.

    Commands and CI backends are resolved once, at construction. The user and
    admin lists are the only mutable state and are safe to share between
    concurrently processed events.
    """

    def __init__(
        self,
        *,
        user_list: AuthorizationList,
        admin_list: AuthorizationList,
        commands: list[Command],
        continuous_integrations: list[ContinuousIntegration],
        whitelisting_enabled: bool = True,
    ) -> None:
        self.user_list = user_list
        self.admin_list = admin_list
        self.commands = commands
        self.continuous_integrations = continuous_integrations
        self.whitelisting_enabled = whitelisting_enabled

    @classmethod
    def from_config(cls, config: FormatConfig, settings: GateSettings) -> WhitelistDispatcher:
        """Load the lists and resolve commands and CI backends.

        Raises:
            PersistenceError: If an authorization list cannot be read.
            ConfigurationError: If a command pattern is invalid.
            CIInitError: If a configured CI backend fails to initialize.
        """
        return cls(
            user_list=AuthorizationList(settings.config_dir, USERLIST_FILE_NAME),
            admin_list=AuthorizationList(settings.config_dir, ADMINLIST_FILE_NAME),
            commands=load_commands(config.format.commands),
            continuous_integrations=load_cis(config.format.ci, settings),
            whitelisting_enabled=settings.whitelist_enabled,
        )

    def process_pr_comment(self, event: Mapping[str, Any]) -> list[str]:
        """Run every command whose pattern matches a newly created PR comment.

        Multiple commands may fire for one comment; they run in configuration order.

        Returns:
            Keys of the commands that fired.

        Raises:
            MalformedEventError: If a required field is absent from the payload.
        """
        if not self.commands:
            return []
        if not events.is_pull_request_issue(event) or events.get_action(event) != CREATED:
            return []

        body = events.get_comment_body(event)
        fired: list[str] = []
        for command in self.commands:
            if command.matches(body):
                logger.info(
                    "Command matched",
                    extra={"command": command.key, "user": events.get_comment_author(event)},
                )
                command.process(event, self)
                fired.append(command.key)
        return fired

    def trigger_ci(self, event: Mapping[str, Any]) -> None:
        self._trigger_all("build", event)

    def trigger_failed_ci(self, event: Mapping[str, Any]) -> None:
        self._trigger_all("failed-build", event)

    def _trigger_all(self, trigger: str, event: Mapping[str, Any]) -> None:
        failures: list[tuple[str, BaseException]] = []
        for ci in self.continuous_integrations:
            try:
                if trigger == "build":
                    ci.trigger_build(event)
                else:
                    ci.trigger_failed_build(event)
            except Exception as e:
                logger.exception("CI trigger failed", extra={"ci": ci.key, "trigger": trigger})
                failures.append((ci.key, e))
        if failures:
            raise CITriggerError(failures)

    def is_user_eligible_to_run_ci(self, username: str) -> bool:
        return self.user_list.contains(username) or self.admin_list.contains(username)

    def should_build_pull_request(self, username: str) -> bool:
        """Whether a PR by `username` gets built automatically.

        When whitelisting is disabled every author qualifies.
        """
        return not self.whitelisting_enabled or self.is_user_eligible_to_run_ci(username)

    def get_comment_author(self, event: Mapping[str, Any]) -> str:
        return events.get_comment_author(event)

    def get_pr_author(self, event: Mapping[str, Any]) -> str:
        return events.get_issue_author(event)

    def is_user_on_admin_list(self, username: str) -> bool:
        return self.admin_list.contains(username)

    def is_user_on_user_list(self, username: str) -> bool:
        return self.user_list.contains(username)

    def add_user_to_user_list(self, username: str) -> bool:
        return self.user_list.add(username)
