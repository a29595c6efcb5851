"""Built-in comment commands."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pr_ci_gate.commands.base import Command

if TYPE_CHECKING:
    from pr_ci_gate.dispatcher import WhitelistDispatcher

logger = logging.getLogger(__name__)


class WhitelistAddCommand(Command):
    """Enroll the comment author in the user list."""

    key = "whitelist-add"

    def process(self, event: Mapping[str, Any], dispatcher: WhitelistDispatcher) -> None:
        author = dispatcher.get_comment_author(event)
        added = dispatcher.add_user_to_user_list(author)
        logger.info(
            "Whitelist enrollment requested",
            extra={"command": self.key, "user": author, "added": added},
        )


class AddUserCommand(Command):
    """Admin-only: add the pull request author to the user list and start a build."""

    key = "add-user"

    def process(self, event: Mapping[str, Any], dispatcher: WhitelistDispatcher) -> None:
        commenter = dispatcher.get_comment_author(event)
        if not dispatcher.is_user_on_admin_list(commenter):
            logger.info(
                "Ignoring add-user from non-admin",
                extra={"command": self.key, "user": commenter},
            )
            return

        pr_author = dispatcher.get_pr_author(event)
        if dispatcher.add_user_to_user_list(pr_author):
            logger.info(
                "Pull request author whitelisted",
                extra={"command": self.key, "user": pr_author, "admin": commenter},
            )
            dispatcher.trigger_ci(event)


class RetestCommand(Command):
    """Re-run CI when requested by an eligible user."""

    key = "retest"

    def process(self, event: Mapping[str, Any], dispatcher: WhitelistDispatcher) -> None:
        commenter = dispatcher.get_comment_author(event)
        if dispatcher.is_user_eligible_to_run_ci(commenter):
            dispatcher.trigger_ci(event)
        else:
            logger.info("Ignoring retest from ineligible user", extra={"user": commenter})


class RetestFailedCommand(Command):
    key = "retest-failed"

    def process(self, event: Mapping[str, Any], dispatcher: WhitelistDispatcher) -> None:
        commenter = dispatcher.get_comment_author(event)
        if dispatcher.is_user_eligible_to_run_ci(commenter):
            dispatcher.trigger_failed_ci(event)
        else:
            logger.info("Ignoring retest-failed from ineligible user", extra={"user": commenter})
