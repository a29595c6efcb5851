"""Field access for webhook event payloads.

Payloads are decoded JSON documents. Only a handful of fields are ever read, and
a missing field is a hard failure for that event rather than a silent "no match".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pr_ci_gate.errors import MalformedEventError

ACTION = "action"
ISSUE = "issue"
PULL_REQUEST = "pull_request"
COMMENT = "comment"
BODY = "body"
USER = "user"
LOGIN = "login"


def get_field(payload: Mapping[str, Any], *path: str) -> Any:
    """Walk `path` through nested mappings.

    Raises:
        MalformedEventError: If any key is absent or an intermediate value is not a mapping.
    """
    node: Any = payload
    for depth, key in enumerate(path):
        if not isinstance(node, Mapping) or key not in node:
            raise MalformedEventError(".".join(path[: depth + 1]))
        node = node[key]
    return node


def get_text(payload: Mapping[str, Any], *path: str) -> str:
    value = get_field(payload, *path)
    if not isinstance(value, str):
        raise MalformedEventError(".".join(path))
    return value


def get_action(payload: Mapping[str, Any]) -> str:
    return get_text(payload, ACTION)


def is_pull_request_issue(payload: Mapping[str, Any]) -> bool:
    """Whether the subject issue of a comment event is a pull request.

    Only presence of `issue.pull_request` matters; its content is not inspected.
    """
    issue = get_field(payload, ISSUE)
    if not isinstance(issue, Mapping):
        raise MalformedEventError(ISSUE)
    return PULL_REQUEST in issue


def get_comment_body(payload: Mapping[str, Any]) -> str:
    return get_text(payload, COMMENT, BODY)


def get_comment_author(payload: Mapping[str, Any]) -> str:
    return get_text(payload, COMMENT, USER, LOGIN)


def get_issue_author(payload: Mapping[str, Any]) -> str:
    return get_text(payload, ISSUE, USER, LOGIN)


def get_pull_request_author(payload: Mapping[str, Any]) -> str:
    """Author of a `pull_request` webhook (as opposed to an issue comment)."""
    return get_text(payload, PULL_REQUEST, USER, LOGIN)
