"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pr_ci_gate.config import ADMINLIST_FILE_NAME, USERLIST_FILE_NAME, GateSettings
from pr_ci_gate.store import AuthorizationList


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for the authorization lists."""
    path = tmp_path / "config"
    path.mkdir()
    return path


@pytest.fixture
def settings(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> GateSettings:
    """Provide test settings isolated from any local `.env` and the process environment."""
    for name in ("GATE_HTTP_HOOK_URL", "GATE_WEBHOOK_SECRET", "WHITELIST_ENABLED", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return GateSettings(
        _env_file=None,
        config_dir=config_dir,
        format_config_file=config_dir / "format.json",
        whitelist_enabled=True,
        log_level="DEBUG",
        http_hook_url="",
        webhook_secret="",
    )


@pytest.fixture
def user_list(config_dir: Path) -> AuthorizationList:
    return AuthorizationList(config_dir, USERLIST_FILE_NAME)


@pytest.fixture
def admin_list(config_dir: Path) -> AuthorizationList:
    return AuthorizationList(config_dir, ADMINLIST_FILE_NAME)


def make_comment_event(
    body: str,
    *,
    action: str = "created",
    commenter: str = "alice",
    pr_author: str = "bob",
    is_pull_request: bool = True,
) -> dict[str, Any]:
    """Build a minimal `issue_comment` webhook payload."""
    issue: dict[str, Any] = {"number": 7, "user": {"login": pr_author}}
    if is_pull_request:
        issue["pull_request"] = {"url": "https://api.github.com/repos/o/r/pulls/7"}
    return {
        "action": action,
        "issue": issue,
        "comment": {"body": body, "user": {"login": commenter}},
    }


@pytest.fixture
def comment_event():
    """Factory fixture for `issue_comment` payloads."""
    return make_comment_event
