"""Unit tests for the CLI."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from pr_ci_gate.main import main


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GATE_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    # main() reconfigures the root logger.
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_add_then_list(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    assert main(["add", "admin", "root"]) == 0
    assert main(["add", "admin", "root"]) == 0
    out = capsys.readouterr().out
    assert "Added root to the admin list" in out
    assert "root is already on the admin list" in out

    assert main(["list", "admin"]) == 0
    assert capsys.readouterr().out == "root\n"
    assert (tmp_path / "config" / "adminlist.txt").read_text(encoding="utf-8") == "root\n"


def test_add_rejects_invalid_username() -> None:
    assert main(["add", "user", ""]) == 1


def test_invalid_settings_exit_code(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("WHITELIST_ENABLED", "not-a-bool")

    assert main(["list", "user"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_unknown_tier_is_rejected() -> None:
    with pytest.raises(SystemExit):
        main(["list", "superuser"])
