"""Unit tests for the file-backed authorization lists."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from pr_ci_gate.errors import PersistenceError
from pr_ci_gate.store import AuthorizationList


def test_missing_file_starts_empty(tmp_path: Path) -> None:
    store = AuthorizationList(tmp_path / "nested" / "dir", "userlist.txt")

    assert len(store) == 0
    assert not store.contains("alice")
    assert (tmp_path / "nested" / "dir").is_dir()


def test_add_persists_and_is_idempotent(tmp_path: Path) -> None:
    store = AuthorizationList(tmp_path, "userlist.txt")

    assert store.add("alice") is True
    assert store.contains("alice")
    assert store.add("alice") is False

    assert (tmp_path / "userlist.txt").read_text(encoding="utf-8") == "alice\n"


def test_reload_preserves_order_and_collapses_duplicates(tmp_path: Path) -> None:
    (tmp_path / "userlist.txt").write_text("carol\nalice\n\ncarol\nbob\n", encoding="utf-8")

    store = AuthorizationList(tmp_path, "userlist.txt")

    assert store.members() == ["carol", "alice", "bob"]
    assert "alice" in store
    assert list(store) == ["carol", "alice", "bob"]


def test_usernames_with_spaces_survive_reload(tmp_path: Path) -> None:
    AuthorizationList(tmp_path, "userlist.txt").add("  spaced name ")

    reloaded = AuthorizationList(tmp_path, "userlist.txt")

    assert reloaded.contains("  spaced name ")
    assert not reloaded.contains("spaced name")


def test_membership_is_case_sensitive(tmp_path: Path) -> None:
    store = AuthorizationList(tmp_path, "userlist.txt")
    store.add("Alice")

    assert store.contains("Alice")
    assert not store.contains("alice")


def test_add_terminates_partial_trailing_record(tmp_path: Path) -> None:
    (tmp_path / "userlist.txt").write_text("alice", encoding="utf-8")
    store = AuthorizationList(tmp_path, "userlist.txt")

    store.add("bob")

    assert (tmp_path / "userlist.txt").read_text(encoding="utf-8") == "alice\nbob\n"


@pytest.mark.parametrize("username", ["", "a\nb", "a\rb"])
def test_add_rejects_unrepresentable_usernames(tmp_path: Path, username: str) -> None:
    store = AuthorizationList(tmp_path, "userlist.txt")

    with pytest.raises(ValueError):
        store.add(username)
    assert len(store) == 0


def test_unreadable_list_fails_loudly(tmp_path: Path) -> None:
    # A directory where the file should be cannot be read as text.
    (tmp_path / "userlist.txt").mkdir()

    with pytest.raises(PersistenceError):
        AuthorizationList(tmp_path, "userlist.txt")


def test_undecodable_list_fails_loudly(tmp_path: Path) -> None:
    (tmp_path / "userlist.txt").write_bytes(b"alice\n\xff\xfebob\n")

    with pytest.raises(PersistenceError) as exc_info:
        AuthorizationList(tmp_path, "userlist.txt")

    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_write_failure_leaves_membership_unchanged(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    store = AuthorizationList(tmp_path, "userlist.txt")

    def boom(_username: str) -> None:
        raise PersistenceError("disk full")

    monkeypatch.setattr(store, "_append_unlocked", boom)

    with pytest.raises(PersistenceError):
        store.add("alice")
    assert not store.contains("alice")


def test_concurrent_adds_write_a_single_entry(tmp_path: Path) -> None:
    store = AuthorizationList(tmp_path, "userlist.txt")
    barrier = threading.Barrier(8)
    results: list[bool] = []
    results_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        added = store.add("alice")
        with results_lock:
            results.append(added)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert results.count(False) == 7
    assert (tmp_path / "userlist.txt").read_text(encoding="utf-8") == "alice\n"
