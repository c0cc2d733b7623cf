from __future__ import annotations

import pytest

from lined.buffer import (
    BadIndex,
    CapacityExceeded,
    EditorSession,
    LineRange,
    LineStore,
    ReplaceSpec,
    format_line,
)
from lined.config import EditorConfig


def test_delete_single_line_scenario() -> None:
    session = EditorSession.from_lines(["one", "two", "three"])
    parsed = session.resolve("2,2")
    assert parsed.range is not None

    session.delete(parsed.range)

    assert session.lines() == ["one", "three"]
    assert session.line_count == 2
    assert session.last_range == (2, 2)


def test_delete_tail_pulls_last_range_back() -> None:
    session = EditorSession.from_lines(["a", "b", "c"])

    session.delete(LineRange(2, 3))

    assert session.lines() == ["a"]
    assert session.last_range == (2, 1)


def test_operations_on_empty_store_are_noops() -> None:
    session = EditorSession()
    rng = session.full_range()

    assert rng.is_empty
    assert session.delete(rng) == 0
    assert session.list_lines(rng) == []
    assert session.search(rng, "x") == []
    assert session.replace(rng, ReplaceSpec("a", "b")) == 0
    assert session.line_count == 0


def test_replace_scenario() -> None:
    session = EditorSession.from_lines(["hello world"])

    made = session.replace(session.full_range(), ReplaceSpec("world", "there"))

    assert made == 1
    assert session.lines() == ["hello there"]
    assert session.last_range == (1, 1)


def test_replace_aggregates_across_lines() -> None:
    session = EditorSession.from_lines(["a a", "b", "a"])

    made = session.replace(LineRange(1, 3), ReplaceSpec("a", "z", global_=True))

    assert made == 3
    assert session.lines() == ["z z", "b", "z"]


def test_replace_honours_configured_limit() -> None:
    session = EditorSession.from_lines(
        ["aaaa"], config=EditorConfig(replace_limit=2)
    )

    made = session.replace(session.full_range(), ReplaceSpec("a", "b", True))

    assert made == 2
    assert session.lines() == ["bbaa"]


def test_search_reports_hits_in_order() -> None:
    session = EditorSession.from_lines(["Hello World", "nothing", "world peace"])

    hits = session.search(LineRange(1, 3), "WORLD")

    assert [(hit.index, hit.offset) for hit in hits] == [(1, 6), (3, 0)]
    assert session.last_range == (1, 3)


def test_edit_replaces_line_and_marks_range() -> None:
    session = EditorSession.from_lines(["a", "b"])

    session.edit(2, "B")

    assert session.lines() == ["a", "B"]
    assert session.last_range == (2, 2)


def test_edit_missing_line_raises() -> None:
    session = EditorSession.from_lines(["a"])

    with pytest.raises(BadIndex):
        session.edit(5, "x")


def test_list_lines_uses_zero_based_padded_index() -> None:
    session = EditorSession.from_lines(["first", "second"])

    assert session.list_lines(LineRange(1, 2)) == ["00000: first", "00001: second"]
    assert session.last_range == (1, 2)
    assert format_line(12, "x") == "00011: x"


def test_status_line_shows_identity() -> None:
    session = EditorSession.from_lines(["a"])
    assert session.status_line() == "Lines: 1  File: (none)"

    session.current_file = "notes.txt"
    assert session.status_line() == "Lines: 1  File: notes.txt"


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINED_CAPACITY", "10")
    monkeypatch.setenv("LINED_MAX_LINE_LENGTH", "oops")
    monkeypatch.setenv("LINED_ENCODING", "latin-1")

    config = EditorConfig.from_env()

    assert config.capacity == 10
    assert config.max_line_length == 255
    assert config.encoding == "latin-1"
    assert EditorSession(config=config).store.capacity == 10


def test_unknown_encoding_in_env_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINED_ENCODING", "no-such-codec")

    assert EditorConfig.from_env().encoding == "utf-8"


def test_session_keeps_a_supplied_empty_store() -> None:
    store = LineStore(capacity=2)

    session = EditorSession(store=store)

    assert session.store is store
    assert len(session.store) == 0
    session.insert(1, "a")
    session.insert(2, "b")
    with pytest.raises(CapacityExceeded):
        session.insert(3, "c")
