from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pytest

from lined.actions import HELP_LINES, leading_int
from lined.buffer import AllocFailure, EditorSession, LineStore
from lined.config import EditorConfig
from lined.console import create_default_manager
from lined.modes.mode_manager import ModeManager


def make_manager(*lines: str, capacity: int = 1200) -> ModeManager:
    session = EditorSession.from_lines(
        list(lines), config=EditorConfig(capacity=capacity)
    )
    return create_default_manager(session)


def lines_of(manager: ModeManager) -> List[str]:
    return manager.context.session.lines()


def test_list_whole_buffer() -> None:
    manager = make_manager("one", "two")

    result = manager.handle_line("l")

    assert result.output == ("00000: one", "00001: two")
    assert result.complete is True
    assert manager.context.session.last_range == (1, 2)


def test_list_empty_buffer() -> None:
    manager = make_manager()

    result = manager.handle_line("L")

    assert result.output == ("(empty)",)
    assert manager.context.session.last_range == (1, 0)


def test_list_bad_range() -> None:
    manager = make_manager("one")

    result = manager.handle_line("L x")

    assert result.output == ("! bad range",)


def test_delete_requires_range() -> None:
    manager = make_manager("a", "b")

    assert manager.handle_line("D").output == ("! need D a[,b]",)
    assert manager.handle_line("D zz").output == ("! need D a[,b]",)
    assert lines_of(manager) == ["a", "b"]


def test_delete_scenario() -> None:
    manager = make_manager("one", "two", "three")

    result = manager.handle_line("D 2,2")

    assert result.output == ()
    assert lines_of(manager) == ["one", "three"]
    assert manager.context.session.last_range == (2, 2)


def test_multi_line_insert() -> None:
    manager = make_manager("a", "b")

    start = manager.handle_line("I 2")
    assert start.output == ("-- Insert mode at line 00001 (end with a single '.') --",)
    assert start.complete is False
    assert manager.prompt == "00002: "

    assert manager.handle_line("x").complete is False
    assert manager.prompt == "00003: "
    manager.handle_line("y")
    done = manager.handle_line(".")

    assert done.complete is True
    assert lines_of(manager) == ["a", "x", "y", "b"]
    assert manager.context.session.last_range == (2, 3)
    assert manager.active_mode is not None
    assert manager.active_mode.name == "command"
    assert manager.prompt == "* "


@pytest.mark.parametrize("command", ["I", "I 0", "I 99", "i junk"])
def test_insert_position_defaults_to_end(command: str) -> None:
    manager = make_manager("a")

    manager.handle_line(command)
    manager.handle_line("z")
    manager.handle_line(".")

    assert lines_of(manager) == ["a", "z"]


def test_insert_stops_when_full() -> None:
    manager = make_manager("a", capacity=2)

    manager.handle_line("I")
    manager.handle_line("b")
    result = manager.handle_line("c")

    assert result.output == ("! out of space",)
    assert result.complete is True
    assert lines_of(manager) == ["a", "b"]
    assert manager.active_mode is not None
    assert manager.active_mode.name == "command"


def test_insert_eof_finishes_and_quits() -> None:
    manager = make_manager()

    manager.handle_line("I")
    manager.handle_line("only")
    result = manager.handle_eof()

    assert result.quit is True
    assert result.complete is True
    assert lines_of(manager) == ["only"]
    assert manager.context.session.last_range == (1, 1)


def test_edit_shows_then_replaces_line() -> None:
    manager = make_manager("a", "b")

    shown = manager.handle_line("E 2")
    assert shown.output == ("00001: b",)
    assert manager.prompt == "00002: "

    done = manager.handle_line("B!")

    assert done.complete is True
    assert lines_of(manager) == ["a", "B!"]
    assert manager.context.session.last_range == (2, 2)


def test_edit_errors() -> None:
    manager = make_manager("a")

    assert manager.handle_line("E").output == ("! need E n",)
    assert manager.handle_line("E 7").output == ("! bad line",)
    assert manager.handle_line("E x").output == ("! bad line",)


def test_edit_eof_leaves_line() -> None:
    manager = make_manager("a")

    manager.handle_line("E 1")
    result = manager.handle_eof()

    assert result.quit is True
    assert lines_of(manager) == ["a"]


def test_replace_command_scenario() -> None:
    manager = make_manager("hello world")

    result = manager.handle_line("R /world/there/")

    assert result.output == ("Replaced 1 occurrence(s).",)
    assert lines_of(manager) == ["hello there"]


def test_replace_command_with_range_and_global() -> None:
    manager = make_manager("a.a", "a.a", "a.a")

    result = manager.handle_line("r 2,3 /a/b/ g")

    assert result.output == ("Replaced 4 occurrence(s).",)
    assert lines_of(manager) == ["a.a", "b.b", "b.b"]
    assert manager.context.session.last_range == (2, 3)


@pytest.mark.parametrize(
    ("command", "expected"),
    [
        ("R", "! syntax: R a,b /old/new/[g]"),
        ("R 1 /old", "! syntax: R a,b /old/new/[g]"),
        ("R q /a/b/", "! bad range"),
    ],
)
def test_replace_command_errors(command: str, expected: str) -> None:
    manager = make_manager("old")

    assert manager.handle_line(command).output == (expected,)
    assert lines_of(manager) == ["old"]


def test_search_with_slashes_and_range() -> None:
    manager = make_manager("Hello World", "world", "other")

    result = manager.handle_line("S 2,3 /WORLD/")

    assert result.output == ("00001: world", "-- 1 match(es)")
    assert manager.context.session.last_range == (2, 3)


def test_search_bare_text_covers_buffer() -> None:
    manager = make_manager("Hello World", "nope")

    result = manager.handle_line("s world")

    assert result.output == ("00000: Hello World", "-- 1 match(es)")


def test_search_unterminated_pattern() -> None:
    manager = make_manager("x")

    assert manager.handle_line("S /x").output == ("! syntax: S a,b /text/",)


def test_open_and_write_commands(tmp_path: Path) -> None:
    source = tmp_path / "in.txt"
    source.write_text("l1\nl2\n")
    manager = make_manager("old")

    opened = manager.handle_line(f"O {source}")
    assert opened.output == ("-- loaded 2 line(s)",)
    assert lines_of(manager) == ["l1", "l2"]

    manager.handle_line("I")
    manager.handle_line("l3")
    manager.handle_line(".")
    wrote = manager.handle_line("W")

    assert wrote.output == (f"-- wrote 3 line(s) to {source}",)
    assert source.read_text() == "l1\nl2\nl3\n"


def test_open_and_write_failures(tmp_path: Path) -> None:
    manager = make_manager("a")

    assert manager.handle_line("O").output == ("! need filename",)
    assert manager.handle_line(f"O {tmp_path / 'nope'}").output == ("! open failed",)
    assert manager.handle_line("W").output == (
        "! W needs filename (no current file)",
    )
    bad_target = tmp_path / "missing" / "out.txt"
    assert manager.handle_line(f"W {bad_target}").output == ("! write failed",)
    assert lines_of(manager) == ["a"]


def test_open_over_capacity_reports_out_of_space(tmp_path: Path) -> None:
    source = tmp_path / "big.txt"
    source.write_text("1\n2\n3\n")
    manager = make_manager(capacity=2)

    result = manager.handle_line(f"O {source}")

    assert result.output == ("! out of space",)
    assert lines_of(manager) == ["1", "2"]


def test_status_help_quit_and_unknown() -> None:
    manager = make_manager("a")
    events: List[Tuple[str, object]] = []
    manager.context.bus.subscribe("command.quit", lambda p: events.append(("quit", p)))

    assert manager.handle_line("P").output == ("Lines: 1  File: (none)",)
    assert manager.handle_line("h").output == HELP_LINES
    assert manager.handle_line("?").output == HELP_LINES
    assert manager.handle_line("Z").output == ("?",)

    quit_result = manager.handle_line("q")
    assert quit_result.quit is True
    assert quit_result.complete is False
    assert events == [("quit", None)]


def test_blank_line_is_ignored() -> None:
    manager = make_manager("a")

    result = manager.handle_line("   ")

    assert result.complete is False
    assert result.output == ()


def test_leading_int_reads_like_atoi() -> None:
    assert leading_int("12abc") == 12
    assert leading_int("  7") == 7
    assert leading_int("x") == 0
    assert leading_int("-3") == -3


class StarvedStore(LineStore):
    """Store that runs out of line storage after ``budget`` lines."""

    def __init__(self, *, budget: int) -> None:
        super().__init__()
        self.budget = budget

    def _own(self, text: str, idx: int) -> str:
        if self.budget <= 0:
            raise AllocFailure(f"no storage for line {idx}", index=idx)
        self.budget -= 1
        return super()._own(text, idx)


def test_insert_stops_on_alloc_failure_and_keeps_lines() -> None:
    manager = create_default_manager(EditorSession(store=StarvedStore(budget=2)))

    manager.handle_line("I")
    manager.handle_line("a")
    manager.handle_line("b")
    result = manager.handle_line("c")

    assert result.output == ("! alloc failed",)
    assert result.complete is True
    assert lines_of(manager) == ["a", "b"]
    assert manager.context.session.last_range == (1, 2)
    assert manager.active_mode is not None
    assert manager.active_mode.name == "command"


def test_edit_alloc_failure_leaves_line() -> None:
    store = StarvedStore(budget=1)
    store.insert_at(1, "a")
    manager = create_default_manager(EditorSession(store=store))

    manager.handle_line("E 1")
    result = manager.handle_line("z")

    assert result.output == ("! alloc failed",)
    assert result.complete is True
    assert lines_of(manager) == ["a"]
    assert manager.context.session.last_range == (1, 0)
    assert manager.active_mode is not None
    assert manager.active_mode.name == "command"


def test_open_and_write_with_unknown_encoding_report_failure(
    tmp_path: Path,
) -> None:
    source = tmp_path / "in.txt"
    source.write_text("data\n")
    session = EditorSession.from_lines(
        ["a"], config=EditorConfig(encoding="no-such-codec")
    )
    manager = create_default_manager(session)

    assert manager.handle_line(f"O {source}").output == ("! open failed",)
    assert manager.handle_line(f"W {source}").output == ("! write failed",)
    assert lines_of(manager) == ["a"]
    assert source.read_text() == "data\n"
