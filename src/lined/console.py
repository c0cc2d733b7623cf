"""Interactive prompt loop and the ``lined`` entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from lined.buffer import EditorSession, LinedError
from lined.config import EditorConfig
from lined.modes import (
    CommandMode,
    EditMode,
    InsertMode,
    ModeBus,
    ModeContext,
    ModeResult,
)
from lined.modes.mode_manager import ModeManager
from lined.runtime import telemetry

TITLE = "LinEd - Line Editor Version 1.0a"
AUTHOR = "Mickey W. Lawless (C) 2025, 2026"
RULE = "=" * 36


def create_default_manager(session: Optional[EditorSession] = None) -> ModeManager:
    """Build a ModeManager with the command, insert, and edit modes."""

    context = ModeContext(
        session=session or EditorSession(config=EditorConfig.from_env()),
        bus=ModeBus(),
        extras={},
    )
    manager = ModeManager(context)
    manager.register_mode(CommandMode)
    manager.register_mode(InsertMode)
    manager.register_mode(EditMode)
    return manager


def banner_lines(name: str) -> list[str]:
    return [RULE, TITLE, AUTHOR, f"Editing: {name.upper()}", RULE]


def open_startup_file(session: EditorSession, name: str) -> Optional[str]:
    """Load ``name`` at startup; on failure keep it as the file identity.

    Returns the diagnostic to show, or ``None`` when the load succeeded.
    """

    try:
        session.open(name)
    except LinedError as exc:
        telemetry.record_event(
            "startup.open_failed",
            level="warning",
            data={"path": name, "kind": exc.kind},
        )
        session.current_file = name
        return f"! couldn't open '{name}' (starting empty)"
    return None


class Console:
    """Reads lines from ``stdin`` and feeds them to the mode manager."""

    def __init__(
        self,
        manager: ModeManager,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.manager = manager
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    @property
    def session(self) -> EditorSession:
        return self.manager.context.session

    def echo(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def run(self) -> int:
        while True:
            self.stdout.write(self.manager.prompt)
            self.stdout.flush()
            raw = self.stdin.readline()
            if not raw:
                result = self.manager.handle_eof()
            else:
                result = self.manager.handle_line(raw.rstrip("\n").rstrip("\r"))
            self.report(result)
            if result.quit:
                return 0

    def report(self, result: ModeResult) -> None:
        for line in result.output:
            self.echo(line)
        if result.complete:
            self.echo(self.session.status_line())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lined", description="EDLIN-style line editor."
    )
    parser.add_argument("file", nargs="?", help="file to load at startup")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    manager = create_default_manager()
    console = Console(manager)
    if args.file:
        failure = open_startup_file(console.session, args.file)
        if failure:
            console.echo(failure)
    for line in banner_lines(args.file or "(none)"):
        console.echo(line)
    console.echo(console.session.status_line())
    return console.run()


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
