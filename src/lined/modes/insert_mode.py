"""Multi-line insert mode, ended by a line holding a single ``.``."""

from __future__ import annotations

from typing import MutableMapping, cast

from lined.buffer import AllocFailure, CapacityExceeded
from lined.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult

TERMINATOR = "."


def insert_state(context: ModeContext) -> MutableMapping[str, int]:
    state = cast(
        MutableMapping[str, int], context.extras.setdefault("insert_state", {})
    )
    state.setdefault("start", 1)
    state.setdefault("pos", 1)
    return state


class InsertMode(Mode):
    """Feeds each input line into the store at a moving position.

    The start line is read from ``extras["insert_state"]``, which the ``I``
    command fills before switching here. Lines already inserted stay when
    the store fills up.
    """

    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("lined.modes.insert")

    @property
    def prompt(self) -> str:
        return f"{insert_state(self.context)['pos']:05d}: "

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.bus.emit("insert.start", dict(insert_state(self.context)))

    def handle_line(self, line: str) -> ModeResult:
        if line == TERMINATOR:
            return self._finish()

        state = insert_state(self.context)
        try:
            self.context.session.insert(state["pos"], line)
        except CapacityExceeded:
            return self._finish("! out of space", status="insert_full")
        except AllocFailure:
            return self._finish("! alloc failed", status="insert_alloc_failed")
        state["pos"] += 1
        return ModeResult(consumed=True, status="inserting", complete=False)

    def handle_eof(self) -> ModeResult:
        result = self._finish()
        result.quit = True
        return result

    def _finish(self, *output: str, status: str = "insert_done") -> ModeResult:
        state = insert_state(self.context)
        start, pos = state["start"], state["pos"]
        self.context.session.mark(start, pos - 1)
        self.context.bus.emit("insert.end", {"start": start, "inserted": pos - start})
        return ModeResult(
            consumed=True,
            switch_to="command",
            status=status,
            output=tuple(output),
        )
