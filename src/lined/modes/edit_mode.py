"""Single-line edit mode: the next input line replaces the chosen line."""

from __future__ import annotations

from typing import MutableMapping, cast

from lined.buffer import AllocFailure, BadIndex

from .base_mode import Mode, ModeContext, ModeResult


def edit_state(context: ModeContext) -> MutableMapping[str, int]:
    state = cast(MutableMapping[str, int], context.extras.setdefault("edit_state", {}))
    state.setdefault("line", 1)
    return state


class EditMode(Mode):
    name = "edit"

    @property
    def prompt(self) -> str:
        return f"{edit_state(self.context)['line']:05d}: "

    def handle_line(self, line: str) -> ModeResult:
        idx = edit_state(self.context)["line"]
        try:
            self.context.session.edit(idx, line)
        except AllocFailure:
            return self._abort("! alloc failed", status="edit_alloc_failed")
        except BadIndex:
            return self._abort("! bad line", status="edit_bad_index")
        self.context.bus.emit("edit.done", idx)
        return ModeResult(consumed=True, switch_to="command", status="edit_done")

    def _abort(self, message: str, *, status: str) -> ModeResult:
        return ModeResult(
            consumed=True, switch_to="command", status=status, output=(message,)
        )

    def handle_eof(self) -> ModeResult:
        return ModeResult(
            consumed=False, switch_to="command", status="edit_cancel", quit=True
        )
