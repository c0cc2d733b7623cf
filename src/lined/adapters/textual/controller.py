"""Minimal Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence

from lined.modes import ModeResult
from lined.modes.mode_manager import ModeManager


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    show_output: Callable[[Sequence[str]], None]
    update_status: Callable[[str], None] = _noop
    update_prompt: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class LinedAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_status()
        self._refresh_prompt()

    def submit(self, text: str) -> ModeResult:
        """Dispatch one entered line, echoing it after the current prompt."""

        self.hooks.show_output([f"{self.manager.prompt}{text}"])
        self._log_state("line ->", text=text)
        result = self.manager.handle_line(text)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            status=result.status,
            switch_to=result.switch_to,
            complete=result.complete,
        )
        return result

    def _after_mode_result(self, result: ModeResult) -> None:
        if result.output:
            self.hooks.show_output(list(result.output))
        if result.complete:
            self._refresh_status()
        self._refresh_prompt()
        if result.quit:
            self.hooks.request_quit()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in (
            "command.submit",
            "command.error",
            "command.open",
            "command.write",
            "command.quit",
            "insert.start",
            "insert.end",
            "edit.done",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_status(self) -> None:
        self.hooks.update_status(self.manager.context.session.status_line())

    def _refresh_prompt(self) -> None:
        self.hooks.update_prompt(self.manager.prompt)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.manager.context.session
        active_mode = self.manager.active_mode
        return {
            "mode": active_mode.name if active_mode else "?",
            "lines": session.line_count,
            "last_range": session.last_range,
            "file": session.current_file,
        }


__all__ = ["LinedAdapter", "TextualUIHooks"]
