"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from lined.buffer import EditorSession


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_line``.

    ``complete`` marks the end of a user command, which is when hosts print
    the status line. ``quit`` asks the host to stop reading input.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    output: Tuple[str, ...] = ()
    complete: bool = True
    quit: bool = False


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    session: EditorSession
    bus: "ModeBus"
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def prompt(self) -> str:
        return "* "

    def on_enter(
        self, previous: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[str]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_line(
        self, line: str
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def handle_eof(self) -> ModeResult:
        """Invoked by the manager when the input stream ends."""

        return ModeResult(consumed=False, status="eof", quit=True, complete=False)
