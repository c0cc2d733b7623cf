"""Mode manager coordinating the command, insert, and edit modes."""

from __future__ import annotations

from typing import Dict, Optional, Type

from lined.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches input lines."""

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("lined.modes")
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def prompt(self) -> str:
        mode = self.active_mode
        return mode.prompt if mode else ""

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name})

    def handle_line(self, line: str) -> ModeResult:
        mode = self._require_active()
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"mode": mode.name},
        ):
            result = mode.handle_line(line)
        return self._after_mode_result(result)

    def handle_eof(self) -> ModeResult:
        """Let the active mode wrap up once input runs out."""

        mode = self._require_active()
        result = mode.handle_eof()
        return self._after_mode_result(result)

    def _require_active(self) -> Mode:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        return mode

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result
