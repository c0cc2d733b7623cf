"""Command prompt mode: one input line is one editor command."""

from __future__ import annotations

from lined.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class CommandMode(Mode):
    name = "command"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("lined.modes.command")

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        self.context.bus.emit("command.end", next_mode)

    def handle_line(self, line: str) -> ModeResult:
        from lined.actions.commands import submit_command_line

        return submit_command_line(self.context, line)
