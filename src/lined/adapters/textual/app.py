"""Executable Textual app that hosts the line editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Input, RichLog, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use lined.adapters.textual.app"
    ) from exc

from lined.console import banner_lines, create_default_manager, open_startup_file
from lined.modes.mode_manager import ModeManager
from lined.runtime import telemetry

from .controller import LinedAdapter, TextualUIHooks


@dataclass
class UIState:
    status_text: str = ""
    prompt_text: str = ""


class LinedApp(App[None]):
    """Output log, status line, and a prompted input box."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#output-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#input-row {
		height: 3;
	}

	#prompt-label {
		width: auto;
		padding: 1 0 0 1;
	}

	#command-input {
		width: 1fr;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, filename: Optional[str] = None) -> None:
        super().__init__()
        self._state = UIState()
        self._filename = filename
        self.manager: ModeManager | None = None
        self.adapter: LinedAdapter | None = None
        self._output_widget: RichLog | None = None
        self._status_widget: Static | None = None
        self._prompt_widget: Static | None = None
        self.logger = telemetry.get_logger("lined.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._output_widget = RichLog(id="output-view", wrap=False, markup=False)
        yield self._output_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        with Horizontal(id="input-row"):
            self._prompt_widget = Static("", id="prompt-label")
            yield self._prompt_widget
            yield Input(id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        self.manager = create_default_manager()
        startup = []
        if self._filename:
            failure = open_startup_file(self.manager.context.session, self._filename)
            if failure:
                startup.append(failure)
        startup.extend(banner_lines(self._filename or "(none)"))
        self._show_output(startup)
        hooks = TextualUIHooks(
            show_output=self._show_output,
            update_status=self._update_status,
            update_prompt=self._update_prompt,
            request_quit=self.exit,
            log=self._log_line,
        )
        self.adapter = LinedAdapter(self.manager, hooks)
        self.query_one("#command-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        value = event.value
        event.input.value = ""
        self.adapter.submit(value)

    def _show_output(self, lines: Sequence[str]) -> None:
        if self._output_widget:
            for line in lines:
                self._output_widget.write(line)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _update_prompt(self, prompt: str) -> None:
        self._state.prompt_text = prompt
        if self._prompt_widget:
            self._prompt_widget.update(prompt)

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lined-tui", description="Run the line editor in a Textual UI."
    )
    parser.add_argument("file", nargs="?", help="file to load at startup")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = LinedApp(filename=args.file)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
