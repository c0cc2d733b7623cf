"""Single-letter editor commands evaluated against the session."""

from __future__ import annotations

import re
from typing import Callable, Dict, Tuple

from lined.buffer import (
    CapacityExceeded,
    IOFailure,
    LinedError,
    LineRange,
    format_line,
    parse_replace_spec,
    parse_search_spec,
)
from lined.modes.base_mode import ModeContext, ModeResult
from lined.modes.edit_mode import edit_state
from lined.modes.insert_mode import insert_state
from lined.runtime import telemetry

CommandHandler = Callable[[ModeContext, str], ModeResult]

REPLACE_USAGE = "! syntax: R a,b /old/new/[g]"
SEARCH_USAGE = "! syntax: S a,b /text/"

HELP_LINES: Tuple[str, ...] = (
    "Commands:",
    "  L [a][,b]           list lines",
    "  I [n]               insert at n (end with a single '.')",
    "  D a[,b]             delete lines",
    "  E n                 edit (replace) line",
    "  R a[,b] /old/new/[g]  replace; 'g' = global per line",
    "  S [a][,b] /text/    search (case-insensitive)",
    "  O name              open (load) file",
    "  W [name]            write (save) file",
    "  P                   print status",
    "  H or ?              help",
    "  Q                   quit",
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def leading_int(text: str) -> int:
    """Read a leading integer the way C ``atoi`` does; no digits gives 0."""

    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def submit_command_line(context: ModeContext, line: str) -> ModeResult:
    text = line.strip()
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, status="command_empty", complete=False)
    letter = text[0].upper()
    args = text[1:].lstrip()
    handler = _COMMAND_HANDLERS.get(letter)
    if handler is None:
        return _unknown_command(context, letter)
    try:
        return handler(context, args)
    except LinedError as exc:
        telemetry.record_event(
            "command.failed",
            level="warning",
            data={"command": letter, "kind": exc.kind, "reason": str(exc)},
        )
        context.bus.emit("command.error", letter)
        return _reply(f"! {exc}", status=f"command_{exc.kind}")


def _reply(*output: str, status: str = "ok", **extra: object) -> ModeResult:
    return ModeResult(consumed=True, status=status, output=tuple(output), **extra)


def _unknown_command(context: ModeContext, command: str) -> ModeResult:
    context.bus.emit("command.error", command)
    return _reply("?", status="command_unknown", message=command)


def _split_slash(args: str) -> Tuple[str, str] | None:
    slash = args.find("/")
    if slash < 0:
        return None
    return args[:slash].strip(), args[slash:]


def _range_or_error(context: ModeContext, token: str) -> LineRange | str:
    parsed = context.session.resolve(token)
    if parsed.range is None:
        return "! bad range"
    return parsed.range


def _handle_list(context: ModeContext, args: str) -> ModeResult:
    session = context.session
    rng = _range_or_error(context, args)
    if isinstance(rng, str):
        return _reply(rng, status="command_bad_range")
    if not session.line_count:
        return _reply("(empty)", status="command_list")
    return _reply(*session.list_lines(rng), status="command_list")


def _handle_insert(context: ModeContext, args: str) -> ModeResult:
    count = context.session.line_count
    n = leading_int(args) if args else count + 1
    if n < 1 or n > count + 1:
        n = count + 1
    state = insert_state(context)
    state["start"] = n
    state["pos"] = n
    return _reply(
        f"-- Insert mode at line {n - 1:05d} (end with a single '.') --",
        status="command_insert",
        switch_to="insert",
        complete=False,
    )


def _handle_delete(context: ModeContext, args: str) -> ModeResult:
    if not args:
        return _reply("! need D a[,b]", status="command_bad_range")
    rng = _range_or_error(context, args)
    if isinstance(rng, str):
        return _reply("! need D a[,b]", status="command_bad_range")
    context.session.delete(rng)
    return _reply(status="command_delete")


def _handle_edit(context: ModeContext, args: str) -> ModeResult:
    if not args:
        return _reply("! need E n", status="command_bad_index")
    n = leading_int(args)
    current = context.session.store.get(n)
    if current is None:
        return _reply("! bad line", status="command_bad_index")
    edit_state(context)["line"] = n
    return _reply(
        format_line(n, current),
        status="command_edit",
        switch_to="edit",
        complete=False,
    )


def _handle_replace(context: ModeContext, args: str) -> ModeResult:
    parts = _split_slash(args)
    if parts is None:
        return _reply(REPLACE_USAGE, status="command_syntax")
    token, spec_text = parts
    rng = _range_or_error(context, token)
    if isinstance(rng, str):
        return _reply(rng, status="command_bad_range")
    spec = parse_replace_spec(spec_text)
    if spec.replace is None:
        return _reply(REPLACE_USAGE, status="command_syntax")
    total = context.session.replace(rng, spec.replace)
    return _reply(f"Replaced {total} occurrence(s).", status="command_replace")


def _handle_search(context: ModeContext, args: str) -> ModeResult:
    session = context.session
    parts = _split_slash(args)
    if parts is None:
        rng, spec_text = session.full_range(), args
    else:
        token, spec_text = parts
        resolved = _range_or_error(context, token)
        if isinstance(resolved, str):
            return _reply(resolved, status="command_bad_range")
        rng = resolved
    spec = parse_search_spec(spec_text)
    if spec.pattern is None:
        return _reply(SEARCH_USAGE, status="command_syntax")
    hits = session.search(rng, spec.pattern)
    output = [format_line(hit.index, hit.text) for hit in hits]
    output.append(f"-- {len(hits)} match(es)")
    return _reply(*output, status="command_search")


def _handle_open(context: ModeContext, args: str) -> ModeResult:
    name = args.strip()
    if not name:
        return _reply("! need filename", status="command_io_failure")
    try:
        loaded = context.session.open(name)
    except IOFailure:
        return _reply("! open failed", status="command_io_failure")
    except CapacityExceeded:
        return _reply("! out of space", status="command_capacity_exceeded")
    context.bus.emit("command.open", {"path": name, "lines": loaded})
    return _reply(f"-- loaded {loaded} line(s)", status="command_open")


def _handle_write(context: ModeContext, args: str) -> ModeResult:
    session = context.session
    name = args.strip()
    if not name and not session.current_file:
        return _reply(
            "! W needs filename (no current file)", status="command_io_failure"
        )
    try:
        target, written = session.write(name or None)
    except IOFailure:
        return _reply("! write failed", status="command_io_failure")
    context.bus.emit("command.write", {"path": target, "lines": written})
    return _reply(f"-- wrote {written} line(s) to {target}", status="command_write")


def _handle_status(context: ModeContext, args: str) -> ModeResult:
    del args
    return _reply(context.session.status_line(), status="command_status")


def _handle_help(context: ModeContext, args: str) -> ModeResult:
    del context, args
    return _reply(*HELP_LINES, status="command_help")


def _handle_quit(context: ModeContext, args: str) -> ModeResult:
    del args
    context.bus.emit("command.quit", None)
    return ModeResult(
        consumed=True, status="command_quit", complete=False, quit=True
    )


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "L": _handle_list,
    "I": _handle_insert,
    "D": _handle_delete,
    "E": _handle_edit,
    "R": _handle_replace,
    "S": _handle_search,
    "O": _handle_open,
    "W": _handle_write,
    "P": _handle_status,
    "H": _handle_help,
    "?": _handle_help,
    "Q": _handle_quit,
}


__all__ = ["HELP_LINES", "leading_int", "submit_command_line"]
