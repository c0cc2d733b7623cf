"""Load and save a session's lines as plain newline-terminated text."""

from __future__ import annotations

import codecs
from typing import TYPE_CHECKING, Iterator

from lined.runtime import telemetry

from .errors import IOFailure

if TYPE_CHECKING:
    from .session import EditorSession

_ERRORS = "surrogateescape"

# Raised by open() or the codec for an unknown or unusable encoding.
_CODEC_ERRORS = (LookupError, UnicodeError)


def chomp(record: str) -> str:
    """Drop one trailing ``\\n``, then up to two trailing ``\\r``."""

    if record.endswith("\n"):
        record = record[:-1]
    for _ in range(2):
        if record.endswith("\r"):
            record = record[:-1]
    return record


def split_record(record: str, width: int) -> Iterator[str]:
    """Yield ``record`` in ``width``-sized lines; an empty record is one line."""

    if not record:
        yield ""
        return
    for offset in range(0, len(record), width):
        yield record[offset : offset + width]


def load_into(session: "EditorSession", name: str) -> int:
    """Replace the session's lines with the contents of ``name``.

    The file is opened before anything is discarded, so an unreadable source
    leaves the session untouched. Once reading starts the load is not atomic:
    ``CapacityExceeded`` propagates with the lines read so far kept. Returns
    the number of lines loaded.
    """

    store = session.store
    with telemetry.span(
        "files::load", component="files", metadata={"path": name}
    ) as handle:
        try:
            source = open(
                name, "r", encoding=session.encoding, errors=_ERRORS, newline="\n"
            )
        except OSError as exc:
            raise IOFailure(
                f"cannot open '{name}': {exc.strerror}", path=name
            ) from exc
        except _CODEC_ERRORS as exc:
            raise IOFailure(f"cannot open '{name}': {exc}", path=name) from exc

        with source:
            store.reset()
            try:
                for record in source:
                    for line in split_record(chomp(record), store.max_line_length):
                        store.insert_at(len(store) + 1, line)
            except OSError as exc:
                raise IOFailure(
                    f"cannot read '{name}': {exc.strerror}", path=name
                ) from exc
            except _CODEC_ERRORS as exc:
                raise IOFailure(f"cannot read '{name}': {exc}", path=name) from exc

        session.current_file = name
        session.last_range = (1, len(store))
        handle.add_metadata("lines", len(store))
        return len(store)


def save_from(session: "EditorSession", name: str) -> int:
    """Write every line of the session to ``name``, each ending in ``\\n``.

    The encoding is looked up before the file is opened so that an unknown
    codec does not truncate an existing file.
    """

    lines = session.store.snapshot()
    with telemetry.span(
        "files::save", component="files", metadata={"path": name}
    ) as handle:
        try:
            codecs.lookup(session.encoding)
            with open(
                name, "w", encoding=session.encoding, errors=_ERRORS, newline="\n"
            ) as sink:
                for line in lines:
                    sink.write(line)
                    sink.write("\n")
        except OSError as exc:
            raise IOFailure(
                f"cannot write '{name}': {exc.strerror}", path=name
            ) from exc
        except _CODEC_ERRORS as exc:
            raise IOFailure(f"cannot write '{name}': {exc}", path=name) from exc

        session.current_file = name
        handle.add_metadata("lines", len(lines))
        return len(lines)


__all__ = ["chomp", "split_record", "load_into", "save_from"]
