"""Editing session: one line store plus its file identity and last range."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from lined.config import EditorConfig
from lined.runtime import telemetry

from . import files
from .errors import BadIndex, IOFailure
from .mutators import ReplaceSpec, replace_in_line, search_line
from .ranges import LineRange, RangeParse, clamp_range, parse_range
from .store import LineStore

LastRange = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class SearchHit:
    index: int
    offset: int
    text: str


def format_line(index: int, text: str) -> str:
    """Render 1-based ``index`` as the 0-based, zero-padded display form."""

    return f"{index - 1:05d}: {text}"


class EditorSession:
    """Explicit editor state passed to every command.

    ``last_range`` starts as ``(1, 0)``, meaning nothing has been touched.
    """

    def __init__(
        self,
        *,
        config: Optional[EditorConfig] = None,
        store: Optional[LineStore] = None,
        name: str = "default",
    ) -> None:
        self.config = config or EditorConfig()
        if store is None:
            store = LineStore(
                capacity=self.config.capacity,
                max_line_length=self.config.max_line_length,
            )
        self.store = store
        self.name = name
        self.current_file = ""
        self.last_range: LastRange = (1, 0)

    @classmethod
    def from_lines(
        cls, lines: List[str], *, config: Optional[EditorConfig] = None
    ) -> "EditorSession":
        session = cls(config=config)
        for line in lines:
            session.store.insert_at(len(session.store) + 1, line)
        return session

    @property
    def encoding(self) -> str:
        return self.config.encoding

    @property
    def line_count(self) -> int:
        return len(self.store)

    def lines(self) -> List[str]:
        return list(self.store.snapshot())

    def status_line(self) -> str:
        return f"Lines: {len(self.store)}  File: {self.current_file or '(none)'}"

    def resolve(self, token: str) -> RangeParse:
        return parse_range(token, len(self.store))

    def full_range(self) -> LineRange:
        count = len(self.store)
        return clamp_range(1, count, count)

    def mark(self, start: int, end: int) -> None:
        self.last_range = (start, end)

    # -- line operations -------------------------------------------------

    def list_lines(self, rng: LineRange) -> List[str]:
        rendered = [format_line(idx, self.store.get(idx) or "") for idx in rng]
        if len(self.store):
            self.mark(*rng.as_tuple())
        return rendered

    def insert(self, pos: int, text: str) -> None:
        with telemetry.span(
            "buffer::insert",
            component="buffer",
            metadata={"buffer": self.name, "pos": pos},
        ):
            self.store.insert_at(pos, text)

    def delete(self, rng: LineRange) -> int:
        if rng.is_empty or not len(self.store):
            return 0
        with telemetry.span(
            "buffer::delete",
            component="buffer",
            metadata={"buffer": self.name, "range": rng.as_tuple()},
        ):
            removed = self.store.delete_range(rng.start, rng.end)
        count = len(self.store)
        self.mark(rng.start, rng.start if rng.start <= count else count)
        return removed

    def edit(self, idx: int, text: str) -> None:
        if self.store.get(idx) is None:
            raise BadIndex(f"line {idx} does not exist", index=idx)
        with telemetry.span(
            "buffer::edit",
            component="buffer",
            metadata={"buffer": self.name, "line": idx},
        ):
            self.store.replace_line(idx, text)
        self.mark(idx, idx)

    def replace(self, rng: LineRange, spec: ReplaceSpec) -> int:
        total = 0
        with telemetry.span(
            "buffer::replace",
            component="buffer",
            metadata={"buffer": self.name, "range": rng.as_tuple()},
        ) as handle:
            for idx in rng:
                line = self.store.get(idx)
                if line is None:
                    continue
                updated, made = replace_in_line(
                    line,
                    spec.old,
                    spec.new,
                    spec.global_,
                    max_length=self.store.max_line_length,
                    limit=self.config.replace_limit,
                )
                if made:
                    self.store.replace_line(idx, updated)
                total += made
            handle.add_metadata("replacements", total)
        self.mark(*rng.as_tuple())
        return total

    def search(self, rng: LineRange, pattern: str) -> List[SearchHit]:
        hits: List[SearchHit] = []
        for idx in rng:
            line = self.store.get(idx)
            if line is None:
                continue
            offset = search_line(line, pattern)
            if offset is not None:
                hits.append(SearchHit(index=idx, offset=offset, text=line))
        self.mark(*rng.as_tuple())
        return hits

    # -- file operations -------------------------------------------------

    def open(self, name: str) -> int:
        return files.load_into(self, name)

    def write(self, name: Optional[str] = None) -> Tuple[str, int]:
        target = name or self.current_file
        if not target:
            raise IOFailure("no file name given and no current file")
        return target, files.save_from(self, target)


__all__ = ["EditorSession", "SearchHit", "format_line"]
