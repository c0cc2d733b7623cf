"""Range tokens (``a``, ``a,b``, ``,b``) resolved against the store size."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import BadRange

_RANGE_RE = re.compile(r"^(?P<start>\d+)?\s*(?:(?P<comma>,)\s*(?P<end>\d+)?)?$")


@dataclass(frozen=True, slots=True)
class LineRange:
    """Inclusive 1-based span of lines.

    A range with ``end < start`` is empty; iterating it yields nothing.
    """

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(frozen=True, slots=True)
class RangeParse:
    """Tagged parse outcome: either ``range`` or ``error`` is set."""

    range: Optional[LineRange] = None
    error: Optional[BadRange] = None

    @property
    def ok(self) -> bool:
        return self.range is not None


def clamp_range(start: int, end: int, count: int) -> LineRange:
    """Force raw bounds into ``1 <= start <= end <= count``.

    On an empty store the bounds are only floored, which leaves an empty
    range.
    """

    if start < 1:
        start = 1
    if end < 1 or end > count:
        end = count
    if count > 0:
        if start > end:
            start, end = end, start
        start = min(start, count)
        end = min(end, count)
    return LineRange(start, end)


def parse_range(token: str, count: int) -> RangeParse:
    text = token.strip()
    if not text:
        return RangeParse(range=clamp_range(1, count, count))

    match = _RANGE_RE.match(text)
    if match is None or (match["start"] is None and match["comma"] is None):
        return RangeParse(error=BadRange(f"bad range '{text}'"))

    raw_end = int(match["end"]) if match["end"] else 0
    if match["start"] is None:
        start, end = 1, raw_end if raw_end > 0 else count
    else:
        x = int(match["start"])
        start = x if x > 0 else 1
        if match["comma"] is None:
            end = x
        else:
            end = raw_end if raw_end > 0 else count
    return RangeParse(range=clamp_range(start, end, count))


__all__ = ["LineRange", "RangeParse", "clamp_range", "parse_range"]
