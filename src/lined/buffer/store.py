"""Bounded, ordered line storage."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from lined.config import MAX_LINE_LENGTH, MAX_LINES

from .errors import AllocFailure, BadIndex, CapacityExceeded


class LineStore:
    """Ordered list of lines with a fixed capacity.

    Positions are 1-based at this API, matching what users type. Lines are
    plain ``str`` values capped at ``max_line_length`` characters; text past
    the cap is cut off on the way in.
    """

    def __init__(
        self,
        *,
        capacity: int = MAX_LINES,
        max_line_length: int = MAX_LINE_LENGTH,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.max_line_length = max_line_length
        self._lines: List[str] = []

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._lines))

    @property
    def is_full(self) -> bool:
        return len(self._lines) >= self.capacity

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def reset(self) -> None:
        self._lines.clear()

    def get(self, idx: int) -> Optional[str]:
        if 1 <= idx <= len(self._lines):
            return self._lines[idx - 1]
        return None

    def insert_at(self, pos: int, text: str) -> None:
        """Insert ``text`` so that it becomes line ``pos``.

        Lines at ``pos`` and after move down one slot. Raises ``BadIndex``
        unless ``1 <= pos <= len + 1`` and ``CapacityExceeded`` when full.
        """

        count = len(self._lines)
        if pos < 1 or pos > count + 1:
            raise BadIndex(f"insert position {pos} outside 1..{count + 1}", index=pos)
        if count >= self.capacity:
            raise CapacityExceeded(
                f"store holds {self.capacity} lines already", index=pos
            )
        self._lines.insert(pos - 1, self._own(text, pos))

    def delete_range(self, a: int, b: int) -> int:
        """Remove lines ``a..b`` inclusive and close the gap.

        Bounds are swapped when reversed and clamped into ``1..len``. Returns
        the number of lines removed; an empty store is left alone.
        """

        count = len(self._lines)
        if count == 0:
            return 0
        if a > b:
            a, b = b, a
        a = min(max(a, 1), count)
        b = min(max(b, 1), count)
        del self._lines[a - 1 : b]
        return b - a + 1

    def replace_line(self, idx: int, text: str) -> None:
        count = len(self._lines)
        if idx < 1 or idx > count:
            raise BadIndex(f"line {idx} outside 1..{count}", index=idx)
        self._lines[idx - 1] = self._own(text, idx)

    def _own(self, text: str, idx: int) -> str:
        try:
            return str(text[: self.max_line_length])
        except MemoryError as exc:
            raise AllocFailure(f"no storage for line {idx}", index=idx) from exc


__all__ = ["LineStore"]
