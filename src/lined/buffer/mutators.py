"""Per-line replace and search, plus parsers for their slash-delimited arguments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lined.config import MAX_LINE_LENGTH, REPLACE_LIMIT

_ASCII_FOLD = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def ascii_lower(text: str) -> str:
    return text.translate(_ASCII_FOLD)


def replace_in_line(
    line: str,
    old: str,
    new: str,
    global_: bool = False,
    *,
    max_length: int = MAX_LINE_LENGTH,
    limit: int = REPLACE_LIMIT,
) -> tuple[str, int]:
    """Replace literal ``old`` with ``new`` inside ``line``.

    Matching is case-sensitive. With ``global_`` the scan resumes right after
    each inserted replacement, for at most ``limit`` replacements. A splice
    that would push the line past ``max_length`` stops the scan; splices made
    before it are kept. Returns ``(line, replacements)``.
    """

    if not old:
        return line, 0

    made = 0
    cursor = 0
    while made < limit:
        found = line.find(old, cursor)
        if found < 0:
            break
        if len(line) - len(old) + len(new) > max_length:
            break
        line = line[:found] + new + line[found + len(old) :]
        made += 1
        cursor = found + len(new)
        if not global_:
            break
    return line, made


def search_line(line: str, needle: str) -> Optional[int]:
    """Offset of the first ASCII case-insensitive match of ``needle``."""

    if not needle:
        return 0
    found = ascii_lower(line).find(ascii_lower(needle))
    return found if found >= 0 else None


@dataclass(frozen=True, slots=True)
class ReplaceSpec:
    old: str
    new: str
    global_: bool = False


@dataclass(frozen=True, slots=True)
class SpecParse:
    """Tagged outcome of parsing a replace or search argument."""

    replace: Optional[ReplaceSpec] = None
    pattern: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _between(text: str, delim: str = "/") -> tuple[Optional[str], str]:
    if not text.startswith(delim):
        return None, text
    close = text.find(delim, 1)
    if close < 0:
        return None, text
    return text[1:close], text[close + 1 :]


def parse_replace_spec(text: str) -> SpecParse:
    """Parse ``/old/new/`` with an optional trailing ``g``."""

    old, rest = _between(text.lstrip())
    if old is None:
        return SpecParse(error="missing /old/")
    new, rest = _between("/" + rest)
    if new is None:
        return SpecParse(error="missing new/")
    flag = rest.lstrip()[:1]
    return SpecParse(replace=ReplaceSpec(old=old, new=new, global_=flag in {"g", "G"}))


def parse_search_spec(text: str) -> SpecParse:
    """Parse ``/text/`` or take the bare remainder as the search text."""

    stripped = text.lstrip()
    if stripped.startswith("/"):
        pattern, _ = _between(stripped)
        if pattern is None:
            return SpecParse(error="missing closing /")
        return SpecParse(pattern=pattern)
    return SpecParse(pattern=stripped)


__all__ = [
    "ReplaceSpec",
    "SpecParse",
    "ascii_lower",
    "parse_replace_spec",
    "parse_search_spec",
    "replace_in_line",
    "search_line",
]
