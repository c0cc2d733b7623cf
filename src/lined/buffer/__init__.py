"""Line-buffer engine: store, ranges, mutators, file bridge, session."""

from .errors import (
    AllocFailure,
    BadIndex,
    BadRange,
    CapacityExceeded,
    IOFailure,
    LinedError,
)
from .files import load_into, save_from
from .mutators import (
    ReplaceSpec,
    SpecParse,
    parse_replace_spec,
    parse_search_spec,
    replace_in_line,
    search_line,
)
from .ranges import LineRange, RangeParse, clamp_range, parse_range
from .session import EditorSession, SearchHit, format_line
from .store import LineStore

__all__ = [
    "LineStore",
    "LineRange",
    "RangeParse",
    "clamp_range",
    "parse_range",
    "ReplaceSpec",
    "SpecParse",
    "parse_replace_spec",
    "parse_search_spec",
    "replace_in_line",
    "search_line",
    "load_into",
    "save_from",
    "EditorSession",
    "SearchHit",
    "format_line",
    "LinedError",
    "BadRange",
    "BadIndex",
    "CapacityExceeded",
    "IOFailure",
    "AllocFailure",
]
