"""Editor limits and I/O settings."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "LINED_"

MAX_LINES = 1200
MAX_LINE_LENGTH = 255
REPLACE_LIMIT = 1024
DEFAULT_ENCODING = "utf-8"


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _env_encoding(env: Mapping[str, str]) -> str:
    value = env.get(f"{ENV_PREFIX}ENCODING")
    if not value:
        return DEFAULT_ENCODING
    try:
        codecs.lookup(value)
    except LookupError:
        return DEFAULT_ENCODING
    return value


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Capacity and line-length ceilings plus the on-disk encoding."""

    capacity: int = MAX_LINES
    max_line_length: int = MAX_LINE_LENGTH
    replace_limit: int = REPLACE_LIMIT
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        source = os.environ if env is None else env
        return cls(
            capacity=_env_int(source, "CAPACITY", MAX_LINES),
            max_line_length=_env_int(source, "MAX_LINE_LENGTH", MAX_LINE_LENGTH),
            replace_limit=_env_int(source, "REPLACE_LIMIT", REPLACE_LIMIT),
            encoding=_env_encoding(source),
        )


__all__ = [
    "EditorConfig",
    "MAX_LINES",
    "MAX_LINE_LENGTH",
    "REPLACE_LIMIT",
    "DEFAULT_ENCODING",
]
