"""Telemetry services for the editor, built on telelog.

The rest of the package only touches this narrow surface:

``configure(...)`` -- pick a preset or hand over a ready ``telelog.Config``
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit an ``event::<name>`` record
``span(name, ...)`` -- profile a block and optionally track it as a component

Stdout belongs to the editor prompt, so console logging is opt-in through
``LINED_LOG_CONSOLE``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LINED_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "lined")

# Settings per preset, applied through the matching ``Config.with_*`` call.
PRESETS: Mapping[str, Mapping[str, Any]] = {
    "development": {
        "min_level": "DEBUG",
        "console_output": True,
        "colored_output": True,
        "json_format": False,
    },
    "production": {
        "min_level": "INFO",
        "console_output": False,
        "file_output": "lined.log",
        "buffering": True,
    },
    "performance": {
        "min_level": "DEBUG",
        "console_output": False,
        "file_output": "lined-performance.log",
        "buffering": True,
        "json_format": True,
    },
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _apply(config: Any, settings: Mapping[str, Any]) -> Any:
    for key, value in settings.items():
        getattr(config, f"with_{key}")(value)
    config.with_profiling(True)
    return config


def _env_settings() -> Dict[str, Any]:
    console = _env_flag("LOG_CONSOLE")
    settings: Dict[str, Any] = {
        "min_level": (_env("LOG_LEVEL") or "INFO").upper(),
        "console_output": console,
    }
    if console:
        settings["colored_output"] = not _env_flag("NO_COLOR")
    if _env_flag("LOG_JSON"):
        settings["json_format"] = True
    log_file = _env("LOG_FILE")
    if log_file:
        settings["file_output"] = log_file
    if _env_flag("LOG_BUFFERED"):
        settings["buffering"] = True
        settings["buffer_size"] = int(_env("LOG_BUFFER_SIZE") or "2048")
    return settings


def build_config(preset: Optional[str] = None) -> Any:
    """Return a ``telelog.Config`` for ``preset``, or from the environment."""

    if preset is None:
        return _apply(tl.Config(), _env_settings())
    try:
        settings = dict(PRESETS[preset.lower()])
    except KeyError as exc:
        raise ValueError(f"Unknown preset '{preset}'.") from exc
    if "file_output" in settings:
        settings["file_output"] = _env("LOG_FILE") or settings["file_output"]
    return _apply(tl.Config(), settings)


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    ``config`` and ``preset`` are mutually exclusive; with neither, the
    configuration is rebuilt from ``LINED_*`` environment variables.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if config is None:
        config = build_config(preset)
    else:
        config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ACTIVE_CONFIG
        )
    return _LOGGER_CACHE[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _stringify(v)) for k, v in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so the block can attach results."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` also tracks the block as a component of the same name;
    a string names the component explicitly. ``metadata`` is attached as
    logger context while the block runs. An exception escaping the block is
    logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=cast(Optional[str], component_name),
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
