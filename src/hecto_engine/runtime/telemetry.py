"""Engine logging on top of telelog.

Loggers are built from a ``TelemetrySettings`` value (read from the
``HECTO_ENGINE_*`` environment by default) or from a named preset, and are
cached per name until the next ``configure`` call.

Document IO, searches and registry changes run inside ``span`` blocks; the
session reports user-visible failures through ``record_event``.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .config import TelemetrySettings

tl = cast(Any, telelog)

PRESETS: Mapping[str, Mapping[str, Any]] = {
    "development": {"level": "DEBUG", "console": True, "colored": True, "json": False},
    "production": {
        "level": "INFO",
        "console": False,
        "buffered": True,
        "log_file": "hecto_engine.log",
    },
    "performance": {
        "level": "DEBUG",
        "console": False,
        "buffered": True,
        "json": True,
        "log_file": "hecto_engine-performance.log",
    },
}

_loggers: Dict[str, Any] = {}
_settings: TelemetrySettings = TelemetrySettings()
_config: Optional[Any] = None


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _pairs(data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def build_config(settings: TelemetrySettings) -> Any:
    """Translate ``settings`` into a ``telelog.Config`` with profiling on."""

    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    config.with_json_format(settings.json)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    config.with_profiling(True)
    return config


def preset_settings(
    name: str, base: Optional[TelemetrySettings] = None
) -> TelemetrySettings:
    """Apply preset ``name`` on top of ``base`` (the environment by default).

    A log file named in the environment takes precedence over the preset's.
    """

    try:
        overrides = dict(PRESETS[name.lower()])
    except KeyError:
        raise ValueError(f"Unknown preset '{name}'.") from None
    base = base or TelemetrySettings.from_env()
    if base.log_file:
        overrides.pop("log_file", None)
    return replace(base, **overrides)


def configure(
    *,
    settings: Optional[TelemetrySettings] = None,
    preset: Optional[str] = None,
    config: Optional[Any] = None,
) -> None:
    """Replace the active configuration and drop cached loggers.

    ``settings``, ``preset`` and an explicit ``telelog.Config`` are mutually
    exclusive; with none of them the environment is read again.
    """

    global _settings, _config
    if sum(option is not None for option in (settings, preset, config)) > 1:
        raise ValueError("Provide only one of `settings`, `preset` or `config`.")

    if preset is not None:
        settings = preset_settings(preset)
    _settings = settings or TelemetrySettings.from_env()
    _config = config if config is not None else build_config(_settings)
    _loggers.clear()


def current_settings() -> TelemetrySettings:
    return _settings


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` for ``name``."""

    if _config is None:
        configure()
    logger_name = name or _settings.logger_name
    logger = _loggers.get(logger_name)
    if logger is None:
        logger = _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return logger


def _emit(logger: Any, level: str, message: str, data: Mapping[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(data)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is reported if the block fails."""

    name: str
    logger: Any
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block as ``name``, tracked as ``component`` when given.

    ``component=True`` reuses ``name``. ``metadata`` is pushed as logger
    context for the duration of the block. An escaping exception is logged as
    ``span::fail`` and re-raised.
    """

    logger = get_logger(logger_name)
    handle = SpanHandle(
        name,
        logger,
        {key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    component_name = name if component is True else (component or None)

    with ExitStack() as stack:
        for key, value in list(handle.metadata.items()):
            logger.add_context(key, value)
            stack.callback(logger.remove_context, key)
        if component_name:
            stack.enter_context(logger.track_component(component_name))
        stack.enter_context(logger.profile(name))

        try:
            yield handle
        except Exception as exc:
            failure = {"span": name, **handle.metadata, "reason": str(exc)}
            if component_name:
                failure["component"] = component_name
            _emit(logger, "error", "span::fail", failure)
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "current_settings",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
