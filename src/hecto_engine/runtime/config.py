"""Environment-driven settings shared by the session and telemetry layers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "HECTO_ENGINE_"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, fallback: int) -> int:
    value = env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def env_float(name: str, fallback: float) -> float:
    value = env(name)
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Tunables for an editing session."""

    quit_times: int = 3
    status_timeout: float = 5.0
    file_name_width: int = 20

    @classmethod
    def from_env(cls) -> "EditorSettings":
        defaults = cls()
        return cls(
            quit_times=max(0, env_int("QUIT_TIMES", defaults.quit_times)),
            status_timeout=env_float("STATUS_TIMEOUT", defaults.status_timeout),
            file_name_width=max(
                1, env_int("FILE_NAME_WIDTH", defaults.file_name_width)
            ),
        )


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Logging options; see ``hecto_engine.runtime.telemetry``.

    The Textual host owns the terminal, so console output defaults to off.
    """

    logger_name: str = "hecto_engine"
    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        defaults = cls()
        return cls(
            logger_name=env("LOGGER") or defaults.logger_name,
            level=(env("LOG_LEVEL") or defaults.level).upper(),
            console=env_flag("CONSOLE", defaults.console)
            and not env_flag("DISABLE_CONSOLE", False),
            colored=not env_flag("NO_COLOR", not defaults.colored),
            json=env_flag("LOG_JSON", defaults.json),
            log_file=env("LOG_FILE") or defaults.log_file,
            buffered=env_flag("LOG_BUFFERED", defaults.buffered),
            buffer_size=max(1, env_int("LOG_BUFFER_SIZE", defaults.buffer_size)),
        )


__all__ = [
    "ENV_PREFIX",
    "EditorSettings",
    "TelemetrySettings",
    "env",
    "env_flag",
    "env_float",
    "env_int",
]
