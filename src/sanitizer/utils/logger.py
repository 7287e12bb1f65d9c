"""
Provides structured logging with log levels.

Each entry is a single line with a UTC timestamp, the level, a dotted event
name and key-value pairs, which keeps the output easy to grep while progress
bars are being drawn on the same terminal. The starting level comes from
$SANITIZER_LOG_LEVEL; the CLI overrides it with --debug.
"""
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from tqdm import tqdm

from sanitizer.utils.constants import LOG_LEVEL

_print_lock = threading.Lock()
_separator = " | "


class LogLevel(Enum):
    """Log level enumeration."""
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


def parse_log_level(name: str, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Map a level name such as "debug" or "WARN" to a LogLevel, falling back to `default`."""
    try:
        return LogLevel[name.strip().upper()]
    except (KeyError, AttributeError):
        return default


_current_level = parse_log_level(LOG_LEVEL)


def set_log_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_log_level() -> LogLevel:
    return _current_level


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str):
        # Single line per entry
        escaped = value.replace("\r", "\\r").replace("\n", "\\n").replace('"', '\\"')
        return f'"{escaped}"'
    return str(value)


def _format_kv(data: Dict[str, Any]) -> str:
    return _separator.join(f"{key}={_format_value(value)}" for key, value in data.items())


def _should_log(level: LogLevel) -> bool:
    return level.value >= _current_level.value


def log(event: str, level: LogLevel = LogLevel.INFO, **kwargs) -> None:
    """
    Structured logging function.

    Args:
        event: Event name (e.g., 'resolve.fallback', 'apply.collision')
        level: Log level (TRACE, DEBUG, INFO, WARN, ERROR)
        **kwargs: Key-value pairs to log
    """
    if not _should_log(level):
        return

    with _print_lock:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        kv_str = _format_kv(kwargs) if kwargs else ""
        header = f"{timestamp}{_separator}[{level.name}]{_separator}{event}"
        # tqdm.write keeps log lines from tearing active progress bars
        tqdm.write(f"{header}{_separator}{kv_str}" if kv_str else header)


def safe_print(*args, **kwargs) -> None:
    """
    Thread-safe print function for user-facing CLI output.
    Use log() for diagnostics instead.
    """
    with _print_lock:
        print(*args, **kwargs, flush=True)
