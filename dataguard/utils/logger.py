"""
Structured console logger for the consent dashboard.

Each module creates its own logger with a context prefix
(``create_logger("ConsentStore")``).  Lines are colourised
on stderr, an ANSI-stripped copy is kept in an in-memory
buffer, and output is optionally mirrored to a log file
under ``.logs/`` when ``WRITE_TO_FILE`` is set.
"""

from __future__ import annotations

import io
import os
import pathlib
import re
import sys
from datetime import UTC, datetime

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")

# ============================================================================
# Shared state
# ============================================================================

_log_buffer: list[str] = []
_log_stream: io.TextIOWrapper | None = None

_write_to_file = os.environ.get("WRITE_TO_FILE", "").lower() == "true"


def get_log_buffer() -> list[str]:
    """Return a copy of the accumulated log lines (ANSI-stripped)."""
    return list(_log_buffer)


def clear_log_buffer() -> None:
    """Drop every buffered log line."""
    _log_buffer.clear()


# ============================================================================
# File Output
# ============================================================================


def start_log_file(logs_dir: pathlib.Path | None = None) -> pathlib.Path | None:
    """Open a timestamped log file when ``WRITE_TO_FILE`` is enabled.

    Args:
        logs_dir: Directory for log files.  Defaults to
            ``.logs`` in the current working directory.

    Returns:
        The path of the opened file, or ``None`` when file
        output is disabled or the file cannot be opened.
    """
    global _log_stream
    if not _write_to_file:
        return None

    end_log_file()

    target_dir = logs_dir or pathlib.Path.cwd() / ".logs"
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"dataguard_{datetime.now(UTC).strftime('%Y-%m-%d_%H-%M-%S')}.log"

    try:
        _log_stream = open(path, "a", encoding="utf-8")  # noqa: SIM115
    except OSError as exc:
        print(f"\033[31m✗ [Logger] Failed to open log file: {exc}\033[0m")
        return None
    return path


def end_log_file() -> None:
    """Flush and close the current log file, if any."""
    global _log_stream
    if _log_stream is None:
        return
    try:
        _log_stream.flush()
        _log_stream.close()
    except OSError:
        print("\033[33m⚠ [Logger] Failed to flush/close log file stream\033[0m")
    _log_stream = None


def _emit(line: str) -> None:
    """Write *line* to stderr, the log file and the buffer."""
    print(line, file=sys.stderr)
    clean = _ANSI_RE.sub("", line)
    if _log_stream is not None:
        _log_stream.write(clean + "\n")
        _log_stream.flush()
    _log_buffer.append(clean)


# ============================================================================
# ANSI Colours
# ============================================================================

_colours = {
    "reset": "\033[0m",
    "bright": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "blue": "\033[34m",
    "gray": "\033[90m",
}

_levels = {
    "info": (_colours["cyan"], "ℹ"),
    "success": (_colours["green"], "✓"),
    "warn": (_colours["yellow"], "⚠"),
    "error": (_colours["red"], "✗"),
    "debug": (_colours["gray"], "•"),
}


def _get_timestamp() -> str:
    """Return the current UTC time as HH:MM:SS.mmm."""
    now = datetime.now(UTC)
    return now.strftime("%H:%M:%S.") + f"{now.microsecond // 1000:03d}"


def _format_value(value: object) -> str:
    """Return an ANSI-coloured representation of *value*."""
    c = _colours
    if value is None:
        return f"{c['dim']}None{c['reset']}"
    if isinstance(value, bool):
        return f"{c['green']}True{c['reset']}" if value else f"{c['red']}False{c['reset']}"
    if isinstance(value, (int, float)):
        return f"{c['yellow']}{value}{c['reset']}"
    if isinstance(value, str):
        display = value[:197] + "..." if len(value) > 200 else value
        return f'{c["green"]}"{display}"{c["reset"]}'
    if isinstance(value, (list, tuple)):
        return f"{c['cyan']}[{len(value)} items]{c['reset']}"
    if isinstance(value, dict):
        return f"{c['cyan']}{{{len(value)} keys}}{c['reset']}"
    return str(value)


# ============================================================================
# Logger Class
# ============================================================================


class Logger:
    """Structured logger with a context prefix."""

    def __init__(self, context: str = "DataGuard") -> None:
        self._context = context

    @property
    def context(self) -> str:
        return self._context

    def _log(self, level: str, message: str, data: dict[str, object] | None = None) -> None:
        colour, symbol = _levels[level]
        c = _colours
        line = f"{c['gray']}[{_get_timestamp()}]{c['reset']} {colour}{symbol}{c['reset']} {c['bright']}[{self._context}]{c['reset']} {message}"
        if data:
            line += " " + " ".join(f"{c['dim']}{k}={c['reset']}{_format_value(v)}" for k, v in data.items())
        _emit(line)

    def info(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log an informational message."""
        self._log("info", message, data)

    def success(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a success message."""
        self._log("success", message, data)

    def warn(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a warning message."""
        self._log("warn", message, data)

    def error(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log an error message."""
        self._log("error", message, data)

    def debug(self, message: str, data: dict[str, object] | None = None) -> None:
        """Log a debug-level message."""
        self._log("debug", message, data)

    def section(self, title: str) -> None:
        """Print a prominent section divider with *title*."""
        c = _colours
        rule = "─" * 60
        for line in ("", f"{c['blue']}{rule}{c['reset']}", f"{c['blue']}{c['bright']}  {title}{c['reset']}", f"{c['blue']}{rule}{c['reset']}", ""):
            _emit(line)


def create_logger(context: str) -> Logger:
    """Create a logger for a specific module."""
    return Logger(context)
