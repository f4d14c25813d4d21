"""Debug logging into an in-memory ring buffer.

Records from Python's logging module are captured into a bounded buffer that
can be exported to a file for bug reports (``teamboard --debug-log PATH``).
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from teamboard.limits import MAX_LOG_MESSAGE_LENGTH


@dataclass(slots=True)
class LogEntry:
    """A captured log entry."""

    group: str  # Level name (DEBUG, INFO, WARNING, ERROR, etc.)
    name: str
    message: str
    timestamp: float


MAX_LOG_LINES = 2000
log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)

# Track generation to detect buffer clears
_buffer_generation: int = 0


def _truncate(message: str) -> str:
    if len(message) > MAX_LOG_MESSAGE_LENGTH:
        return message[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
    return message


class DebugLogHandler(logging.Handler):
    """Logging handler that captures logs to the debug buffer."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_buffer.append(
                LogEntry(
                    group=record.levelname,
                    name=record.name,
                    message=_truncate(self.format(record)),
                    timestamp=record.created,
                )
            )
        except Exception:
            self.handleError(record)


_debug_handler: DebugLogHandler | None = None


def setup_debug_logging(level: int = logging.DEBUG) -> None:
    """Attach the buffer handler to the ``teamboard`` logger.

    This is idempotent - calling it multiple times has no effect after the first call.
    """
    global _debug_handler

    if _debug_handler is not None:
        return

    handler = DebugLogHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger("teamboard")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    _debug_handler = handler

    package_logger.info("Debug logging initialized")


def teardown_debug_logging() -> None:
    """Detach the buffer handler installed by :func:`setup_debug_logging`."""
    global _debug_handler

    if _debug_handler is None:
        return
    logging.getLogger("teamboard").removeHandler(_debug_handler)
    _debug_handler = None


def clear_log_buffer() -> None:
    """Clear the log buffer."""
    global _buffer_generation
    log_buffer.clear()
    _buffer_generation += 1


def get_buffer_generation() -> int:
    """Get the current buffer generation (incremented on clear)."""
    return _buffer_generation


def export_logs_to_file(file_path: str | Path) -> int:
    """Export all logs from the buffer to a file.

    Args:
        file_path: Path to write the log file to

    Returns:
        Number of log entries written
    """
    output_path = Path(file_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8") as f:
        f.write("# teamboard Debug Log Export\n")
        f.write(f"# Total entries: {len(log_buffer)}\n")
        f.write(f"# Buffer generation: {_buffer_generation}\n")
        f.write("# " + "=" * 76 + "\n\n")

        for entry in log_buffer:
            ts = datetime.fromtimestamp(entry.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            f.write(f"{ts} [{entry.group}] {entry.name}: {entry.message}\n")

    return len(log_buffer)
