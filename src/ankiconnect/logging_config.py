"""
Logging configuration for the AnkiConnect client.

Provides a centralized logging setup with human-readable output and structured context fields.
"""
import logging
import sys

_STANDARD_ATTRS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
    'asctime', 'getMessage', 'taskName',
})


class ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields to log messages.

    Supports extra fields passed via logger.debug("msg", extra={...})
    Format: timestamp [LEVEL] logger_name: message | key1=value1 key2=value2
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m',
        'GRAY': '\033[90m',
    }

    def __init__(self, fmt=None, datefmt=None, use_colors: bool = True) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = use_colors

    def _paint(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"

    def format(self, record: logging.LogRecord) -> str:
        base_msg = super().format(record)

        levelname = record.levelname
        if levelname in self.COLORS:
            base_msg = base_msg.replace(f"[{levelname}]", self._paint(f"[{levelname}]", levelname))

        extra_fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and value is not None
        ]
        if extra_fields:
            return base_msg + self._paint(f" | {' '.join(extra_fields)}", 'GRAY')
        return base_msg


def setup_logging(level: str = "INFO", stream=None) -> None:
    """Configure logging for the ``ankiconnect`` namespace.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Use DEBUG to see every action sent to AnkiConnect.
        stream: Output stream, stderr by default so CLI output on stdout stays clean.

    Example:
        >>> from ankiconnect.logging_config import setup_logging
        >>> setup_logging("DEBUG")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    stream = stream if stream is not None else sys.stderr

    formatter = ContextFormatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        use_colors=hasattr(stream, "isatty") and stream.isatty(),
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger('ankiconnect')
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Action sent", extra={"action": "deckNames"})
    """
    return logging.getLogger(name)
