"""Loguru logging configuration.

One stderr sink, human-readable by default or serialized JSON when
``json_logs`` is set, and a rotating file sink when ``log_dir`` is set.
Every line carries the ``request_id`` bound by the request-context
middleware, or ``-`` outside a request.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {extra[request_id]} | {name}:{function}:{line} | {message}"
)
_NO_REQUEST = "-"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, json_logs: bool = False) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
        json_logs: Emit stderr records as JSON instead of text lines.
    """
    level = log_level.upper()
    logger.remove()
    logger.configure(extra={"request_id": _NO_REQUEST})
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "hubit-api.log",
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
