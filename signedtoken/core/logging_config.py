"""Logging setup for processes that use signedtoken.

``setup_logging`` writes JSON lines (or plain text) to stdout. Compact
tokens and ``secret=``/``password=`` style values are masked before any
record is formatted.
"""

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Optional

_REDACTED = "***REDACTED***"

# A token is three base64url runs joined by dots. The lookarounds stand in
# for \b, which does not treat '-' and '_' as word characters.
_TOKEN_PATTERN = re.compile(
    r"(?<![A-Za-z0-9_-])[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]{8,}\.[A-Za-z0-9_-]{8,}(?![A-Za-z0-9_-])"
)
_KEY_VALUE_PATTERN = re.compile(
    r"(?i)((?:secret_key|secret|password|token)[=:]\s*)[^\s,'\"]+"
)


def redact(text: str) -> str:
    text = _TOKEN_PATTERN.sub(_REDACTED, text)
    return _KEY_VALUE_PATTERN.sub(lambda m: m.group(1) + _REDACTED, text)


class _RedactingFilter(logging.Filter):
    """Mask tokens and secrets in the rendered message and traceback text."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(record.getMessage())
        record.args = None
        if record.exc_text:
            record.exc_text = redact(record.exc_text)
        return True


class _JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` fields land at the top level."""

    _RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__)

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in self._RECORD_ATTRS and key not in entry
        )
        if record.exc_info:
            entry["exc_info"] = redact(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Replace the root handlers with a single redacting stdout handler.

    Args:
        log_level: Level name, defaults to INFO.
        log_format: ``"json"`` (default) or ``"text"``.
    """
    level = (log_level or "INFO").upper()
    fmt = (log_format or "json").lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_RedactingFilter())
    if fmt == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger(__name__).info("Logging configured", extra={"level": level, "format": fmt})
