"""Logging helpers that keep API credentials out of log output."""
from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

SECRET_PATTERN = re.compile(r"((?:[?&]key=)|(?:x-goog-api-key['\"]?\s*[:=]\s*['\"]?))[A-Za-z0-9_\-]+", re.IGNORECASE)


class RedactingFilter(logging.Filter):
    """Replace API key values in log messages with a redaction marker."""

    def __init__(self, name: str = "") -> None:
        super().__init__(name)
        self._replacement = r"\1[REDACTED]"

    def _clean(self, value: object) -> object:
        if isinstance(value, str):
            return SECRET_PATTERN.sub(self._replacement, value)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._clean(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(self._clean(arg) for arg in record.args)
        return True


_installed: set[str] = set()


def install_redacting_filter(target_loggers: Optional[Iterable[str]] = None) -> None:
    """Ensure the redacting filter is installed once on each named logger."""
    names = list(target_loggers or ["fairpay"])
    for name in names:
        if name in _installed:
            continue
        logging.getLogger(name).addFilter(RedactingFilter())
        _installed.add(name)
