"""Logging for jobfinder: console plus a daily debug file, credentials scrubbed.

Handlers carry :class:`RedactSecretsFilter`, so a bearer token, JWT or
password that reaches a log call through an exception message or a payload
dump is masked before it is written anywhere.
"""
from __future__ import annotations

import logging
import os
import re
import sys
from datetime import datetime
from pathlib import Path

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
MASK = "***"

_SECRET_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(Bearer\s+)[\w\-.~+/]+=*", re.IGNORECASE),
    re.compile(r"()\beyJ[\w-]*\.[\w-]+\.[\w-]+"),
    re.compile(r"""(["']?(?:token|userToken|password|confirmPassword)["']?\s*[:=]\s*["']?)[^"'\s,}]+""",
               re.IGNORECASE),
)

_configured = False


def redact(text: str) -> str:
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: m.group(1) + MASK, text)
    return text


class RedactSecretsFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _file_handler() -> logging.Handler | None:
    if os.environ.get("JOBFINDER_NO_LOG_FILE"):
        return None
    log_dir = Path(os.environ.get("JOBFINDER_LOG_DIR") or _DEFAULT_LOG_DIR)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(
            log_dir / f"jobfinder_{datetime.now().strftime('%Y-%m-%d')}.log", encoding="utf-8"
        )
    except OSError:
        return None
    fh.setLevel(logging.DEBUG)
    return fh


def _configure() -> None:
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    # urllib3 logs every connection at DEBUG
    if level > logging.DEBUG:
        logging.getLogger("urllib3").setLevel(logging.WARNING)

    if root.handlers:
        for handler in root.handlers:
            handler.addFilter(RedactSecretsFilter())
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    handlers: list[logging.Handler] = [console]
    fh = _file_handler()
    if fh is not None:
        handlers.append(fh)

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(RedactSecretsFilter())
        root.addHandler(handler)
