"""stderr logging for classy.

``CLASSY_LOG_LEVEL`` picks the threshold (default ``WARN``) and
``CLASSY_TRACE=True`` adds one DEBUG line per class creation, object
lifecycle step and mixin lookup or application.
"""
from __future__ import annotations
import os
import sys
import time

_RESET = "\033[0m"

# name -> (rank, ANSI colour of the prefix)
_LEVELS = {
    "DEBUG": (10, "\033[2m"),
    "INFO": (20, "\033[32m"),
    "WARN": (30, "\033[33m"),
    "ERROR": (40, "\033[31m"),
}


def _paint(text: str, code: str, stream) -> str:
    wanted = os.getenv("FORCE_COLOR") or getattr(stream, "isatty", lambda: False)()
    return f"{code}{text}{_RESET}" if wanted else text


def _threshold() -> int:
    name = os.getenv("CLASSY_LOG_LEVEL", "WARN").upper()
    return _LEVELS.get(name, _LEVELS["WARN"])[0]


def trace_enabled() -> bool:
    return os.getenv("CLASSY_TRACE") == "True"


def log(level: str, message: str, *, stream=None) -> None:
    """Write ``[classy:LEVEL] HH:MM:SS message`` to *stream* (default stderr)."""
    level = level.upper()
    rank, colour = _LEVELS.get(level, (0, ""))
    if rank < _threshold():
        return
    if stream is None:
        stream = sys.stderr
    prefix = _paint(f"[classy:{level}]", colour, stream)
    print(f"{prefix} {time.strftime('%H:%M:%S')} {message}", file=stream)


def log_trace(action: str, subject: str, detail: str = "") -> None:
    if not trace_enabled():
        return
    log("DEBUG", f"{action} {subject} {detail}".rstrip())
