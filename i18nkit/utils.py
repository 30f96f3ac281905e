#!/usr/bin/env python3
"""
i18nkit Utilities

Tagged console logging shared by the resolver, loader and configuration code.
"""

import os
import threading
from datetime import datetime

# Global lock for stdout to prevent garbled output in multi-threaded environment
_stdout_lock = threading.Lock()

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "WARN": 30, "ERROR": 40}
_min_level = _LEVELS.get(os.getenv("I18N_LOG_LEVEL", "INFO").strip().upper(), 20)


def set_log_level(level: str) -> None:
    """Set the lowest level that gets printed (DEBUG, INFO, WARNING, ERROR)."""
    global _min_level
    _min_level = _LEVELS.get(str(level).strip().upper(), _LEVELS["INFO"])


def get_log_level() -> str:
    """Return the name of the current minimum log level."""
    for name, value in _LEVELS.items():
        if value == _min_level:
            return name
    return "INFO"


def i18n_log(tag: str, message: str, level: str = "INFO"):
    """
    Log a message with timestamp and tag.

    Format: [HH:MM:SS.mmm] [LEVEL] [TAG] message

    Args:
        tag: Component tag (e.g., "I18N", "LOADER", "CONFIG")
        message: Log message
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    if _LEVELS.get(level.upper(), _LEVELS["INFO"]) < _min_level:
        return

    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]

    # Format: [14:08:25.342] [INFO] [LOADER] Loaded strings_en.json
    log_line = f"[{timestamp}] [{level}] [{tag}] {message}"

    with _stdout_lock:
        print(log_line, flush=True)
