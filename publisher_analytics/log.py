"""
Logging sink for publisher analytics

Debug output is only produced when TELEMETRY_DEBUG is enabled in
analytics_config. Warnings and errors always go to stderr.
None of these functions ever raise.
"""

import os
import sys
from datetime import datetime

from .config import load_config


def _write_file(level: str, message: str, config):
    """Append a line to the debug log file"""
    with open(os.path.expanduser(config['DEBUG_LOG_FILE']), 'a') as f:
        timestamp = datetime.now().isoformat()
        f.write(f"[{timestamp}] [{level}] {message}\n")


def debug(message: str):
    try:
        config = load_config()
        if not config['TELEMETRY_DEBUG']:
            return
        print(message)
        _write_file("DEBUG", message, config)
    except Exception:
        pass  # Silently fail if can't write log


def warning(message: str):
    try:
        print(f"Warning: {message}", file=sys.stderr)
        config = load_config()
        if config['TELEMETRY_DEBUG']:
            _write_file("WARNING", message, config)
    except Exception:
        pass


def error(message: str):
    try:
        print(f"Error: {message}", file=sys.stderr)
        config = load_config()
        if config['TELEMETRY_DEBUG']:
            _write_file("ERROR", message, config)
    except Exception:
        pass
