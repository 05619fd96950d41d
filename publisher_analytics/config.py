"""
Analytics Configuration Loader

Reads settings from the optional 'analytics_config' module
(see analytics_config.example.py). Missing module or keys fall back to defaults.
"""

from pathlib import Path
from typing import Dict, Any

_load_error_reported = False

DEFAULTS = {
    'TRACKING_ID': None,
    'TELEMETRY_DEBUG': False,
    'DEBUG_LOG_FILE': str(Path.home() / "Desktop" / "publisher_analytics_debug.log"),
    'DISABLE_APPLICATION_TRACKING': False,
    'REQUEST_TIMEOUT': None,
    'USE_CERTIFI': True,
}


def load_config() -> Dict[str, Any]:
    """
    Load configuration from analytics_config.py

    Returns:
        Dictionary with every key in DEFAULTS
    """
    config = dict(DEFAULTS)
    try:
        import analytics_config
    except ImportError:
        return config
    except Exception as e:
        global _load_error_reported
        if not _load_error_reported:
            _load_error_reported = True
            print(f"Error loading analytics_config - using defaults: {e}")
        return config

    for key in DEFAULTS:
        config[key] = getattr(analytics_config, key, DEFAULTS[key])
    return config
