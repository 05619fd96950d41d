"""
Publisher Analytics

Anonymous usage telemetry: per-installation payload, fire-and-forget event
beacons and a one-time event per package version update.

Typical use::

    import publisher_analytics
    publisher_analytics.initialize("UA-XXXXX-Y", "1.4.0")
    publisher_analytics.track_event("Export", "csv", 12)
"""

from typing import Optional, Mapping

from . import log
from .config import load_config
from .backends.http import HTTPReporter, SendResult, TRACKING_URL
from .errors import AnalyticsError, ConfigurationError, ReporterBusyError, TransportError
from .payload import DISABLE_APPLICATION_TRACKING
from .telemetry import TelemetryClient

__version__ = "1.0.0"

__all__ = [
    'TelemetryClient',
    'HTTPReporter',
    'SendResult',
    'TRACKING_URL',
    'DISABLE_APPLICATION_TRACKING',
    'AnalyticsError',
    'ConfigurationError',
    'ReporterBusyError',
    'TransportError',
    'initialize',
    'track_event',
    'get_client',
]

_client: Optional[TelemetryClient] = None


def initialize(tracking_id: Optional[str], package_version: str,
               configuration: Optional[Mapping[str, bool]] = None, settings=None) -> TelemetryClient:
    """
    Initialize the shared client (safe to call more than once)

    Args:
        tracking_id: Analytics property id (None = TRACKING_ID from analytics_config)
        package_version: Version of the tracked package
        configuration: Option flags, e.g. {DISABLE_APPLICATION_TRACKING: True}
        settings: QSettings object (default: QSettings("SpaceMadness", "PublisherAnalytics"))

    Raises:
        ConfigurationError: If tracking_id or package_version is empty
    """
    global _client

    if tracking_id is None:
        tracking_id = load_config()['TRACKING_ID']

    if _client is None or (settings is not None and settings is not _client.settings):
        if settings is None:
            from PyQt6.QtCore import QSettings
            settings = QSettings("SpaceMadness", "PublisherAnalytics")
        client = TelemetryClient.from_config(settings)
    else:
        client = _client

    client.initialize(tracking_id, package_version, configuration)
    _client = client
    return client


def track_event(category: str, action: str, value: Optional[int] = None):
    """Send an event through the shared client (no-op before initialize())"""
    if _client is None:
        log.warning(f"Can't track event '{action}': instance is not initialized")
        return None
    return _client.track_event(category, action, value)


def get_client() -> Optional[TelemetryClient]:
    return _client


def _reset():
    """Drop the shared client (used by tests)"""
    global _client
    _client = None
