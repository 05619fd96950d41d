"""
Telemetry Client

Builds the per-installation payload once, records version updates and sends
anonymous event beacons without blocking the caller.
Privacy-first approach: no personal info, anonymous device id, opt-out available.
"""

from typing import Optional, Dict, Any, Mapping

from . import log
from .backends.http import HTTPReporter, SendResult
from .backends.transport import get_default_transport
from .config import load_config
from .environment import Environment
from .payload import DISABLE_APPLICATION_TRACKING, build_default_payload, build_event_payload
from .version_gate import check_and_track_update


class TelemetryClient:
    """Anonymous event tracking client"""

    def __init__(self, settings, environment: Optional[Environment] = None,
                 reporter_factory=None, transport=None, timeout: Optional[float] = None):
        """
        Initialize telemetry client

        Args:
            settings: QSettings object for storing preferences and version records
            environment: Host environment values (detected if None)
            reporter_factory: Callable(transport=..., timeout=...) returning a new reporter
            transport: TLS transport strategy for the reporters
            timeout: Request timeout in seconds (None = transport default)
        """
        self.settings = settings
        self.environment = environment
        self.reporter_factory = reporter_factory or HTTPReporter
        self.transport = transport or get_default_transport()
        self.timeout = timeout

        self.tracking_id: Optional[str] = None
        self.package_version: Optional[str] = None
        self._default_payload: Optional[str] = None

        # Load preferences
        self.telemetry_enabled = settings.value("telemetry_enabled", True, type=bool)

    @classmethod
    def from_config(cls, settings, environment: Optional[Environment] = None) -> "TelemetryClient":
        """Create a client using transport and timeout from analytics_config.py"""
        config = load_config()
        return cls(
            settings,
            environment=environment,
            transport=get_default_transport(use_certifi=config['USE_CERTIFI']),
            timeout=config['REQUEST_TIMEOUT'],
        )

    @property
    def is_initialized(self) -> bool:
        return self._default_payload is not None

    @property
    def default_payload(self) -> Optional[str]:
        return self._default_payload

    def initialize(self, tracking_id: str, package_version: str,
                   configuration: Optional[Mapping[str, bool]] = None):
        """
        Build the default payload and record a version update if any

        Args:
            tracking_id: Analytics property id
            package_version: Version of the tracked package
            configuration: Option flags, e.g. {"DisableApplicationTracking": True}

        Raises:
            ConfigurationError: If tracking_id or package_version is empty
        """
        if configuration is None:
            configuration = {DISABLE_APPLICATION_TRACKING: load_config()['DISABLE_APPLICATION_TRACKING']}

        if self.environment is None:
            self.environment = Environment.detect(self.settings)

        self._default_payload = build_default_payload(
            tracking_id, package_version, configuration, self.environment
        )
        self.tracking_id = tracking_id
        self.package_version = package_version
        log.debug(f"Telemetry initialized: tid={tracking_id}, version={package_version}")

        check_and_track_update(tracking_id, package_version, self.settings, self.track_event)

    def track_event(self, category: str, action: str, value: Optional[int] = None, background: bool = True):
        """
        Send an event to the collection endpoint

        Args:
            category: Event category
            action: Event action
            value: Optional integer value
            background: If True, send in background thread (non-blocking)

        Returns:
            Future of SendResult (background), SendResult (blocking),
            or None if nothing was sent
        """
        if self._default_payload is None:
            log.warning(f"Can't track event '{action}': instance is not initialized")
            return None

        if not self.telemetry_enabled:
            log.debug(f"Telemetry disabled by user, event '{action}' dropped")
            return None

        payload = build_event_payload(self._default_payload, category, action, value)
        log.debug(f"Event track payload: {payload}")

        reporter = self.reporter_factory(transport=self.transport, timeout=self.timeout)
        if background:
            return reporter.send(payload, on_complete=_log_result)

        result = reporter.send_blocking(payload)
        _log_result(result)
        return result

    def set_enabled(self, enabled: bool):
        """Enable or disable telemetry"""
        self.telemetry_enabled = enabled
        self.settings.setValue("telemetry_enabled", enabled)
        log.debug(f"Telemetry {'enabled' if enabled else 'disabled'}")

    def get_user_info(self) -> Dict[str, Any]:
        """Get user info for display in settings (for transparency)"""
        return {
            "tracking_id": self.tracking_id,
            "package_version": self.package_version,
            "device_id": self.environment.device_id if self.environment else None,
            "enabled": self.telemetry_enabled,
        }


def _log_result(result: SendResult):
    if result.ok:
        log.debug(f"Event track result: {result.body}")
    else:
        log.error(f"Event track failed: {result.error}")
