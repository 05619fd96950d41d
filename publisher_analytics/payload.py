"""
Payload Builder

Builds Measurement Protocol query strings. The default payload is built once
per client; event payloads extend it per call.
"""

from typing import Mapping, Optional
from urllib.parse import quote_plus

from . import log
from .environment import Environment
from .errors import ConfigurationError

DISABLE_APPLICATION_TRACKING = "DisableApplicationTracking"

# Max encoded length per optional app-identity field
MAX_APP_NAME_LENGTH = 100
MAX_APP_ID_LENGTH = 150
MAX_APP_INSTALLER_ID_LENGTH = 150


def escape(value) -> str:
    """Form-encode a free-text value (spaces become '+')"""
    return quote_plus(str(value))


def _append_bounded(parts, key: str, value: str, max_length: int):
    # Over-long values are dropped rather than truncated
    if not value:
        return
    encoded = escape(value)
    if len(encoded) <= max_length:
        parts.append(f"{key}={encoded}")


def build_default_payload(
    tracking_id: str,
    package_version: str,
    configuration: Optional[Mapping[str, bool]],
    environment: Environment,
) -> str:
    """
    Build the session-invariant part of every event payload

    Args:
        tracking_id: Analytics property id
        package_version: Version of the tracked package
        configuration: Option flags (see DISABLE_APPLICATION_TRACKING)
        environment: Host environment values

    Returns:
        URL-encoded query string

    Raises:
        ConfigurationError: If tracking_id or package_version is empty
    """
    if not tracking_id:
        raise ConfigurationError("Tracking id is null or empty")
    if not package_version:
        raise ConfigurationError("Package version is null or empty")

    configuration = configuration or {}

    parts = [
        "v=1",
        "t=event",
        f"tid={tracking_id}",
        f"cid={escape(environment.device_id)}",
        f"ua={escape(environment.operating_system)}",
        f"av={escape(package_version)}",
        f"ds={environment.runtime_mode}",
    ]

    if not configuration.get(DISABLE_APPLICATION_TRACKING, False):
        identity = environment.app_identity
        _append_bounded(parts, "an", identity.name, MAX_APP_NAME_LENGTH)
        _append_bounded(parts, "aid", identity.identifier, MAX_APP_ID_LENGTH)
        _append_bounded(parts, "aiid", identity.company, MAX_APP_INSTALLER_ID_LENGTH)

    return "&".join(parts)


def build_event_payload(default_payload: str, category: str, action: str, value: Optional[int] = None) -> str:
    """Append event category, action and (if given) value to the default payload"""
    payload = f"{default_payload}&ec={escape(category)}&ea={escape(action)}"
    if value is None:
        return payload
    if isinstance(value, bool) or not isinstance(value, int):
        # Non-integer values are dropped, the event itself is still sent
        log.warning(f"Ignoring non-integer value {value!r} for event '{action}'")
        return payload
    return payload + f"&ev={value}"
