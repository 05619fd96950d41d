"""
Version Gate

Records a one-time "updated_version" event whenever the tracked package
version differs from the last one seen on this machine.
"""

from . import log

PREFS_NAMESPACE = "Com.SpaceMadness.PublisherAnalytics"

VERSION_CATEGORY = "Version"
VERSION_UPDATED_ACTION = "updated_version"


def last_known_version_key(tracking_id: str) -> str:
    return f"{PREFS_NAMESPACE}.{tracking_id}.LastKnownPackageVersion"


def check_and_track_update(tracking_id: str, current_version: str, settings, track_event) -> bool:
    """
    Persist current_version and emit the update event if it changed

    A missing record (fresh install) counts as a change.

    Args:
        tracking_id: Analytics property id, part of the settings key
        current_version: Version of the tracked package
        settings: QSettings-like store with value()/setValue()
        track_event: Callable(category, action) used to report the update

    Returns:
        True if the update event was emitted
    """
    key = last_known_version_key(tracking_id)
    last_known_version = settings.value(key, "")
    if last_known_version == current_version:
        return False

    log.debug(f"Package version changed: {last_known_version or '<none>'} -> {current_version}")
    settings.setValue(key, current_version)
    if hasattr(settings, 'sync'):
        settings.sync()

    track_event(VERSION_CATEGORY, VERSION_UPDATED_ACTION)
    return True
