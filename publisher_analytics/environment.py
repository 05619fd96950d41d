"""
Host Environment

Providers for the identity and environment fields of the default payload:
device id, operating system, application identity and runtime mode.
"""

import sys
import platform
import uuid
from typing import Optional

from PyQt6.QtCore import QCoreApplication, QSysInfo


def get_device_unique_id(settings=None) -> str:
    """
    Get a stable anonymous identifier for this machine

    Uses the OS machine id when Qt can read it, otherwise a random UUID
    that is persisted in settings on first use.

    Args:
        settings: QSettings object used to persist the fallback id
    """
    machine_id = bytes(QSysInfo.machineUniqueId()).decode('utf-8', errors='replace')
    if machine_id:
        return machine_id

    if settings is None:
        return str(uuid.uuid4())

    user_id = settings.value("telemetry_user_id", None)
    if not user_id:
        user_id = str(uuid.uuid4())
        settings.setValue("telemetry_user_id", user_id)
    return user_id


def get_operating_system() -> str:
    """Get user-friendly OS name and version"""
    os_name = platform.system()
    if os_name == "Darwin":
        # macOS - report the marketing version, not the kernel version
        mac_ver = platform.mac_ver()[0]
        return f"macOS {mac_ver or platform.release()}"
    return f"{os_name} {platform.release()}".strip()


def is_frozen() -> bool:
    """Check if running as compiled executable"""
    return getattr(sys, 'frozen', False)


def get_runtime_mode() -> str:
    """'player' for packaged builds, 'editor' when running from source"""
    return "player" if is_frozen() else "editor"


class AppIdentity:
    """Name, identifier and publisher of the host application"""

    def __init__(self, name: str = "", identifier: str = "", company: str = ""):
        self.name = name or ""
        self.identifier = identifier or ""
        self.company = company or ""

    @classmethod
    def from_qt(cls) -> "AppIdentity":
        """Read identity from QCoreApplication (set by the host app at startup)"""
        return cls(
            name=QCoreApplication.applicationName(),
            identifier=QCoreApplication.organizationDomain(),
            company=QCoreApplication.organizationName(),
        )

    def __repr__(self):
        return f"AppIdentity(name={self.name!r}, identifier={self.identifier!r}, company={self.company!r})"


class Environment:
    """Snapshot of the host values that go into the default payload"""

    def __init__(
        self,
        device_id: str,
        operating_system: str,
        runtime_mode: str,
        app_identity: Optional[AppIdentity] = None,
    ):
        self.device_id = device_id
        self.operating_system = operating_system
        self.runtime_mode = runtime_mode
        self.app_identity = app_identity or AppIdentity()

    @classmethod
    def detect(cls, settings=None) -> "Environment":
        """
        Collect environment values from the running host

        Args:
            settings: QSettings object for the fallback device id
        """
        return cls(
            device_id=get_device_unique_id(settings),
            operating_system=get_operating_system(),
            runtime_mode=get_runtime_mode(),
            app_identity=AppIdentity.from_qt(),
        )
