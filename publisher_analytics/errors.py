"""
Analytics Errors

Only ConfigurationError ever reaches the host application. The others are
logged or carried inside a SendResult.
"""

from typing import Optional


class AnalyticsError(Exception):
    """Base class for publisher analytics errors"""


class ConfigurationError(AnalyticsError, ValueError):
    """Required initialization argument is missing or empty"""


class TransportError(AnalyticsError):
    """Event could not be delivered to the collection endpoint"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ReporterBusyError(AnalyticsError, RuntimeError):
    """Reporter was asked to send while a transfer is still in flight"""
